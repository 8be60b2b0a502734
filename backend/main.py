"""
StarRez API Documentation Compiler
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import documentation, health
from config import settings

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S",
)
logger = logging.getLogger("starrez_docs")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("StarRez documentation compiler starting up…")
    yield
    logger.info("StarRez documentation compiler shutting down.")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="StarRez Custom API",
    description="Compiles the StarRez REST API metadata into a corrected OpenAPI 3.0 document.",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(health.router,        prefix="/api")
app.include_router(documentation.router, prefix="/api")
