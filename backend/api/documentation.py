"""GET /api/documentation and /api/models — compiled StarRez OpenAPI output."""
import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from fastapi.responses import Response
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from config import settings
from core.document_composer import compile_documentation, compile_models
from core.errors import MalformedMetadata, UpstreamUnavailable
from integrations.starrez_client import StarRezClient
from integrations.swagger_converter import SwaggerConverterClient

router = APIRouter(tags=["StarRez API Documentation"])
logger = logging.getLogger(__name__)

basic_auth = HTTPBasic(auto_error=False)


async def get_starrez_client(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_auth),
) -> AsyncIterator[StarRezClient]:
    """StarRez client for one request; request credentials override the configured ones."""
    if credentials:
        connection = settings.starrez_connection(credentials.username, credentials.password)
    else:
        connection = settings.starrez_connection()
    async with StarRezClient(connection) as client:
        yield client


async def get_converter() -> AsyncIterator[SwaggerConverterClient]:
    async with SwaggerConverterClient() as converter:
        yield converter


def _upstream_failure(e: Exception) -> HTTPException:
    if isinstance(e, UpstreamUnavailable):
        return HTTPException(status_code=502, detail=f"StarRez upstream unavailable: {e}")
    return HTTPException(status_code=502, detail=f"Malformed StarRez metadata: {e}")


@router.get("/documentation", summary="Gets StarRez API documentation in OpenAPI format")
async def get_documentation(
    dev: bool = Header(False),
    client: StarRezClient = Depends(get_starrez_client),
    converter: SwaggerConverterClient = Depends(get_converter),
):
    try:
        document = await compile_documentation(client, converter, dev)
    except (UpstreamUnavailable, MalformedMetadata) as e:
        logger.exception("Documentation compilation failed")
        raise _upstream_failure(e)
    return Response(content=document, media_type="application/json")


@router.get("/models", summary="Gets StarRez API models in OpenAPI component schema format")
async def get_models(
    dev: bool = Header(False),
    client: StarRezClient = Depends(get_starrez_client),
):
    try:
        models = await compile_models(client, dev)
    except (UpstreamUnavailable, MalformedMetadata) as e:
        logger.exception("Model compilation failed")
        raise _upstream_failure(e)
    return Response(content=models, media_type="application/json")
