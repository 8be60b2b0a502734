#!/usr/bin/env python3
"""
Compile the StarRez OpenAPI document (or the raw model map) and write it to disk.
Usage (from the repository root):
    python scripts/export_documentation.py [--dev] [--models] [--output FILE]
Reads STARREZ_* settings from .env / the environment.
"""
import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "backend")))

from config import settings  # noqa: E402
from core.document_composer import compile_documentation, compile_models  # noqa: E402
from core.errors import StarRezError  # noqa: E402
from integrations.starrez_client import StarRezClient  # noqa: E402
from integrations.swagger_converter import SwaggerConverterClient  # noqa: E402

logger = logging.getLogger("export_documentation")


async def export(dev: bool, models_only: bool) -> str:
    async with StarRezClient(settings.starrez_connection()) as client:
        if models_only:
            return await compile_models(client, dev)
        async with SwaggerConverterClient() as converter:
            return await compile_documentation(client, converter, dev)


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Export compiled StarRez API documentation.")
    p.add_argument("--dev", action="store_true", help="Use the development StarRez environment")
    p.add_argument("--models", action="store_true", help="Export only the per-table schema map")
    p.add_argument("--output", default=None, help="Output file (default: openapi.json or models.json)")
    args = p.parse_args(argv)

    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    output = Path(args.output or ("models.json" if args.models else "openapi.json"))
    try:
        text = asyncio.run(export(args.dev, args.models))
    except StarRezError as e:
        logger.error("Export failed: %s", e)
        return 1
    output.write_text(text, encoding="utf-8")
    print(f"wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
