"""
Document Composer — runs a full compilation and serializes the result.

    StarRez /swagger ──► converter ──► path corrector ──┐
                                                          ├──► OpenAPI 3.0 JSON
    StarRez databaseinfo ──► schema assembler ──────────┘

Each call owns its own EnumCache; nothing is shared between runs.
"""
import json
import logging
import time

from pydantic import ValidationError

from core.enum_resolver import EnumCache
from core.errors import MalformedMetadata
from core.path_corrector import correct_document
from core.schema_assembler import collect_schemas, stream_models_json
from integrations.starrez_client import StarRezClient
from integrations.swagger_converter import SwaggerConverterClient
from models.openapi import OpenApiDocument

logger = logging.getLogger(__name__)


def parse_document(data: dict) -> OpenApiDocument:
    try:
        return OpenApiDocument.model_validate(data)
    except ValidationError as e:
        raise MalformedMetadata(f"Converted document is not valid OpenAPI: {e}") from e


def compose_document(document: OpenApiDocument, schemas: dict[str, dict]) -> dict:
    """Attach the table schemas (alphabetical) to the corrected document."""
    document.components.schemas = dict(sorted(schemas.items()))
    return document.to_openapi()


def serialize_document(data: dict) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


async def compile_documentation(
    client: StarRezClient, converter: SwaggerConverterClient, dev: bool = False
) -> str:
    """Build the corrected StarRez OpenAPI document. Any failure aborts the whole run."""
    t0 = time.time()
    swagger = await client.get_swagger(dev)
    document = parse_document(await converter.convert(swagger))
    correct_document(document, client.connection.servers())

    schemas = await collect_schemas(client, EnumCache(), dev)
    output = serialize_document(compose_document(document, schemas))
    logger.info(
        "Compiled StarRez documentation (%s): %d paths, %d schemas in %.1fs",
        "development" if dev else "production", len(document.paths), len(schemas), time.time() - t0,
    )
    return output


async def compile_models(client: StarRezClient, dev: bool = False) -> str:
    """The raw table → schema map, in table-list order."""
    return "".join([chunk async for chunk in stream_models_json(client, EnumCache(), dev)])
