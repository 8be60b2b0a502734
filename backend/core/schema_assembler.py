"""
Schema Assembler — one JSON Schema object per StarRez table.
Tables are streamed from the table list and finished one at a time: a table's
schema is yielded the moment its column list has been consumed and is not
kept afterwards.
"""
import json
import logging
from contextlib import aclosing
from functools import partial
from typing import AsyncIterator, Optional

from core.enum_resolver import EnumCache, apply_enum_values, column_suffix
from core.errors import MalformedMetadata
from core.type_mapper import map_column_type
from integrations.starrez_client import StarRezClient
from models.schema import PropertySchema, TableSchema
from models.starrez import ColumnDefinition

logger = logging.getLogger(__name__)


# ── Attribute parsing ─────────────────────────────────────────────────────────

def _parse_bool(value: str, attribute: str, column: str) -> bool:
    normalized = value.strip().lower()
    if normalized not in ("true", "false"):
        raise MalformedMetadata(f"Column {column}: {attribute}={value!r} is not a boolean")
    return normalized == "true"


def _parse_int(value: str, attribute: str, column: str) -> int:
    try:
        return int(value.strip())
    except ValueError as e:
        raise MalformedMetadata(f"Column {column}: {attribute}={value!r} is not an integer") from e


# ── Column handling ───────────────────────────────────────────────────────────

def describe_column(table_name: str, column_name: str) -> Optional[str]:
    """Descriptions derived purely from naming conventions (keys and references)."""
    if column_name == "TableID":
        return "ID of element in Table specified in TableName"
    if column_name == "TableName":
        return "Name of table to be used for reference"

    suffix = column_suffix(column_name)
    if column_name.endswith("ID") and len(column_name) > 3 and "GUID" not in column_name:
        referenced = suffix.replace("ID", "")
        if column_name != f"{table_name}ID":
            return f"References {referenced} table"
        return f"Primary identification key for {referenced} table"
    if "Enum" in suffix:
        return f"References {column_name} table"
    return None


def apply_column_attributes(table: TableSchema, prop: PropertySchema, column: ColumnDefinition) -> None:
    """Apply required/type/size/allowNull in the order the attributes appear."""
    for attribute, value in column.attributes.items():
        if attribute == "required":
            if _parse_bool(value, attribute, column.name):
                table.add_required(column.name)
        elif attribute == "type":
            mapping = map_column_type(value, column.name)
            prop.type = mapping.type
            prop.format = mapping.format
            if mapping.description:
                prop.description = mapping.description
        elif attribute == "size":
            size = _parse_int(value, attribute, column.name)
            if size > 0:
                prop.max_length = size
        elif attribute == "allowNull":
            prop.nullable = _parse_bool(value, attribute, column.name)


async def build_table_schema(
    client: StarRezClient, table_name: str, cache: EnumCache, dev: bool = False
) -> TableSchema:
    """Consume one table's column stream and return its finished schema."""
    table = TableSchema(name=table_name)
    fetch_enum = partial(client.query_enum, dev=dev)

    async with aclosing(client.iter_columns(table_name, dev)) as columns:
        async for column in columns:
            if column.name in table.properties or column.name == table_name:
                continue

            prop = PropertySchema(description=describe_column(table_name, column.name))
            table.properties[column.name] = prop
            apply_column_attributes(table, prop, column)
            await apply_enum_values(prop, column.name, cache, fetch_enum)

    logger.debug("Table %s: %d properties, %d required", table_name, len(table.properties), len(table.required))
    return table


# ── Table streams ─────────────────────────────────────────────────────────────

async def iter_table_schemas(
    client: StarRezClient, cache: EnumCache, dev: bool = False
) -> AsyncIterator[TableSchema]:
    """Yield finished table schemas in table-list order, each table at most once."""
    seen: set[str] = set()
    async with aclosing(client.iter_table_names(dev)) as table_names:
        async for table_name in table_names:
            if table_name in seen:
                continue
            seen.add(table_name)
            yield await build_table_schema(client, table_name, cache, dev)
    logger.info("Assembled %d table schemas (%d enums resolved)", len(seen), cache.size)


async def stream_models_json(
    client: StarRezClient, cache: EnumCache, dev: bool = False
) -> AsyncIterator[str]:
    """Emit the table → schema map as JSON text, one chunk per finished table."""
    yield "{"
    first = True
    async for table in iter_table_schemas(client, cache, dev):
        prefix = "" if first else ","
        first = False
        yield f"{prefix}{json.dumps(table.name)}:{json.dumps(table.to_openapi())}"
    yield "}"


async def collect_schemas(client: StarRezClient, cache: EnumCache, dev: bool = False) -> dict[str, dict]:
    """All table schemas keyed by name, ordered alphabetically."""
    schemas = {table.name: table.to_openapi() async for table in iter_table_schemas(client, cache, dev)}
    return dict(sorted(schemas.items()))
