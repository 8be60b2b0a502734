"""
Enum Resolver — detects enum-valued StarRez columns and fills in their values.
Values come from a StarQL lookup and are memoized in an EnumCache that lives
for exactly one compilation run.
"""
import logging
from typing import Awaitable, Callable, Optional

from models.schema import PropertySchema
from models.starrez import EnumDefinition

logger = logging.getLogger(__name__)

EnumFetcher = Callable[[str], Awaitable[EnumDefinition]]

# Enum-looking columns with no queryable backing table.
RESERVED_ENUMS = {"PortalAuthLockedUserReasonEnum"}
EXCLUDED_NAME_FRAGMENTS = ("OneTimeCode",)

ENUM_ONE_OF = [{"type": "integer"}, {"type": "string"}]


class EnumCache:
    """Per-run memo of resolved enums. Each name is fetched at most once."""

    def __init__(self):
        self._definitions: dict[str, EnumDefinition] = {}
        self.lookups = 0

    def __contains__(self, name: str) -> bool:
        return name in self._definitions

    @property
    def size(self) -> int:
        """Number of distinct enums resolved so far."""
        return len(self._definitions)

    async def resolve(self, name: str, fetch: EnumFetcher) -> EnumDefinition:
        if name not in self._definitions:
            self.lookups += 1
            self._definitions[name] = await fetch(name)
        return self._definitions[name]


def column_suffix(column_name: str) -> str:
    """Text after the first underscore, or the whole name."""
    return column_name.split("_", 1)[1] if "_" in column_name else column_name


def enum_name_for(column_name: str) -> Optional[str]:
    """Return the enum table to query for a column, or None if it is not enum-valued."""
    suffix = column_suffix(column_name)
    if "Enum" not in suffix or suffix in RESERVED_ENUMS:
        return None
    if any(fragment in column_name for fragment in EXCLUDED_NAME_FRAGMENTS):
        return None
    return suffix


async def apply_enum_values(
    prop: PropertySchema, column_name: str, cache: EnumCache, fetch: EnumFetcher
) -> bool:
    """
    Turn an enum-valued column into a oneOf integer/string property listing
    id, label pairs. Returns True if the property was changed.
    """
    enum_name = enum_name_for(column_name)
    if enum_name is None or prop.enum:
        return False

    prop.one_of = [dict(t) for t in ENUM_ONE_OF]
    prop.type = None

    definition = await cache.resolve(enum_name, fetch)
    for enum_id, label in definition.values:
        prop.enum.append(enum_id)
        prop.enum.append(label.replace(" ", ""))
    if prop.nullable:
        prop.enum.append(None)
    logger.debug("Column %s → enum %s (%d values)", column_name, enum_name, len(definition.values))
    return True
