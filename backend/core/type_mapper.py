"""
Type Mapper — StarRez column type tokens to JSON Schema type/format/description.
The lookup table and the column-name overrides are plain data; extend them
rather than adding branches.
"""
from typing import Callable, NamedTuple, Optional


class TypeMapping(NamedTuple):
    type: str
    format: Optional[str] = None
    description: Optional[str] = None


DATE_TIME = TypeMapping(
    "string", "date-time",
    "Date and time as defined by RFC 3339, section 5.6, for example, 2017-07-21T17:32:28Z",
)
DATE = TypeMapping("string", "date", "Date as defined by RFC 3339, section 5.6, for example, 2017-07-21")
TIME = TypeMapping("string", "time", "Time as defined by RFC 3339, section 5.6, for example, 17:32:28Z")
DECIMAL = TypeMapping("number", "decimal", "A fixed point decimal number of unspecified precision and range")
BINARY = TypeMapping("string", "binary", "Any sequence of octets")
BYTE = TypeMapping("string", "byte", "Base64 encoded data as defined by RFC4648, section 6")
GUID = TypeMapping(
    "string", "guid",
    "A Globally Unique Identifier, defined as UUID by RFC 9562, section 4, "
    "for example, f81d4fae-7dec-11d0-a765-00a0c91e6bf6",
)
UINT16 = TypeMapping("integer", "uint16", "Unsigned 16-bit integer")
EMAIL = TypeMapping(
    "string", "email",
    "An email address, defined as Mailbox by RFC5321, section 2.3.11, for example, example@domain.com",
)

# Checked first, in order: token contains the key.
CONTAINS_RULES: list[tuple[str, TypeMapping]] = [
    ("datetime", DATE_TIME),
]

EXACT_RULES: dict[str, TypeMapping] = {
    "date":       DATE,
    "timestamp":  TIME,
    "money":      DECIMAL,
    "decimal":    DECIMAL,
    "bigdecimal": DECIMAL,
    "binary":     BINARY,
    "longstring": BINARY,
    "byte":       BYTE,
    "guid":       GUID,
    "short":      UINT16,
}

USER_IDENTIFIER_FIELDS = {"PortalAuthProviderUserID"}

# Column-name overrides; the first match replaces whatever the token produced.
NAME_OVERRIDES: list[tuple[Callable[[str], bool], TypeMapping]] = [
    (lambda name: "Email" in name or name in USER_IDENTIFIER_FIELDS, EMAIL),
    (lambda name: name == "Password", BYTE),
]


def map_column_type(token: str, column_name: str = "") -> TypeMapping:
    """
    Map a raw StarRez type token to a TypeMapping.
    Unknown tokens pass through as the (lower-cased) type with no format.
    """
    token = token.lower()
    for matches, override in NAME_OVERRIDES:
        if matches(column_name):
            return override

    for fragment, mapping in CONTAINS_RULES:
        if fragment in token:
            return mapping
    return EXACT_RULES.get(token, TypeMapping(token))
