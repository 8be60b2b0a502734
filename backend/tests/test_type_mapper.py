import pytest
from core.type_mapper import map_column_type


@pytest.mark.parametrize("token,expected_type,expected_format", [
    ("DateTime", "string", "date-time"),
    ("SmallDateTime", "string", "date-time"),
    ("Date", "string", "date"),
    ("Timestamp", "string", "time"),
    ("Money", "number", "decimal"),
    ("Decimal", "number", "decimal"),
    ("BigDecimal", "number", "decimal"),
    ("Binary", "string", "binary"),
    ("LongString", "string", "binary"),
    ("Byte", "string", "byte"),
    ("GUID", "string", "guid"),
    ("Short", "integer", "uint16"),
])
def test_known_tokens(token, expected_type, expected_format):
    mapping = map_column_type(token, "SomeColumn")
    assert mapping.type == expected_type
    assert mapping.format == expected_format
    assert mapping.description


def test_descriptions_reference_standards():
    assert "RFC 3339" in map_column_type("datetime").description
    assert "RFC4648" in map_column_type("byte").description
    assert "RFC 9562" in map_column_type("guid").description
    assert map_column_type("short").description == "Unsigned 16-bit integer"


def test_unrecognized_token_passes_through():
    mapping = map_column_type("Unrecognized", "Whatever")
    assert mapping.type == "unrecognized"
    assert mapping.format is None
    assert mapping.description is None


def test_plain_types_pass_through_lower_cased():
    assert map_column_type("Integer").type == "integer"
    assert map_column_type("String").type == "string"
    assert map_column_type("Boolean").type == "boolean"


def test_email_override_wins_over_token():
    mapping = map_column_type("Integer", "Contact_EmailAddress")
    assert (mapping.type, mapping.format) == ("string", "email")
    assert "RFC5321" in mapping.description


def test_user_identifier_is_an_email():
    mapping = map_column_type("Guid", "PortalAuthProviderUserID")
    assert (mapping.type, mapping.format) == ("string", "email")


def test_password_is_base64():
    mapping = map_column_type("String", "Password")
    assert (mapping.type, mapping.format) == ("string", "byte")


def test_override_requires_exact_user_identifier():
    assert map_column_type("Integer", "PortalAuthProviderUserIDx").type == "integer"
