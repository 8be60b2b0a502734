import asyncio

import pytest
from core.enum_resolver import EnumCache, apply_enum_values, column_suffix, enum_name_for
from models.schema import PropertySchema
from models.starrez import EnumDefinition


class CountingFetcher:
    def __init__(self, values=None):
        self.calls = []
        self.values = values or [(0, "Credit Card"), (1, "Bank Transfer")]

    async def __call__(self, name: str) -> EnumDefinition:
        self.calls.append(name)
        return EnumDefinition(name=name, values=self.values)


@pytest.mark.parametrize("column,expected", [
    ("Student_PaymentTypeEnum", "PaymentTypeEnum"),
    ("GenderEnum", "GenderEnum"),
    ("Entry_Room_StatusEnum", "Room_StatusEnum"),
    ("Name", None),
    ("Enum_Name", None),
    ("Portal_PortalAuthLockedUserReasonEnum", None),
    ("PortalAuthLockedUserReasonEnum", None),
    ("OneTimeCodeTypeEnum", None),
])
def test_enum_name_for(column, expected):
    assert enum_name_for(column) == expected


def test_column_suffix():
    assert column_suffix("Entry_NameFirst") == "NameFirst"
    assert column_suffix("NameFirst") == "NameFirst"


def test_cache_fetches_each_name_once():
    cache = EnumCache()
    fetch = CountingFetcher()

    async def run():
        first = await cache.resolve("PaymentTypeEnum", fetch)
        second = await cache.resolve("PaymentTypeEnum", fetch)
        await cache.resolve("GenderEnum", fetch)
        return first, second

    first, second = asyncio.run(run())
    assert first is second
    assert fetch.calls == ["PaymentTypeEnum", "GenderEnum"]
    assert cache.lookups == 2
    assert "PaymentTypeEnum" in cache
    assert cache.size == 2


def test_empty_cache_is_truthy():
    cache = EnumCache()
    assert cache.size == 0
    assert (cache or None) is cache


def test_apply_enum_values_alternates_ids_and_labels():
    prop = PropertySchema(type="integer")
    changed = asyncio.run(apply_enum_values(prop, "Student_PaymentTypeEnum", EnumCache(), CountingFetcher()))

    assert changed
    assert prop.type is None
    assert prop.one_of == [{"type": "integer"}, {"type": "string"}]
    assert prop.enum == [0, "CreditCard", 1, "BankTransfer"]


def test_nullable_enum_gets_null_sentinel_last():
    prop = PropertySchema(type="integer", nullable=True)
    fetch = CountingFetcher()
    asyncio.run(apply_enum_values(prop, "Student_PaymentTypeEnum", EnumCache(), fetch))

    assert fetch.calls == ["PaymentTypeEnum"]
    assert prop.enum == [0, "CreditCard", 1, "BankTransfer", None]
    assert prop.to_openapi()["enum"][-1] is None


def test_existing_enum_values_are_left_alone():
    prop = PropertySchema(type="integer", enum=[5, "Five"])
    fetch = CountingFetcher()
    changed = asyncio.run(apply_enum_values(prop, "PaymentTypeEnum", EnumCache(), fetch))

    assert not changed
    assert fetch.calls == []
    assert prop.type == "integer"
    assert prop.enum == [5, "Five"]


def test_non_enum_column_is_untouched():
    prop = PropertySchema(type="string")
    fetch = CountingFetcher()
    assert not asyncio.run(apply_enum_values(prop, "NameFirst", EnumCache(), fetch))
    assert fetch.calls == []
    assert prop.one_of is None


def test_fetch_failure_propagates():
    async def failing(name):
        raise RuntimeError("query failed")

    with pytest.raises(RuntimeError):
        asyncio.run(apply_enum_values(PropertySchema(), "PaymentTypeEnum", EnumCache(), failing))
