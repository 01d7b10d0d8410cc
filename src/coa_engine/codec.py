"""Encoding of stored collections to and from raw bytes."""

from collections.abc import Sequence

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from coa_engine.exceptions import CoaStoreError
from coa_engine.models.accounts import Account
from coa_engine.models.charts import ChartOfAccounts

CHARTS_KEY = "charts-of-accounts"
ACCOUNTS_KEY_PREFIX = "accounts/"

_charts_adapter = TypeAdapter(list[ChartOfAccounts])
_accounts_adapter = TypeAdapter(list[Account])


def accounts_key(chart_id: str) -> str:
    """Storage key holding the account list of a chart."""
    return f"{ACCOUNTS_KEY_PREFIX}{chart_id}"


def encode_charts(charts: Sequence[ChartOfAccounts]) -> bytes:
    return _encode(_charts_adapter, list(charts), CHARTS_KEY)


def decode_charts(data: bytes | None) -> list[ChartOfAccounts]:
    return _decode(_charts_adapter, data, CHARTS_KEY)


def encode_accounts(chart_id: str, accounts: Sequence[Account]) -> bytes:
    return _encode(_accounts_adapter, list(accounts), accounts_key(chart_id))


def decode_accounts(chart_id: str, data: bytes | None) -> list[Account]:
    return _decode(_accounts_adapter, data, accounts_key(chart_id))


def _encode(adapter: TypeAdapter, items: list, key: str) -> bytes:
    # Internal timestamps are kept so that `created` survives a round trip.
    try:
        return adapter.dump_json(items, by_alias=True)
    except PydanticSerializationError as e:
        raise CoaStoreError(f"Failed to encode {key}: {e}", key=key, operation="encode") from e


def _decode(adapter: TypeAdapter, data: bytes | None, key: str) -> list:
    if not data:
        return []
    try:
        result: list = adapter.validate_json(data)
    except ValidationError as e:
        raise CoaStoreError(f"Failed to decode {key}: {e}", key=key, operation="decode") from e
    return result
