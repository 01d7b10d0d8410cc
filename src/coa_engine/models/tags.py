"""Account tag catalogs and the ordered tag collection."""

from collections.abc import Iterable, Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class Tag(StrEnum):
    """Known account tags.

    RETAINED_EARNINGS is a marker: it is accepted on input but never stored.
    """

    # Financial statement
    BALANCE_SHEET = "balanceSheet"
    INCOME_STATEMENT = "incomeStatement"
    # Income statement attributes
    OPERATING = "operating"
    DEDUCTION = "deduction"
    SALES_TAX = "salesTax"
    COST = "cost"
    NON_OPERATING_TAX = "nonOperatingTax"
    INCOME_TAX = "incomeTax"
    DIVIDENDS = "dividends"
    # Normal balance
    INCREASE_ON_DEBIT = "increaseOnDebit"
    INCREASE_ON_CREDIT = "increaseOnCredit"
    # Structural role
    DETAIL = "detail"
    SUMMARY = "summary"
    # Marker
    RETAINED_EARNINGS = "retainedEarnings"


FINANCIAL_STATEMENT = "financial statement"
INCOME_STATEMENT_ATTRIBUTE = "income statement attribute"
NORMAL_BALANCE = "normal balance"
STRUCTURAL_ROLE = "structural role"

# Tags a child account must mirror when its parent carries them.
INHERITED_TAGS: Mapping[str, str] = MappingProxyType(
    {
        Tag.BALANCE_SHEET: FINANCIAL_STATEMENT,
        Tag.INCOME_STATEMENT: FINANCIAL_STATEMENT,
        Tag.OPERATING: INCOME_STATEMENT_ATTRIBUTE,
        Tag.DEDUCTION: INCOME_STATEMENT_ATTRIBUTE,
        Tag.SALES_TAX: INCOME_STATEMENT_ATTRIBUTE,
        Tag.COST: INCOME_STATEMENT_ATTRIBUTE,
        Tag.NON_OPERATING_TAX: INCOME_STATEMENT_ATTRIBUTE,
        Tag.INCOME_TAX: INCOME_STATEMENT_ATTRIBUTE,
        Tag.DIVIDENDS: INCOME_STATEMENT_ATTRIBUTE,
    }
)

NON_INHERITED_TAGS: Mapping[str, str] = MappingProxyType(
    {
        Tag.INCREASE_ON_DEBIT: NORMAL_BALANCE,
        Tag.INCREASE_ON_CREDIT: NORMAL_BALANCE,
        Tag.DETAIL: STRUCTURAL_ROLE,
        Tag.SUMMARY: STRUCTURAL_ROLE,
    }
)


def is_catalog_tag(tag: str) -> bool:
    """Return True if the tag belongs to either catalog."""
    return tag in INHERITED_TAGS or tag in NON_INHERITED_TAGS


class Tags(list[str]):
    """Ordered collection of tag labels attached to an account.

    Serialized as a plain JSON array.
    """

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            handler.generate_schema(list[str]),
            serialization=core_schema.plain_serializer_function_ser_schema(list),
        )

    def index_of(self, tag: str) -> int:
        """Return the position of the first occurrence of tag, or -1."""
        for i, each in enumerate(self):
            if each == tag:
                return i
        return -1

    def contains(self, tag: str) -> bool:
        return self.index_of(tag) != -1

    def contains_all(self, tags: Iterable[str]) -> bool:
        """Return True if every tag in tags is present (vacuously true when empty)."""
        return all(self.contains(t) for t in tags)

    def with_tag(self, tag: str) -> "Tags":
        """Return a copy with tag appended, unless already present."""
        if self.contains(tag):
            return Tags(self)
        return Tags([*self, str(tag)])

    def without_tag(self, tag: str) -> "Tags":
        """Return a copy with every occurrence of tag removed."""
        return Tags(t for t in self if t != tag)


def normalize_tags(tags: Iterable[str], *, new_account: bool) -> tuple[Tags, bool]:
    """Filter input tags down to the catalogs.

    Unknown tags are dropped and duplicates collapsed, keeping input order.
    New accounts get DETAIL appended when absent.

    Returns:
        Tuple of (normalized tags, whether the retained-earnings marker was present)
    """
    normalized = Tags()
    retained_earnings = False
    for tag in tags:
        if tag == Tag.RETAINED_EARNINGS:
            retained_earnings = True
        if is_catalog_tag(tag) and not normalized.contains(tag):
            normalized.append(tag)
    if new_account and not normalized.contains(Tag.DETAIL):
        normalized.append(Tag.DETAIL.value)
    return normalized, retained_earnings
