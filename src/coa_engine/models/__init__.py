"""Pydantic models for charts of accounts."""

from coa_engine.models.accounts import Account, format_accounts
from coa_engine.models.charts import ChartOfAccounts
from coa_engine.models.tags import (
    FINANCIAL_STATEMENT,
    INCOME_STATEMENT_ATTRIBUTE,
    INHERITED_TAGS,
    NON_INHERITED_TAGS,
    Tag,
    Tags,
    is_catalog_tag,
    normalize_tags,
)

__all__ = [
    # Tag catalogs
    "FINANCIAL_STATEMENT",
    "INCOME_STATEMENT_ATTRIBUTE",
    "INHERITED_TAGS",
    "NON_INHERITED_TAGS",
    "Tag",
    "Tags",
    "is_catalog_tag",
    "normalize_tags",
    # Entities
    "Account",
    "ChartOfAccounts",
    "format_accounts",
]
