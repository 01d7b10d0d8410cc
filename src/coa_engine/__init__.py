"""Chart-of-accounts repository and validation engine.

Charts and their account hierarchies are kept in any byte-oriented
key-value store, one blob per collection.

Example:
    from coa_engine import Account, ChartOfAccounts, CoaRepository, MemoryStore

    repo = CoaRepository(MemoryStore())
    chart = repo.save_chart(ChartOfAccounts(name="Household"))

    assets = repo.save_account(
        chart.id,
        Account(number="1", name="Assets", tags=["balanceSheet", "increaseOnDebit"]),
    )
    cash = repo.save_account(
        chart.id,
        Account(
            number="11",
            name="Cash",
            tags=["balanceSheet", "increaseOnDebit"],
            parent=assets.id,
        ),
    )

    # Assets now carries "summary" instead of "detail"
    repo.get_account(chart.id, assets.id).tags
"""

from coa_engine.config import CoaConfig
from coa_engine.exceptions import (
    CoaArgumentError,
    CoaError,
    CoaNotFoundError,
    CoaRateLimitError,
    CoaStoreError,
    CoaValidationError,
)
from coa_engine.models import Account, ChartOfAccounts, Tag, Tags
from coa_engine.repository import CoaRepository
from coa_engine.store import FileStore, HttpStore, KeyValueStore, MemoryStore

__version__ = "0.1.0"

__all__ = [
    # Engine
    "CoaConfig",
    "CoaRepository",
    # Models
    "Account",
    "ChartOfAccounts",
    "Tag",
    "Tags",
    # Stores
    "FileStore",
    "HttpStore",
    "KeyValueStore",
    "MemoryStore",
    # Exceptions
    "CoaArgumentError",
    "CoaError",
    "CoaNotFoundError",
    "CoaRateLimitError",
    "CoaStoreError",
    "CoaValidationError",
]
