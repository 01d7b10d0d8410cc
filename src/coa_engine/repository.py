"""Repository engine for charts of accounts.

Every collection is read and written as one blob: all charts live under
"charts-of-accounts" and each chart's accounts under "accounts/<chart id>".
There are no cross-key transactions, so the engine assumes a single logical
writer per chart. Concurrent saves against the same chart can lose updates;
callers that need multi-writer safety must serialize access themselves.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from uuid import uuid4

from coa_engine.codec import (
    CHARTS_KEY,
    accounts_key,
    decode_accounts,
    decode_charts,
    encode_accounts,
    encode_charts,
)
from coa_engine.exceptions import CoaArgumentError, CoaNotFoundError, CoaValidationError
from coa_engine.models.accounts import Account
from coa_engine.models.charts import ChartOfAccounts
from coa_engine.models.tags import Tag, normalize_tags
from coa_engine.store.base import KeyValueStore
from coa_engine.validation import validate_account, validate_chart

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CoaRepository:
    """Load, validate, mutate and store charts and their accounts.

    Saving an account may trigger follow-up saves: marking it as the chart's
    retained-earnings account, and reclassifying its parent from detail to
    summary. Those cascades run after the account itself is written, so a
    failure there leaves the account saved and the derived flag stale until
    the save is retried.

    Usage:
        repo = CoaRepository(MemoryStore())
        chart = repo.save_chart(ChartOfAccounts(name="Main"))
        cash = repo.save_account(
            chart.id,
            Account(number="1", name="Assets", tags=["balanceSheet", "increaseOnDebit"]),
        )
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            store: Backing key-value store
            id_factory: Generates identifiers for new entities (default: random UUID)
            clock: Returns the current time (default: timezone-aware UTC now)
        """
        self.store = store
        self._new_id = id_factory or _new_id
        self._now = clock or _utc_now

    # ------------------------------------------------------------------
    # Charts
    # ------------------------------------------------------------------

    def list_charts(self) -> list[ChartOfAccounts]:
        """Return every chart in stored order (sorted by name on write)."""
        return decode_charts(self.store.get(CHARTS_KEY))

    def get_chart(self, chart_id: str) -> ChartOfAccounts | None:
        for chart in self.list_charts():
            if chart.id == chart_id:
                return chart
        return None

    def save_chart(self, chart: ChartOfAccounts | None) -> ChartOfAccounts:
        """Create or replace a chart and rewrite the chart list.

        The retained-earnings account and the creation time are kept from
        the stored version; only the retained-earnings cascade changes the
        former.

        Returns:
            A copy of the chart with id and timestamps populated

        Raises:
            CoaValidationError: If the chart is missing or its name is blank
            CoaNotFoundError: If the chart has an id that is not stored
            CoaStoreError: On storage failure
        """
        return self._save_chart(chart, designating=False)

    def _save_chart(self, chart: ChartOfAccounts | None, *, designating: bool) -> ChartOfAccounts:
        if chart is None:
            raise CoaValidationError("Invalid argument: chart is missing", entity="chart")
        validate_chart(chart)

        chart = chart.model_copy(deep=True)
        charts = self.list_charts()
        now = self._now()
        chart.as_of = now

        if chart.is_new:
            chart.id = self._new_id()
            chart.created = now
            if not designating:
                chart.retained_earnings_account = ""
            charts.append(chart)
        else:
            index = _index_by_id(charts, chart.id)
            if index is None:
                raise CoaNotFoundError(
                    f"Chart of accounts not found: {chart.id}", entity="chart", entity_id=chart.id
                )
            chart.created = charts[index].created
            if not designating:
                chart.retained_earnings_account = charts[index].retained_earnings_account
            charts[index] = chart

        charts.sort(key=lambda c: c.name)
        self.store.put(CHARTS_KEY, encode_charts(charts))
        logger.debug("Saved chart %s (%s), %d charts stored", chart.id, chart.name, len(charts))
        return chart

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def list_accounts(self, chart_id: str) -> list[Account]:
        """Return the chart's accounts sorted by number."""
        accounts = self._load_accounts(chart_id)
        accounts.sort(key=lambda a: a.number)
        return accounts

    def get_account(self, chart_id: str, account_id: str) -> Account | None:
        for account in self.list_accounts(chart_id):
            if account.id == account_id:
                return account
        return None

    def find_account(self, chart_id: str, account_id: str) -> Account | None:
        """Lookup used by validation; same as get_account."""
        return self.get_account(chart_id, account_id)

    def save_account(self, chart_id: str, account: Account | None) -> Account:
        """Create or update an account, then run the cascades.

        On update, number, parent and created are taken from the stored
        version whatever the caller supplies.

        Returns:
            A copy of the account as stored

        Raises:
            CoaArgumentError: If chart_id is blank or account is missing
            CoaValidationError: If a business rule is violated (nothing is written)
            CoaNotFoundError: If the account, its parent or the chart is unknown
            CoaStoreError: On storage failure
        """
        self._require_chart_id(chart_id)
        if account is None:
            raise CoaArgumentError("Invalid argument: account is missing", argument="account")

        account = account.model_copy(deep=True)
        account.tags, retained_earnings = normalize_tags(account.tags, new_account=account.is_new)

        if not account.is_new:
            previous = self.get_account(chart_id, account.id)
            if previous is None:
                raise CoaNotFoundError(
                    f"Account not found: {account.id}", entity="account", entity_id=account.id
                )
            account.number = previous.number
            account.parent = previous.parent
            account.created = previous.created

        validate_account(account, chart_id, self)
        if retained_earnings and self.get_chart(chart_id) is None:
            raise CoaNotFoundError(
                f"Chart of accounts not found: {chart_id}", entity="chart", entity_id=chart_id
            )

        accounts = self._load_accounts(chart_id)
        now = self._now()
        account.as_of = now
        if account.is_new:
            account.id = self._new_id()
            account.created = now
            accounts.append(account)
        else:
            index = _index_by_id(accounts, account.id)
            if index is None:
                accounts.append(account)
            else:
                accounts[index] = account

        self.store.put(accounts_key(chart_id), encode_accounts(chart_id, accounts))
        logger.debug("Saved account %s (%s) in chart %s", account.id, account.number, chart_id)

        if retained_earnings:
            self._designate_retained_earnings(chart_id, account)
        if account.parent:
            self._reclassify_parent(chart_id, account)

        return account

    def indexes(self, chart_id: str, account_ids: Sequence[str], tags: Sequence[str]) -> list[int]:
        """Locate accounts by id in stored (unsorted) order.

        For each requested id, returns the position of the last stored entry
        with that id whose tags include every tag in tags, or -1.
        """
        self._require_chart_id(chart_id)
        accounts = self._load_accounts(chart_id)
        result = []
        for account_id in account_ids:
            position = -1
            for i, account in enumerate(accounts):
                if account.id == account_id and account.tags.contains_all(tags):
                    position = i
            result.append(position)
        return result

    # ------------------------------------------------------------------
    # Cascades
    # ------------------------------------------------------------------

    def _designate_retained_earnings(self, chart_id: str, account: Account) -> None:
        chart = self.get_chart(chart_id)
        if chart is None:
            raise CoaNotFoundError(
                f"Chart of accounts not found: {chart_id}", entity="chart", entity_id=chart_id
            )
        logger.info("Designating account %s as retained earnings of chart %s", account.id, chart_id)
        chart.retained_earnings_account = account.id
        self._save_chart(chart, designating=True)

    def _reclassify_parent(self, chart_id: str, account: Account) -> None:
        """Turn the parent into a summary account if it is not one already."""
        parent = self.get_account(chart_id, account.parent)
        if parent is None:
            raise CoaNotFoundError(
                f"Parent not found: {account.parent}", entity="account", entity_id=account.parent
            )

        changed = False
        if parent.tags.contains(Tag.DETAIL):
            parent.tags = parent.tags.without_tag(Tag.DETAIL)
            changed = True
        if not parent.tags.contains(Tag.SUMMARY):
            parent.tags = parent.tags.with_tag(Tag.SUMMARY)
            changed = True

        if changed:
            logger.info("Reclassifying account %s as summary in chart %s", parent.id, chart_id)
            self.save_account(chart_id, parent)

    # ------------------------------------------------------------------
    # Storage helpers
    # ------------------------------------------------------------------

    def _load_accounts(self, chart_id: str) -> list[Account]:
        self._require_chart_id(chart_id)
        return decode_accounts(chart_id, self.store.get(accounts_key(chart_id)))

    @staticmethod
    def _require_chart_id(chart_id: str) -> None:
        if not chart_id or not chart_id.strip():
            raise CoaArgumentError("Invalid argument: chart id is empty", argument="chart_id")


def _index_by_id(items: Sequence[Account] | Sequence[ChartOfAccounts], item_id: str) -> int | None:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    return None
