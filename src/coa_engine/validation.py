"""Business-rule validation for charts and accounts.

The message functions are pure: they return the first violated rule as a
human-readable message, or None when the entity is valid. Account rules
that need sibling or parent data read them through an AccountLookup.
"""

from collections.abc import Iterator
from typing import Protocol

from coa_engine.exceptions import CoaNotFoundError, CoaValidationError
from coa_engine.models.accounts import Account
from coa_engine.models.charts import ChartOfAccounts
from coa_engine.models.tags import INCOME_STATEMENT_ATTRIBUTE, INHERITED_TAGS, Tag


class AccountLookup(Protocol):
    """Read-only access to a chart's accounts."""

    def find_account(self, chart_id: str, account_id: str) -> Account | None: ...

    def list_accounts(self, chart_id: str) -> list[Account]: ...


def chart_validation_message(chart: ChartOfAccounts) -> str | None:
    if not chart.name.strip():
        return "The name must be informed"
    return None


def validate_chart(chart: ChartOfAccounts) -> None:
    """Raise CoaValidationError if the chart breaks a rule."""
    if msg := chart_validation_message(chart):
        raise CoaValidationError(msg, entity="chart")


def account_validation_message(account: Account, chart_id: str, lookup: AccountLookup) -> str | None:
    violation = next(_account_violations(account, chart_id, lookup), None)
    return violation.message if violation else None


def validate_account(account: Account, chart_id: str, lookup: AccountLookup) -> None:
    """Raise the first rule violation for the account, if any.

    A missing parent is raised as CoaNotFoundError.
    """
    violation = next(_account_violations(account, chart_id, lookup), None)
    if violation is not None:
        raise violation


def _account_violations(
    account: Account, chart_id: str, lookup: AccountLookup
) -> Iterator[CoaValidationError]:
    """Yield rule violations in the order they are checked."""
    tags = account.tags

    if not account.number.strip():
        yield _violation("The number must be informed")
    if not account.name.strip():
        yield _violation("The name must be informed")

    balance_sheet = tags.contains(Tag.BALANCE_SHEET)
    income_statement = tags.contains(Tag.INCOME_STATEMENT)
    if not balance_sheet and not income_statement:
        yield _violation("The financial statement must be informed")
    if balance_sheet and income_statement:
        yield _violation("The statement must be either balance sheet or income statement")

    on_debit = tags.contains(Tag.INCREASE_ON_DEBIT)
    on_credit = tags.contains(Tag.INCREASE_ON_CREDIT)
    if not on_debit and not on_credit:
        yield _violation("The normal balance must be informed")
    if on_debit and on_credit:
        yield _violation("The normal balance must be either debit or credit")

    attributes = sum(1 for t in tags if INHERITED_TAGS.get(t) == INCOME_STATEMENT_ATTRIBUTE)
    if attributes > 1:
        yield _violation("Only one income statement attribute is allowed")

    if account.is_new:
        for existing in lookup.list_accounts(chart_id):
            if existing.number == account.number:
                yield _violation("An account with this number already exists")
                break

    if account.parent:
        parent = lookup.find_account(chart_id, account.parent)
        if parent is None:
            yield CoaNotFoundError(
                f"Parent not found: {account.parent}",
                entity="account",
                entity_id=account.parent,
            )
            return
        if not account.number.startswith(parent.number):
            yield _violation("The number must start with parent's number")
        if _has_parent_cycle(account, parent, chart_id, lookup):
            yield _violation("The hierarchy of parents contains a cycle")
        for tag, category in INHERITED_TAGS.items():
            if parent.tags.contains(tag) and not tags.contains(tag):
                yield _violation(f"The {category} must be same as the parent")
                break


def _has_parent_cycle(account: Account, parent: Account, chart_id: str, lookup: AccountLookup) -> bool:
    """Walk the ancestor chain looking for an id seen twice."""
    by_id = {a.id: a for a in lookup.list_accounts(chart_id)}
    seen = {account.id} if account.id else set()
    current: Account | None = parent
    while current is not None:
        if current.id in seen:
            return True
        seen.add(current.id)
        current = by_id.get(current.parent) if current.parent else None
    return False


def _violation(message: str) -> CoaValidationError:
    return CoaValidationError(message, entity="account")
