"""Shared fixtures for engine tests."""

import itertools
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from coa_engine import Account, ChartOfAccounts, CoaRepository, MemoryStore


class FakeClock:
    """Clock that advances one second per call."""

    def __init__(self) -> None:
        self.current = datetime(2025, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def store() -> MemoryStore:
    """Create an empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def repo(store: MemoryStore, clock: FakeClock) -> CoaRepository:
    """Create a repository with predictable ids (id-1, id-2, ...)."""
    counter = itertools.count(1)
    return CoaRepository(store, id_factory=lambda: f"id-{next(counter)}", clock=clock)


@pytest.fixture
def chart(repo: CoaRepository) -> ChartOfAccounts:
    """Create and save a chart named Main."""
    return repo.save_chart(ChartOfAccounts(name="Main"))


@pytest.fixture
def make_account() -> Callable[..., Account]:
    """Factory for balance-sheet, debit-normal accounts unless tags are given."""

    def factory(
        number: str,
        name: str | None = None,
        *,
        tags: list[str] | None = None,
        parent: str = "",
    ) -> Account:
        return Account(
            number=number,
            name=name or f"Account {number}",
            tags=tags if tags is not None else ["balanceSheet", "increaseOnDebit"],
            parent=parent,
        )

    return factory
