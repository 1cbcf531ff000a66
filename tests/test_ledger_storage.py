"""Mini README: Tests for the in-memory storage context.

Structure:
    * lifecycle tests - closed stores surface ``StorageUnavailable``.
    * lookup tests - identifier lookups and owner snapshots.
    * concurrency test - parallel inserts keep identifiers unique and visible.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from pocketledger.ledger import (
    InMemoryLedgerStorage,
    LedgerAggregator,
    NewTransaction,
    NotFoundError,
    StorageUnavailable,
    TransactionKind,
)


def _entry(owner: str = "alice", amount: str = "10.00") -> NewTransaction:
    return NewTransaction(
        owner_key=owner,
        kind=TransactionKind.INCOME,
        amount=Decimal(amount),
        description="Deposit",
        category="other",
        occurred_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_closed_storage_rejects_reads_and_writes() -> None:
    storage = InMemoryLedgerStorage()

    with pytest.raises(StorageUnavailable):
        storage.append(_entry())
    with pytest.raises(StorageUnavailable):
        storage.snapshot("alice")

    storage.open()
    storage.append(_entry())
    storage.close()

    aggregator = LedgerAggregator(storage)
    with pytest.raises(StorageUnavailable):
        aggregator.current_balance("alice")


def test_context_manager_opens_and_closes() -> None:
    with InMemoryLedgerStorage() as storage:
        assert storage.is_open
        storage.append(_entry())
    assert not storage.is_open


def test_get_returns_entry_or_raises_not_found() -> None:
    with InMemoryLedgerStorage() as storage:
        created = storage.append(_entry())
        assert storage.get(created.transaction_id) == created
        with pytest.raises(NotFoundError) as excinfo:
            storage.get(999)
        assert str(excinfo.value) == "Transaction 999 not found"


def test_snapshot_is_isolated_per_owner_and_immutable() -> None:
    with InMemoryLedgerStorage() as storage:
        storage.append(_entry("alice"))
        storage.append(_entry("bob"))
        snapshot = storage.snapshot("alice")
        storage.append(_entry("alice"))

        assert len(snapshot) == 1
        assert len(storage.snapshot("alice")) == 2
        assert storage.snapshot("carol") == ()


def test_concurrent_inserts_are_all_visible() -> None:
    """Appends from many threads get unique identifiers and are all readable afterwards."""

    with InMemoryLedgerStorage() as storage:
        aggregator = LedgerAggregator(storage)

        def worker() -> None:
            for _ in range(50):
                aggregator.create_transaction("alice", "income", "1.00", "Tick", "other")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        transactions = aggregator.list_transactions("alice")
        assert len(transactions) == 400
        assert len({transaction.transaction_id for transaction in transactions}) == 400
        assert aggregator.current_balance("alice") == Decimal("400.00")
        assert len(storage) == 400
