"""Mini README: Storage contexts holding the append-only transaction log.

Structure:
    * NewTransaction - validated field set awaiting an identifier.
    * LedgerStorage - abstract interface the aggregator depends on.
    * InMemoryLedgerStorage - arena keyed by identifier with an owner index.

A storage context is constructed explicitly and opened/closed by whoever owns
the process lifecycle (the web application's lifespan, the CLI, or a test).
Operations on a closed context raise ``StorageUnavailable``. Entries are never
updated or removed once appended.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Tuple

from ..logging_utils import get_logger
from .errors import NotFoundError, StorageUnavailable
from .models import Transaction, TransactionKind

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class NewTransaction:
    """Fields of a transaction that has passed validation."""

    owner_key: str
    kind: TransactionKind
    amount: Decimal
    description: str
    category: str
    occurred_at: datetime


class LedgerStorage(ABC):
    """Interface for transaction stores."""

    @abstractmethod
    def open(self) -> None:
        """Make the store ready to serve requests."""

    @abstractmethod
    def close(self) -> None:
        """Release resources; later calls raise ``StorageUnavailable``."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the store currently accepts requests."""

    @abstractmethod
    def append(self, entry: NewTransaction) -> Transaction:
        """Assign an identifier to ``entry`` and persist it."""

    @abstractmethod
    def snapshot(self, owner_key: str) -> Tuple[Transaction, ...]:
        """Return every transaction of ``owner_key`` in insertion order."""

    @abstractmethod
    def get(self, transaction_id: int) -> Transaction:
        """Fetch a transaction by identifier."""

    def __enter__(self) -> "LedgerStorage":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class InMemoryLedgerStorage(LedgerStorage):
    """Process-local store guarded by a re-entrant lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._transactions: Dict[int, Transaction] = {}
        self._by_owner: Dict[str, List[int]] = {}
        self._sequence = 0
        self._open = False

    def open(self) -> None:
        with self._lock:
            self._open = True
        LOGGER.debug("In-memory ledger storage opened")

    def close(self) -> None:
        with self._lock:
            self._open = False
        LOGGER.debug("In-memory ledger storage closed with %s transactions", len(self._transactions))

    @property
    def is_open(self) -> bool:
        return self._open

    def _ensure_open(self) -> None:
        if not self._open:
            raise StorageUnavailable("Ledger storage is not open")

    def append(self, entry: NewTransaction) -> Transaction:
        with self._lock:
            self._ensure_open()
            self._sequence += 1
            transaction = Transaction(
                transaction_id=self._sequence,
                owner_key=entry.owner_key,
                kind=entry.kind,
                amount=entry.amount,
                description=entry.description,
                category=entry.category,
                occurred_at=entry.occurred_at,
            )
            self._transactions[transaction.transaction_id] = transaction
            self._by_owner.setdefault(entry.owner_key, []).append(transaction.transaction_id)
        return transaction

    def snapshot(self, owner_key: str) -> Tuple[Transaction, ...]:
        with self._lock:
            self._ensure_open()
            identifiers = self._by_owner.get(owner_key, ())
            return tuple(self._transactions[identifier] for identifier in identifiers)

    def get(self, transaction_id: int) -> Transaction:
        with self._lock:
            self._ensure_open()
            if transaction_id not in self._transactions:
                raise NotFoundError(f"Transaction {transaction_id} not found")
            return self._transactions[transaction_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._transactions)
