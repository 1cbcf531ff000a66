"""Mini README: Ledger core for Pocketledger.

This package owns the append-only transaction log and every derived figure
computed from it: the all-time balance, month-to-date totals, and the daily
balance history used by the dashboard chart. Storage is an explicit context
object handed to ``LedgerAggregator``; nothing here keeps module-level state.
"""

from .aggregator import (
    LedgerAggregator,
    build_balance_history,
    compute_balance,
    compute_monthly_stats,
    most_recent_first,
)
from .demo import seed_demo_transactions
from .errors import LedgerError, NotFoundError, StorageUnavailable, ValidationError
from .models import BalancePoint, FinancialContext, MonthlyStats, Transaction, TransactionKind
from .storage import InMemoryLedgerStorage, LedgerStorage, NewTransaction

__all__ = [
    "BalancePoint",
    "FinancialContext",
    "InMemoryLedgerStorage",
    "LedgerAggregator",
    "LedgerError",
    "LedgerStorage",
    "MonthlyStats",
    "NewTransaction",
    "NotFoundError",
    "StorageUnavailable",
    "Transaction",
    "TransactionKind",
    "ValidationError",
    "build_balance_history",
    "compute_balance",
    "compute_monthly_stats",
    "most_recent_first",
    "seed_demo_transactions",
]
