"""Mini README: Ledger aggregator answering balance queries over the log.

Structure:
    * compute_balance - signed fold over transactions.
    * compute_monthly_stats - month-to-date income, expense and count totals.
    * build_balance_history - daily running balance over a trailing window.
    * LedgerAggregator - validated inserts plus the read queries, bound to a
      storage context and a fixed ledger timezone.

The pure functions take any iterable of transactions so they can be reused on
snapshots from any storage. The aggregator takes exactly one snapshot per
query, which keeps multi-pass computations consistent while inserts continue.
Calendar days and month boundaries are always evaluated in the aggregator's
timezone.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from ..logging_utils import get_logger
from .errors import ValidationError
from .models import (
    ZERO,
    BalancePoint,
    FinancialContext,
    MonthlyStats,
    Transaction,
    TransactionKind,
)
from .storage import LedgerStorage, NewTransaction
from .validation import parse_amount, parse_limit, parse_occurred_at, require_text

LOGGER = get_logger(__name__)

DEFAULT_MAX_WINDOW_DAYS = 3660


def compute_balance(transactions: Iterable[Transaction]) -> Decimal:
    """Signed sum of ``transactions`` with no time bound."""

    return sum((transaction.signed_amount for transaction in transactions), ZERO)


def most_recent_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Order by effective time descending, newest identifier first on ties."""

    return sorted(
        transactions,
        key=lambda transaction: (transaction.occurred_at, transaction.transaction_id),
        reverse=True,
    )


def month_start(moment: datetime, tz: tzinfo) -> datetime:
    """Local midnight on the first day of the month containing ``moment``."""

    local = moment.astimezone(tz)
    return local.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def compute_monthly_stats(
    transactions: Iterable[Transaction], *, reference_time: datetime, tz: tzinfo
) -> MonthlyStats:
    """Totals for entries between the start of the reference month and ``reference_time``."""

    window_start = month_start(reference_time, tz)
    income = ZERO
    expenses = ZERO
    count = 0
    for transaction in transactions:
        if not window_start <= transaction.occurred_at <= reference_time:
            continue
        count += 1
        if transaction.kind is TransactionKind.INCOME:
            income += transaction.amount
        else:
            expenses += transaction.amount
    return MonthlyStats(income=income, expenses=expenses, count=count)


def build_balance_history(
    transactions: Iterable[Transaction],
    *,
    end_date: date,
    window_days: int,
    tz: tzinfo,
) -> List[BalancePoint]:
    """Running balance for each day from ``end_date - window_days`` to ``end_date``.

    The series starts from the balance of everything dated before the window
    so the first point is accurate rather than zero. Days without activity
    repeat the previous balance. Entries after ``end_date`` are ignored. A
    negative window yields an empty series.
    """

    if window_days < 0:
        return []

    start_date = end_date - timedelta(days=window_days)
    seed = ZERO
    daily_totals: Dict[date, Decimal] = {}
    for transaction in transactions:
        day = transaction.occurred_at.astimezone(tz).date()
        if day < start_date:
            seed += transaction.signed_amount
        elif day <= end_date:
            daily_totals[day] = daily_totals.get(day, ZERO) + transaction.signed_amount

    points: List[BalancePoint] = []
    running = seed
    cursor = start_date
    while cursor <= end_date:
        running += daily_totals.get(cursor, ZERO)
        points.append(BalancePoint(day=cursor, balance=running))
        cursor += timedelta(days=1)
    return points


class LedgerAggregator:
    """Record transactions and answer derived balance queries."""

    def __init__(
        self,
        storage: LedgerStorage,
        *,
        tz: tzinfo = timezone.utc,
        clock: Optional[Callable[[], datetime]] = None,
        max_window_days: int = DEFAULT_MAX_WINDOW_DAYS,
    ) -> None:
        self.storage = storage
        self.tz = tz
        self.max_window_days = max_window_days
        self._clock = clock or (lambda: datetime.now(self.tz))
        LOGGER.debug("Ledger aggregator initialised with timezone %s", tz)

    def now(self) -> datetime:
        """Current time in the ledger timezone."""

        return self._clock().astimezone(self.tz)

    def _resolve_time(self, value: Optional[object]) -> datetime:
        return parse_occurred_at(value, tz=self.tz, default=self.now())

    def create_transaction(
        self,
        owner_key: str,
        kind: object,
        amount: object,
        description: object,
        category: object,
        occurred_at: Optional[object] = None,
    ) -> Transaction:
        """Validate the inputs and append a new transaction."""

        try:
            entry = NewTransaction(
                owner_key=require_text(owner_key, "owner"),
                kind=TransactionKind.from_str(kind),
                amount=parse_amount(amount),
                description=require_text(description, "description"),
                category=require_text(category, "category"),
                occurred_at=self._resolve_time(occurred_at),
            )
        except ValidationError as error:
            LOGGER.warning("Rejected transaction for %s: %s", owner_key, error.message)
            raise

        transaction = self.storage.append(entry)
        LOGGER.info(
            "Recorded %s %s for %s (id=%s)",
            transaction.kind.value,
            transaction.amount,
            transaction.owner_key,
            transaction.transaction_id,
        )
        return transaction

    def list_transactions(self, owner_key: str, limit: Optional[int] = None) -> List[Transaction]:
        """Return the owner's transactions, most recent first."""

        limit = parse_limit(limit)
        ordered = most_recent_first(self.storage.snapshot(owner_key))
        return ordered if limit is None else ordered[:limit]

    def current_balance(self, owner_key: str) -> Decimal:
        """Signed sum of every transaction the owner has recorded."""

        return compute_balance(self.storage.snapshot(owner_key))

    def monthly_stats(
        self, owner_key: str, reference_time: Optional[object] = None
    ) -> MonthlyStats:
        """Income and expense totals for the month to date."""

        reference = self._resolve_time(reference_time)
        return compute_monthly_stats(
            self.storage.snapshot(owner_key), reference_time=reference, tz=self.tz
        )

    def balance_history(
        self,
        owner_key: str,
        window_days: int = 30,
        end_time: Optional[object] = None,
    ) -> List[BalancePoint]:
        """Daily balance points over the trailing ``window_days``."""

        if isinstance(window_days, bool) or not isinstance(window_days, int):
            raise ValidationError("Window must be a whole number of days", field="days")
        end_date = self._resolve_time(end_time).date()
        if window_days > min(self.max_window_days, (end_date - date.min).days):
            raise ValidationError(
                f"Window must not exceed {self.max_window_days} days", field="days"
            )
        transactions = self.storage.snapshot(owner_key)
        LOGGER.debug(
            "Building %s-day balance history for %s from %s transactions",
            window_days,
            owner_key,
            len(transactions),
        )
        return build_balance_history(
            transactions, end_date=end_date, window_days=window_days, tz=self.tz
        )

    def financial_context(
        self,
        owner_key: str,
        recent_limit: int = 10,
        reference_time: Optional[object] = None,
    ) -> FinancialContext:
        """Balance, monthly stats and recent entries computed from one snapshot."""

        recent_limit = parse_limit(recent_limit)
        reference = self._resolve_time(reference_time)
        transactions = self.storage.snapshot(owner_key)
        recent = most_recent_first(transactions)[:recent_limit]
        return FinancialContext(
            owner_key=owner_key,
            balance=compute_balance(transactions),
            stats=compute_monthly_stats(transactions, reference_time=reference, tz=self.tz),
            recent=tuple(recent),
        )
