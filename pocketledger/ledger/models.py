"""Mini README: Domain records for the ledger.

Structure:
    * TransactionKind - closed income/expense tag with lenient parsing.
    * Transaction - immutable ledger entry; the balance sign comes from ``kind``.
    * BalancePoint - one day of the balance history series.
    * MonthlyStats - income, expense and count totals for a calendar month.
    * FinancialContext - read model bundling the figures an advisor needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Tuple

from .errors import ValidationError

ZERO = Decimal("0.00")


class TransactionKind(str, Enum):
    """Enumerate the supported transaction kinds."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "TransactionKind":
        """Coerce arbitrary casing into a valid transaction kind."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower()
            return cls(normalised)
        except ValueError as error:
            raise ValidationError(
                f"Unsupported transaction kind: {value!r}", field="kind"
            ) from error


@dataclass(frozen=True, slots=True)
class Transaction:
    """A recorded income or expense."""

    transaction_id: int
    owner_key: str
    kind: TransactionKind
    amount: Decimal
    description: str
    category: str
    occurred_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Contribution of this entry to the running balance."""

        return self.amount if self.kind is TransactionKind.INCOME else -self.amount

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with JSON-serialisable values."""

        return {
            "id": self.transaction_id,
            "owner": self.owner_key,
            "type": self.kind.value,
            "amount": f"{self.amount:.2f}",
            "description": self.description,
            "category": self.category,
            "date": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class BalancePoint:
    """Running balance at the end of one calendar day."""

    day: date
    balance: Decimal

    def as_dict(self) -> Dict[str, str]:
        """Export the point with an ISO date and a two-decimal balance."""

        return {"date": self.day.isoformat(), "balance": f"{self.balance:.2f}"}


@dataclass(frozen=True, slots=True)
class MonthlyStats:
    """Month-to-date totals; income and expenses are reported separately."""

    income: Decimal = ZERO
    expenses: Decimal = ZERO
    count: int = 0

    def as_dict(self) -> Dict[str, object]:
        """Export the totals using the dashboard's field names."""

        return {
            "income": f"{self.income:.2f}",
            "expenses": f"{self.expenses:.2f}",
            "transactionCount": self.count,
        }


@dataclass(frozen=True, slots=True)
class FinancialContext:
    """Balance, month-to-date stats and recent activity from one snapshot."""

    owner_key: str
    balance: Decimal
    stats: MonthlyStats
    recent: Tuple[Transaction, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, object]:
        """Export the context in the shape an advice prompt is built from."""

        recent: List[Dict[str, object]] = [
            {
                "type": transaction.kind.value,
                "amount": f"{transaction.amount:.2f}",
                "category": transaction.category,
                "description": transaction.description,
                "date": transaction.occurred_at.date().isoformat(),
            }
            for transaction in self.recent
        ]
        return {
            "currentBalance": f"{self.balance:.2f}",
            "monthlyIncome": f"{self.stats.income:.2f}",
            "monthlyExpenses": f"{self.stats.expenses:.2f}",
            "transactionCount": self.stats.count,
            "recentTransactions": recent,
        }
