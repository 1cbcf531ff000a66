"""Mini README: Deterministic demo data for a fresh ledger.

Structure:
    * DEMO_TRANSACTIONS - (days ago, kind, amount, description, category) rows.
    * seed_demo_transactions - append the rows relative to the aggregator's clock.

Dates are relative to "today" so the balance chart and month-to-date stats of
a freshly started service always have something to show.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import List, Optional, Tuple

from ..logging_utils import get_logger
from .aggregator import LedgerAggregator
from .models import Transaction

LOGGER = get_logger(__name__)

DEMO_TRANSACTIONS: Tuple[Tuple[int, str, str, str, str], ...] = (
    (45, "income", "3200.00", "Monthly salary", "salary"),
    (40, "expense", "1150.00", "Rent", "utilities"),
    (33, "expense", "86.40", "Groceries", "food"),
    (21, "income", "450.00", "Logo design commission", "freelance"),
    (15, "income", "3200.00", "Monthly salary", "salary"),
    (12, "expense", "1150.00", "Rent", "utilities"),
    (9, "expense", "64.25", "Train pass", "transport"),
    (6, "expense", "112.80", "Groceries", "food"),
    (3, "expense", "39.99", "Concert tickets", "entertainment"),
    (1, "expense", "18.50", "Pharmacy", "healthcare"),
)


def seed_demo_transactions(
    aggregator: LedgerAggregator, owner_key: str, *, today: Optional[datetime] = None
) -> List[Transaction]:
    """Record the demo rows for ``owner_key`` at local noon on their day."""

    anchor = (today or aggregator.now()).astimezone(aggregator.tz)
    created: List[Transaction] = []
    for days_ago, kind, amount, description, category in DEMO_TRANSACTIONS:
        day = anchor.date() - timedelta(days=days_ago)
        created.append(
            aggregator.create_transaction(
                owner_key,
                kind,
                amount,
                description,
                category,
                occurred_at=datetime.combine(day, time(12, 0)),
            )
        )
    LOGGER.info("Seeded %s demo transactions for %s", len(created), owner_key)
    return created
