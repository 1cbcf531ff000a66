"""Mini README: Input coercion for new ledger entries.

Structure:
    * parse_amount - positive two-decimal ``Decimal`` from strings or numbers.
    * require_text - stripped, non-empty text fields.
    * parse_occurred_at - timezone-aware datetimes from ISO strings, dates or datetimes.

Every helper raises ``ValidationError`` naming the offending field so callers
can report it back to the user without touching storage.
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from .errors import ValidationError

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")


def parse_amount(value: object) -> Decimal:
    """Return ``value`` as a positive amount rounded to cents."""

    if isinstance(value, bool) or value is None:
        raise ValidationError("Amount must be a positive number", field="amount")
    try:
        # Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion.
        raw = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as error:
        raise ValidationError("Amount must be a positive number", field="amount") from error
    if not raw.is_finite() or raw <= 0:
        raise ValidationError("Amount must be a positive number", field="amount")
    if raw > MAX_AMOUNT:
        raise ValidationError(f"Amount must not exceed {MAX_AMOUNT}", field="amount")

    amount = raw.quantize(CENT, rounding=ROUND_HALF_UP)
    if amount <= 0:
        raise ValidationError("Amount must be a positive number", field="amount")
    return amount


def require_text(value: object, field: str) -> str:
    """Return ``value`` stripped, rejecting missing or blank input."""

    text = "" if value is None else str(value).strip()
    if not text:
        raise ValidationError(f"{field.capitalize()} is required", field=field)
    return text


def parse_occurred_at(value: object, *, tz: tzinfo, default: datetime) -> datetime:
    """Normalise an effective date into an aware datetime.

    ``None`` selects ``default``. Naive datetimes and plain dates are read as
    wall-clock time in ``tz``; aware datetimes keep their instant and are
    converted into ``tz``.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        moment = default
    elif isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        moment = _parse_iso(value.strip())
    else:
        raise ValidationError(
            "Date must be an ISO string or a date/datetime instance", field="date"
        )

    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def _parse_iso(text: str) -> datetime:
    # Accept the trailing "Z" that JavaScript clients send.
    candidate = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        pass
    try:
        return datetime.combine(date.fromisoformat(candidate), time.min)
    except ValueError as error:
        raise ValidationError(f"Invalid date: {text!r}", field="date") from error


def parse_limit(value: Optional[int]) -> Optional[int]:
    """Validate an optional result limit."""

    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError("Limit must be a positive integer", field="limit")
    return value
