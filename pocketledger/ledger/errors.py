"""Mini README: Exceptions raised by the ledger core.

Structure:
    * LedgerError - base class for every ledger failure.
    * ValidationError - rejected input, raised before anything is stored.
    * NotFoundError - lookup of a transaction identifier that does not exist.
    * StorageUnavailable - the storage context is closed or was never opened.

The interface layer maps these to HTTP responses; the core never retries.
"""

from __future__ import annotations

from typing import Dict, Optional


class LedgerError(Exception):
    """Base class for ledger failures."""


class ValidationError(LedgerError, ValueError):
    """Input that cannot become a transaction."""

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Export the offending field and message for error responses."""

        return {"field": self.field, "message": self.message}


class NotFoundError(LedgerError, KeyError):
    """Unknown transaction identifier."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class StorageUnavailable(LedgerError, RuntimeError):
    """The ledger storage cannot serve requests."""
