"""Mini README: Core package initializer for Pocketledger.

Pocketledger records personal income and expenses and derives balances from
the transaction log. The ledger core lives in ``pocketledger.ledger``; the
HTTP interface in ``pocketledger.interface`` is a thin layer on top of it.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
