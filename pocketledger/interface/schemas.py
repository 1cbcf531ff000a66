"""Mini README: Request bodies accepted by the HTTP interface.

Only the JSON shape is checked here. Field values (positive amounts, known
kinds, non-empty text, parseable dates) are validated by the ledger core so
that every caller gets the same rules and error messages.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TransactionCreateRequest(BaseModel):
    """Raw fields of a new transaction as sent by the dashboard form."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    kind: str = Field("", alias="type")
    amount: Union[str, int, float, None] = None
    description: str = ""
    category: str = ""
    date: Optional[str] = None
