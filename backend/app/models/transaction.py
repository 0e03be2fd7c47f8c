"""Transaction models - payment snapshots recorded against a route."""

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from backend.app.models.common import TransactionType


class TransactionCreate(BaseModel):
    """Fields accepted when recording a transaction."""

    transaction_date: date
    amount: float = Field(..., gt=0)
    currency: str | None = Field(None, min_length=3, max_length=3)
    payment_method: str | None = None
    type: TransactionType
    description: str | None = None
    from_account_id: uuid.UUID | None = None
    to_account_id: uuid.UUID | None = None


class TransactionOut(BaseModel):
    """Recorded transaction with account holder names."""

    id: uuid.UUID
    route_id: uuid.UUID
    transaction_date: date
    amount: float
    currency: str
    payment_method: str | None
    type: TransactionType
    description: str | None
    from_account_id: uuid.UUID | None
    from_account_name: str | None
    to_account_id: uuid.UUID | None
    to_account_name: str | None
    created_at: datetime
