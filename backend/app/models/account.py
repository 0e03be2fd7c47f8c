"""Account models - financial accounts attached to entities or the company."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import AccountEntityType, AccountType


class AccountCreate(BaseModel):
    """Fields accepted when creating an account.

    Type-specific requirements (bank_name for bank/other, service_name for
    online) are enforced by the ledger so they surface as validation errors.
    """

    entity_type: AccountEntityType
    entity_id: uuid.UUID | None = None
    account_type: AccountType
    account_holder_name: str = Field(..., min_length=1)
    bank_name: str | None = None
    account_number: str | None = None
    iban: str | None = None
    swift_bic: str | None = None
    routing_number: str | None = None
    currency: str | None = None
    service_name: str | None = None
    is_primary: bool = False
    note: str | None = None


class AccountUpdate(BaseModel):
    """Partial account update. The owning entity cannot change."""

    account_type: AccountType | None = None
    account_holder_name: str | None = Field(None, min_length=1)
    bank_name: str | None = None
    account_number: str | None = None
    iban: str | None = None
    swift_bic: str | None = None
    routing_number: str | None = None
    currency: str | None = None
    service_name: str | None = None
    is_primary: bool | None = None
    note: str | None = None


class AccountOut(BaseModel):
    """Stored account with the owner's name resolved."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    entity_type: AccountEntityType
    entity_id: uuid.UUID | None
    entity_name: str | None = None
    account_type: AccountType
    account_holder_name: str
    bank_name: str | None
    account_number: str | None
    iban: str | None
    swift_bic: str | None
    routing_number: str | None
    currency: str | None
    service_name: str | None
    is_primary: bool
    note: str | None
    created_at: datetime
    updated_at: datetime
