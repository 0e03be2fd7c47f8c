"""Account endpoints."""

import uuid

from fastapi import APIRouter, Response, status

from backend.app.api.deps import LedgerDep
from backend.app.models.account import AccountCreate, AccountOut, AccountUpdate
from backend.app.models.common import AccountEntityType

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountOut, status_code=status.HTTP_201_CREATED)
def create_account(request: AccountCreate, ledger: LedgerDep) -> AccountOut:
    """Create an account; is_primary demotes the scope's other accounts."""
    return ledger.create_account(request)


@router.get("", response_model=list[AccountOut])
def list_accounts(
    ledger: LedgerDep,
    entity_type: AccountEntityType | None = None,
    entity_id: uuid.UUID | None = None,
) -> list[AccountOut]:
    """List accounts, primary first."""
    return ledger.list_accounts(entity_type=entity_type, entity_id=entity_id)


@router.get("/{account_id}", response_model=AccountOut)
def get_account(account_id: uuid.UUID, ledger: LedgerDep) -> AccountOut:
    """Get one account."""
    return ledger.get_account(account_id)


@router.patch("/{account_id}", response_model=AccountOut)
def update_account(account_id: uuid.UUID, request: AccountUpdate, ledger: LedgerDep) -> AccountOut:
    """Partially update an account."""
    return ledger.update_account(account_id, request)


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(account_id: uuid.UUID, ledger: LedgerDep) -> Response:
    """Delete an account."""
    ledger.delete_account(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
