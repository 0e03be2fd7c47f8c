"""Account ledger - financial accounts with one primary per owner scope.

A scope is (entity_type, entity_id); the company scope has no entity id.
Making an account primary demotes every other account in its scope inside
the same transaction. The partial unique index on primary scope keys turns a
lost race into a ConflictError instead of two primaries.
"""

import logging
import uuid
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from backend.app.db.engine import atomic
from backend.app.db.entity_store import SqlEntityStore
from backend.app.db.models import Account
from backend.app.db.repositories import EntityStore
from backend.app.errors import NotFoundError, ValidationError
from backend.app.models.account import AccountCreate, AccountOut, AccountUpdate
from backend.app.models.common import ACCOUNT_ENTITY_KINDS, AccountEntityType, AccountType
from backend.app.utils.logging import StructuredOperationLogger
from backend.app.utils.metrics import PrometheusOperationMetrics

logger = logging.getLogger(__name__)


def scope_key(entity_type: AccountEntityType | str, entity_id: uuid.UUID | None) -> str:
    """Stable key for an owner scope, e.g. 'hotel:<uuid>' or 'company:'."""
    kind = AccountEntityType(entity_type).value
    return f"{kind}:{entity_id or ''}"


def check_account_fields(account_type: AccountType, values: dict[str, Any]) -> dict[str, Any]:
    """Enforce type-specific required fields.

    Cash accounts carry no bank name. Returns the adjusted values.

    Raises:
        ValidationError: If a required field is missing for the type
    """
    values = dict(values)
    if account_type in (AccountType.bank, AccountType.other) and not values.get("bank_name"):
        raise ValidationError(f"bank_name is required for {account_type.value} accounts")
    if account_type == AccountType.online and not values.get("service_name"):
        raise ValidationError("service_name is required for online accounts")
    if account_type == AccountType.cash:
        values["bank_name"] = None
    return values


class AccountLedger:
    """CRUD over accounts, keeping the single-primary invariant."""

    def __init__(self, session: Session, entities: EntityStore | None = None) -> None:
        self._session = session
        self._entities = entities or SqlEntityStore(session)
        self._ops = StructuredOperationLogger("ledger")
        self._metrics = PrometheusOperationMetrics()

    def create_account(self, payload: AccountCreate) -> AccountOut:
        """Create an account, demoting the scope's current primary if needed.

        Args:
            payload: Account fields

        Returns:
            Created account

        Raises:
            ValidationError: On missing type-specific fields or owner id
            NotFoundError: If the owning entity does not exist
            ConflictError: If a concurrent writer won the primary slot
        """
        entity_type = payload.entity_type
        entity_id = None if entity_type == AccountEntityType.company else payload.entity_id
        if entity_type != AccountEntityType.company and entity_id is None:
            raise ValidationError(f"entity_id is required for {entity_type.value} accounts")

        values = check_account_fields(
            payload.account_type,
            payload.model_dump(exclude={"entity_type", "entity_id", "account_type"}),
        )

        with atomic(self._session):
            if entity_id is not None:
                kind = ACCOUNT_ENTITY_KINDS[entity_type]
                if self._entities.get_by_id(kind, entity_id) is None:
                    raise NotFoundError(f"{kind.value.capitalize()} not found")

            key = scope_key(entity_type, entity_id)
            if payload.is_primary:
                self._demote_scope(key, entity_type)

            account = Account(
                entity_type=entity_type.value,
                entity_id=entity_id,
                scope_key=key,
                account_type=payload.account_type.value,
                **values,
            )
            self._session.add(account)
            self._session.flush()

        self._ops.log_operation(
            "create_account", account_id=account.id, scope=key, is_primary=account.is_primary
        )
        return self.to_out(account)

    def update_account(self, account_id: uuid.UUID, payload: AccountUpdate) -> AccountOut:
        """Apply a partial update. The owner scope never changes.

        Demotion of siblings happens only when is_primary goes false -> true.
        """
        data = payload.model_dump(exclude_unset=True)
        with atomic(self._session):
            account = self._lock_account(account_id)
            account_type = AccountType(data.get("account_type") or account.account_type)

            merged = {
                column: getattr(account, column)
                for column in (
                    "account_holder_name",
                    "bank_name",
                    "account_number",
                    "iban",
                    "swift_bic",
                    "routing_number",
                    "currency",
                    "service_name",
                    "note",
                )
            }
            for key, value in data.items():
                if key in merged:
                    merged[key] = value
            if not merged["account_holder_name"]:
                raise ValidationError("account_holder_name is required")
            merged = check_account_fields(account_type, merged)

            becomes_primary = bool(data.get("is_primary")) and not account.is_primary
            if becomes_primary:
                self._demote_scope(account.scope_key, account.entity_type, exclude=account.id)

            account.account_type = account_type.value
            for key, value in merged.items():
                setattr(account, key, value)
            if data.get("is_primary") is not None:
                account.is_primary = data["is_primary"]
            self._session.flush()

        self._ops.log_operation(
            "update_account", account_id=account_id, promoted=becomes_primary
        )
        return self.to_out(account)

    def delete_account(self, account_id: uuid.UUID) -> None:
        """Delete an account. Transactions referencing it keep their snapshot."""
        with atomic(self._session):
            account = self._lock_account(account_id)
            self._session.delete(account)

        self._ops.log_operation("delete_account", account_id=account_id)

    def get_account(self, account_id: uuid.UUID) -> AccountOut:
        """Get one account with its owner's name."""
        account = self._session.get(Account, account_id)
        if account is None:
            raise NotFoundError("Account not found")
        return self.to_out(account)

    def list_accounts(
        self,
        entity_type: AccountEntityType | None = None,
        entity_id: uuid.UUID | None = None,
    ) -> list[AccountOut]:
        """List accounts, primary first then oldest first."""
        query = select(Account)
        if entity_type is not None:
            query = query.where(Account.entity_type == entity_type.value)
        if entity_id is not None:
            query = query.where(Account.entity_id == entity_id)
        query = query.order_by(Account.is_primary.desc(), Account.created_at)
        return [self.to_out(account) for account in self._session.scalars(query).all()]

    def to_out(self, account: Account) -> AccountOut:
        """Render an account with the owner's name resolved."""
        out = AccountOut.model_validate(account)
        if account.entity_id is not None:
            kind = ACCOUNT_ENTITY_KINDS[AccountEntityType(account.entity_type)]
            record = self._entities.get_by_id(kind, account.entity_id)
            out.entity_name = record.name if record else None
        return out

    def _demote_scope(
        self, key: str, entity_type: AccountEntityType | str, exclude: uuid.UUID | None = None
    ) -> None:
        """Clear is_primary on every account in the scope, rows locked first."""
        locked = select(Account.id).where(Account.scope_key == key).with_for_update()
        if exclude is not None:
            locked = locked.where(Account.id != exclude)
        ids = list(self._session.scalars(locked))
        if not ids:
            return
        result = self._session.execute(
            update(Account)
            .where(Account.id.in_(ids), Account.is_primary)
            .values(is_primary=False)
            .execution_options(synchronize_session="fetch")
        )
        demoted = result.rowcount or 0  # type: ignore[attr-defined]
        if demoted:
            logger.info(f"[ledger] demoted scope={key} count={demoted}")
            self._metrics.inc_demotions(AccountEntityType(entity_type).value, demoted)

    def _lock_account(self, account_id: uuid.UUID) -> Account:
        account = self._session.scalars(
            select(Account).where(Account.id == account_id).with_for_update()
        ).one_or_none()
        if account is None:
            raise NotFoundError("Account not found")
        return account
