"""Route transactions - payment snapshots, no processing."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from backend.app.config import Settings, get_settings
from backend.app.db.engine import atomic
from backend.app.db.models import Account, Route, RouteTransaction
from backend.app.errors import NotFoundError
from backend.app.models.common import TransactionType
from backend.app.models.transaction import TransactionCreate, TransactionOut
from backend.app.utils.logging import StructuredOperationLogger

logger = logging.getLogger(__name__)


class TransactionRecorder:
    """Records and lists payments made against a route."""

    def __init__(self, session: Session, settings: Settings | None = None) -> None:
        self._session = session
        self._settings = settings or get_settings()
        self._ops = StructuredOperationLogger("transactions")

    def record_transaction(self, route_id: uuid.UUID, payload: TransactionCreate) -> TransactionOut:
        """Record a transaction snapshot.

        Currency falls back to the route's currency, then the configured default.

        Raises:
            NotFoundError: If the route or a referenced account does not exist
        """
        with atomic(self._session):
            route = self._session.get(Route, route_id)
            if route is None:
                raise NotFoundError("Route not found")
            for account_id in (payload.from_account_id, payload.to_account_id):
                if account_id is not None and self._session.get(Account, account_id) is None:
                    raise NotFoundError("Account not found")

            transaction = RouteTransaction(
                route_id=route_id,
                transaction_date=payload.transaction_date,
                amount=payload.amount,
                currency=payload.currency or route.currency or self._settings.default_currency,
                payment_method=payload.payment_method,
                type=payload.type.value,
                description=payload.description,
                from_account_id=payload.from_account_id,
                to_account_id=payload.to_account_id,
            )
            self._session.add(transaction)
            self._session.flush()

        self._ops.log_operation(
            "record_transaction",
            route_id=route_id,
            transaction_id=transaction.id,
            type=transaction.type,
            amount=transaction.amount,
        )
        return self.to_out(transaction)

    def list_transactions(self, route_id: uuid.UUID) -> list[TransactionOut]:
        """List a route's transactions, newest first."""
        if self._session.get(Route, route_id) is None:
            raise NotFoundError("Route not found")
        transactions = self._session.scalars(
            select(RouteTransaction)
            .where(RouteTransaction.route_id == route_id)
            .order_by(RouteTransaction.transaction_date.desc(), RouteTransaction.created_at.desc())
        ).all()
        return [self.to_out(t) for t in transactions]

    def delete_transaction(self, transaction_id: uuid.UUID) -> None:
        """Delete a transaction."""
        with atomic(self._session):
            transaction = self._session.get(RouteTransaction, transaction_id)
            if transaction is None:
                raise NotFoundError("Transaction not found")
            route_id = transaction.route_id
            self._session.delete(transaction)

        self._ops.log_operation(
            "delete_transaction", route_id=route_id, transaction_id=transaction_id
        )

    def to_out(self, transaction: RouteTransaction) -> TransactionOut:
        """Render a transaction with account holder names."""
        return TransactionOut(
            id=transaction.id,
            route_id=transaction.route_id,
            transaction_date=transaction.transaction_date,
            amount=transaction.amount,
            currency=transaction.currency,
            payment_method=transaction.payment_method,
            type=TransactionType(transaction.type),
            description=transaction.description,
            from_account_id=transaction.from_account_id,
            from_account_name=self._holder(transaction.from_account_id),
            to_account_id=transaction.to_account_id,
            to_account_name=self._holder(transaction.to_account_id),
            created_at=transaction.created_at,
        )

    def _holder(self, account_id: uuid.UUID | None) -> str | None:
        if account_id is None:
            return None
        account = self._session.get(Account, account_id)
        return account.account_holder_name if account else None
