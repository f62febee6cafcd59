"""SQLAlchemy implementation of LedgerStore."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from papertrade.core.exceptions import ConflictError, StoreUnavailableError
from papertrade.core.timezone import from_naive_utc, now_eastern, to_naive_utc
from papertrade.domain.models import (
    Account,
    AccountMutation,
    Holding,
    HoldingMutation,
    Transaction,
)
from papertrade.repositories.sqlalchemy.orm_models import (
    AccountORM,
    HoldingORM,
    TransactionORM,
)

logger = logging.getLogger(__name__)


class SqlAlchemyLedgerStore:
    """
    SQLAlchemy-backed ledger store over a single session.

    Order commits are compare-and-swap on the ``version`` columns: each
    UPDATE/DELETE only matches the row version the engine loaded, so the
    loser of a race on the same account sees zero affected rows and the whole
    database transaction is rolled back.
    """

    def __init__(self, db: Session):
        self._db = db

    @contextmanager
    def _reading(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Ledger read failed: %s", operation)
            raise StoreUnavailableError(f"{operation} failed") from exc

    def get_account(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        with self._reading("get_account"):
            orm_account = (
                self._db.query(AccountORM)
                .filter(AccountORM.account_id == account_id)
                .populate_existing()
                .first()
            )
        return self._account_to_domain(orm_account) if orm_account else None

    def create_account_if_absent(self, account_id: str, starting_cash: int) -> Account:
        """Create the account with the starting cash unless it exists (idempotent)."""
        existing = self.get_account(account_id)
        if existing:
            return existing

        self._db.add(
            AccountORM(
                account_id=account_id,
                cash=starting_cash,
                value=starting_cash,
                version=0,
                created_at=to_naive_utc(now_eastern()),
            )
        )
        try:
            self._db.commit()
        except IntegrityError:
            # A concurrent first login created it; the winner's row stands.
            self._db.rollback()
            logger.info("Account %s created concurrently; using existing row", account_id)
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Failed to create account %s", account_id)
            raise StoreUnavailableError("create_account_if_absent failed") from exc
        else:
            logger.info("Created account %s with starting cash %d", account_id, starting_cash)

        account = self.get_account(account_id)
        if account is None:
            raise StoreUnavailableError(f"account {account_id} missing after create")
        return account

    def get_holding(self, account_id: str, symbol: str) -> Optional[Holding]:
        """Retrieve one holding."""
        with self._reading("get_holding"):
            orm_holding = (
                self._db.query(HoldingORM)
                .filter(
                    HoldingORM.account_id == account_id,
                    HoldingORM.symbol == symbol,
                )
                .populate_existing()
                .first()
            )
        return self._holding_to_domain(orm_holding) if orm_holding else None

    def list_holdings(self, account_id: str) -> list[Holding]:
        """List every holding of an account, ordered by symbol."""
        with self._reading("list_holdings"):
            orm_holdings = (
                self._db.query(HoldingORM)
                .filter(HoldingORM.account_id == account_id)
                .order_by(HoldingORM.symbol)
                .populate_existing()
                .all()
            )
        return [self._holding_to_domain(h) for h in orm_holdings]

    def list_transactions(self, account_id: str) -> list[Transaction]:
        """List an account's transactions, newest first."""
        with self._reading("list_transactions"):
            orm_txns = (
                self._db.query(TransactionORM)
                .filter(TransactionORM.account_id == account_id)
                .order_by(TransactionORM.timestamp.desc())
                .all()
            )
        return [self._transaction_to_domain(t) for t in orm_txns]

    def apply_order_atomically(
        self,
        account_mutation: AccountMutation,
        holding_mutation: HoldingMutation,
        transaction: Transaction,
    ) -> Transaction:
        """Apply cash, holding and transaction writes in one database transaction."""
        account_id = account_mutation.account_id
        if holding_mutation.is_insert and holding_mutation.is_delete:
            raise ValueError("cannot insert a zero-quantity holding")
        try:
            updated = (
                self._db.query(AccountORM)
                .filter(
                    AccountORM.account_id == account_id,
                    AccountORM.version == account_mutation.expected_version,
                )
                .update(
                    {
                        AccountORM.cash: account_mutation.cash,
                        AccountORM.version: AccountORM.version + 1,
                    },
                    synchronize_session=False,
                )
            )
            if updated != 1:
                raise ConflictError(account_id, "account changed since it was read")

            self._apply_holding(holding_mutation)

            self._db.add(self._transaction_to_orm(transaction))
            self._db.commit()
        except ConflictError:
            self._db.rollback()
            raise
        except IntegrityError as exc:
            self._db.rollback()
            raise ConflictError(account_id, "holding created concurrently") from exc
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Order commit failed for account %s", account_id)
            raise StoreUnavailableError("order commit failed") from exc

        return transaction

    def update_account_value(self, account_id: str, value: int) -> None:
        """Persist the latest valuation; does not bump the order version."""
        try:
            self._db.query(AccountORM).filter(
                AccountORM.account_id == account_id
            ).update({AccountORM.value: value}, synchronize_session=False)
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Failed to persist value for account %s", account_id)
            raise StoreUnavailableError("update_account_value failed") from exc

    def _apply_holding(self, mutation: HoldingMutation) -> None:
        """Insert, update or delete the holding row; raises ConflictError on a stale version."""
        if mutation.is_insert:
            self._db.execute(
                insert(HoldingORM).values(
                    account_id=mutation.account_id,
                    symbol=mutation.symbol,
                    display_name=mutation.display_name,
                    quantity=mutation.quantity,
                    average_cost=mutation.average_cost,
                    version=0,
                )
            )
            return

        query = self._db.query(HoldingORM).filter(
            HoldingORM.account_id == mutation.account_id,
            HoldingORM.symbol == mutation.symbol,
            HoldingORM.version == mutation.expected_version,
        )
        if mutation.is_delete:
            affected = query.delete(synchronize_session=False)
        else:
            affected = query.update(
                {
                    HoldingORM.quantity: mutation.quantity,
                    HoldingORM.average_cost: mutation.average_cost,
                    HoldingORM.version: HoldingORM.version + 1,
                },
                synchronize_session=False,
            )
        if affected != 1:
            raise ConflictError(mutation.account_id, f"holding {mutation.symbol} changed since it was read")

    @staticmethod
    def _account_to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            cash=orm.cash,
            value=orm.value,
            version=orm.version,
            created_at_est=from_naive_utc(orm.created_at) if orm.created_at else None,
        )

    @staticmethod
    def _holding_to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM model to domain model."""
        return Holding(
            account_id=orm.account_id,
            symbol=orm.symbol,
            quantity=orm.quantity,
            average_cost=orm.average_cost,
            display_name=orm.display_name,
            version=orm.version,
        )

    @staticmethod
    def _transaction_to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            transaction_id=txn.transaction_id,
            account_id=txn.account_id,
            symbol=txn.symbol,
            side=txn.side,
            quantity=txn.quantity,
            price=txn.price,
            timestamp=to_naive_utc(txn.timestamp),
        )

    @staticmethod
    def _transaction_to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            transaction_id=orm.transaction_id,
            account_id=orm.account_id,
            symbol=orm.symbol,
            side=orm.side,
            quantity=orm.quantity,
            price=orm.price,
            timestamp=from_naive_utc(orm.timestamp),
        )
