"""SQLAlchemy ORM model definitions."""

from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from papertrade.repositories.sqlalchemy.database import Base
from papertrade.domain.models.enums import OrderSide


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(String(255), primary_key=True)
    cash = Column(BigInteger, nullable=False)
    value = Column(BigInteger, nullable=False, default=0)
    version = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False)  # naive UTC

    holdings = relationship("HoldingORM", back_populates="account")
    transactions = relationship("TransactionORM", back_populates="account")


class HoldingORM(Base):
    """SQLAlchemy model for Holding (one row per account and symbol)."""

    __tablename__ = "holdings"

    account_id = Column(String(255), ForeignKey("accounts.account_id"), primary_key=True)
    symbol = Column(String(20), primary_key=True)
    display_name = Column(String(255), nullable=False, default="")
    quantity = Column(BigInteger, nullable=False)
    average_cost = Column(BigInteger, nullable=False)
    version = Column(Integer, nullable=False, default=0)

    account = relationship("AccountORM", back_populates="holdings")


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (append-only ledger entry)."""

    __tablename__ = "transactions"
    __table_args__ = (Index("ix_transactions_account_time", "account_id", "timestamp"),)

    transaction_id = Column(String(36), primary_key=True)
    account_id = Column(String(255), ForeignKey("accounts.account_id"), nullable=False)
    symbol = Column(String(20), nullable=False)
    side = Column(SqlEnum(OrderSide), nullable=False)
    quantity = Column(BigInteger, nullable=False)
    price = Column(BigInteger, nullable=False)
    timestamp = Column(DateTime, nullable=False)  # naive UTC

    account = relationship("AccountORM", back_populates="transactions")
