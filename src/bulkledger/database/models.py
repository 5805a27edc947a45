"""SQLAlchemy models for bulkledger database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Party(Base):
    """Vendor or customer model."""

    __tablename__ = "parties"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    credit_limit = Column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    current_balance = Column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="party")


class Staff(Base):
    """Staff member model."""

    __tablename__ = "staff"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    current_advance = Column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="staff")


class Transaction(Base):
    """Posted transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_mode = Column(String, nullable=True)
    expense_category = Column(String, nullable=True)
    has_gst = Column(Boolean, default=False, nullable=False)
    bill_number = Column(String, nullable=True)
    description = Column(String, nullable=True)
    party_id = Column(Integer, ForeignKey("parties.id"), nullable=True)
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=True)
    running_balance = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_transactions_date", "date"),
        Index("ix_transactions_type", "type"),
        Index("ix_transactions_party_id", "party_id"),
    )

    # Relationships
    party = relationship("Party", back_populates="transactions")
    staff = relationship("Staff", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
