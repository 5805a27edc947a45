"""Mapper functions to convert between domain models and SQLAlchemy models.

SQLite hands DateTime values back without tzinfo; they were written as UTC,
so the mappers reattach UTC before they reach the domain layer.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from bulkledger.domain import entities as domain
from bulkledger.database.models import (
    Party as ORMParty,
    Staff as ORMStaff,
    Transaction as ORMTransaction,
)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _as_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(value)


def party_to_domain(orm_party: ORMParty) -> domain.Party:
    """Convert SQLAlchemy Party model to domain Party entity."""
    return domain.Party(
        id=orm_party.id,
        name=orm_party.name,
        credit_limit=_as_decimal(orm_party.credit_limit) or Decimal("0"),
        current_balance=_as_decimal(orm_party.current_balance) or Decimal("0"),
        created_at=_as_utc(orm_party.created_at),
        updated_at=_as_utc(orm_party.updated_at),
    )


def staff_to_domain(orm_staff: ORMStaff) -> domain.Staff:
    """Convert SQLAlchemy Staff model to domain Staff entity."""
    return domain.Staff(
        id=orm_staff.id,
        name=orm_staff.name,
        current_advance=_as_decimal(orm_staff.current_advance) or Decimal("0"),
        created_at=_as_utc(orm_staff.created_at),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        type=orm_transaction.type,
        amount=_as_decimal(orm_transaction.amount),
        party_id=orm_transaction.party_id,
        staff_id=orm_transaction.staff_id,
        payment_mode=orm_transaction.payment_mode,
        expense_category=orm_transaction.expense_category,
        bill_number=orm_transaction.bill_number,
        has_gst=bool(orm_transaction.has_gst),
        description=orm_transaction.description,
        running_balance=_as_decimal(orm_transaction.running_balance),
        created_at=_as_utc(orm_transaction.created_at),
    )
