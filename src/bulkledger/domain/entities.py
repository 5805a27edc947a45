"""Domain model entities for bulkledger.

These are pure data classes representing posted business records,
independent of the database schema.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Party:
    """Vendor or customer with a running balance.

    A positive current_balance means the party owes the business.
    """

    id: int
    name: str
    credit_limit: Decimal
    current_balance: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Staff:
    """Staff member paid through salary and advance expenses."""

    id: int
    name: str
    current_advance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Posted transaction.

    running_balance is only meaningful for bill and payment rows, and is
    owned by the balance engine.
    """

    id: int
    date: date
    type: str
    amount: Decimal
    party_id: Optional[int]
    staff_id: Optional[int]
    payment_mode: Optional[str]
    expense_category: Optional[str]
    bill_number: Optional[str]
    has_gst: bool
    description: Optional[str]
    running_balance: Optional[Decimal]
    created_at: datetime
