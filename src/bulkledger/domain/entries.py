"""Parsed bulk-entry records.

A parsed line is one of four entry variants (sale, expense, bill, payment),
each carrying only the fields that make sense for it, or a ParseError
describing why the line could not be read. Names typed by the operator are
kept as free text here; they are resolved to party and staff records only
when a batch is applied.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional, Union


class EntryKind(str, Enum):
    """Kind of a parsed entry, also used as the stored transaction type."""

    SALE = "sale"
    EXPENSE = "expense"
    BILL = "bill"
    PAYMENT = "payment"


class PaymentMode(str, Enum):
    """How a sale was settled."""

    CASH = "cash"
    DIGITAL = "digital"
    CREDIT = "credit"


class ExpenseCategory(str, Enum):
    """Closed set of expense categories."""

    GOODS_PURCHASE = "goods_purchase"
    SALARY = "salary"
    ADVANCE = "advance"
    HOME = "home"
    RENT = "rent"
    PARTY_PAYMENT = "party_payment"
    PETTY = "petty"
    POLY = "poly"
    FOOD = "food"


@dataclass(frozen=True)
class ParsedEntry:
    """Fields shared by every entry variant."""

    kind: ClassVar[EntryKind]

    date: date
    amount: Decimal

    @property
    def party_name(self) -> Optional[str]:
        """Party the entry is posted against, if any."""
        return None

    @property
    def staff_name(self) -> Optional[str]:
        return None

    @property
    def bill_number(self) -> Optional[str]:
        return None

    @property
    def has_gst(self) -> bool:
        return False

    @property
    def description(self) -> Optional[str]:
        return None

    @property
    def affects_party_ledger(self) -> bool:
        """Whether the entry takes part in a party's running balance."""
        return False


@dataclass(frozen=True)
class SaleEntry(ParsedEntry):
    """Counter sale: cash, digital, or on credit to a party."""

    kind: ClassVar[EntryKind] = EntryKind.SALE

    payment_mode: PaymentMode = PaymentMode.CASH
    customer: Optional[str] = None

    @property
    def party_name(self) -> Optional[str]:
        return self.customer


@dataclass(frozen=True)
class ExpenseEntry(ParsedEntry):
    """Standalone expense, optionally paid to a staff member."""

    kind: ClassVar[EntryKind] = EntryKind.EXPENSE

    category: ExpenseCategory = ExpenseCategory.PETTY
    note: Optional[str] = None
    staff: Optional[str] = None
    gst: bool = False

    @property
    def staff_name(self) -> Optional[str]:
        return self.staff

    @property
    def has_gst(self) -> bool:
        return self.gst

    @property
    def description(self) -> Optional[str]:
        return self.note


@dataclass(frozen=True)
class BillEntry(ParsedEntry):
    """Bill raised by a party; the party owes more."""

    kind: ClassVar[EntryKind] = EntryKind.BILL

    party: Optional[str] = None
    number: Optional[str] = None
    note: Optional[str] = None
    gst: bool = False

    @property
    def party_name(self) -> Optional[str]:
        return self.party

    @property
    def bill_number(self) -> Optional[str]:
        return self.number

    @property
    def has_gst(self) -> bool:
        return self.gst

    @property
    def description(self) -> Optional[str]:
        return self.note

    @property
    def affects_party_ledger(self) -> bool:
        return True


@dataclass(frozen=True)
class PaymentEntry(ParsedEntry):
    """Payment made to a party; the party owes less."""

    kind: ClassVar[EntryKind] = EntryKind.PAYMENT

    party: Optional[str] = None
    note: Optional[str] = None
    gst: bool = False

    @property
    def party_name(self) -> Optional[str]:
        return self.party

    @property
    def has_gst(self) -> bool:
        return self.gst

    @property
    def description(self) -> Optional[str]:
        return self.note

    @property
    def expense_category(self) -> ExpenseCategory:
        return ExpenseCategory.PARTY_PAYMENT

    @property
    def affects_party_ledger(self) -> bool:
        return True


@dataclass(frozen=True)
class ParseError:
    """A raw line that could not be turned into an entry."""

    raw_line: str
    reason: str


ParseResult = Union[SaleEntry, ExpenseEntry, BillEntry, PaymentEntry, ParseError]
