"""Batch validator for parsed entries."""

from datetime import date
from decimal import Decimal
from typing import Iterable

from bulkledger.domain.entries import (
    BillEntry,
    ExpenseCategory,
    ExpenseEntry,
    ParsedEntry,
    PaymentEntry,
    PaymentMode,
    SaleEntry,
)
from bulkledger.utils.amount_parser import is_whole_cents


def _label(position: int, entry: ParsedEntry) -> str:
    kind = getattr(entry, "kind", None)
    if kind is None:
        return f"Entry {position}"
    return f"Entry {position} ({kind.value})"


def _amount_errors(entry: ParsedEntry) -> list[str]:
    amount = entry.amount
    if isinstance(amount, bool) or not isinstance(amount, (Decimal, int, float)):
        return ["amount must be a number"]
    amount = Decimal(str(amount)) if isinstance(amount, float) else Decimal(amount)
    if not amount.is_finite():
        return ["amount must be a finite number"]
    if amount <= 0:
        return ["amount must be greater than zero"]
    if not is_whole_cents(amount):
        return ["amount must have at most 2 decimal places"]
    return []


def _party_errors(entry: ParsedEntry) -> list[str]:
    name = entry.party_name
    if not isinstance(name, str) or not name.strip():
        return ["party name is required"]
    return []


def validate_entry(entry: ParsedEntry, require_party: bool = True) -> list[str]:
    """Return the problems with a single entry, without position labels.

    require_party=False is for party-scoped batches, where bills and
    payments without a party name are posted against the given party.
    """
    if not isinstance(entry, ParsedEntry):
        return [f"unsupported entry type {type(entry).__name__}"]

    problems = []

    if not isinstance(entry.date, date):
        problems.append("date must be a valid calendar date")

    problems.extend(_amount_errors(entry))

    if isinstance(entry, (BillEntry, PaymentEntry)):
        if require_party or entry.party_name is not None:
            problems.extend(_party_errors(entry))
    elif isinstance(entry, SaleEntry):
        if entry.payment_mode not in list(PaymentMode):
            problems.append(f"payment mode '{entry.payment_mode}' is not one of cash, digital, credit")
        elif entry.payment_mode == PaymentMode.CREDIT:
            problems.extend(f"credit sale: {p}" for p in _party_errors(entry))
    elif isinstance(entry, ExpenseEntry):
        if entry.category not in list(ExpenseCategory):
            problems.append(f"expense category '{entry.category}' is not recognised")
        elif entry.category == ExpenseCategory.PARTY_PAYMENT:
            problems.append("party payments must be entered as payments, not expenses")
    else:
        problems.append(f"unsupported entry type {type(entry).__name__}")

    return problems


def validate_entries(
    entries: Iterable[ParsedEntry], require_party: bool = True
) -> list[str]:
    """Check a parsed batch for internal consistency.

    This is a whole-batch gate: any message returned means the batch must
    not be applied. Positions in the messages are 1-based.

    Args:
        entries: Parsed entries (ParseErrors already filtered out)
        require_party: Whether bills and payments must name their party

    Returns:
        Human-readable error messages; empty iff the batch is postable
    """
    errors = []
    for position, entry in enumerate(entries, start=1):
        for problem in validate_entry(entry, require_party):
            errors.append(f"{_label(position, entry)}: {problem}")
    return errors
