"""Bulk-entry line parser.

Turns operator shorthand into typed entries, one result per non-blank line:

    1. 23500                               cash sale
    7. 21506 net                           digital sale
    20. 9300 (Maa)                         credit sale to a party
    Alok Sal 30493                         staff salary (Adv for advance)
    PBK 20000 Party GST                    payment to a party
    Home 23988                             standard expense
    PendalKarigar SV2029 73173 GR 302 GST  bill from a party
    SAJ (date: 13/12/24) 33201             any line may carry its own date

Lines are classified by the shape of their leading tokens, and the first
matching rule wins. A line that cannot be read becomes a ParseError and
the rest of the batch is still parsed.
"""

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Optional

from bulkledger.domain.entries import (
    BillEntry,
    ExpenseCategory,
    ExpenseEntry,
    ParseError,
    ParseResult,
    PaymentEntry,
    PaymentMode,
    SaleEntry,
)
from bulkledger.utils.amount_parser import is_whole_cents, parse_number
from bulkledger.utils.date_parser import parse_short_date

logger = logging.getLogger(__name__)

UNRECOGNIZED = "Unrecognized entry format"

# Case-sensitive: "home 500" is not a standard expense.
STANDARD_EXPENSES = frozenset(
    {"Home", "Rent", "Petty", "Food", "Poly", "GP", "Repair", "Labour", "Transport"}
)

STANDARD_EXPENSE_CATEGORIES = {
    "gp": ExpenseCategory.GOODS_PURCHASE,
    "home": ExpenseCategory.HOME,
    "rent": ExpenseCategory.RENT,
    "petty": ExpenseCategory.PETTY,
    "poly": ExpenseCategory.POLY,
    "food": ExpenseCategory.FOOD,
}

STAFF_KEYWORDS = {
    "sal": ExpenseCategory.SALARY,
    "adv": ExpenseCategory.ADVANCE,
}

SALE_MARKER = re.compile(r"^\d+\.$")

DATE_PATTERNS = (
    re.compile(r"\(date:\s*([^)]*)\)", re.IGNORECASE),
    re.compile(r"\((\d{1,2}/\d{1,2}/\d{2})\)"),
)


class _LineError(ValueError):
    """Raised inside the parser for a line that cannot be read."""


def _extract_date(line: str, default_date: date) -> tuple[date, str]:
    """Pull an inline date token out of the line, if there is one."""
    for pattern in DATE_PATTERNS:
        match = pattern.search(line)
        if match is None:
            continue
        try:
            entry_date = parse_short_date(match.group(1))
        except ValueError as e:
            raise _LineError(str(e))
        stripped = (line[: match.start()] + " " + line[match.end() :]).strip()
        return entry_date, stripped
    return default_date, line


def _amount(token: str, what: str) -> Decimal:
    amount = parse_number(token)
    if amount is None:
        raise _LineError(f"Invalid amount in {what}")
    if amount <= 0:
        raise _LineError(f"Amount must be a positive number in {what}")
    if not is_whole_cents(amount):
        raise _LineError(f"Amount must have at most 2 decimal places in {what}")
    return amount


def _has_gst_anywhere(line: str) -> bool:
    return "GST" in line.upper()


def _strip_brackets(text: str) -> Optional[str]:
    text = re.sub(r"^\(|\)$", "", text.strip()).strip()
    return text or None


def _parse_sale(tokens: list[str], entry_date: date) -> SaleEntry:
    if len(tokens) < 2:
        raise _LineError("Invalid sale entry format")
    amount = _amount(tokens[1], "sale entry")

    if len(tokens) == 2:
        return SaleEntry(date=entry_date, amount=amount, payment_mode=PaymentMode.CASH)

    if tokens[2].lower() == "net":
        customer = " ".join(tokens[3:]).strip() or None
        return SaleEntry(
            date=entry_date, amount=amount, payment_mode=PaymentMode.DIGITAL, customer=customer
        )

    return SaleEntry(
        date=entry_date,
        amount=amount,
        payment_mode=PaymentMode.CREDIT,
        customer=_strip_brackets(" ".join(tokens[2:])),
    )


def _parse_staff_expense(tokens: list[str], entry_date: date) -> ExpenseEntry:
    category = STAFF_KEYWORDS[tokens[1].lower()]
    return ExpenseEntry(
        date=entry_date,
        amount=_amount(tokens[2], "staff expense"),
        category=category,
        note=category.value,
        staff=tokens[0],
    )


def _parse_party_payment(tokens: list[str], entry_date: date, line: str) -> PaymentEntry:
    amount = _amount(tokens[1], "party payment")

    note = None
    keyword_at = next(i for i, token in enumerate(tokens) if token.lower() == "party")
    trailing = [t for t in tokens[keyword_at + 1 :] if t.upper() != "GST"]
    if trailing:
        note = " ".join(trailing).strip()

    return PaymentEntry(
        date=entry_date,
        amount=amount,
        party=tokens[0],
        note=note,
        gst=_has_gst_anywhere(line),
    )


def _parse_standard_expense(tokens: list[str], entry_date: date, line: str) -> ExpenseEntry:
    name = tokens[0].lower()
    return ExpenseEntry(
        date=entry_date,
        amount=_amount(tokens[1], "expense entry"),
        category=STANDARD_EXPENSE_CATEGORIES.get(name, ExpenseCategory.PETTY),
        note=name,
        gst=_has_gst_anywhere(line),
    )


def _parse_bill(tokens: list[str], entry_date: date) -> BillEntry:
    amount_at = None
    for i in range(1, len(tokens)):
        if parse_number(tokens[i]) is not None:
            amount_at = i
            break
    if amount_at is None:
        raise _LineError("Invalid amount in bill entry")
    amount = _amount(tokens[amount_at], "bill entry")

    number = None
    if amount_at > 1:
        number = re.sub(r"[()]", "", " ".join(tokens[1:amount_at])).strip() or None

    note = None
    gst = False
    trailing = tokens[amount_at + 1 :]
    if trailing:
        upper = [t.upper() for t in trailing]
        if "GR" in upper:
            gr_at = upper.index("GR")
            if gr_at + 1 < len(trailing):
                note = f"GR {trailing[gr_at + 1]}"
        gst = "GST" in upper

    return BillEntry(
        date=entry_date,
        amount=amount,
        party=tokens[0],
        number=number,
        note=note,
        gst=gst,
    )


def _parse_random_expense(tokens: list[str], entry_date: date, line: str) -> ExpenseEntry:
    return ExpenseEntry(
        date=entry_date,
        amount=_amount(tokens[1], "expense entry"),
        category=ExpenseCategory.PETTY,
        note=tokens[0].lower(),
        gst=_has_gst_anywhere(line),
    )


def parse_line(line: str, default_date: date) -> ParseResult:
    """Parse a single trimmed, non-empty line.

    Args:
        line: Raw operator input
        default_date: Date used when the line carries no inline date

    Returns:
        An entry, or a ParseError naming the problem
    """
    raw_line = line.strip()
    try:
        entry_date, text = _extract_date(raw_line, default_date)
        tokens = text.split()

        if tokens and SALE_MARKER.match(tokens[0]):
            return _parse_sale(tokens, entry_date)
        if len(tokens) > 2 and tokens[1].lower() in STAFF_KEYWORDS:
            return _parse_staff_expense(tokens, entry_date)
        if len(tokens) >= 3 and tokens[2].lower() == "party":
            return _parse_party_payment(tokens, entry_date, text)
        if len(tokens) >= 2:
            if tokens[0] in STANDARD_EXPENSES:
                return _parse_standard_expense(tokens, entry_date, text)
            if any(parse_number(token) is not None for token in tokens):
                return _parse_bill(tokens, entry_date)
            return _parse_random_expense(tokens, entry_date, text)
    except _LineError as e:
        logger.debug("Could not parse line %r: %s", raw_line, e)
        return ParseError(raw_line=raw_line, reason=str(e))

    return ParseError(raw_line=raw_line, reason=UNRECOGNIZED)


def parse_entries(text: str, default_date: date) -> list[ParseResult]:
    """Parse a block of operator input, one result per non-blank line.

    Failures are per line: a line that cannot be read is reported as a
    ParseError in its position and does not stop the rest of the batch.

    Args:
        text: Multi-line operator input
        default_date: Date for lines without an inline date

    Returns:
        Entries and ParseErrors, in input order
    """
    return [parse_line(line, default_date) for line in text.splitlines() if line.strip()]
