"""Tests for the batch validator."""

from datetime import date
from decimal import Decimal

from bulkledger.domain.entries import (
    BillEntry,
    ExpenseCategory,
    ExpenseEntry,
    PaymentEntry,
    PaymentMode,
    SaleEntry,
)
from bulkledger.domain.validator import validate_entries, validate_entry

D = date(2025, 1, 20)


def test_valid_batch_has_no_errors():
    """Test a well-formed batch of every kind passes."""
    entries = [
        SaleEntry(date=D, amount=Decimal("23500")),
        SaleEntry(date=D, amount=Decimal("9300"), payment_mode=PaymentMode.CREDIT, customer="Maa"),
        ExpenseEntry(date=D, amount=Decimal("30493"), category=ExpenseCategory.SALARY, staff="Alok"),
        BillEntry(date=D, amount=Decimal("73173"), party="PendalKarigar", number="SV2029"),
        PaymentEntry(date=D, amount=Decimal("20000"), party="PBK"),
    ]

    assert validate_entries(entries) == []


def test_empty_batch_is_valid():
    assert validate_entries([]) == []


def test_non_positive_amount():
    errors = validate_entries([SaleEntry(date=D, amount=Decimal("0"))])

    assert errors == ["Entry 1 (sale): amount must be greater than zero"]


def test_non_finite_amount():
    errors = validate_entries([BillEntry(date=D, amount=Decimal("Infinity"), party="SAJ")])

    assert errors == ["Entry 1 (bill): amount must be a finite number"]


def test_amount_finer_than_cents():
    errors = validate_entries([BillEntry(date=D, amount=Decimal("100.005"), party="SAJ")])

    assert errors == ["Entry 1 (bill): amount must have at most 2 decimal places"]


def test_non_numeric_amount():
    errors = validate_entry(BillEntry(date=D, amount="12", party="SAJ"))
    assert errors == ["amount must be a number"]


def test_bill_and_payment_need_a_party():
    """Test bills and payments without a party block the batch."""
    entries = [
        SaleEntry(date=D, amount=Decimal("1")),
        BillEntry(date=D, amount=Decimal("100")),
        PaymentEntry(date=D, amount=Decimal("50"), party="   "),
    ]

    errors = validate_entries(entries)

    assert errors == [
        "Entry 2 (bill): party name is required",
        "Entry 3 (payment): party name is required",
    ]


def test_party_not_required_for_party_scoped_batch():
    entries = [
        BillEntry(date=D, amount=Decimal("100")),
        PaymentEntry(date=D, amount=Decimal("50")),
    ]

    assert validate_entries(entries, require_party=False) == []


def test_blank_party_name_rejected_even_when_scoped():
    errors = validate_entries([BillEntry(date=D, amount=Decimal("100"), party="")], require_party=False)
    assert errors == ["Entry 1 (bill): party name is required"]


def test_credit_sale_needs_a_party():
    errors = validate_entries(
        [SaleEntry(date=D, amount=Decimal("100"), payment_mode=PaymentMode.CREDIT)]
    )
    assert errors == ["Entry 1 (sale): credit sale: party name is required"]


def test_invalid_date():
    errors = validate_entry(SaleEntry(date="2025-01-20", amount=Decimal("100")))
    assert errors == ["date must be a valid calendar date"]


def test_unknown_payment_mode():
    errors = validate_entry(SaleEntry(date=D, amount=Decimal("100"), payment_mode="cheque"))

    assert len(errors) == 1
    assert "payment mode 'cheque'" in errors[0]


def test_payment_mode_given_as_plain_string():
    assert validate_entry(SaleEntry(date=D, amount=Decimal("100"), payment_mode="digital")) == []


def test_unknown_expense_category():
    errors = validate_entry(ExpenseEntry(date=D, amount=Decimal("100"), category="travel"))

    assert len(errors) == 1
    assert "expense category 'travel'" in errors[0]


def test_party_payment_category_is_not_an_expense():
    errors = validate_entry(
        ExpenseEntry(date=D, amount=Decimal("100"), category=ExpenseCategory.PARTY_PAYMENT)
    )
    assert errors == ["party payments must be entered as payments, not expenses"]


def test_multiple_problems_reported_for_one_entry():
    errors = validate_entries([BillEntry(date=None, amount=Decimal("-5"))])

    assert errors == [
        "Entry 1 (bill): date must be a valid calendar date",
        "Entry 1 (bill): amount must be greater than zero",
        "Entry 1 (bill): party name is required",
    ]


def test_unsupported_entry_type():
    errors = validate_entries(["1. 23500"])
    assert errors == ["Entry 1: unsupported entry type str"]
