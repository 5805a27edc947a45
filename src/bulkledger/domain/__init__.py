"""Domain layer for bulkledger application.

Services are imported from their modules directly; this package only
re-exports the parsed-entry types so the store layer can import domain
entities without pulling the services in.
"""

from bulkledger.domain.entries import (
    BillEntry,
    EntryKind,
    ExpenseCategory,
    ExpenseEntry,
    ParsedEntry,
    ParseError,
    PaymentEntry,
    PaymentMode,
    SaleEntry,
)

__all__ = [
    "BillEntry",
    "EntryKind",
    "ExpenseCategory",
    "ExpenseEntry",
    "ParsedEntry",
    "ParseError",
    "PaymentEntry",
    "PaymentMode",
    "SaleEntry",
]
