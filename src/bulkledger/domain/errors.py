"""Shared domain error messages and error types."""

from datetime import date
from decimal import Decimal
from typing import Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class BatchValidationError(ValidationError):
    """A parsed batch failed structural validation and cannot be posted."""

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateTransactionError(ConflictError):
    """A transaction matching an existing, recently posted one was not forced."""


class StoreError(DomainError):
    """The underlying store failed while a unit of work was open."""


def party_not_found(party: int | str) -> str:
    """Return message for missing party by ID or name."""
    if isinstance(party, int):
        return f"Party {party} not found"
    return f"Party '{party}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_party_name(name: str) -> str:
    """Return message for a party name that already exists."""
    return f"Party with name '{name}' already exists"


def duplicate_transaction(kind: str, party_name: str, txn_date: date, amount: Decimal) -> str:
    """Return message for a probable re-submission."""
    return f"Duplicate {kind} found for {party_name} on {txn_date.isoformat()} with amount {amount}"


def apply_in_progress() -> str:
    """Return message when a second apply is attempted while one is open."""
    return "Another apply is already in progress; wait for it to commit or roll back"


def repeated_in_batch(kind: str, party_name: str, txn_date: date, amount: Decimal, earlier: int) -> str:
    """Return message for an entry that repeats an earlier line of the same batch."""
    return (
        f"Duplicate {kind} for {party_name} on {txn_date.isoformat()} with amount {amount} "
        f"repeats entry {earlier} of this batch"
    )
