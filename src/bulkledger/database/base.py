"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from bulkledger.domain.entities import Party, Staff, Transaction


class Database(ABC):
    """Abstract store interface for bulkledger.

    Writes issued outside unit_of_work() commit one by one. Writes issued
    inside it are only made durable when the block exits normally.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager[None]:
        """Open an all-or-nothing unit of work.

        Commits when the block exits normally and rolls back on any
        exception. Only one unit may be open at a time.

        Raises:
            ConflictError: If a unit of work is already open
            StoreError: If the store fails inside the unit
        """
        pass

    @property
    @abstractmethod
    def in_unit_of_work(self) -> bool:
        """Whether a unit of work is currently open."""
        pass

    # Party operations
    @abstractmethod
    def create_party(self, name: str, credit_limit: Decimal = Decimal("0")) -> Party:
        """Create a party with a zero balance."""
        pass

    @abstractmethod
    def get_party(self, party_id: int) -> Optional[Party]:
        """Get party by ID."""
        pass

    @abstractmethod
    def find_party_by_name(self, name: str) -> Optional[Party]:
        """Find a party by name, ignoring case."""
        pass

    @abstractmethod
    def list_parties(self) -> list[Party]:
        """List all parties ordered by name."""
        pass

    @abstractmethod
    def update_party_balance(self, party_id: int, value: Decimal) -> None:
        """Overwrite a party's current balance."""
        pass

    @abstractmethod
    def adjust_party_balance(self, party_id: int, delta: Decimal) -> None:
        """Add delta to a party's current balance."""
        pass

    # Staff operations
    @abstractmethod
    def create_staff(self, name: str) -> Staff:
        """Create a staff member with no outstanding advance."""
        pass

    @abstractmethod
    def get_staff(self, staff_id: int) -> Optional[Staff]:
        """Get staff member by ID."""
        pass

    @abstractmethod
    def find_staff_by_name(self, name: str) -> Optional[Staff]:
        """Find a staff member by name, ignoring case."""
        pass

    @abstractmethod
    def adjust_staff_advance(self, staff_id: int, delta: Decimal) -> None:
        """Add delta to a staff member's outstanding advance."""
        pass

    # Transaction operations
    @abstractmethod
    def insert_transaction(
        self,
        date: date,
        type: str,
        amount: Decimal,
        party_id: Optional[int] = None,
        staff_id: Optional[int] = None,
        payment_mode: Optional[str] = None,
        expense_category: Optional[str] = None,
        bill_number: Optional[str] = None,
        has_gst: bool = False,
        description: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Transaction:
        """Insert a transaction. created_at defaults to now."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def update_transaction_date(self, transaction_id: int, new_date: date) -> None:
        """Change a transaction's date."""
        pass

    @abstractmethod
    def update_transaction_running_balance(self, transaction_id: int, value: Decimal) -> None:
        """Overwrite a transaction's running balance."""
        pass

    @abstractmethod
    def list_transactions_for_party(
        self, party_id: int, types: Optional[tuple[str, ...]] = None
    ) -> list[Transaction]:
        """List a party's transactions in (date, created_at, id) ascending order.

        Args:
            party_id: Party ID
            types: Optional transaction types to restrict to
        """
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first."""
        pass

    @abstractmethod
    def find_transactions(
        self,
        party_id: int,
        date: date,
        type: str,
        created_since: Optional[datetime] = None,
    ) -> list[Transaction]:
        """Find a party's transactions of one type on one date.

        Args:
            party_id: Party ID
            date: Transaction date
            type: Transaction type
            created_since: If given, only rows created at or after this instant
        """
        pass
