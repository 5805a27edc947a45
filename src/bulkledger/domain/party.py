"""Party domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from bulkledger.database.base import Database
from bulkledger.domain.balance import BalanceEngine, LEDGER_TYPES
from bulkledger.domain.duplicates import DuplicateDetector
from bulkledger.domain.entities import Party as PartyEntity
from bulkledger.domain.entities import Transaction as TransactionEntity
from bulkledger.domain.entries import EntryKind, ExpenseCategory, PaymentMode
from bulkledger.domain.errors import (
    ConflictError,
    DuplicateTransactionError,
    NotFoundError,
    ValidationError,
    duplicate_party_name,
    duplicate_transaction,
    party_not_found,
    transaction_not_found,
)
from bulkledger.utils.amount_parser import is_whole_cents

logger = logging.getLogger(__name__)


class PartyService:
    """Service for managing parties and their ledgers."""

    def __init__(self, db: Database, detector: Optional[DuplicateDetector] = None):
        """Initialize party service.

        Args:
            db: Database instance
            detector: Duplicate detector; defaults to one over db
        """
        self.db = db
        self.detector = detector or DuplicateDetector(db)
        self.engine = BalanceEngine(db)

    def create_party(self, name: str, credit_limit: Decimal = Decimal("0")) -> PartyEntity:
        """Create a new party.

        Args:
            name: Party name, unique ignoring case
            credit_limit: Credit limit, zero for none

        Returns:
            Party entity

        Raises:
            ValidationError: If the name is empty or the limit is negative
            ConflictError: If a party with the same name exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Party name must not be empty")
        if credit_limit < 0:
            raise ValidationError("Credit limit must not be negative")
        if self.db.find_party_by_name(name) is not None:
            raise ConflictError(duplicate_party_name(name))
        return self.db.create_party(name=name, credit_limit=credit_limit)

    def get_party(self, party_id: int) -> Optional[PartyEntity]:
        """Get party by ID."""
        return self.db.get_party(party_id)

    def require_party(self, party: int | str) -> PartyEntity:
        """Get a party by ID or name, or raise.

        Raises:
            NotFoundError: If no such party exists
        """
        if isinstance(party, int):
            found = self.db.get_party(party)
        else:
            found = self.db.find_party_by_name(party)
        if found is None:
            raise NotFoundError(party_not_found(party))
        return found

    def list_parties(self) -> list[PartyEntity]:
        """List all parties."""
        return self.db.list_parties()

    def statement(self, party_id: int) -> list[TransactionEntity]:
        """Bills and payments of a party in ledger order, with running balances."""
        self.require_party(party_id)
        return self.db.list_transactions_for_party(party_id, types=LEDGER_TYPES)

    @staticmethod
    def credit_used_percent(party: PartyEntity) -> Optional[Decimal]:
        """Share of the credit limit in use, or None when no limit is set."""
        if party.credit_limit <= 0:
            return None
        return (party.current_balance / party.credit_limit * 100).quantize(Decimal("0.1"))

    def add_transaction(
        self,
        party_id: int,
        kind: EntryKind | str,
        txn_date: date,
        amount: Decimal,
        bill_number: Optional[str] = None,
        has_gst: bool = False,
        description: Optional[str] = None,
        force: bool = False,
    ) -> TransactionEntity:
        """Post a single bill or payment for a party.

        Args:
            party_id: Party ID
            kind: "bill" or "payment"
            txn_date: Transaction date
            amount: Positive amount
            bill_number: Optional bill number (bills only)
            has_gst: Whether the amount includes GST
            description: Optional description
            force: Post even if it duplicates a recent transaction

        Returns:
            The posted transaction, with its running balance

        Raises:
            ValidationError: If the kind or amount is invalid
            NotFoundError: If the party doesn't exist
            DuplicateTransactionError: If not forced and a recent match exists
        """
        kind = EntryKind(kind)
        if kind not in (EntryKind.BILL, EntryKind.PAYMENT):
            raise ValidationError(f"Only bills and payments can be added to a party, not {kind.value}")
        if not amount.is_finite() or amount <= 0:
            raise ValidationError("Amount must be greater than zero")
        if not is_whole_cents(amount):
            raise ValidationError("Amount must have at most 2 decimal places")
        party = self.require_party(party_id)

        with self.db.unit_of_work():
            if not force and self.detector.is_duplicate(
                party.id, txn_date, amount, kind, bill_number
            ):
                raise DuplicateTransactionError(
                    duplicate_transaction(kind.value, party.name, txn_date, amount)
                )

            if kind is EntryKind.BILL:
                txn = self.db.insert_transaction(
                    date=txn_date,
                    type=kind.value,
                    amount=amount,
                    party_id=party.id,
                    bill_number=bill_number,
                    has_gst=has_gst,
                    description=description,
                )
                self.db.adjust_party_balance(party.id, amount)
            else:
                txn = self.db.insert_transaction(
                    date=txn_date,
                    type=kind.value,
                    amount=amount,
                    party_id=party.id,
                    expense_category=ExpenseCategory.PARTY_PAYMENT.value,
                    has_gst=has_gst,
                    description=description,
                )
                self.db.adjust_party_balance(party.id, -amount)

            self.engine.recalculate(party.id)

        return self.db.get_transaction(txn.id)

    def delete_transaction(self, transaction_id: int) -> Optional[Decimal]:
        """Delete a transaction and repair its party's balances.

        Returns:
            The party's new current balance, or None for standalone rows

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        with self.db.unit_of_work():
            self.db.delete_transaction(transaction_id)
            if txn.party_id is None:
                return None
            if txn.type in LEDGER_TYPES:
                balance = self.engine.recalculate(txn.party_id)
            elif txn.type == EntryKind.SALE.value and txn.payment_mode == PaymentMode.CREDIT.value:
                self.db.adjust_party_balance(txn.party_id, -txn.amount)
                balance = self.db.get_party(txn.party_id).current_balance
            else:
                balance = self.db.get_party(txn.party_id).current_balance

        logger.info("Deleted transaction %s", transaction_id)
        return balance

    def redate_transaction(self, transaction_id: int, new_date: date) -> TransactionEntity:
        """Move a transaction to another date and repair its party's balances.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        with self.db.unit_of_work():
            self.db.update_transaction_date(transaction_id, new_date)
            if txn.party_id is not None and txn.type in LEDGER_TYPES:
                self.engine.recalculate(txn.party_id)

        return self.db.get_transaction(transaction_id)

    def fix_balances(self, party_id: Optional[int] = None) -> dict[int, Decimal]:
        """Recalculate one party, or every party when party_id is None.

        Returns:
            New current balance per party ID
        """
        if party_id is not None:
            self.require_party(party_id)

        with self.db.unit_of_work():
            if party_id is None:
                return self.engine.recalculate_all()
            return {party_id: self.engine.recalculate(party_id)}
