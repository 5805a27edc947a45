"""Atomic apply of a parsed bulk-entry batch."""

import logging
from decimal import Decimal
from typing import Any, Collection, Iterable, Optional

from bulkledger.database.base import Database
from bulkledger.domain.balance import BalanceEngine
from bulkledger.domain.duplicates import DuplicateDetector
from bulkledger.domain.entities import Transaction
from bulkledger.domain.entries import (
    BillEntry,
    ExpenseCategory,
    ExpenseEntry,
    ParsedEntry,
    PaymentEntry,
    PaymentMode,
    SaleEntry,
)
from bulkledger.domain.errors import (
    BatchValidationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StoreError,
    apply_in_progress,
    party_not_found,
)
from bulkledger.domain.validator import validate_entries

logger = logging.getLogger(__name__)


class BulkApplyService:
    """Posts a validated batch of entries in one unit of work."""

    def __init__(self, db: Database, detector: Optional[DuplicateDetector] = None):
        """Initialize bulk apply service.

        Args:
            db: Database instance
            detector: Duplicate detector; defaults to one over db
        """
        self.db = db
        self.detector = detector or DuplicateDetector(db)
        self.engine = BalanceEngine(db)

    def apply(
        self,
        entries: Iterable[ParsedEntry],
        party_id_hint: Optional[int] = None,
        overrides: Collection[int] = (),
    ) -> dict[str, Any]:
        """Post a batch of entries, all or nothing.

        Entries are posted in date order (stable for equal dates). Party and
        staff names are resolved case-insensitively and created when
        missing. Entries the duplicate detector flags are skipped unless
        their position is listed in overrides. Every party that received a
        bill or payment is recalculated before the commit.

        Args:
            entries: Parsed entries to post
            party_id_hint: Party for bills and payments that name no party
            overrides: 0-based positions of entries to post even if they
                look like duplicates

        Returns:
            Dict with apply statistics:
            - posted: IDs of the created transactions, in posting order
            - skipped: number of entries skipped as duplicates
            - skipped_details: position and entry of each skipped entry
            - balances: new current balance per recalculated party ID

        Raises:
            BatchValidationError: If the batch fails validation
            NotFoundError: If party_id_hint names no party
            ConflictError: If another apply is in progress
            StoreError: If the store fails; nothing is persisted
        """
        entries = list(entries)
        errors = validate_entries(entries, require_party=party_id_hint is None)
        if errors:
            raise BatchValidationError(errors)

        if self.db.in_unit_of_work:
            raise ConflictError(apply_in_progress())

        if party_id_hint is not None and self.db.get_party(party_id_hint) is None:
            raise NotFoundError(party_not_found(party_id_hint))

        overrides = set(overrides)
        order = sorted(range(len(entries)), key=lambda i: entries[i].date)

        posted: list[int] = []
        skipped_details: list[dict[str, Any]] = []
        touched: dict[int, None] = {}

        try:
            with self.db.unit_of_work():
                for position in order:
                    entry = entries[position]
                    party_id = self._resolve_party(entry, party_id_hint)
                    staff_id = self._resolve_staff(entry)

                    if position not in overrides and self.detector.should_skip(entry, party_id):
                        skipped_details.append({"position": position, "entry": entry})
                        continue

                    txn = self._post(entry, party_id, staff_id)
                    posted.append(txn.id)
                    if party_id is not None and entry.affects_party_ledger:
                        touched[party_id] = None

                balances = {party_id: self.engine.recalculate(party_id) for party_id in touched}
        except DomainError as e:
            logger.error("Bulk apply of %d entries rolled back: %s", len(entries), e)
            raise
        except Exception as e:
            logger.error("Bulk apply of %d entries rolled back: %s", len(entries), e)
            raise StoreError(f"Bulk apply failed: {e}") from e

        logger.info(
            "Applied %d entries (%d skipped as duplicates, %d parties recalculated)",
            len(posted),
            len(skipped_details),
            len(balances),
        )
        return {
            "posted": posted,
            "skipped": len(skipped_details),
            "skipped_details": skipped_details,
            "balances": balances,
        }

    def _resolve_party(self, entry: ParsedEntry, party_id_hint: Optional[int]) -> Optional[int]:
        """Find or create the entry's party."""
        name = entry.party_name
        if name:
            name = name.strip()
            party = self.db.find_party_by_name(name)
            if party is None:
                party = self.db.create_party(name)
                logger.info("Created party '%s' (ID: %s)", party.name, party.id)
            return party.id
        if entry.affects_party_ledger:
            return party_id_hint
        return None

    def _resolve_staff(self, entry: ParsedEntry) -> Optional[int]:
        """Find or create the entry's staff member."""
        name = entry.staff_name
        if not name:
            return None
        name = name.strip()
        staff = self.db.find_staff_by_name(name)
        if staff is None:
            staff = self.db.create_staff(name)
            logger.info("Created staff member '%s' (ID: %s)", staff.name, staff.id)
        return staff.id

    def _post(
        self, entry: ParsedEntry, party_id: Optional[int], staff_id: Optional[int]
    ) -> Transaction:
        """Insert one entry and apply its incremental balance change."""
        amount = Decimal(entry.amount)

        if isinstance(entry, SaleEntry):
            mode = PaymentMode(entry.payment_mode)
            txn = self.db.insert_transaction(
                date=entry.date,
                type=entry.kind.value,
                amount=amount,
                party_id=party_id,
                payment_mode=mode.value,
            )
            if mode is PaymentMode.CREDIT and party_id is not None:
                self.db.adjust_party_balance(party_id, amount)
            return txn

        if isinstance(entry, ExpenseEntry):
            category = ExpenseCategory(entry.category)
            txn = self.db.insert_transaction(
                date=entry.date,
                type=entry.kind.value,
                amount=amount,
                staff_id=staff_id,
                expense_category=category.value,
                has_gst=entry.has_gst,
                description=entry.description,
            )
            if category is ExpenseCategory.ADVANCE and staff_id is not None:
                self.db.adjust_staff_advance(staff_id, amount)
            return txn

        if isinstance(entry, BillEntry):
            txn = self.db.insert_transaction(
                date=entry.date,
                type=entry.kind.value,
                amount=amount,
                party_id=party_id,
                bill_number=entry.bill_number,
                has_gst=entry.has_gst,
                description=entry.description,
            )
            if party_id is not None:
                self.db.adjust_party_balance(party_id, amount)
            return txn

        if isinstance(entry, PaymentEntry):
            txn = self.db.insert_transaction(
                date=entry.date,
                type=entry.kind.value,
                amount=amount,
                party_id=party_id,
                expense_category=entry.expense_category.value,
                has_gst=entry.has_gst,
                description=entry.description,
            )
            if party_id is not None:
                self.db.adjust_party_balance(party_id, -amount)
            return txn

        raise TypeError(f"Unsupported entry type {type(entry).__name__}")
