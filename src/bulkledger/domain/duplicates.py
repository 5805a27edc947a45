"""Duplicate detection for posted transactions.

An entry is a probable re-submission when a transaction for the same party,
date, amount and kind was created within the trailing window (24 hours by
default). Bills must also agree on their bill number, or both lack one.
Entries without a party are never flagged. Within one batch, an entry
that repeats an earlier entry for the same party is flagged as well.

The same predicate backs two policies:

- find_duplicates() reports warnings so an operator can decide to post
  anyway or drop the flagged entries.
- should_skip() is used by the bulk-import path, which skips duplicates
  silently and only logs them.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal
from typing import Callable, Iterable, Optional

from bulkledger.database.base import Database
from bulkledger.domain.entities import Transaction
from bulkledger.domain.entries import EntryKind, ParsedEntry
from bulkledger.domain.errors import duplicate_transaction, repeated_in_batch

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class DuplicateWarning:
    """A parsed entry that collides with a recent transaction or an earlier entry."""

    position: int
    entry: ParsedEntry
    existing_transaction_id: Optional[int]
    message: str


class DuplicateDetector:
    """Finds recently posted transactions matching new entries."""

    def __init__(
        self,
        db: Database,
        window: timedelta = DEFAULT_WINDOW,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize duplicate detector.

        Args:
            db: Database instance
            window: Trailing span in which a match counts as a re-submission
            clock: Returns the current time; defaults to UTC now
        """
        self.db = db
        self.window = window
        self.clock = clock or _utcnow

    def find_match(
        self,
        party_id: Optional[int],
        txn_date: date,
        amount: Decimal,
        kind: EntryKind | str,
        bill_number: Optional[str] = None,
    ) -> Optional[Transaction]:
        """Return the existing transaction an entry duplicates, if any."""
        if party_id is None:
            return None

        kind = EntryKind(kind)
        created_since = self.clock() - self.window
        candidates = self.db.find_transactions(
            party_id, txn_date, kind.value, created_since=created_since
        )
        for txn in candidates:
            if txn.amount != amount:
                continue
            if kind is EntryKind.BILL and (txn.bill_number or None) != (bill_number or None):
                continue
            return txn
        return None

    def is_duplicate(
        self,
        party_id: Optional[int],
        txn_date: date,
        amount: Decimal,
        kind: EntryKind | str,
        bill_number: Optional[str] = None,
    ) -> bool:
        """Check whether a transaction would duplicate a recent one.

        Args:
            party_id: Party ID, or None for standalone entries
            txn_date: Transaction date
            amount: Transaction amount
            kind: Transaction kind
            bill_number: Bill number, only compared for bills

        Returns:
            True if a matching transaction was created within the window
        """
        return self.find_match(party_id, txn_date, amount, kind, bill_number) is not None

    def existing_party_id(
        self, entry: ParsedEntry, party_id_hint: Optional[int] = None
    ) -> Optional[int]:
        """Resolve an entry's party without creating one."""
        if entry.party_name:
            party = self.db.find_party_by_name(entry.party_name)
            return party.id if party is not None else None
        if entry.affects_party_ledger:
            return party_id_hint
        return None

    def find_duplicates(
        self, entries: Iterable[ParsedEntry], party_id_hint: Optional[int] = None
    ) -> list[DuplicateWarning]:
        """Return one warning per entry that collides with a recent transaction.

        An entry that repeats an earlier entry of the same batch is flagged
        too, because apply would match it against the row the earlier entry
        just posted. Such warnings carry no existing_transaction_id.

        Positions in the warnings are 0-based indexes into entries, so a
        caller can pass them back to the apply step as overrides.
        """
        warnings = []
        seen: dict[tuple, int] = {}
        for position, entry in enumerate(entries):
            party_id = self.existing_party_id(entry, party_id_hint)
            key = self._batch_key(entry, party_id)
            earlier = seen.setdefault(key, position) if key is not None else position

            match = self.find_match(
                party_id, entry.date, entry.amount, entry.kind, entry.bill_number
            )
            if match is None and earlier == position:
                continue

            party_name = entry.party_name
            if party_name is None:
                party = self.db.get_party(party_id)
                party_name = party.name if party is not None else str(party_id)
            if match is not None:
                message = duplicate_transaction(
                    entry.kind.value, party_name, entry.date, entry.amount
                )
            else:
                message = repeated_in_batch(
                    entry.kind.value, party_name, entry.date, entry.amount, earlier + 1
                )
            warnings.append(
                DuplicateWarning(
                    position=position,
                    entry=entry,
                    existing_transaction_id=match.id if match is not None else None,
                    message=message,
                )
            )
        return warnings

    @staticmethod
    def _batch_key(entry: ParsedEntry, party_id: Optional[int]) -> Optional[tuple]:
        """Identify an entry within a batch, or None if it has no party."""
        if party_id is not None:
            party = ("id", party_id)
        elif entry.party_name:
            party = ("name", entry.party_name.strip().lower())
        else:
            return None
        kind = EntryKind(entry.kind)
        bill_number = (entry.bill_number or None) if kind == EntryKind.BILL else None
        return (party, entry.date, entry.amount, kind, bill_number)

    def should_skip(self, entry: ParsedEntry, party_id: Optional[int]) -> bool:
        """Bulk-import policy: skip a duplicate entry and log it."""
        match = self.find_match(
            party_id, entry.date, entry.amount, entry.kind, entry.bill_number
        )
        if match is None:
            return False
        logger.info(
            "Skipping duplicate %s for party %s on %s (amount %s, matches transaction %s)",
            entry.kind.value,
            party_id,
            entry.date.isoformat(),
            entry.amount,
            match.id,
        )
        return True
