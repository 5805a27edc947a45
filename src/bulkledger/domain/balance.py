"""Ledger balance engine."""

import logging
from decimal import Decimal

from bulkledger.database.base import Database
from bulkledger.domain.entries import EntryKind
from bulkledger.domain.errors import NotFoundError, party_not_found

logger = logging.getLogger(__name__)

LEDGER_TYPES = (EntryKind.BILL.value, EntryKind.PAYMENT.value)


class BalanceEngine:
    """Recomputes running balances from a party's bills and payments.

    The result depends only on the set of bill and payment rows, so running
    it twice with no change in between produces the same balances.
    Callers that need the rewrite to be atomic run it inside
    Database.unit_of_work().
    """

    def __init__(self, db: Database):
        """Initialize balance engine.

        Args:
            db: Database instance
        """
        self.db = db

    def recalculate(self, party_id: int) -> Decimal:
        """Rewrite running balances for one party.

        Rows are folded in (date, created_at) order starting from zero:
        a bill adds its amount, a payment subtracts it. Each row gets the
        balance after it, and the final balance becomes the party's
        current balance.

        Args:
            party_id: Party ID

        Returns:
            The party's new current balance

        Raises:
            NotFoundError: If the party doesn't exist
        """
        if self.db.get_party(party_id) is None:
            raise NotFoundError(party_not_found(party_id))

        balance = Decimal("0")
        rows = self.db.list_transactions_for_party(party_id, types=LEDGER_TYPES)
        for txn in rows:
            if txn.type == EntryKind.BILL.value:
                balance += txn.amount
            else:
                balance -= txn.amount
            self.db.update_transaction_running_balance(txn.id, balance)

        self.db.update_party_balance(party_id, balance)
        logger.debug("Recalculated party %s over %d rows: balance %s", party_id, len(rows), balance)
        return balance

    def recalculate_all(self) -> dict[int, Decimal]:
        """Recalculate every party. Returns new balances keyed by party ID."""
        return {party.id: self.recalculate(party.id) for party in self.db.list_parties()}
