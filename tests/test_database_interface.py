"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal

from bulkledger.database.factories import create_sqlite_database
from bulkledger.domain import entities
from bulkledger.domain.errors import ConflictError, NotFoundError, StoreError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_create_party_returns_domain_model(self, temp_db):
        """Test that create_party returns a domain Party entity."""
        party = temp_db.create_party("SAJ", credit_limit=Decimal("1000"))

        assert isinstance(party, entities.Party)
        assert isinstance(party.id, int)
        assert party.name == "SAJ"
        assert party.credit_limit == Decimal("1000")
        assert party.current_balance == Decimal("0")
        assert party.created_at.tzinfo is not None

    def test_find_party_by_name_ignores_case(self, temp_db):
        party = temp_db.create_party("PendalKarigar")

        assert temp_db.find_party_by_name("pendalkarigar").id == party.id
        assert temp_db.find_party_by_name(" PENDALKARIGAR ").id == party.id
        assert temp_db.find_party_by_name("Pendal") is None

    def test_staff_returns_domain_model(self, temp_db):
        staff = temp_db.create_staff("Alok")
        temp_db.adjust_staff_advance(staff.id, Decimal("2000"))

        found = temp_db.find_staff_by_name("ALOK")
        assert isinstance(found, entities.Staff)
        assert found.current_advance == Decimal("2000")
        assert temp_db.get_staff(staff.id).name == "Alok"

    def test_insert_transaction_returns_domain_model(self, temp_db):
        party = temp_db.create_party("SAJ")
        txn = temp_db.insert_transaction(
            date=date(2025, 1, 20),
            type="bill",
            amount=Decimal("73173"),
            party_id=party.id,
            bill_number="SV2029",
            has_gst=True,
            description="GR 302",
        )

        assert isinstance(txn, entities.Transaction)
        assert txn.party_id == party.id
        assert txn.amount == Decimal("73173")
        assert txn.running_balance is None
        assert isinstance(txn.created_at, datetime)

    def test_balance_updates(self, temp_db):
        party = temp_db.create_party("SAJ")

        temp_db.adjust_party_balance(party.id, Decimal("100"))
        temp_db.adjust_party_balance(party.id, Decimal("-30"))
        assert temp_db.get_party(party.id).current_balance == Decimal("70")

        temp_db.update_party_balance(party.id, Decimal("5"))
        assert temp_db.get_party(party.id).current_balance == Decimal("5")

    def test_missing_rows_raise(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update_party_balance(1, Decimal("0"))
        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(1)
        with pytest.raises(NotFoundError):
            temp_db.update_transaction_running_balance(1, Decimal("0"))
        with pytest.raises(NotFoundError):
            temp_db.adjust_staff_advance(1, Decimal("1"))

    def test_list_transactions_for_party_filters_types(self, temp_db):
        party = temp_db.create_party("Maa")
        temp_db.insert_transaction(
            date=date(2025, 1, 1), type="sale", amount=Decimal("10"), party_id=party.id, payment_mode="credit"
        )
        temp_db.insert_transaction(date=date(2025, 1, 2), type="bill", amount=Decimal("20"), party_id=party.id)

        assert len(temp_db.list_transactions_for_party(party.id)) == 2
        rows = temp_db.list_transactions_for_party(party.id, types=("bill", "payment"))
        assert [r.type for r in rows] == ["bill"]

    def test_find_transactions_created_since(self, temp_db):
        party = temp_db.create_party("SAJ")
        now = datetime.now(UTC)
        temp_db.insert_transaction(
            date=date(2025, 1, 20), type="bill", amount=Decimal("1"), party_id=party.id,
            created_at=now - timedelta(hours=2),
        )

        assert len(temp_db.find_transactions(party.id, date(2025, 1, 20), "bill")) == 1
        assert temp_db.find_transactions(
            party.id, date(2025, 1, 20), "bill", created_since=now - timedelta(hours=1)
        ) == []

    def test_update_transaction_date(self, temp_db):
        txn = temp_db.insert_transaction(date=date(2025, 1, 20), type="sale", amount=Decimal("1"))

        temp_db.update_transaction_date(txn.id, date(2025, 1, 1))

        assert temp_db.get_transaction(txn.id).date == date(2025, 1, 1)

    def test_list_transactions_filters(self, temp_db):
        temp_db.insert_transaction(date=date(2025, 1, 1), type="sale", amount=Decimal("1"))
        temp_db.insert_transaction(date=date(2025, 1, 5), type="expense", amount=Decimal("2"))
        temp_db.insert_transaction(date=date(2025, 1, 9), type="sale", amount=Decimal("3"))

        assert [t.amount for t in temp_db.list_transactions(type="sale")] == [Decimal("3"), Decimal("1")]
        assert len(temp_db.list_transactions(start_date=date(2025, 1, 2), end_date=date(2025, 1, 8))) == 1


class TestUnitOfWork:
    """Tests for the all-or-nothing unit of work."""

    def test_commit_on_normal_exit(self, temp_db):
        with temp_db.unit_of_work():
            assert temp_db.in_unit_of_work is True
            temp_db.create_party("SAJ")

        assert temp_db.in_unit_of_work is False
        assert temp_db.find_party_by_name("SAJ") is not None

    def test_rollback_on_exception(self, temp_db):
        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                party = temp_db.create_party("SAJ")
                temp_db.insert_transaction(date=date(2025, 1, 1), type="bill", amount=Decimal("5"), party_id=party.id)
                raise RuntimeError("boom")

        assert temp_db.list_parties() == []
        assert temp_db.list_transactions() == []
        assert temp_db.in_unit_of_work is False

    def test_store_failure_is_wrapped(self, temp_db):
        """Test a SQLAlchemy error inside a unit surfaces as StoreError."""
        temp_db.create_party("SAJ")

        with pytest.raises(StoreError) as excinfo:
            with temp_db.unit_of_work():
                temp_db.create_party("SAJ")

        assert excinfo.value.__cause__ is not None
        assert [p.name for p in temp_db.list_parties()] == ["SAJ"]

    def test_nested_unit_is_refused(self, temp_db):
        with temp_db.unit_of_work():
            with pytest.raises(ConflictError):
                with temp_db.unit_of_work():
                    pass


def test_database_path_from_environment(tmp_path, monkeypatch):
    db_path = tmp_path / "env.db"
    monkeypatch.setenv("BULKLEDGER_DB_PATH", str(db_path))

    db = create_sqlite_database()

    assert db.database_url == f"sqlite:///{db_path}"
    db.disconnect()
