"""Tests for the Database interface returning domain models."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from ohadabooks.database import Database, LedgerLineSource
from ohadabooks.database.mappers import journal_entry_to_domain, journal_entry_to_orm
from ohadabooks.domain import entities
from ohadabooks.domain.journal import build_entry

from conftest import OWNER, OTHER_OWNER


def _sample_entry(owner=OWNER, entry_date=date(2024, 3, 15), journal="bank"):
    return build_entry(
        owner,
        entry_date,
        "VIR-001",
        "Virement client",
        journal,
        [
            {"account_code": "512", "debit": "1000", "credit": "0"},
            {"account_code": "411", "debit": "0", "credit": "1000", "label": "Client Dupont"},
        ],
    )


class TestDatabaseInterface:
    """Tests to verify the SQL store returns domain models."""

    def test_store_is_a_ledger_line_source(self, temp_db):
        assert isinstance(temp_db, Database)
        assert isinstance(temp_db, LedgerLineSource)

    def test_upsert_account_returns_domain_model(self, temp_db):
        account = temp_db.upsert_account(
            OWNER,
            "512",
            "Banque B",
            category=entities.AccountCategory.ASSET,
            normal_balance=entities.NormalBalance.DEBIT,
        )

        assert isinstance(account, entities.Account)
        assert account.category == entities.AccountCategory.ASSET
        assert account.normal_balance == entities.NormalBalance.DEBIT
        assert temp_db.get_account(OWNER, "512") == account

    def test_get_account_is_owner_scoped(self, temp_db):
        temp_db.upsert_account(OWNER, "512", "Banque B")

        assert temp_db.get_account(OTHER_OWNER, "512") is None
        assert temp_db.list_accounts(OTHER_OWNER) == []

    def test_failed_account_commit_is_rolled_back(self, temp_db, monkeypatch):
        session = temp_db._get_session()

        def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(session, "commit", failing_commit)
        with pytest.raises(OperationalError):
            temp_db.upsert_account(OWNER, "512", "Banque B")
        monkeypatch.undo()

        temp_db.upsert_account(OWNER, "521", "Caisse principale")

        assert temp_db.get_account(OWNER, "512") is None
        assert [a.code for a in temp_db.list_accounts(OWNER)] == ["521"]

    def test_journal_entry_round_trip(self, temp_db):
        entry = _sample_entry()

        temp_db.create_journal_entry(entry)
        stored = temp_db.get_journal_entry(entry.id)

        assert isinstance(stored, entities.JournalEntry)
        assert stored == entry
        assert stored.journal_type == entities.JournalType.BANK
        assert isinstance(stored.lines[0].debit, Decimal)
        assert stored.lines[1].label == "Client Dupont"

    def test_get_missing_entry(self, temp_db):
        assert temp_db.get_journal_entry("missing") is None

    def test_list_journal_entries_filters(self, temp_db):
        cash = _sample_entry(journal="cash", entry_date=date(2024, 1, 5))
        bank = _sample_entry(journal="bank", entry_date=date(2024, 2, 5))
        other = _sample_entry(owner=OTHER_OWNER)
        for entry in (cash, bank, other):
            temp_db.create_journal_entry(entry)

        assert [e.id for e in temp_db.list_journal_entries(OWNER)] == [bank.id, cash.id]
        assert [
            e.id for e in temp_db.list_journal_entries(OWNER, journal_type=entities.JournalType.CASH)
        ] == [cash.id]
        assert temp_db.list_journal_entries(OWNER, start_date=date(2024, 3, 1)) == []

    def test_ledger_lines(self, temp_db):
        entry = _sample_entry()
        temp_db.create_journal_entry(entry)

        lines = temp_db.ledger_lines(OWNER, "51")

        assert lines == [
            entities.LedgerLine(
                entry_id=entry.id,
                entry_date=date(2024, 3, 15),
                account_code="512",
                debit=Decimal("1000"),
                credit=Decimal("0"),
            )
        ]
        assert lines[0].amount == Decimal("1000")
        assert len(temp_db.ledger_lines(OWNER, "")) == 2
        assert temp_db.ledger_lines(OWNER, "51", end_date=date(2024, 3, 14)) == []


class TestMappers:
    """Tests for ORM and domain conversion."""

    def test_entry_to_orm_keeps_line_order(self):
        entry = _sample_entry()

        orm_entry = journal_entry_to_orm(entry)

        assert orm_entry.journal_type == "bank"
        assert [line.position for line in orm_entry.lines] == [0, 1]
        assert [line.account_code for line in orm_entry.lines] == ["512", "411"]

    def test_entry_round_trip_without_database(self):
        entry = _sample_entry()

        assert journal_entry_to_domain(journal_entry_to_orm(entry)) == entry
