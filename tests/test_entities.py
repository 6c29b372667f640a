"""Tests for domain entities."""

from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from ohadabooks.domain.entities import (
    Account,
    AccountLevel,
    AccountNode,
    JournalEntry,
    JournalLine,
    JournalType,
    LedgerLine,
)


class TestAccount:
    """Tests for Account."""

    @pytest.mark.parametrize(
        "code, level",
        [("5", AccountLevel.CLASS), ("52", AccountLevel.ACCOUNT), ("521", AccountLevel.SUBACCOUNT), ("5211", AccountLevel.SUBACCOUNT)],
    )
    def test_level_from_code_length(self, code, level):
        assert Account(code=code, label="Caisse", owner_id="acme").level == level

    def test_class_code(self):
        assert Account(code="601", label="Achats", owner_id="acme").class_code == "6"

    def test_is_immutable(self):
        account = Account(code="601", label="Achats", owner_id="acme")

        with pytest.raises(FrozenInstanceError):
            account.label = "Autre"

    def test_node_delegates_to_account(self):
        node = AccountNode(Account(code="60", label="Achats", owner_id="acme"))

        assert (node.code, node.label, node.level) == ("60", "Achats", AccountLevel.ACCOUNT)
        assert node.children == ()


class TestJournalEntry:
    """Tests for JournalEntry totals."""

    def test_totals(self):
        entry = JournalEntry(
            id="e1",
            owner_id="acme",
            date=date(2024, 3, 1),
            reference="FA-1",
            description="Vente",
            journal_type=JournalType.SALES,
            lines=(
                JournalLine(id="l1", account_code="411", label="", debit=Decimal("1180")),
                JournalLine(id="l2", account_code="701", label="", credit=Decimal("1000")),
                JournalLine(id="l3", account_code="443", label="", credit=Decimal("180")),
            ),
        )

        assert entry.total_debit == Decimal("1180")
        assert entry.total_credit == Decimal("1180")

    def test_ledger_line_amount_is_debit_positive(self):
        line = LedgerLine(
            entry_id="e1",
            entry_date=date(2024, 3, 1),
            account_code="701",
            debit=Decimal("0"),
            credit=Decimal("1000"),
        )

        assert line.amount == Decimal("-1000")
