"""Tests for the financial statement builder."""

from datetime import date
from decimal import Decimal

from ohadabooks.domain.entities import Account
from ohadabooks.domain.statements import (
    ALTERNATE_CLASS_BUCKETS,
    AccountClass,
    StatementBucket,
    StatementService,
)

from conftest import OWNER, OTHER_OWNER


def _codes(lines):
    return [line.code for line in lines]


def _balances(lines):
    return {line.code: line.balance for line in lines}


class TestAccountClass:
    """Tests for account class lookup."""

    def test_from_code(self):
        assert AccountClass.from_code("4") == AccountClass.THIRD_PARTIES
        assert AccountClass.from_code("512") == AccountClass.TREASURY

    def test_outside_classes(self):
        assert AccountClass.from_code("8") is None
        assert AccountClass.from_code("0") is None
        assert AccountClass.from_code("") is None


class TestBucketFor:
    """Tests for class to bucket mapping."""

    def test_default_layout(self, statement_service):
        def bucket(code):
            return statement_service.bucket_for(Account(code=code, label="x", owner_id=OWNER))

        assert bucket("10") == StatementBucket.EQUITY
        assert bucket("21") == StatementBucket.ASSETS
        assert bucket("31") == StatementBucket.ASSETS
        assert bucket("40") == StatementBucket.LIABILITIES
        assert bucket("51") == StatementBucket.LIABILITIES
        assert bucket("60") == StatementBucket.EXPENSES
        assert bucket("70") == StatementBucket.REVENUES
        assert bucket("81") is None

    def test_alternate_layout(self, temp_db):
        service = StatementService(temp_db, class_buckets=ALTERNATE_CLASS_BUCKETS)

        assert service.bucket_for(Account(code="41", label="x", owner_id=OWNER)) == StatementBucket.ASSETS
        assert service.bucket_for(Account(code="51", label="x", owner_id=OWNER)) == StatementBucket.LIABILITIES


class TestBalanceSheet:
    """Tests for balance sheet construction."""

    def test_lists_account_level_codes_by_bucket(self, statement_service, sample_chart):
        sheet = statement_service.balance_sheet(OWNER)

        assert _codes(sheet.equity) == ["10", "11", "12"]
        assert _codes(sheet.assets) == ["21", "22", "31", "32"]
        assert _codes(sheet.liabilities) == ["40", "41", "51", "52"]

    def test_buckets_are_disjoint(self, statement_service, sample_chart):
        sheet = statement_service.balance_sheet(OWNER)
        income = statement_service.income_statement(OWNER)

        all_codes = (
            _codes(sheet.assets)
            + _codes(sheet.liabilities)
            + _codes(sheet.equity)
            + _codes(income.revenues)
            + _codes(income.expenses)
        )
        assert len(all_codes) == len(set(all_codes)) == 15

    def test_balances_include_subaccounts(self, statement_service, sample_chart, post_entry):
        post_entry([("211", "500", "0"), ("101", "0", "500")])
        post_entry([("221", "200", "0"), ("511", "0", "200")])

        sheet = statement_service.balance_sheet(OWNER)

        assert _balances(sheet.assets)["21"] == Decimal("500")
        assert _balances(sheet.assets)["22"] == Decimal("200")
        assert _balances(sheet.equity)["10"] == Decimal("-500")
        assert _balances(sheet.liabilities)["51"] == Decimal("-200")
        assert sheet.total_assets == Decimal("700")
        assert sheet.total_liabilities == Decimal("-200")
        assert sheet.total_equity == Decimal("-500")

    def test_totals_match_lines(self, statement_service, sample_chart, post_entry):
        post_entry([("211", "500", "0"), ("401", "0", "300"), ("511", "0", "200")])

        sheet = statement_service.balance_sheet(OWNER)

        assert sheet.total_assets == sum(line.balance for line in sheet.assets)
        assert sheet.total_liabilities == sum(line.balance for line in sheet.liabilities)
        assert sheet.total_equity == sum(line.balance for line in sheet.equity)

    def test_alternate_layout_moves_class_four(self, temp_db, sample_chart, post_entry):
        post_entry([("411", "300", "0"), ("701", "0", "300")])
        service = StatementService(temp_db, class_buckets=ALTERNATE_CLASS_BUCKETS)

        sheet = service.balance_sheet(OWNER)

        assert _codes(sheet.assets) == ["21", "22", "31", "32", "40", "41"]
        assert _codes(sheet.liabilities) == ["51", "52"]
        assert _balances(sheet.assets)["41"] == Decimal("300")

    def test_date_range(self, statement_service, sample_chart, post_entry):
        post_entry([("211", "500", "0"), ("101", "0", "500")], entry_date=date(2023, 12, 31))
        post_entry([("211", "100", "0"), ("101", "0", "100")], entry_date=date(2024, 1, 1))

        sheet = statement_service.balance_sheet(OWNER, start_date=date(2024, 1, 1), end_date=date(2024, 12, 31))

        assert sheet.start_date == date(2024, 1, 1)
        assert _balances(sheet.assets)["21"] == Decimal("100")

    def test_owner_without_chart_is_empty(self, statement_service, sample_chart, post_entry):
        post_entry([("211", "500", "0"), ("101", "0", "500")])

        sheet = statement_service.balance_sheet(OTHER_OWNER)

        assert sheet.assets == () and sheet.liabilities == () and sheet.equity == ()
        assert sheet.total_assets == Decimal("0")


class TestIncomeStatement:
    """Tests for income statement construction."""

    def test_net_income_on_natural_balances(self, statement_service, sample_chart, post_entry):
        post_entry([("411", "1000", "0"), ("701", "0", "1000")], journal="sales")
        post_entry([("601", "400", "0"), ("401", "0", "400")], journal="purchases")

        statement = statement_service.income_statement(OWNER)

        assert _codes(statement.revenues) == ["70", "71"]
        assert _codes(statement.expenses) == ["60", "61"]
        assert statement.total_revenues == Decimal("-1000")
        assert statement.total_expenses == Decimal("400")
        assert statement.net_income == statement.total_revenues - statement.total_expenses
        assert statement.net_income == Decimal("-1400")

    def test_empty_ledger(self, statement_service, sample_chart):
        statement = statement_service.income_statement(OWNER)

        assert all(line.balance == Decimal("0") for line in statement.revenues + statement.expenses)
        assert statement.net_income == Decimal("0")

    def test_no_accounts(self, statement_service):
        statement = statement_service.income_statement(OWNER)

        assert statement.revenues == () and statement.expenses == ()
        assert statement.net_income == Decimal("0")
