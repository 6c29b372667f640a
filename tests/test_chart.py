"""Tests for the chart of accounts model and account service."""

import logging

import pytest

from ohadabooks.domain.chart import ChartOfAccounts, build_tree, parent_code
from ohadabooks.domain.entities import Account, AccountCategory, AccountLevel, NormalBalance
from ohadabooks.domain.errors import ValidationError

from conftest import OWNER, OTHER_OWNER


def _accounts(*codes):
    return [Account(code=code, label=f"Account {code}", owner_id=OWNER) for code in codes]


def _codes(nodes):
    return [node.code for node in nodes]


class TestBuildTree:
    """Tests for tree construction from a flat list."""

    def test_nests_class_account_subaccount(self):
        roots = build_tree(_accounts("1", "10", "101"))

        assert _codes(roots) == ["1"]
        assert _codes(roots[0].children) == ["10"]
        assert _codes(roots[0].children[0].children) == ["101"]
        assert roots[0].children[0].children[0].children == ()

    def test_missing_account_drops_subaccount(self):
        chart = ChartOfAccounts(_accounts("1", "101"))

        assert _codes(chart.roots) == ["1"]
        assert chart.roots[0].children == ()
        assert chart.orphans == ["101"]

    def test_missing_class_drops_whole_branch(self):
        chart = ChartOfAccounts(_accounts("10", "101", "2"))

        assert _codes(chart.roots) == ["2"]
        assert chart.orphans == ["10", "101"]

    def test_orphans_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="ohadabooks.domain.chart"):
            ChartOfAccounts(_accounts("1", "20"))

        assert "20" in caplog.text

    def test_children_ordered_by_code(self):
        roots = build_tree(_accounts("2", "12", "1", "111", "11", "113", "112"))

        assert _codes(roots) == ["1", "2"]
        assert _codes(roots[0].children) == ["11", "12"]
        assert _codes(roots[0].children[0].children) == ["111", "112", "113"]

    def test_long_subaccount_nests_under_two_digit_account(self):
        roots = build_tree(_accounts("5", "51", "5121"))

        assert _codes(roots[0].children[0].children) == ["5121"]

    def test_flatten_round_trip(self, sample_chart):
        flattened = {account.code for account in sample_chart.flatten()}
        rebuilt = ChartOfAccounts(sample_chart.flatten())

        assert len(flattened) == 56
        assert {account.code for account in rebuilt.flatten()} == flattened
        assert rebuilt.orphans == []

    def test_flatten_drops_only_orphans(self):
        chart = ChartOfAccounts(_accounts("1", "10", "101", "2", "201", "3", "31"))

        assert {a.code for a in chart.flatten()} == {"1", "10", "101", "2", "3", "31"}
        assert chart.orphans == ["201"]

    def test_empty_input(self):
        chart = ChartOfAccounts([])

        assert chart.roots == []
        assert chart.orphans == []

    def test_parent_code(self):
        assert parent_code("6") is None
        assert parent_code("60") == "6"
        assert parent_code("601") == "60"
        assert parent_code("6011") == "60"


class TestChartLookups:
    """Tests for find, search and path lookups."""

    def test_find_by_code(self, sample_chart):
        node = sample_chart.find_by_code("512")

        assert node is not None
        assert node.label == "Banque B"
        assert node.level == AccountLevel.SUBACCOUNT

    def test_find_by_code_missing(self, sample_chart):
        assert sample_chart.find_by_code("999") is None

    def test_search_is_case_insensitive_depth_first(self, sample_chart):
        results = sample_chart.search_accounts("BANQUE")

        assert _codes(results) == ["51", "511", "512"]

    def test_search_matches_code(self, sample_chart):
        results = sample_chart.search_accounts("60")

        assert _codes(results) == ["60", "601", "602"]

    def test_search_no_match(self, sample_chart):
        assert sample_chart.search_accounts("zzz") == []

    def test_get_account_path(self, sample_chart):
        path = sample_chart.get_account_path("512")

        assert _codes(path) == ["5", "51", "512"]

    def test_get_account_path_for_class(self, sample_chart):
        assert _codes(sample_chart.get_account_path("7")) == ["7"]

    def test_get_account_path_missing(self, sample_chart):
        assert sample_chart.get_account_path("999") == []


class TestAccountService:
    """Tests for AccountService."""

    def test_upsert_creates_account(self, account_service):
        account = account_service.upsert_account(
            owner_id=OWNER,
            code="5121",
            label="Banque Atlantique",
            category="asset",
            normal_balance="debit",
        )

        assert account.code == "5121"
        assert account.level == AccountLevel.SUBACCOUNT
        assert account.category == AccountCategory.ASSET
        assert account.normal_balance == NormalBalance.DEBIT

    def test_upsert_updates_existing_code(self, account_service):
        account_service.upsert_account(owner_id=OWNER, code="60", label="Achats")
        account_service.upsert_account(owner_id=OWNER, code="60", label="Achats et variations")

        accounts = account_service.list_accounts(OWNER)
        assert len(accounts) == 1
        assert accounts[0].label == "Achats et variations"

    def test_same_code_for_different_owners(self, account_service):
        account_service.upsert_account(owner_id=OWNER, code="60", label="Achats")
        account_service.upsert_account(owner_id=OTHER_OWNER, code="60", label="Purchases")

        assert account_service.get_account(OWNER, "60").label == "Achats"
        assert account_service.get_account(OTHER_OWNER, "60").label == "Purchases"

    @pytest.mark.parametrize("code", ["", "4a", "A1", " "])
    def test_rejects_non_digit_code(self, account_service, code):
        with pytest.raises(ValidationError):
            account_service.upsert_account(owner_id=OWNER, code=code, label="Bad")

    def test_rejects_missing_label(self, account_service):
        with pytest.raises(ValidationError, match="label"):
            account_service.upsert_account(owner_id=OWNER, code="60", label="  ")

    def test_rejects_unknown_category(self, account_service):
        with pytest.raises(ValidationError, match="category"):
            account_service.upsert_account(owner_id=OWNER, code="60", label="Achats", category="cost")

    def test_rejects_unknown_normal_balance(self, account_service):
        with pytest.raises(ValidationError, match="normal balance"):
            account_service.upsert_account(owner_id=OWNER, code="60", label="Achats", normal_balance="left")

    def test_list_accounts_ordered_by_code(self, account_service):
        for code in ("7", "10", "1", "101"):
            account_service.upsert_account(owner_id=OWNER, code=code, label=code)

        assert [a.code for a in account_service.list_accounts(OWNER)] == ["1", "10", "101", "7"]

    def test_load_default_chart_is_idempotent(self, account_service):
        assert account_service.load_default_chart(OWNER) == 56
        account_service.load_default_chart(OWNER)

        assert len(account_service.list_accounts(OWNER)) == 56
        assert account_service.list_accounts(OTHER_OWNER) == []

    def test_default_chart_metadata(self, account_service, sample_chart):
        cash_class = account_service.get_account(OWNER, "5")
        suppliers = account_service.get_account(OWNER, "40")

        assert cash_class.category == AccountCategory.ASSET
        assert cash_class.description == "Disponibilités et valeurs assimilées"
        assert suppliers.normal_balance == NormalBalance.CREDIT
        assert _codes(sample_chart.roots) == ["1", "2", "3", "4", "5", "6", "7"]
