"""Chart-of-accounts model and account domain service."""

import logging
from collections import defaultdict
from typing import Iterable, Optional, Union

from ohadabooks.database.base import Database
from ohadabooks.domain.entities import (
    Account,
    AccountCategory,
    AccountLevel,
    AccountNode,
    NormalBalance,
)
from ohadabooks.domain.errors import ValidationError, invalid_choice

logger = logging.getLogger(__name__)


def parent_code(code: str) -> Optional[str]:
    """Return the code an account nests under, or None for a class."""
    level = AccountLevel.from_code(code)
    if level == AccountLevel.CLASS:
        return None
    if level == AccountLevel.ACCOUNT:
        return code[0]
    return code[:2]


class ChartOfAccounts:
    """Hierarchical view of a flat list of accounts.

    Classes (one digit) are roots, accounts (two digits) nest under the class
    matching their first digit, and subaccounts nest under the account
    matching their first two digits. Entries whose parent is missing are left
    out of the tree and reported in ``orphans``.
    """

    def __init__(self, accounts: Iterable[Account]):
        by_code = {account.code: account for account in accounts}
        children: dict[str, list[str]] = defaultdict(list)
        root_codes: list[str] = []
        candidates: list[str] = []

        for code in sorted(by_code):
            parent = parent_code(code)
            if parent is None:
                root_codes.append(code)
            else:
                children[parent].append(code)
                candidates.append(code)

        def build(code: str) -> AccountNode:
            return AccountNode(
                account=by_code[code],
                children=tuple(build(child) for child in children[code]),
            )

        self.roots: list[AccountNode] = [build(code) for code in root_codes]

        placed = {account.code for account in self.flatten()}
        self.orphans: list[str] = [code for code in candidates if code not in placed]
        if self.orphans:
            logger.warning(
                "Dropped %d orphaned account code(s) from chart: %s",
                len(self.orphans),
                ", ".join(self.orphans),
            )

    def _walk(self, nodes: Iterable[AccountNode]) -> Iterable[AccountNode]:
        for node in nodes:
            yield node
            yield from self._walk(node.children)

    def flatten(self) -> list[Account]:
        """Return every account in the tree, depth-first."""
        return [node.account for node in self._walk(self.roots)]

    def find_by_code(self, code: str) -> Optional[AccountNode]:
        """Find an account node by exact code, depth-first."""
        for node in self._walk(self.roots):
            if node.code == code:
                return node
        return None

    def search_accounts(self, query: str) -> list[AccountNode]:
        """Case-insensitive substring search on code or label, depth-first."""
        needle = query.lower()
        return [
            node
            for node in self._walk(self.roots)
            if needle in node.code.lower() or needle in node.label.lower()
        ]

    def get_account_path(self, code: str) -> list[AccountNode]:
        """Return the path from the root class down to the account.

        Returns an empty list when the code is not in the tree.
        """

        def find_path(nodes: Iterable[AccountNode]) -> Optional[list[AccountNode]]:
            for node in nodes:
                if node.code == code:
                    return [node]
                below = find_path(node.children)
                if below is not None:
                    return [node] + below
            return None

        return find_path(self.roots) or []


def build_tree(accounts: Iterable[Account]) -> list[AccountNode]:
    """Build the nested chart from a flat list of accounts. Returns roots only."""
    return ChartOfAccounts(accounts).roots


def _coerce_choice(enum_cls, value, field: str):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(invalid_choice(field, value, [e.value for e in enum_cls]))


class AccountService:
    """Service for managing an owner's chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def upsert_account(
        self,
        owner_id: str,
        code: str,
        label: str,
        category: Union[AccountCategory, str, None] = None,
        normal_balance: Union[NormalBalance, str, None] = None,
        description: Optional[str] = None,
    ) -> Account:
        """Create or update an account by (code, owner).

        Args:
            owner_id: Owner scoping key
            code: Account code, digits only
            label: Display name
            category: Optional category (enum or its string value)
            normal_balance: Optional normal balance (enum or its string value)
            description: Optional description

        Returns:
            The stored account

        Raises:
            ValidationError: If the code, label or an enum value is invalid
        """
        code = (code or "").strip()
        label = (label or "").strip()
        if not code or not code.isdigit():
            raise ValidationError(f"Account code must be a non-empty string of digits, got '{code}'")
        if not label:
            raise ValidationError(f"Account {code} requires a label")

        account = self.db.upsert_account(
            owner_id=owner_id,
            code=code,
            label=label,
            category=_coerce_choice(AccountCategory, category, "category"),
            normal_balance=_coerce_choice(NormalBalance, normal_balance, "normal balance"),
            description=description,
        )
        logger.debug("Upserted account %s for owner %s", code, owner_id)
        return account

    def get_account(self, owner_id: str, code: str) -> Optional[Account]:
        """Get account by code, or None if not found."""
        return self.db.get_account(owner_id, code)

    def list_accounts(self, owner_id: str) -> list[Account]:
        """List the owner's accounts, ordered by code."""
        return self.db.list_accounts(owner_id)

    def get_chart(self, owner_id: str) -> ChartOfAccounts:
        """Build the owner's chart tree."""
        return ChartOfAccounts(self.db.list_accounts(owner_id))

    def load_default_chart(self, owner_id: str) -> int:
        """Upsert the default OHADA chart for an owner.

        Returns:
            Number of accounts written
        """
        from ohadabooks.domain.default_chart import DEFAULT_CHART

        for code, label, category, normal_balance, description in DEFAULT_CHART:
            self.upsert_account(
                owner_id=owner_id,
                code=code,
                label=label,
                category=category,
                normal_balance=normal_balance,
                description=description,
            )
        logger.info("Loaded %d default accounts for owner %s", len(DEFAULT_CHART), owner_id)
        return len(DEFAULT_CHART)
