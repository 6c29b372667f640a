"""Domain layer for ohadabooks application."""

# Services are imported lazily: they depend on ohadabooks.database, which
# itself imports ohadabooks.domain.entities.
_EXPORTS = {
    "AccountService": "ohadabooks.domain.chart",
    "ChartOfAccounts": "ohadabooks.domain.chart",
    "JournalService": "ohadabooks.domain.journal",
    "LedgerAggregator": "ohadabooks.domain.ledger",
    "StatementService": "ohadabooks.domain.statements",
    "BankStatementImportService": "ohadabooks.domain.bank_import",
}

__all__ = list(_EXPORTS)


def __getattr__(name):
    if name in _EXPORTS:
        import importlib

        return getattr(importlib.import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
