"""Bank reconciliation command."""

import click
from ohadabooks.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from ohadabooks.cli.error_handling import handle_domain_error
from ohadabooks.domain.bank_import import BankStatementImportService
from ohadabooks.domain.entities import JournalType
from ohadabooks.domain.errors import DomainError
from ohadabooks.domain.journal import JournalService
from ohadabooks.domain.reconciliation import find_matches


@click.command("reconcile")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--journal",
    type=click.Choice([j.value for j in JournalType]),
    help="Only match against entries of this journal",
)
@period_options
@click.pass_context
def reconcile(ctx, csv_file: str, journal: str | None, start_date, end_date, **kwargs):
    """Match a bank statement CSV against recorded journal entries.

    The CSV needs date, description and amount columns; type (credit or
    debit) and reference are optional. A transaction is matched only when
    exactly one entry has the same date and amount.

    Examples:
        ohadabooks reconcile releve-mars.csv --journal bank --last-month
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=pop_period_flags(kwargs)
    )

    try:
        imported = BankStatementImportService().import_csv(csv_file)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    for error in imported["errors"]:
        click.echo(f"Warning: {error}", err=True)

    entries = JournalService(ctx.obj["db"]).list_entries(
        ctx.obj["owner"], journal_type=journal, start_date=start, end_date=end
    )
    references = {entry.id: entry.reference for entry in entries}
    result = find_matches(imported["transactions"], entries)

    for txn in result.transactions:
        line = f"{txn.date} | {txn.amount:>12,.2f} | {txn.description[:30]:30s} | {txn.status.value}"
        match = result.match_for(txn.id)
        if match is not None:
            line += f" -> {references[match.journal_entry_id]} ({match.confidence:.0f}%)"
        click.echo(line)

    click.echo(
        f"\nMatched {len(result.matched)} of {len(result.transactions)} transactions; "
        f"unmatched total: {result.total_unmatched:,.2f}"
    )


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile, name="reconcile")
