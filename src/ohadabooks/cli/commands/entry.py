"""Journal entry commands."""

import logging

import click
from ohadabooks.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from ohadabooks.cli.error_handling import handle_domain_error
from ohadabooks.domain.entities import JournalType
from ohadabooks.domain.errors import DomainError, ValidationError
from ohadabooks.domain.journal import JournalService

logger = logging.getLogger(__name__)


def _log_notification(event: str, entry) -> None:
    logger.info("%s: %s (%s)", event, entry.id, entry.reference)


def parse_line_option(value: str) -> dict[str, str]:
    """Parse a --line value of the form CODE:DEBIT:CREDIT[:LABEL]."""
    parts = value.split(":", 3)
    if len(parts) < 3:
        raise ValidationError(f"Invalid line '{value}'. Expected CODE:DEBIT:CREDIT[:LABEL]")
    line = {"account_code": parts[0], "debit": parts[1] or "0", "credit": parts[2] or "0"}
    if len(parts) == 4:
        line["label"] = parts[3]
    return line


def _echo_entry(entry) -> None:
    click.echo(
        f"{entry.date} | {entry.journal_type.value:9s} | {entry.reference:12s} | "
        f"{entry.description} (ID: {entry.id})"
    )
    for line in entry.lines:
        click.echo(
            f"    {line.account_code:8s} {line.label:30s} "
            f"{line.debit:>12,.2f} {line.credit:>12,.2f}"
        )


@click.group()
def entry_group():
    """Record and view journal entries."""
    pass


@entry_group.command("add")
@click.option("--date", "entry_date", required=True, help="Entry date (YYYY-MM-DD or 'today')")
@click.option("--reference", required=True, help="Entry reference (e.g., invoice number)")
@click.option("--description", required=True, help="Entry description")
@click.option(
    "--journal",
    type=click.Choice([j.value for j in JournalType]),
    required=True,
    help="Journal to record the entry in",
)
@click.option(
    "--line",
    "lines",
    multiple=True,
    required=True,
    help="Entry line as CODE:DEBIT:CREDIT[:LABEL]; repeat for each line",
)
@click.option("--strict", is_flag=True, help="Reject lines whose account is not in the chart")
@click.pass_context
def add_entry(ctx, entry_date: str, reference: str, description: str, journal: str, lines: tuple[str, ...], strict: bool):
    """Record a balanced journal entry.

    Total debit and total credit must agree within 0.01.

    Examples:
        ohadabooks entry add --date 2024-03-01 --reference FA-001 \\
            --description "Vente comptant" --journal cash \\
            --line 521:1000:0 --line 701:0:1000
    """
    service = JournalService(ctx.obj["db"], notify=_log_notification)
    try:
        entry = service.create_entry(
            owner_id=ctx.obj["owner"],
            entry_date=entry_date,
            reference=reference,
            description=description,
            journal_type=journal,
            lines=[parse_line_option(line) for line in lines],
            require_known_accounts=strict,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Recorded entry '{entry.reference}' (ID: {entry.id})")
    click.echo(f"Total: {entry.total_debit:,.2f}")


@entry_group.command("list")
@click.option(
    "--journal",
    type=click.Choice([j.value for j in JournalType]),
    help="Only show entries of this journal",
)
@period_options
@click.pass_context
def list_entries(ctx, journal: str | None, start_date: str | None, end_date: str | None, **kwargs):
    """List journal entries, newest first."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )
    service = JournalService(ctx.obj["db"])
    entries = service.list_entries(
        ctx.obj["owner"], journal_type=journal, start_date=start, end_date=end
    )
    if not entries:
        click.echo("No journal entries found.")
        return
    for entry in entries:
        _echo_entry(entry)


@entry_group.command("show")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def show_entry(ctx, entry_id: str):
    """Show one journal entry with its lines."""
    service = JournalService(ctx.obj["db"])
    try:
        entry = service.get_entry(entry_id, ctx.obj["owner"])
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    _echo_entry(entry)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
