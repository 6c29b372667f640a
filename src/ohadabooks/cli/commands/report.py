"""Financial report commands."""

import click
from ohadabooks.cli.date_filters import period_options, pop_period_flags, resolve_cli_date_range
from ohadabooks.domain.ledger import LedgerAggregator
from ohadabooks.domain.statements import (
    ALTERNATE_CLASS_BUCKETS,
    DEFAULT_CLASS_BUCKETS,
    StatementService,
)

LAYOUTS = {
    "default": DEFAULT_CLASS_BUCKETS,
    "alternate": ALTERNATE_CLASS_BUCKETS,
}


def _describe_period(start, end) -> str:
    if start is None and end is None:
        return "all dates"
    return f"{start or '...'} to {end or '...'}"


def _echo_section(title: str, lines, total) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * 60)
    for line in lines:
        click.echo(f"{line.code:<6s} {line.label:<36s} {line.balance:>16,.2f}")
    click.echo(f"{'Total ' + title.lower():<43s} {total:>16,.2f}")


@click.group()
def report_group():
    """Produce balances and financial statements."""
    pass


@report_group.command("balance")
@click.argument("prefix", metavar="ACCOUNT_PREFIX")
@click.option("--detail", is_flag=True, help="Also show the balance of each posted account")
@period_options
@click.pass_context
def account_balance(ctx, prefix: str, detail: bool, start_date, end_date, **kwargs):
    """Show the natural (debit minus credit) balance of an account prefix.

    A class code such as 4 includes every account and subaccount below it.
    """
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=pop_period_flags(kwargs)
    )
    aggregator = LedgerAggregator(ctx.obj["db"])
    owner = ctx.obj["owner"]

    if detail:
        for code, balance in aggregator.balances_by_account(prefix, owner, start, end).items():
            click.echo(f"{code:<8s} {balance:>16,.2f}")
    balance = aggregator.account_balance(prefix, owner, start, end)
    click.echo(f"Balance of {prefix} ({_describe_period(start, end)}): {balance:,.2f}")


@report_group.command("balance-sheet")
@click.option(
    "--layout",
    type=click.Choice(sorted(LAYOUTS)),
    default="default",
    show_default=True,
    help="Class mapping: 'default' reports classes 4 and 5 as liabilities, "
    "'alternate' reports class 4 as assets",
)
@period_options
@click.pass_context
def balance_sheet(ctx, layout: str, start_date, end_date, **kwargs):
    """Show the balance sheet."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=pop_period_flags(kwargs)
    )
    service = StatementService(ctx.obj["db"], class_buckets=LAYOUTS[layout])
    sheet = service.balance_sheet(ctx.obj["owner"], start, end)

    click.echo(f"Balance sheet ({_describe_period(start, end)})")
    _echo_section("Assets", sheet.assets, sheet.total_assets)
    _echo_section("Liabilities", sheet.liabilities, sheet.total_liabilities)
    _echo_section("Equity", sheet.equity, sheet.total_equity)


@report_group.command("income-statement")
@period_options
@click.pass_context
def income_statement(ctx, start_date, end_date, **kwargs):
    """Show the income statement."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=pop_period_flags(kwargs)
    )
    service = StatementService(ctx.obj["db"])
    statement = service.income_statement(ctx.obj["owner"], start, end)

    click.echo(f"Income statement ({_describe_period(start, end)})")
    _echo_section("Revenues", statement.revenues, statement.total_revenues)
    _echo_section("Expenses", statement.expenses, statement.total_expenses)
    click.echo(f"\nNet income: {statement.net_income:,.2f}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
