"""Chart of accounts commands."""

import click
from ohadabooks.cli.error_handling import handle_domain_error
from ohadabooks.domain.chart import AccountService
from ohadabooks.domain.entities import AccountCategory, NormalBalance
from ohadabooks.domain.errors import DomainError

INDENT_SIZE = 4


def _format_node(node, indent: int = 0) -> str:
    return f"{' ' * (INDENT_SIZE * indent)}{node.code:<8s} {node.label}"


def _echo_tree(nodes, indent: int = 0) -> None:
    for node in nodes:
        click.echo(_format_node(node, indent))
        _echo_tree(node.children, indent + 1)


@click.group()
def chart_group():
    """Manage the chart of accounts."""
    pass


@chart_group.command("init")
@click.pass_context
def init_chart(ctx):
    """Load the default OHADA chart of accounts.

    Existing accounts with the same codes are updated; other accounts are
    left untouched.
    """
    service = AccountService(ctx.obj["db"])
    count = service.load_default_chart(ctx.obj["owner"])
    click.echo(f"Loaded {count} accounts into the chart")


@chart_group.command("add")
@click.argument("code", metavar="CODE")
@click.argument("label", metavar="LABEL")
@click.option(
    "--category",
    type=click.Choice([c.value for c in AccountCategory]),
    help="Account category",
)
@click.option(
    "--normal-balance",
    type=click.Choice([n.value for n in NormalBalance]),
    help="Side on which the account normally carries its balance",
)
@click.option("--description", help="Free-text description")
@click.pass_context
def add_account(ctx, code: str, label: str, category: str | None, normal_balance: str | None, description: str | None):
    """Create or update an account.

    Examples:
        ohadabooks chart add 5121 "Banque Atlantique" --normal-balance debit
        ohadabooks chart add 8 "Autres charges et produits"
    """
    service = AccountService(ctx.obj["db"])
    try:
        account = service.upsert_account(
            owner_id=ctx.obj["owner"],
            code=code,
            label=label,
            category=category,
            normal_balance=normal_balance,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Saved {account.level.value} {account.code} '{account.label}'")


@chart_group.command("tree")
@click.pass_context
def show_tree(ctx):
    """Show the chart of accounts as a tree."""
    service = AccountService(ctx.obj["db"])
    chart = service.get_chart(ctx.obj["owner"])
    if not chart.roots and not chart.orphans:
        click.echo("No accounts found. Run 'ohadabooks chart init' to load the default chart.")
        return

    _echo_tree(chart.roots)
    if chart.orphans:
        click.echo()
        click.echo(
            f"Warning: {len(chart.orphans)} account(s) without a parent are not shown: "
            f"{', '.join(chart.orphans)}",
            err=True,
        )


@chart_group.command("search")
@click.argument("query", metavar="QUERY")
@click.pass_context
def search_chart(ctx, query: str):
    """Search accounts by code or label (case-insensitive)."""
    service = AccountService(ctx.obj["db"])
    results = service.get_chart(ctx.obj["owner"]).search_accounts(query)
    if not results:
        click.echo(f"No accounts matching '{query}'.")
        return
    for node in results:
        click.echo(f"{node.code:<8s} {node.label}")


@chart_group.command("path")
@click.argument("code", metavar="CODE")
@click.pass_context
def account_path(ctx, code: str):
    """Show the path from the account's class down to the account."""
    service = AccountService(ctx.obj["db"])
    path = service.get_chart(ctx.obj["owner"]).get_account_path(code)
    if not path:
        click.echo(f"Error: Account '{code}' not found", err=True)
        ctx.exit(1)
    click.echo(" > ".join(f"{node.code} {node.label}" for node in path))


def register_commands(cli):
    """Register chart commands with main CLI."""
    cli.add_command(chart_group, name="chart")
