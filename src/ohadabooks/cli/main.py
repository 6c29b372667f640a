"""Main CLI entry point."""

import click
from ohadabooks.database.factories import create_sqlite_database
from ohadabooks.logging_config import configure_logging

# Import and register all commands at module level
from ohadabooks.cli.commands import (
    chart,
    entry,
    report,
    reconcile,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides OHADABOOKS_DB_PATH environment variable)",
    envvar="OHADABOOKS_DB_PATH",
)
@click.option(
    "--owner",
    default="default",
    show_default=True,
    envvar="OHADABOOKS_OWNER",
    help="Owner whose books are used (overrides OHADABOOKS_OWNER environment variable)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="OHADABOOKS_LOG_LEVEL",
    help="Logging level (overrides OHADABOOKS_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, owner: str, log_level: str | None):
    """ohadabooks - Double-entry bookkeeping on an OHADA chart of accounts.

    Keep a chart of accounts, record balanced journal entries, produce the
    balance sheet and income statement, and reconcile bank statements.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["owner"] = owner
        ctx.call_on_close(db.disconnect)


# Register all commands
chart.register_commands(cli)
entry.register_commands(cli)
report.register_commands(cli)
reconcile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
