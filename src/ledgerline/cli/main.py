"""Main CLI entry point."""

import click

from ledgerline.database.factories import create_sqlite_database
from ledgerline.domain.statement_cache import StatementCache
from ledgerline.logging_config import configure_logging

# Import and register all commands at module level
from ledgerline.cli.commands import entity, record, statement, report


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERLINE_DB_PATH environment variable)",
    envvar="LEDGERLINE_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="LEDGERLINE_LOG_LEVEL",
    help="Log level for diagnostics on stderr (default: WARNING)",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    envvar="LEDGERLINE_LOG_FORMAT",
    help="Log output format (default: console)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None, log_format: str | None):
    """Ledgerline - client and supplier ledgers with branch financial reports.

    Record sales, purchases, vouchers and daily expenses, then print account
    statements with running balances and profit reports per branch.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level, log_format)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["cache"] = StatementCache()
        ctx.call_on_close(db.disconnect)


# Register all commands
entity.register_commands(cli)
record.register_commands(cli)
statement.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
