"""Account statement command."""

import click

from ledgerline.cli.date_filters import date_range_options
from ledgerline.cli.entity_resolution import resolve_entity_or_exit
from ledgerline.cli.error_handling import handle_domain_error
from ledgerline.cli.presenters import render_statement
from ledgerline.domain.entity import EntityService
from ledgerline.domain.ledger import LedgerService


@click.command("statement")
@click.argument("entity", metavar="ENTITY")
@click.option(
    "--include-unposted",
    is_flag=True,
    help="Include sales not yet posted to the client account",
)
@date_range_options
@click.pass_context
def statement(ctx, entity: str, include_unposted: bool, start_date, end_date):
    """Print the account statement of a client or supplier.

    ENTITY can be a name or an ID. The opening balance always starts the
    statement; only records inside the date range are listed.

    Examples:
        ledgerline statement "Al Noor Trading"
        ledgerline statement 3 --start-date 2024-02-01 --end-date 2024-02-29
        ledgerline statement "Gulf Supplies" --last-month
    """
    db = ctx.obj["db"]
    ent = resolve_entity_or_exit(ctx, EntityService(db), entity)
    service = LedgerService(db, ctx.obj.get("cache"))

    try:
        result = service.get_statement(
            ent.id,
            start_date=start_date,
            end_date=end_date,
            posted_only=not include_unposted,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(render_statement(result, ent))


def register_commands(cli):
    """Register statement command with main CLI."""
    cli.add_command(statement)
