"""Financial report commands."""

import click

from ledgerline.cli.date_filters import date_range_options
from ledgerline.cli.presenters import (
    format_date_range,
    render_balance_summary,
    render_branch_breakdown,
    render_financials,
)
from ledgerline.domain.entities import EntityKind
from ledgerline.domain.financials import ReportService
from ledgerline.domain.ledger import LedgerService


def _report_service(ctx) -> ReportService:
    db = ctx.obj["db"]
    return ReportService(db, LedgerService(db, ctx.obj.get("cache")))


@click.group()
def report_group():
    """Financial reports."""
    pass


@report_group.command("financials")
@click.option("--branch", type=int, help="Restrict to one branch")
@date_range_options
@click.pass_context
def financials(ctx, branch: int | None, start_date, end_date):
    """Revenue, cost, expenses and profit for the business or a branch.

    Examples:
        ledgerline report financials --this-month
        ledgerline report financials --branch 2 --start-date 2024-01-01
    """
    result = _report_service(ctx).get_financials(
        start_date=start_date, end_date=end_date, branch_id=branch
    )
    title = f"Financial report - branch {branch}" if branch is not None else "Financial report"
    click.echo(render_financials(result, title=title))


@report_group.command("branches")
@date_range_options
@click.pass_context
def branches(ctx, start_date, end_date):
    """Headline figures for every branch."""
    breakdown = _report_service(ctx).get_branch_breakdown(
        start_date=start_date, end_date=end_date
    )
    if not breakdown:
        click.echo("No branch records found.")
        return

    click.echo(format_date_range(start_date, end_date))
    click.echo(render_branch_breakdown(breakdown))


@report_group.command("balances")
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in EntityKind]),
    default=EntityKind.CLIENT.value,
    help="Clients (default) or suppliers",
)
@click.pass_context
def balances(ctx, kind: str):
    """Current balance of every client or supplier, with totals."""
    service = _report_service(ctx)
    entity_kind = EntityKind(kind)
    entities = service.db.list_entities(kind=entity_kind)
    if not entities:
        click.echo(f"No {kind}s found.")
        return

    summary = service.get_balance_summary(entity_kind)
    click.echo(render_balance_summary(summary, entities, kind.capitalize()))


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
