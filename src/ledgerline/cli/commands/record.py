"""Commands for recording invoices, vouchers, adjustments and expenses."""

from datetime import date

import click

from ledgerline.cli.entity_resolution import resolve_entity_or_exit
from ledgerline.cli.error_handling import handle_domain_error
from ledgerline.cli.presenters import render_record
from ledgerline.domain.entities import EntryDirection, RecordKind
from ledgerline.domain.entity import EntityService
from ledgerline.domain.record import RecordService
from ledgerline.utils.date_parser import parse_date

KIND_CHOICE = click.Choice([kind.value for kind in RecordKind])


@click.group()
def record_group():
    """Record and list financial records."""
    pass


@record_group.command("add")
@click.argument("kind", type=KIND_CHOICE)
@click.option("--amount", required=True, help="Amount (invoice total for sales and purchases)")
@click.option("--date", "date_str", help="Record date (default: today)")
@click.option("--entity", help="Client or supplier name or ID")
@click.option("--branch", type=int, help="Branch ID (default: the entity's branch)")
@click.option("--reference", help="Invoice or voucher number")
@click.option("--description", help="Description shown on statements")
@click.option(
    "--direction",
    type=click.Choice([d.value for d in EntryDirection]),
    help="Ledger side, required for adjustments",
)
@click.option("--unposted", is_flag=True, help="Keep a sale off the client account for now")
@click.pass_context
def add_record(
    ctx,
    kind: str,
    amount: str,
    date_str: str | None,
    entity: str | None,
    branch: int | None,
    reference: str | None,
    description: str | None,
    direction: str | None,
    unposted: bool,
):
    """Add a sale, purchase, receipt, payment, adjustment or expense.

    Examples:
        ledgerline record add sale --entity "Al Noor Trading" --amount 500 --reference 123
        ledgerline record add receipt --entity 1 --amount 300 --date 2024-01-10
        ledgerline record add expense --amount 75.50 --branch 2 --description "Electricity"
    """
    db = ctx.obj["db"]
    cache = ctx.obj.get("cache")
    service = RecordService(db, cache)

    record_date = date.today()
    if date_str:
        try:
            record_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    entity_id = None
    if entity is not None:
        entity_id = resolve_entity_or_exit(ctx, EntityService(db), entity).id

    try:
        record_id = service.add_record(
            kind=RecordKind(kind),
            date=record_date,
            amount=amount,
            entity_id=entity_id,
            branch_id=branch,
            reference=reference,
            description=description,
            direction=EntryDirection(direction) if direction else None,
            posted=not unposted,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded {kind} (ID: {record_id})")


@record_group.command("list")
@click.option("--kind", type=KIND_CHOICE, help="Only records of this kind")
@click.option("--entity", help="Only records of this client or supplier")
@click.option("--branch", type=int, help="Only records of this branch")
@click.pass_context
def list_records(ctx, kind: str | None, entity: str | None, branch: int | None):
    """List stored records with their raw date and amount."""
    db = ctx.obj["db"]
    service = RecordService(db)

    entity_id = None
    if entity is not None:
        entity_id = resolve_entity_or_exit(ctx, EntityService(db), entity).id

    records = service.list_records(
        kind=RecordKind(kind) if kind else None, entity_id=entity_id, branch_id=branch
    )
    if not records:
        click.echo("No records found.")
        return

    click.echo(f"\nFound {len(records)} record(s):")
    click.echo("-" * 90)
    for rec in records:
        click.echo(render_record(rec))


@record_group.command("post")
@click.argument("record_id", type=int)
@click.option("--undo", is_flag=True, help="Withdraw the sale from the client account")
@click.pass_context
def post_record(ctx, record_id: int, undo: bool):
    """Post a sale to its client account."""
    service = RecordService(ctx.obj["db"], ctx.obj.get("cache"))
    try:
        service.set_posted(record_id, posted=not undo)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Sale {record_id} {'withdrawn from' if undo else 'posted to'} client account")


@record_group.command("delete")
@click.argument("record_id", type=int)
@click.pass_context
def delete_record(ctx, record_id: int):
    """Delete a record."""
    service = RecordService(ctx.obj["db"], ctx.obj.get("cache"))
    try:
        service.delete_record(record_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted record {record_id}")


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(record_group, name="record")
