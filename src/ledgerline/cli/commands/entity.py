"""Client and supplier management commands."""

from decimal import Decimal

import click

from ledgerline.cli.entity_resolution import resolve_entity_or_exit
from ledgerline.cli.error_handling import handle_domain_error
from ledgerline.cli.presenters import format_money
from ledgerline.domain.entities import EntityKind, EntityStatus
from ledgerline.domain.entity import EntityService
from ledgerline.utils.amount_parser import to_decimal

KIND_CHOICE = click.Choice([kind.value for kind in EntityKind])
STATUS_CHOICE = click.Choice([status.value for status in EntityStatus])


def _parse_amount_option(ctx, value: str | None, label: str) -> Decimal | None:
    if value is None:
        return None
    try:
        return to_decimal(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def entity_group():
    """Manage clients and suppliers."""
    pass


@entity_group.command("create")
@click.argument("name", metavar="NAME")
@click.option("--kind", type=KIND_CHOICE, required=True, help="Client or supplier")
@click.option("--opening-balance", default="0", help="Opening balance (may be negative)")
@click.option("--credit-limit", help="Optional credit limit")
@click.option("--branch", type=int, help="Owning branch ID")
@click.option("--status", type=STATUS_CHOICE, default="active", help="Initial status")
@click.pass_context
def create_entity(
    ctx,
    name: str,
    kind: str,
    opening_balance: str,
    credit_limit: str | None,
    branch: int | None,
    status: str,
):
    """Create a client or supplier.

    Examples:
        ledgerline entity create "Al Noor Trading" --kind client --opening-balance 1000
        ledgerline entity create "Gulf Supplies" --kind supplier --branch 2
    """
    db = ctx.obj["db"]
    service = EntityService(db, ctx.obj.get("cache"))

    opening = _parse_amount_option(ctx, opening_balance, "opening balance")
    limit = _parse_amount_option(ctx, credit_limit, "credit limit")

    try:
        entity_id = service.create_entity(
            name=name,
            kind=EntityKind(kind),
            opening_balance=opening,
            credit_limit=limit,
            status=EntityStatus(status),
            branch_id=branch,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {kind} '{name}' (ID: {entity_id})")


@entity_group.command("list")
@click.option("--kind", type=KIND_CHOICE, help="Only clients or only suppliers")
@click.option("--branch", type=int, help="Only entities of this branch")
@click.pass_context
def list_entities(ctx, kind: str | None, branch: int | None):
    """List clients and suppliers."""
    service = EntityService(ctx.obj["db"])
    entities = service.list_entities(
        kind=EntityKind(kind) if kind else None, branch_id=branch
    )
    if not entities:
        click.echo("No entities found.")
        return

    click.echo("\nEntities:")
    click.echo("-" * 80)
    for ent in entities:
        branch_str = str(ent.branch_id) if ent.branch_id is not None else "-"
        click.echo(
            f"ID: {ent.id:3d} | {ent.name:25s} | {ent.kind.value:8s} | "
            f"{ent.status.value:8s} | Opening: {format_money(ent.opening_balance):>12} | "
            f"Branch: {branch_str}"
        )


@entity_group.command("show")
@click.argument("entity", metavar="ENTITY")
@click.pass_context
def show_entity(ctx, entity: str):
    """Show details of a client or supplier (name or ID)."""
    service = EntityService(ctx.obj["db"])
    ent = resolve_entity_or_exit(ctx, service, entity)

    click.echo(f"ID: {ent.id}")
    click.echo(f"  Name: {ent.name}")
    click.echo(f"  Kind: {ent.kind.value}")
    click.echo(f"  Status: {ent.status.value}")
    click.echo(f"  Opening balance: {format_money(ent.opening_balance)}")
    if ent.credit_limit is not None:
        click.echo(f"  Credit limit: {format_money(ent.credit_limit)}")
    if ent.branch_id is not None:
        click.echo(f"  Branch: {ent.branch_id}")


@entity_group.command("set-status")
@click.argument("entity", metavar="ENTITY")
@click.argument("status", type=STATUS_CHOICE)
@click.pass_context
def set_status(ctx, entity: str, status: str):
    """Change the status of a client or supplier."""
    service = EntityService(ctx.obj["db"], ctx.obj.get("cache"))
    ent = resolve_entity_or_exit(ctx, service, entity)
    try:
        service.set_status(ent.id, EntityStatus(status))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{ent.name} is now {status}")


@entity_group.command("set-opening-balance")
@click.argument("entity", metavar="ENTITY")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def set_opening_balance(ctx, entity: str, amount: str):
    """Change the opening balance of a client or supplier."""
    service = EntityService(ctx.obj["db"], ctx.obj.get("cache"))
    ent = resolve_entity_or_exit(ctx, service, entity)
    value = _parse_amount_option(ctx, amount, "opening balance")
    try:
        service.set_opening_balance(ent.id, value)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Opening balance of {ent.name} set to {format_money(value)}")


def register_commands(cli):
    """Register entity commands with main CLI."""
    cli.add_command(entity_group, name="entity")
