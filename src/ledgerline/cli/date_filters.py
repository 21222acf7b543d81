"""CLI helpers for date range resolution."""

from datetime import date
from functools import wraps

import click

from ledgerline.utils.date_parser import PERIODS, get_date_range, parse_date


def date_range_options(command):
    """Add --start-date/--end-date and the period flags to a command.

    The wrapped command receives ``start_date`` and ``end_date`` as resolved
    dates (or None) instead of the raw option values.
    """

    @wraps(command)
    @click.pass_context
    def wrapper(ctx, *args, start_date, end_date, **kwargs):
        period_flags = {
            period: kwargs.pop(period.replace("-", "_")) for period in PERIODS
        }
        start, end = resolve_cli_date_range(
            ctx,
            start_date=start_date,
            end_date=end_date,
            period_flags=period_flags,
        )
        return command(*args, start_date=start, end_date=end, **kwargs)

    for period in reversed(PERIODS):
        label = period.replace("-", " ")
        wrapper = click.option(
            f"--{period}", is_flag=True, help=f"Restrict to {label}"
        )(wrapper)
    wrapper = click.option(
        "--end-date", help="End date, inclusive (YYYY-MM-DD or relative like 'today')"
    )(wrapper)
    wrapper = click.option(
        "--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')"
    )(wrapper)
    return wrapper


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)
    flag_names = ", ".join(f"--{period}" for period in PERIODS)

    if period_count > 1:
        click.echo(
            f"Error: Only one period option ({flag_names}) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period_count == 1:
        period = next(name for name, is_set in period_flags.items() if is_set)
        return get_date_range(period)

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end
