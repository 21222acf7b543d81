"""Text rendering of statements and financial reports.

Presenters only read the computed values; they never recompute balances.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerline.domain.entities import (
    Entity,
    EntityBalanceSummary,
    PeriodFinancials,
    SourceRecord,
    Statement,
)

CURRENCY = "SAR"


def format_money(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def format_pct(value: Decimal) -> str:
    return f"{value:.1f}%"


def format_date_range(start: Optional[date], end: Optional[date]) -> str:
    """Human-readable description of a reporting window."""
    if start and end:
        return f"Period {start.isoformat()} to {end.isoformat()}"
    if start:
        return f"From {start.isoformat()}"
    if end:
        return f"Until {end.isoformat()}"
    return "All periods"


def render_statement(statement: Statement, entity: Optional[Entity] = None) -> str:
    """Render an account statement as a fixed-width table."""
    out = []
    if entity is not None:
        out.append(f"Account statement: {entity.name} ({entity.kind.value}, ID {entity.id})")
    out.append(format_date_range(statement.start_date, statement.end_date))
    out.append("-" * 100)
    out.append(
        f"{'Date':<12} {'Description':<40} {'Debit':>14} {'Credit':>14} {'Balance':>16}"
    )
    out.append("-" * 100)

    for line in statement.lines:
        if line.is_opening:
            date_str = "opening"
        else:
            date_str = line.date.isoformat() if line.date else "undated"
        debit = format_money(line.debit) if line.debit else "-"
        credit = format_money(line.credit) if line.credit else "-"
        out.append(
            f"{date_str:<12} {line.description[:40]:<40} {debit:>14} {credit:>14} "
            f"{format_money(line.running_balance):>16}"
        )

    out.append("-" * 100)
    out.append(
        f"{'Totals':<53} {format_money(statement.total_debit):>14} "
        f"{format_money(statement.total_credit):>14} "
        f"{format_money(statement.closing_balance):>16}"
    )
    out.append(f"Closing balance: {format_money(statement.closing_balance)} {CURRENCY}")
    return "\n".join(out)


def render_financials(financials: PeriodFinancials, title: str = "Financial report") -> str:
    """Render period financials as labelled rows."""
    rows = [
        ("Total revenue", format_money(financials.total_revenue)),
        ("Total cost", format_money(financials.total_cost)),
        ("Total expenses", format_money(financials.total_expense)),
        ("Gross profit", format_money(financials.gross_profit)),
        ("Net profit", format_money(financials.net_profit)),
        ("Profit margin", format_pct(financials.profit_margin_pct)),
        ("Expense ratio", format_pct(financials.expense_ratio_pct)),
        ("Net cash flow", format_money(financials.net_cash_flow)),
        ("Sales", str(financials.sales_count)),
        ("Purchases", str(financials.purchases_count)),
        ("Expenses", str(financials.expenses_count)),
        ("Average sale", format_money(financials.average_sale)),
    ]
    out = [title, format_date_range(financials.start_date, financials.end_date), "-" * 44]
    out.extend(f"{label:<24} {value:>19}" for label, value in rows)
    return "\n".join(out)


def render_branch_breakdown(breakdown: dict[int, PeriodFinancials]) -> str:
    """Render one row of headline figures per branch."""
    out = [
        f"{'Branch':<8} {'Revenue':>14} {'Cost':>14} {'Expenses':>14} {'Net profit':>14} {'Margin':>8}",
        "-" * 77,
    ]
    for branch_id, fin in breakdown.items():
        out.append(
            f"{branch_id:<8} {format_money(fin.total_revenue):>14} "
            f"{format_money(fin.total_cost):>14} {format_money(fin.total_expense):>14} "
            f"{format_money(fin.net_profit):>14} {format_pct(fin.profit_margin_pct):>8}"
        )
    return "\n".join(out)


def render_balance_summary(
    summary: EntityBalanceSummary, entities: list[Entity], label: str
) -> str:
    """Render per-entity current balances followed by the totals."""
    out = [f"{'ID':<5} {label:<30} {'Status':<10} {'Opening':>14} {'Current':>14}", "-" * 77]
    for entity in entities:
        current = summary.balances.get(entity.id, entity.opening_balance)
        out.append(
            f"{entity.id:<5} {entity.name[:30]:<30} {entity.status.value:<10} "
            f"{format_money(entity.opening_balance):>14} {format_money(current):>14}"
        )
    out.append("-" * 77)
    out.append(
        f"{summary.total_entities} {label.lower()}(s), {summary.active_entities} active | "
        f"opening {format_money(summary.total_opening_balance)} | "
        f"current {format_money(summary.total_current_balance)}"
    )
    return "\n".join(out)


def render_record(record: SourceRecord) -> str:
    """One-line summary of a stored record, showing the raw values."""
    entity = f"entity {record.entity_id}" if record.entity_id is not None else "-"
    branch = f"branch {record.branch_id}" if record.branch_id is not None else "-"
    flags = "" if record.posted else " (unposted)"
    return (
        f"{record.id:<6} {record.kind.value:<10} {str(record.date):<12} "
        f"{str(record.amount):>14} {entity:<12} {branch:<10} "
        f"{record.reference or ''}{flags}"
    )
