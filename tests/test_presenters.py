"""Tests for statement and report rendering."""

from datetime import date, datetime, UTC
from decimal import Decimal

from ledgerline.cli.presenters import (
    format_date_range,
    format_money,
    format_pct,
    render_balance_summary,
    render_financials,
    render_statement,
)
from ledgerline.domain.entities import (
    Entity,
    EntityBalanceSummary,
    EntityKind,
    EntityStatus,
    SourceType,
)
from ledgerline.domain.financials import compute_financials
from ledgerline.domain.ledger import build_statement


def test_format_money():
    assert format_money(Decimal("1234567.5")) == "1,234,567.50"
    assert format_money(Decimal("-1000")) == "-1,000.00"


def test_format_pct():
    assert format_pct(Decimal("33.3333")) == "33.3%"


def test_format_date_range():
    assert format_date_range(date(2024, 1, 1), date(2024, 1, 31)) == "Period 2024-01-01 to 2024-01-31"
    assert format_date_range(date(2024, 1, 1), None) == "From 2024-01-01"
    assert format_date_range(None, date(2024, 1, 31)) == "Until 2024-01-31"
    assert format_date_range(None, None) == "All periods"


def test_render_statement_uses_computed_balances():
    statement = build_statement(
        Decimal("1000"),
        [
            ([{"date": "2024-01-05", "total": "500", "invoice_number": "123"}], SourceType.SALE),
            ([{"date": "2024-01-10", "amount": "300"}], SourceType.RECEIPT),
        ],
    )
    entity = Entity(
        id=1,
        name="Al Noor Trading",
        kind=EntityKind.CLIENT,
        opening_balance=Decimal("1000"),
        status=EntityStatus.ACTIVE,
        created_at=datetime.now(UTC),
    )

    text = render_statement(statement, entity)

    assert "Account statement: Al Noor Trading (client, ID 1)" in text
    assert "Opening balance" in text
    assert "Sales invoice #123" in text
    assert "1,500.00" in text
    assert text.endswith("Closing balance: 1,200.00 SAR")


def test_render_empty_statement():
    text = render_statement(build_statement(Decimal("250")))

    assert "All periods" in text
    assert text.endswith("Closing balance: 250.00 SAR")


def test_render_financials():
    result = compute_financials(
        [{"date": "2024-02-01", "total": "10000"}],
        [{"date": "2024-02-02", "total": "6000"}],
        [{"date": "2024-02-03", "amount": "1000"}],
    )

    text = render_financials(result, title="February")

    assert text.startswith("February")
    assert "3,000.00" in text
    assert "30.0%" in text
    assert "10.0%" in text


def test_render_balance_summary():
    entity = Entity(
        id=4,
        name="Gulf Supplies",
        kind=EntityKind.SUPPLIER,
        opening_balance=Decimal("2000"),
        status=EntityStatus.ACTIVE,
        created_at=datetime.now(UTC),
    )
    summary = EntityBalanceSummary(
        total_entities=1,
        active_entities=1,
        total_opening_balance=Decimal("2000"),
        total_current_balance=Decimal("2800"),
        balances={4: Decimal("2800")},
    )

    text = render_balance_summary(summary, [entity], "Supplier")

    assert "Gulf Supplies" in text
    assert "2,800.00" in text
    assert "1 supplier(s), 1 active" in text
