"""Tests for the ledger engine."""

from datetime import date
from decimal import Decimal

from ledgerline.domain.entities import EntityKind, LedgerEntry, SourceType
from ledgerline.domain.ledger import (
    OPENING_BALANCE_LABEL,
    build_client_statement,
    build_statement,
    build_supplier_statement,
    opening_balance_of,
)


def _entry(day, debit="0", credit="0", source_type=SourceType.SALE, source_id=None):
    return LedgerEntry(
        date=day,
        description="entry",
        debit=Decimal(debit),
        credit=Decimal(credit),
        source_type=source_type,
        source_id=source_id,
    )


def test_client_statement_scenario():
    """Opening 1000, sale 500, receipt 300 gives 1500 then 1200."""
    sales = [{"id": 1, "date": "2024-01-05", "total": "500", "reference": "123"}]
    receipts = [{"id": 2, "date": "2024-01-10", "amount": "300"}]

    statement = build_statement(
        Decimal("1000"),
        [(sales, SourceType.SALE), (receipts, SourceType.RECEIPT)],
    )

    assert [line.running_balance for line in statement.lines] == [
        Decimal("1000"),
        Decimal("1500"),
        Decimal("1200"),
    ]
    assert statement.lines[1].debit == Decimal("500")
    assert statement.lines[2].credit == Decimal("300")
    assert statement.closing_balance == Decimal("1200")


def test_opening_line_is_synthetic():
    statement = build_statement(Decimal("250"), [])

    assert len(statement) == 1
    opening = statement.lines[0]
    assert opening.is_opening
    assert opening.description == OPENING_BALANCE_LABEL
    assert opening.debit == 0 and opening.credit == 0
    assert opening.running_balance == Decimal("250")
    assert statement.as_rows()[0]["date"] == "opening"


def test_entries_are_sorted_by_date():
    receipts = [{"id": "r1", "date": "2024-01-03", "amount": "100"}]
    sales = [
        {"id": "s2", "date": "2024-01-09", "total": "50"},
        {"id": "s1", "date": "2024-01-01", "total": "20"},
    ]

    statement = build_statement(
        0, [(sales, SourceType.SALE), (receipts, SourceType.RECEIPT)]
    )

    assert [line.entry.source_id for line in statement.entries] == ["s1", "r1", "s2"]


def test_same_day_entries_keep_supplied_order():
    day = date(2024, 1, 5)
    entries = [
        _entry(day, credit="10", source_type=SourceType.RECEIPT, source_id="a"),
        _entry(day, debit="30", source_id="b"),
        _entry(day, credit="5", source_type=SourceType.RECEIPT, source_id="c"),
    ]

    statement = build_statement(Decimal("0"), entries)

    assert [line.entry.source_id for line in statement.entries] == ["a", "b", "c"]
    assert [line.running_balance for line in statement.entries] == [
        Decimal("-10"),
        Decimal("20"),
        Decimal("15"),
    ]


def test_undated_entries_sort_last():
    entries = [
        _entry(None, debit="1", source_id="undated"),
        _entry(date(2024, 1, 1), debit="1", source_id="dated"),
    ]
    statement = build_statement(0, entries)
    assert [line.entry.source_id for line in statement.entries] == ["dated", "undated"]


def test_balance_identity_over_filtered_entries():
    sales = [
        {"date": "2024-01-15", "total": "100.10"},
        {"date": "2024-02-10", "total": "200.20"},
        {"date": "2024-03-01", "total": "999"},
    ]
    receipts = [
        {"date": "2024-02-05", "amount": "50.05"},
        {"date": "2023-12-31", "amount": "1000"},
    ]
    opening = Decimal("-75.5")

    statement = build_statement(
        opening,
        [(sales, SourceType.SALE), (receipts, SourceType.RECEIPT)],
        "2024-01-01",
        "2024-02-29",
    )

    expected = opening + Decimal("100.10") + Decimal("200.20") - Decimal("50.05")
    assert statement.closing_balance == expected
    assert statement.closing_balance == (
        statement.opening_balance + statement.total_debit - statement.total_credit
    )
    assert len(statement.entries) == 3


def test_date_range_excludes_later_sale():
    sales = [
        {"id": 1, "date": "2024-02-10", "total": "100"},
        {"id": 2, "date": "2024-03-01", "total": "400"},
    ]
    statement = build_statement(0, [(sales, SourceType.SALE)], "2024-02-01", "2024-02-29")

    assert [line.entry.source_id for line in statement.entries] == [1]
    assert statement.start_date == date(2024, 2, 1)
    assert statement.end_date == date(2024, 2, 29)


def test_opening_balance_is_never_filtered():
    statement = build_statement(Decimal("1000"), [], "2030-01-01", "2030-12-31")
    assert statement.closing_balance == Decimal("1000")


def test_inverted_range_gives_opening_only():
    sales = [{"date": "2024-02-10", "total": "100"}]
    statement = build_statement(5, [(sales, SourceType.SALE)], "2024-03-01", "2024-02-01")
    assert len(statement) == 1
    assert statement.closing_balance == Decimal("5")


def test_statement_is_deterministic():
    sales = [
        {"id": 1, "date": "2024-01-05", "total": "500"},
        {"id": 2, "date": "2024-01-05", "total": "oops"},
    ]
    receipts = [{"id": 3, "date": "2024-01-05", "amount": "300"}]
    sources = [(sales, SourceType.SALE), (receipts, SourceType.RECEIPT)]

    assert build_statement(1000, sources) == build_statement(1000, sources)


def test_malformed_record_still_appears_as_zero_line():
    sales = [
        {"id": 1, "date": "2024-01-05", "total": "abc"},
        {"id": 2, "date": "2024-01-06", "total": "40"},
    ]
    statement = build_statement(0, [(sales, SourceType.SALE)])

    assert len(statement.entries) == 2
    assert statement.entries[0].debit == 0
    assert statement.closing_balance == Decimal("40")


def test_missing_entity_has_zero_opening_balance():
    assert opening_balance_of(None) == Decimal("0")
    assert build_client_statement(None, [], []).closing_balance == Decimal("0")


def test_client_statement_skips_unposted_sales():
    client = {"id": 1, "kind": EntityKind.CLIENT, "opening_balance": "100"}
    sales = [
        {"id": 1, "date": "2024-01-05", "total": "50", "posted": True},
        {"id": 2, "date": "2024-01-06", "total": "70", "posted": False},
        {"id": 3, "date": "2024-01-07", "total": "30"},
    ]

    posted = build_client_statement(client, sales, [])
    everything = build_client_statement(client, sales, [], posted_only=False)

    assert posted.closing_balance == Decimal("180")
    assert everything.closing_balance == Decimal("250")


def test_client_statement_puts_invoices_before_vouchers_on_same_day():
    sales = [{"id": "sale", "date": "2024-01-05", "total": "50"}]
    receipts = [{"id": "receipt", "date": "2024-01-05", "amount": "50"}]
    statement = build_client_statement({"opening_balance": 0}, sales, receipts)
    assert [line.entry.source_id for line in statement.entries] == ["sale", "receipt"]


def test_supplier_statement_purchases_raise_payments_lower():
    supplier = {"id": 2, "opening_balance": Decimal("2000")}
    purchases = [{"date": "2024-01-02", "total": "800"}]
    payments = [{"date": "2024-01-08", "amount": "1500"}]
    adjustments = [{"date": "2024-01-09", "amount": "100", "direction": "credit"}]

    statement = build_supplier_statement(supplier, purchases, payments, adjustments=adjustments)

    assert [line.running_balance for line in statement.lines] == [
        Decimal("2000"),
        Decimal("2800"),
        Decimal("1300"),
        Decimal("1200"),
    ]


def test_malformed_opening_balance_counts_as_zero():
    assert build_statement("n/a", []).closing_balance == Decimal("0")


def test_huge_amounts_do_not_abort_the_statement():
    sales = [
        {"date": "2024-01-01", "total": "9e999999"},
        {"date": "2024-01-02", "total": "9e999999"},
        {"date": "2024-01-03", "total": "100"},
    ]

    statement = build_statement(0, [(sales, SourceType.SALE)])

    assert len(statement) == 4
    assert statement.closing_balance == Decimal("100")
