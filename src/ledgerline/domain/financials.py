"""Financial aggregation over sales, purchases and expenses."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

from ledgerline.database.base import Database
from ledgerline.domain.date_filter import DateBound, coerce_bound, filter_by_date_range
from ledgerline.domain.entities import (
    Entity,
    EntityBalanceSummary,
    EntityKind,
    PeriodFinancials,
    RecordKind,
    SourceType,
)
from ledgerline.domain.ledger import LedgerService, opening_balance_of
from ledgerline.domain.normalizer import get_field, record_amount
from ledgerline.utils.amount_parser import ZERO

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def sum_amounts(records: Iterable[Any], source_type: Optional[SourceType]) -> Decimal:
    """Sum record amounts; malformed amounts contribute zero."""
    return sum((record_amount(record, source_type) for record in records), ZERO)


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """``part`` as a percentage of ``whole``; zero when ``whole`` is not positive."""
    if whole <= 0:
        return ZERO
    return part / whole * HUNDRED


def compute_financials(
    sales: Sequence[Any],
    purchases: Sequence[Any],
    expenses: Sequence[Any],
    start: DateBound = None,
    end: DateBound = None,
    branch_id: Optional[int] = None,
) -> PeriodFinancials:
    """Reduce a period's sales, purchases and expenses to profit indicators.

    All three collections are filtered through the same inclusive window.
    Net cash flow equals net profit: receivable and payable timing is not
    modelled.

    Args:
        sales: Sale records (amount read from ``total``)
        purchases: Purchase records (amount read from ``total``)
        expenses: Daily expense records (amount read from ``amount``)
        start: Optional first day of the period
        end: Optional last day of the period
        branch_id: Branch the records were selected for, carried into the result

    Returns:
        PeriodFinancials for the period
    """
    start_date = coerce_bound(start)
    end_date = coerce_bound(end)
    period_sales = filter_by_date_range(sales, start_date, end_date)
    period_purchases = filter_by_date_range(purchases, start_date, end_date)
    period_expenses = filter_by_date_range(expenses, start_date, end_date)

    total_revenue = sum_amounts(period_sales, SourceType.SALE)
    total_cost = sum_amounts(period_purchases, SourceType.PURCHASE)
    total_expense = sum_amounts(period_expenses, None)

    gross_profit = total_revenue - total_cost
    net_profit = gross_profit - total_expense

    average_sale = ZERO
    if period_sales:
        average_sale = total_revenue / len(period_sales)

    return PeriodFinancials(
        total_revenue=total_revenue,
        total_cost=total_cost,
        total_expense=total_expense,
        gross_profit=gross_profit,
        net_profit=net_profit,
        profit_margin_pct=percentage(net_profit, total_revenue),
        expense_ratio_pct=percentage(total_expense, total_revenue),
        net_cash_flow=net_profit,
        sales_count=len(period_sales),
        purchases_count=len(period_purchases),
        expenses_count=len(period_expenses),
        average_sale=average_sale,
        start_date=start_date,
        end_date=end_date,
        branch_id=branch_id,
    )


def _same_branch(record: Any, branch_id: int) -> bool:
    value = get_field(record, "branch_id")
    return value is not None and str(value) == str(branch_id)


def select_branch(records: Iterable[Any], branch_id: int) -> list[Any]:
    """Records belonging to one branch; IDs compare as text."""
    return [record for record in records if _same_branch(record, branch_id)]


def compute_branch_financials(
    branch_id: int,
    sales: Sequence[Any],
    purchases: Sequence[Any],
    expenses: Sequence[Any],
    start: DateBound = None,
    end: DateBound = None,
) -> PeriodFinancials:
    """Financials for the records of a single branch."""
    return compute_financials(
        select_branch(sales, branch_id),
        select_branch(purchases, branch_id),
        select_branch(expenses, branch_id),
        start,
        end,
        branch_id=branch_id,
    )


def compute_branch_breakdown(
    branch_ids: Iterable[int],
    sales: Sequence[Any],
    purchases: Sequence[Any],
    expenses: Sequence[Any],
    start: DateBound = None,
    end: DateBound = None,
) -> dict[int, PeriodFinancials]:
    """Financials per branch, in the order the branch IDs are given."""
    return {
        branch_id: compute_branch_financials(
            branch_id, sales, purchases, expenses, start, end
        )
        for branch_id in branch_ids
    }


def summarize_entity_balances(
    entities: Sequence[Any], closing_balances: Mapping[Any, Decimal]
) -> EntityBalanceSummary:
    """Counts and balance totals over clients or suppliers.

    An entity without a computed closing balance contributes its opening
    balance to the current total.
    """
    balances: dict[Any, Decimal] = {}
    active = 0
    total_opening = ZERO
    for entity in entities:
        entity_id = get_field(entity, "id")
        opening = opening_balance_of(entity)
        total_opening += opening
        balances[entity_id] = closing_balances.get(entity_id, opening)
        status = get_field(entity, "status")
        if str(getattr(status, "value", status)) == "active":
            active += 1

    return EntityBalanceSummary(
        total_entities=len(entities),
        active_entities=active,
        total_opening_balance=total_opening,
        total_current_balance=sum(balances.values(), ZERO),
        balances=balances,
    )


class ReportService:
    """Service for financial reports over persisted records."""

    def __init__(self, db: Database, ledger_service: Optional[LedgerService] = None):
        """Initialize report service.

        Args:
            db: Database instance
            ledger_service: Ledger service used for current balances
        """
        self.db = db
        self.ledger_service = ledger_service or LedgerService(db)

    def _records(self, branch_id: Optional[int] = None) -> tuple[list, list, list]:
        return (
            self.db.list_records(kind=RecordKind.SALE, branch_id=branch_id),
            self.db.list_records(kind=RecordKind.PURCHASE, branch_id=branch_id),
            self.db.list_records(kind=RecordKind.EXPENSE, branch_id=branch_id),
        )

    def get_financials(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        branch_id: Optional[int] = None,
    ) -> PeriodFinancials:
        """Financials for the whole business, or for one branch.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            branch_id: Optional branch filter
        """
        sales, purchases, expenses = self._records(branch_id)
        return compute_financials(
            sales, purchases, expenses, start_date, end_date, branch_id=branch_id
        )

    def list_branch_ids(self) -> list[int]:
        return self.db.list_branch_ids()

    def get_branch_breakdown(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> dict[int, PeriodFinancials]:
        """Financials for every branch that has records."""
        sales, purchases, expenses = self._records()
        return compute_branch_breakdown(
            self.list_branch_ids(), sales, purchases, expenses, start_date, end_date
        )

    def get_balance_summary(self, kind: EntityKind) -> EntityBalanceSummary:
        """Balance totals over all clients or all suppliers."""
        entities: list[Entity] = self.db.list_entities(kind=kind)
        closing = self.ledger_service.get_current_balances(entities)
        return summarize_entity_balances(entities, closing)
