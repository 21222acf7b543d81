"""Domain model entities for ledgerline.

These are pure data classes representing business concepts, independent of
database schema. Statements and financial reports are value objects: they are
computed on demand from source records and never persisted.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class EntityKind(str, Enum):
    """Kind of counterparty an account ledger is kept for."""

    CLIENT = "client"
    SUPPLIER = "supplier"


class EntityStatus(str, Enum):
    """Lifecycle status of a client or supplier."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    BLOCKED = "blocked"


class SourceType(str, Enum):
    """Origin of a ledger entry."""

    SALE = "sale"
    PURCHASE = "purchase"
    RECEIPT = "receipt"
    PAYMENT = "payment"
    ADJUSTMENT = "adjustment"


class RecordKind(str, Enum):
    """Kind of persisted source record.

    Mirrors SourceType, plus daily expenses, which feed financial reports but
    never an entity ledger.
    """

    SALE = "sale"
    PURCHASE = "purchase"
    RECEIPT = "receipt"
    PAYMENT = "payment"
    ADJUSTMENT = "adjustment"
    EXPENSE = "expense"

    @property
    def source_type(self) -> Optional[SourceType]:
        if self is RecordKind.EXPENSE:
            return None
        return SourceType(self.value)


class EntryDirection(str, Enum):
    """Side of the ledger an entry is posted to."""

    DEBIT = "debit"
    CREDIT = "credit"


@dataclass(frozen=True)
class Entity:
    """Client or supplier domain entity."""

    id: int
    name: str
    kind: EntityKind
    opening_balance: Decimal
    status: EntityStatus
    created_at: datetime
    credit_limit: Optional[Decimal] = None
    branch_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status == EntityStatus.ACTIVE


@dataclass(frozen=True)
class SourceRecord:
    """Raw financial record as stored by the persistence layer.

    ``date`` and ``amount`` hold the text as received from upstream; they are
    parsed tolerantly by the normalizer.
    """

    id: int
    kind: RecordKind
    date: Optional[str]
    amount: Optional[str]
    created_at: datetime
    entity_id: Optional[int] = None
    branch_id: Optional[int] = None
    reference: Optional[str] = None
    description: Optional[str] = None
    direction: Optional[EntryDirection] = None
    posted: bool = True


@dataclass(frozen=True)
class LedgerEntry:
    """A source record normalized into a signed ledger movement."""

    date: Optional[date]
    description: str
    debit: Decimal
    credit: Decimal
    source_type: Optional[SourceType]
    source_id: Any = None

    @property
    def net(self) -> Decimal:
        """Effect of the entry on the balance."""
        return self.debit - self.credit


@dataclass(frozen=True)
class StatementLine:
    """A ledger entry together with the balance after applying it."""

    entry: LedgerEntry
    running_balance: Decimal

    @property
    def date(self) -> Optional[date]:
        return self.entry.date

    @property
    def description(self) -> str:
        return self.entry.description

    @property
    def debit(self) -> Decimal:
        return self.entry.debit

    @property
    def credit(self) -> Decimal:
        return self.entry.credit

    @property
    def is_opening(self) -> bool:
        return self.entry.source_type is None

    def as_row(self) -> dict[str, Any]:
        """Flat row for tabular rendering or template interpolation."""
        return {
            "date": "opening" if self.is_opening else self.date,
            "description": self.description,
            "debit": self.debit,
            "credit": self.credit,
            "running_balance": self.running_balance,
        }


@dataclass(frozen=True)
class Statement:
    """Ordered account statement; line zero is the opening balance."""

    lines: tuple[StatementLine, ...]
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def opening_balance(self) -> Decimal:
        return self.lines[0].running_balance

    @property
    def closing_balance(self) -> Decimal:
        return self.lines[-1].running_balance

    @property
    def entries(self) -> tuple[StatementLine, ...]:
        """Lines after the synthetic opening-balance line."""
        return self.lines[1:]

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))

    def as_rows(self) -> list[dict[str, Any]]:
        return [line.as_row() for line in self.lines]

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class PeriodFinancials:
    """Aggregate financial indicators for a period, branch or the business."""

    total_revenue: Decimal
    total_cost: Decimal
    total_expense: Decimal
    gross_profit: Decimal
    net_profit: Decimal
    profit_margin_pct: Decimal
    expense_ratio_pct: Decimal
    net_cash_flow: Decimal
    sales_count: int = 0
    purchases_count: int = 0
    expenses_count: int = 0
    average_sale: Decimal = Decimal("0")
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    branch_id: Optional[int] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_revenue": self.total_revenue,
            "total_cost": self.total_cost,
            "total_expense": self.total_expense,
            "gross_profit": self.gross_profit,
            "net_profit": self.net_profit,
            "profit_margin_pct": self.profit_margin_pct,
            "expense_ratio_pct": self.expense_ratio_pct,
            "net_cash_flow": self.net_cash_flow,
        }


@dataclass(frozen=True)
class EntityBalanceSummary:
    """Totals across a list of clients or suppliers."""

    total_entities: int
    active_entities: int
    total_opening_balance: Decimal
    total_current_balance: Decimal
    balances: dict[int, Decimal] = field(default_factory=dict)
