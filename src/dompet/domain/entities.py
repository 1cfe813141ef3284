"""Domain model entities for dompet.

These are pure data classes representing business concepts, independent of
database schema. Balances are plain floats: the divestment arithmetic is
proportional and is compared with a floating-point tolerance.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Union


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class LinkKind(str, Enum):
    """Kind of satellite entity a transaction can be linked to."""

    GOAL = "goal"
    INVESTMENT = "investment"
    DEBT = "debt"
    RECEIVABLE = "receivable"


class TransactionPurpose(str, Enum):
    """What a transaction does to the satellite ledgers.

    Carried alongside the free-text category so that satellite dispatch and
    cash-flow classification never depend on user-editable labels.
    """

    ORDINARY = "ordinary"
    GOAL_CONTRIBUTION = "goal_contribution"
    INVESTMENT_CONTRIBUTION = "investment_contribution"
    INVESTMENT_DIVESTMENT = "investment_divestment"
    DEBT_PAYMENT = "debt_payment"
    RECEIVABLE_PAYMENT = "receivable_payment"


class DebtType(str, Enum):
    """Whether the user owes money or is owed money."""

    DEBT = "debt"
    RECEIVABLE = "receivable"


class DebtStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


@dataclass(frozen=True)
class Link:
    """Reference from a transaction to exactly one satellite entity."""

    kind: LinkKind
    satellite_id: int

    def __str__(self) -> str:
        return f"{self.kind.value}_{self.satellite_id}"


@dataclass(frozen=True)
class TransactionDraft:
    """A transaction as submitted by the user, before it is stored."""

    type: TransactionType
    amount: float
    date: date
    category: str
    fund_source: str
    description: str
    linked_to: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    type: TransactionType
    amount: float
    date: date
    category: str
    fund_source: str
    description: str
    linked_to: Optional[str] = None
    purpose: TransactionPurpose = TransactionPurpose.ORDINARY

    @property
    def is_linked(self) -> bool:
        return self.purpose is not TransactionPurpose.ORDINARY


@dataclass(frozen=True)
class Goal:
    """Savings goal domain entity."""

    id: int
    name: str
    target_amount: float
    current_amount: float
    target_date: date

    @property
    def progress(self) -> float:
        """Percentage of the target reached (may exceed 100)."""
        if self.target_amount <= 0:
            return 0.0
        return self.current_amount / self.target_amount * 100


@dataclass(frozen=True)
class Investment:
    """Investment position domain entity.

    ``initial_amount`` is the cost basis, ``current_value`` the market mark.
    """

    id: int
    name: str
    type: str
    initial_amount: float
    current_value: float
    purchase_date: date

    @property
    def profit_loss(self) -> float:
        return self.current_value - self.initial_amount


@dataclass(frozen=True)
class Debt:
    """Debt or receivable domain entity."""

    id: int
    type: DebtType
    person_name: str
    amount: float
    current_amount: float
    due_date: date
    status: DebtStatus
    description: Optional[str] = None


Satellite = Union[Goal, Investment, Debt]


@dataclass(frozen=True)
class Category:
    """Category domain entity, typed by transaction direction."""

    id: int
    name: str
    type: TransactionType


@dataclass(frozen=True)
class FundSource:
    """Fund source (cash, bank account, e-wallet...) domain entity."""

    id: int
    name: str


@dataclass(frozen=True)
class MonthlyCashFlow:
    """Income and expense totals for one calendar month (``YYYY-MM``)."""

    month: str
    income: float
    expense: float

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass(frozen=True)
class CashFlowReport:
    """Monthly cash flow plus overall totals."""

    months: tuple[MonthlyCashFlow, ...] = field(default_factory=tuple)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def total_income(self) -> float:
        return sum(m.income for m in self.months)

    @property
    def total_expense(self) -> float:
        return sum(m.expense for m in self.months)

    @property
    def net_flow(self) -> float:
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class CategoryTotal:
    """Total amount recorded under one category label."""

    category: str
    total: float


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregate cost basis and market value over all investments."""

    total_initial: float
    total_current: float

    @property
    def profit_loss(self) -> float:
        return self.total_current - self.total_initial

    @property
    def profit_loss_percentage(self) -> float:
        if self.total_initial <= 0:
            return 0.0
        return self.profit_loss / self.total_initial * 100


@dataclass(frozen=True)
class DebtSummary:
    """Outstanding balances of unpaid debts and receivables."""

    total_debt: float
    total_receivable: float
