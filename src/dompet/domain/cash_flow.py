"""Cash-flow reporting domain service.

Investment contributions are capital transfers and never count as spending.
Divestment proceeds only count for the realized profit or loss they carry.
"""

import math
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from dompet.database.base import Database
from dompet.domain.entities import (
    CashFlowReport,
    Investment,
    MonthlyCashFlow,
    Transaction,
    TransactionPurpose,
    TransactionType,
)
from dompet.domain.links import resolve_link


def divestment_profit_loss(transaction: Transaction, investment: Optional[Investment]) -> float:
    """Realized profit (positive) or loss (negative) of a divestment transaction.

    The investment is stored in its post-sale state, so the value before the
    sale is reconstructed as ``current_value + amount``. Without the
    investment the whole amount is treated as profit.
    """
    if investment is None:
        return transaction.amount
    value_before_sale = investment.current_value + transaction.amount
    if value_before_sale <= 0:
        return transaction.amount
    proportion_sold = transaction.amount / value_before_sale
    cost_of_goods_sold = investment.initial_amount * proportion_sold
    return transaction.amount - cost_of_goods_sold


def _linked_investment_id(transaction: Transaction) -> Optional[int]:
    if not transaction.linked_to:
        return None
    return resolve_link(transaction.linked_to).satellite_id


def aggregate_cash_flow(
    transactions: Iterable[Transaction], investments: Iterable[Investment]
) -> list[MonthlyCashFlow]:
    """Compute income and expense totals per calendar month.

    Args:
        transactions: Transactions to aggregate, in any order
        investments: Current investment positions, used to value divestments

    Returns:
        MonthlyCashFlow entries sorted by month (``YYYY-MM``)
    """
    investments_by_id = {inv.id: inv for inv in investments}
    income: dict[str, list[float]] = defaultdict(list)
    expense: dict[str, list[float]] = defaultdict(list)

    for txn in transactions:
        month = txn.date.strftime("%Y-%m")
        # Touch both buckets so a month with only capital movements still shows up.
        income[month]
        expense[month]

        if txn.purpose is TransactionPurpose.INVESTMENT_CONTRIBUTION:
            continue

        if txn.purpose is TransactionPurpose.INVESTMENT_DIVESTMENT:
            investment_id = _linked_investment_id(txn)
            investment = investments_by_id.get(investment_id) if investment_id is not None else None
            profit_loss = divestment_profit_loss(txn, investment)
            if profit_loss > 0:
                income[month].append(profit_loss)
            else:
                expense[month].append(abs(profit_loss))
            continue

        if txn.type is TransactionType.INCOME:
            income[month].append(txn.amount)
        else:
            expense[month].append(txn.amount)

    # fsum is exactly rounded, so totals do not depend on iteration order.
    return [
        MonthlyCashFlow(
            month=month,
            income=math.fsum(income[month]),
            expense=math.fsum(expense[month]),
        )
        for month in sorted(income)
    ]


class CashFlowService:
    """Service for building cash-flow reports."""

    def __init__(self, db: Database):
        """Initialize cash-flow service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_report(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> CashFlowReport:
        """Build a monthly cash-flow report.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)

        Returns:
            CashFlowReport with one entry per month that has transactions
        """
        transactions = self.db.list_transactions(start_date=start_date, end_date=end_date)
        months = aggregate_cash_flow(transactions, self.db.list_investments())
        return CashFlowReport(months=tuple(months), start_date=start_date, end_date=end_date)
