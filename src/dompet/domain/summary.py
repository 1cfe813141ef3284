"""Category summary domain service."""

import math
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from dompet.database.base import Database
from dompet.domain.entities import CategoryTotal, Transaction, TransactionType


def totals_by_category(
    transactions: Iterable[Transaction], type: TransactionType = TransactionType.EXPENSE
) -> list[CategoryTotal]:
    """Sum transaction amounts of one type per category label.

    Every transaction of the requested type counts, linked ones included.

    Args:
        transactions: Transactions to group, in any order
        type: Transaction type to keep

    Returns:
        CategoryTotal entries, largest total first (ties by category name)
    """
    amounts: dict[str, list[float]] = defaultdict(list)
    for txn in transactions:
        if txn.type is type:
            amounts[txn.category].append(txn.amount)
    totals = [
        CategoryTotal(category=category, total=math.fsum(values))
        for category, values in amounts.items()
    ]
    return sorted(totals, key=lambda t: (-t.total, t.category))


class SummaryService:
    """Service for per-category spending summaries."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def expense_by_category(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[CategoryTotal]:
        """Total expenses per category over an optional date range.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)

        Returns:
            CategoryTotal entries, largest spending category first
        """
        return self.totals(TransactionType.EXPENSE, start_date=start_date, end_date=end_date)

    def income_by_category(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[CategoryTotal]:
        return self.totals(TransactionType.INCOME, start_date=start_date, end_date=end_date)

    def totals(
        self,
        type: TransactionType,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[CategoryTotal]:
        transactions = self.db.list_transactions(
            start_date=start_date, end_date=end_date, type=type
        )
        return totals_by_category(transactions, type)
