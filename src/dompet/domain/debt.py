"""Debt and receivable domain service."""

import math
from datetime import date
from typing import Optional

from dompet.database.base import Database
from dompet.domain.entities import (
    Debt,
    DebtStatus,
    DebtSummary,
    DebtType,
    LinkKind,
    TransactionType,
)
from dompet.domain.errors import NotFoundError, ValidationError, debt_not_found
from dompet.domain.links import (
    DEBT_PAYMENT_CATEGORY,
    RECEIVABLE_PAYMENT_CATEGORY,
    build_link,
)
from dompet.domain.transaction import TransactionService


class DebtService:
    """Service for managing debts (money owed) and receivables (money lent)."""

    def __init__(self, db: Database):
        """Initialize debt service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_debt(
        self,
        type: DebtType,
        person_name: str,
        amount: float,
        due_date: date,
        description: Optional[str] = None,
    ) -> int:
        """Create a debt or receivable with the full amount outstanding.

        Returns:
            Debt record ID

        Raises:
            ValidationError: If the person is blank or the amount is not positive
        """
        if not person_name or not person_name.strip():
            raise ValidationError("Person name is required")
        if not amount > 0:
            raise ValidationError(f"Amount must be positive, got {amount}")
        return self.db.create_debt(
            type=DebtType(type),
            person_name=person_name.strip(),
            amount=amount,
            due_date=due_date,
            description=description,
        )

    def get_debt(self, debt_id: int) -> Optional[Debt]:
        return self.db.get_debt(debt_id)

    def require_debt(self, debt_id: int) -> Debt:
        debt = self.db.get_debt(debt_id)
        if debt is None:
            raise NotFoundError(debt_not_found(debt_id))
        return debt

    def list_debts(
        self, type: Optional[DebtType] = None, status: Optional[DebtStatus] = None
    ) -> list[Debt]:
        """List debt records ordered by due date."""
        return self.db.list_debts(
            type=DebtType(type) if type is not None else None,
            status=DebtStatus(status) if status is not None else None,
        )

    def update_details(
        self,
        debt_id: int,
        person_name: Optional[str] = None,
        due_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> Debt:
        """Edit the descriptive fields of a debt record.

        The original amount cannot be changed once payments may exist.
        """
        self.require_debt(debt_id)
        if person_name is not None and not person_name.strip():
            raise ValidationError("Person name is required")
        self.db.update_debt_details(
            debt_id,
            person_name=person_name.strip() if person_name is not None else None,
            due_date=due_date,
            description=description,
        )
        return self.require_debt(debt_id)

    def set_status(self, debt_id: int, status: DebtStatus) -> Debt:
        """Mark a debt record paid or unpaid by hand.

        Marking paid clears the outstanding balance. Marking unpaid keeps a
        balance that is still outstanding, so partial payments survive; only a
        cleared balance is restored to the original amount.
        """
        debt = self.require_debt(debt_id)
        status = DebtStatus(status)
        if status is DebtStatus.PAID:
            current_amount = 0.0
        elif debt.current_amount > 0:
            current_amount = debt.current_amount
        else:
            current_amount = debt.amount
        self.db.update_debt_balance(debt_id, current_amount=current_amount, status=status)
        return self.require_debt(debt_id)

    def record_payment(
        self,
        debt_id: int,
        amount: float,
        date: date,
        fund_source: str,
        description: Optional[str] = None,
    ) -> int:
        """Record a payment against a debt record as a linked transaction.

        Paying a debt is an expense; collecting a receivable is an income.

        Returns:
            ID of the payment transaction
        """
        debt = self.require_debt(debt_id)
        if debt.type is DebtType.DEBT:
            kind, txn_type = LinkKind.DEBT, TransactionType.EXPENSE
            category = DEBT_PAYMENT_CATEGORY
            default_description = f"Pembayaran utang kepada {debt.person_name}"
        else:
            kind, txn_type = LinkKind.RECEIVABLE, TransactionType.INCOME
            category = RECEIVABLE_PAYMENT_CATEGORY
            default_description = f"Penerimaan piutang dari {debt.person_name}"

        return TransactionService(self.db).create_transaction(
            type=txn_type,
            amount=amount,
            date=date,
            category=category,
            fund_source=fund_source,
            description=description or default_description,
            linked_to=build_link(kind, debt.id),
        )

    def delete_debt(self, debt_id: int) -> None:
        self.require_debt(debt_id)
        self.db.delete_debt(debt_id)

    def summary(self) -> DebtSummary:
        """Total outstanding balance of unpaid debts and receivables."""
        unpaid = self.db.list_debts(status=DebtStatus.UNPAID)
        return DebtSummary(
            total_debt=math.fsum(d.current_amount for d in unpaid if d.type is DebtType.DEBT),
            total_receivable=math.fsum(
                d.current_amount for d in unpaid if d.type is DebtType.RECEIVABLE
            ),
        )
