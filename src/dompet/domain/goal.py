"""Savings goal domain service."""

from datetime import date
from typing import Optional

from dompet.database.base import Database
from dompet.domain.entities import Goal, LinkKind, TransactionType
from dompet.domain.errors import NotFoundError, ValidationError, goal_not_found
from dompet.domain.links import GOAL_SAVINGS_CATEGORY, build_link
from dompet.domain.transaction import TransactionService


class GoalService:
    """Service for managing savings goals."""

    def __init__(self, db: Database):
        """Initialize goal service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_goal(
        self,
        name: str,
        target_amount: float,
        target_date: date,
        current_amount: float = 0.0,
    ) -> int:
        """Create a savings goal.

        Args:
            name: Goal name
            target_amount: Amount to save, must be positive
            target_date: Date the target should be reached
            current_amount: Amount already saved

        Returns:
            Goal ID

        Raises:
            ValidationError: If the name is blank or an amount is out of range
        """
        if not name or not name.strip():
            raise ValidationError("Goal name is required")
        if not target_amount > 0:
            raise ValidationError(f"Target amount must be positive, got {target_amount}")
        if current_amount < 0:
            raise ValidationError(f"Current amount cannot be negative, got {current_amount}")
        return self.db.create_goal(
            name=name.strip(),
            target_amount=target_amount,
            target_date=target_date,
            current_amount=current_amount,
        )

    def get_goal(self, goal_id: int) -> Optional[Goal]:
        return self.db.get_goal(goal_id)

    def require_goal(self, goal_id: int) -> Goal:
        goal = self.db.get_goal(goal_id)
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def list_goals(self) -> list[Goal]:
        """List goals ordered by target date."""
        return self.db.list_goals()

    def adjust_goal(self, goal_id: int, current_amount: float) -> Goal:
        """Set the saved amount directly, without recording a transaction.

        Raises:
            NotFoundError: If the goal does not exist
            ValidationError: If the amount is negative
        """
        self.require_goal(goal_id)
        if current_amount < 0:
            raise ValidationError(f"Current amount cannot be negative, got {current_amount}")
        self.db.update_goal_balance(goal_id, current_amount=current_amount)
        return self.require_goal(goal_id)

    def contribute(
        self,
        goal_id: int,
        amount: float,
        date: date,
        fund_source: str,
        description: Optional[str] = None,
    ) -> int:
        """Save money towards a goal by recording a linked expense.

        Returns:
            ID of the contribution transaction
        """
        goal = self.require_goal(goal_id)
        return TransactionService(self.db).create_transaction(
            type=TransactionType.EXPENSE,
            amount=amount,
            date=date,
            category=GOAL_SAVINGS_CATEGORY,
            fund_source=fund_source,
            description=description or f"Tabungan untuk: {goal.name}",
            linked_to=build_link(LinkKind.GOAL, goal.id),
        )

    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal. Its contributions stay in the transaction ledger."""
        self.require_goal(goal_id)
        self.db.delete_goal(goal_id)
