"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from dompet.domain.entities import (
    Category,
    Debt,
    DebtStatus,
    DebtType,
    FundSource,
    Goal,
    Investment,
    Transaction,
    TransactionPurpose,
    TransactionType,
)


class Database(ABC):
    """Abstract ledger store for dompet.

    Every mutating operation commits on its own; there is no transaction
    spanning several calls.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        type: TransactionType,
        amount: float,
        date: date,
        category: str,
        fund_source: str,
        description: str,
        linked_to: Optional[str] = None,
        purpose: TransactionPurpose = TransactionPurpose.ORDINARY,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        type: TransactionType,
        amount: float,
        date: date,
        category: str,
        fund_source: str,
        description: str,
        linked_to: Optional[str],
        purpose: TransactionPurpose,
    ) -> None:
        """Replace all fields of a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        linked_to: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            type: Optional transaction type filter
            category: Optional exact category label filter
            linked_to: Optional link reference filter
        """
        pass

    # Goal operations
    @abstractmethod
    def create_goal(
        self, name: str, target_amount: float, target_date: date, current_amount: float = 0.0
    ) -> int:
        """Create a savings goal. Returns goal ID."""
        pass

    @abstractmethod
    def get_goal(self, goal_id: int) -> Optional[Goal]:
        """Get goal by ID."""
        pass

    @abstractmethod
    def list_goals(self) -> list[Goal]:
        """List all goals."""
        pass

    @abstractmethod
    def update_goal_balance(self, goal_id: int, current_amount: float) -> None:
        """Set the accumulated amount of a goal."""
        pass

    @abstractmethod
    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal."""
        pass

    # Investment operations
    @abstractmethod
    def create_investment(
        self,
        name: str,
        type: str,
        initial_amount: float,
        current_value: float,
        purchase_date: date,
    ) -> int:
        """Create an investment position. Returns investment ID."""
        pass

    @abstractmethod
    def get_investment(self, investment_id: int) -> Optional[Investment]:
        """Get investment by ID."""
        pass

    @abstractmethod
    def list_investments(self) -> list[Investment]:
        """List all investments."""
        pass

    @abstractmethod
    def update_investment_balance(
        self,
        investment_id: int,
        initial_amount: Optional[float] = None,
        current_value: Optional[float] = None,
    ) -> None:
        """Update cost basis and/or market value of an investment."""
        pass

    @abstractmethod
    def delete_investment(self, investment_id: int) -> None:
        """Delete an investment."""
        pass

    # Debt operations
    @abstractmethod
    def create_debt(
        self,
        type: DebtType,
        person_name: str,
        amount: float,
        due_date: date,
        description: Optional[str] = None,
    ) -> int:
        """Create a debt or receivable with its full amount outstanding. Returns ID."""
        pass

    @abstractmethod
    def get_debt(self, debt_id: int) -> Optional[Debt]:
        """Get debt or receivable by ID."""
        pass

    @abstractmethod
    def list_debts(
        self, type: Optional[DebtType] = None, status: Optional[DebtStatus] = None
    ) -> list[Debt]:
        """List debts and receivables, optionally filtered by type and status."""
        pass

    @abstractmethod
    def update_debt_balance(self, debt_id: int, current_amount: float, status: DebtStatus) -> None:
        """Set the outstanding balance and status of a debt or receivable."""
        pass

    @abstractmethod
    def update_debt_details(
        self,
        debt_id: int,
        person_name: Optional[str] = None,
        due_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update descriptive fields. The original amount is immutable."""
        pass

    @abstractmethod
    def delete_debt(self, debt_id: int) -> None:
        """Delete a debt or receivable."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, type: TransactionType) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str, type: TransactionType) -> Optional[Category]:
        """Get category by name and type."""
        pass

    @abstractmethod
    def list_categories(self, type: Optional[TransactionType] = None) -> list[Category]:
        """List categories, optionally filtered by type."""
        pass

    # Fund source operations
    @abstractmethod
    def create_fund_source(self, name: str) -> int:
        """Create a fund source. Returns fund source ID."""
        pass

    @abstractmethod
    def get_fund_source_by_name(self, name: str) -> Optional[FundSource]:
        """Get fund source by name."""
        pass

    @abstractmethod
    def list_fund_sources(self) -> list[FundSource]:
        """List all fund sources."""
        pass
