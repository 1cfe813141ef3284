"""Generic SQLAlchemy database implementation."""

from typing import Optional
from datetime import date
from sqlalchemy.orm import Session

from dompet.database.base import Database
from dompet.database.models import (
    Category,
    Debt,
    FundSource,
    Goal,
    Investment,
    Transaction,
    create_session_factory,
)
from dompet.database.mappers import (
    category_to_domain,
    debt_to_domain,
    fund_source_to_domain,
    goal_to_domain,
    investment_to_domain,
    transaction_to_domain,
)
from dompet.domain.entities import (
    Category as DomainCategory,
    Debt as DomainDebt,
    DebtStatus,
    DebtType,
    FundSource as DomainFundSource,
    Goal as DomainGoal,
    Investment as DomainInvestment,
    Transaction as DomainTransaction,
    TransactionPurpose,
    TransactionType,
)
from dompet.domain.errors import (
    NotFoundError,
    debt_not_found,
    goal_not_found,
    investment_not_found,
    transaction_not_found,
)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _commit(self) -> None:
        """Commit the current session, rolling back on failure."""
        session = self._get_session()
        try:
            session.commit()
        except Exception:
            session.rollback()
            raise

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    # Transaction operations
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
        session = self._get_session()
        transaction = Transaction(
            type=TransactionType(type).value,
            amount=amount,
            date=date,
            category=category,
            fund_source=fund_source,
            description=description,
            linked_to=linked_to,
            purpose=TransactionPurpose(purpose).value,
        )
        session.add(transaction)
        self._commit()
        return transaction.id

    def _get_orm_transaction(self, transaction_id: int) -> Transaction:
        session = self._get_session()
        transaction = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def get_transaction(self, transaction_id: int) -> Optional[DomainTransaction]:
        """Get transaction by ID."""
        session = self._get_session()
        txn = session.query(Transaction).filter(Transaction.id == transaction_id).first()
        if txn is None:
            return None
        return transaction_to_domain(txn)

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
        transaction = self._get_orm_transaction(transaction_id)
        transaction.type = TransactionType(type).value
        transaction.amount = amount
        transaction.date = date
        transaction.category = category
        transaction.fund_source = fund_source
        transaction.description = description
        transaction.linked_to = linked_to
        transaction.purpose = TransactionPurpose(purpose).value
        self._commit()

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        transaction = self._get_orm_transaction(transaction_id)
        self._get_session().delete(transaction)
        self._commit()

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        linked_to: Optional[str] = None,
    ) -> list[DomainTransaction]:
        """List transactions with optional filters."""
        session = self._get_session()
        query = session.query(Transaction)

        if start_date is not None:
            query = query.filter(Transaction.date >= start_date)
        if end_date is not None:
            query = query.filter(Transaction.date <= end_date)
        if type is not None:
            query = query.filter(Transaction.type == TransactionType(type).value)
        if category is not None:
            query = query.filter(Transaction.category == category)
        if linked_to is not None:
            query = query.filter(Transaction.linked_to == linked_to)

        transactions = query.order_by(Transaction.date.desc(), Transaction.id.desc()).all()
        return [transaction_to_domain(txn) for txn in transactions]

    # Goal operations
    def create_goal(
        self, name: str, target_amount: float, target_date: date, current_amount: float = 0.0
    ) -> int:
        """Create a savings goal. Returns goal ID."""
        session = self._get_session()
        goal = Goal(
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
            target_date=target_date,
        )
        session.add(goal)
        self._commit()
        return goal.id

    def _get_orm_goal(self, goal_id: int) -> Goal:
        session = self._get_session()
        goal = session.query(Goal).filter(Goal.id == goal_id).first()
        if goal is None:
            raise NotFoundError(goal_not_found(goal_id))
        return goal

    def get_goal(self, goal_id: int) -> Optional[DomainGoal]:
        """Get goal by ID."""
        session = self._get_session()
        goal = session.query(Goal).filter(Goal.id == goal_id).first()
        if goal is None:
            return None
        return goal_to_domain(goal)

    def list_goals(self) -> list[DomainGoal]:
        """List all goals."""
        session = self._get_session()
        goals = session.query(Goal).order_by(Goal.target_date, Goal.id).all()
        return [goal_to_domain(goal) for goal in goals]

    def update_goal_balance(self, goal_id: int, current_amount: float) -> None:
        """Set the accumulated amount of a goal."""
        goal = self._get_orm_goal(goal_id)
        goal.current_amount = current_amount
        self._commit()

    def delete_goal(self, goal_id: int) -> None:
        """Delete a goal."""
        goal = self._get_orm_goal(goal_id)
        self._get_session().delete(goal)
        self._commit()

    # Investment operations
    def create_investment(
        self,
        name: str,
        type: str,
        initial_amount: float,
        current_value: float,
        purchase_date: date,
    ) -> int:
        """Create an investment position. Returns investment ID."""
        session = self._get_session()
        investment = Investment(
            name=name,
            type=type,
            initial_amount=initial_amount,
            current_value=current_value,
            purchase_date=purchase_date,
        )
        session.add(investment)
        self._commit()
        return investment.id

    def _get_orm_investment(self, investment_id: int) -> Investment:
        session = self._get_session()
        investment = session.query(Investment).filter(Investment.id == investment_id).first()
        if investment is None:
            raise NotFoundError(investment_not_found(investment_id))
        return investment

    def get_investment(self, investment_id: int) -> Optional[DomainInvestment]:
        """Get investment by ID."""
        session = self._get_session()
        investment = session.query(Investment).filter(Investment.id == investment_id).first()
        if investment is None:
            return None
        return investment_to_domain(investment)

    def list_investments(self) -> list[DomainInvestment]:
        """List all investments."""
        session = self._get_session()
        investments = session.query(Investment).order_by(Investment.name, Investment.id).all()
        return [investment_to_domain(inv) for inv in investments]

    def update_investment_balance(
        self,
        investment_id: int,
        initial_amount: Optional[float] = None,
        current_value: Optional[float] = None,
    ) -> None:
        """Update cost basis and/or market value of an investment."""
        investment = self._get_orm_investment(investment_id)
        if initial_amount is not None:
            investment.initial_amount = initial_amount
        if current_value is not None:
            investment.current_value = current_value
        self._commit()

    def delete_investment(self, investment_id: int) -> None:
        """Delete an investment."""
        investment = self._get_orm_investment(investment_id)
        self._get_session().delete(investment)
        self._commit()

    # Debt operations
    def create_debt(
        self,
        type: DebtType,
        person_name: str,
        amount: float,
        due_date: date,
        description: Optional[str] = None,
    ) -> int:
        """Create a debt or receivable with its full amount outstanding. Returns ID."""
        session = self._get_session()
        debt = Debt(
            type=DebtType(type).value,
            person_name=person_name,
            amount=amount,
            current_amount=amount,
            due_date=due_date,
            status=DebtStatus.UNPAID.value,
            description=description,
        )
        session.add(debt)
        self._commit()
        return debt.id

    def _get_orm_debt(self, debt_id: int) -> Debt:
        session = self._get_session()
        debt = session.query(Debt).filter(Debt.id == debt_id).first()
        if debt is None:
            raise NotFoundError(debt_not_found(debt_id))
        return debt

    def get_debt(self, debt_id: int) -> Optional[DomainDebt]:
        """Get debt or receivable by ID."""
        session = self._get_session()
        debt = session.query(Debt).filter(Debt.id == debt_id).first()
        if debt is None:
            return None
        return debt_to_domain(debt)

    def list_debts(
        self, type: Optional[DebtType] = None, status: Optional[DebtStatus] = None
    ) -> list[DomainDebt]:
        """List debts and receivables, optionally filtered by type and status."""
        session = self._get_session()
        query = session.query(Debt)
        if type is not None:
            query = query.filter(Debt.type == DebtType(type).value)
        if status is not None:
            query = query.filter(Debt.status == DebtStatus(status).value)
        debts = query.order_by(Debt.due_date, Debt.id).all()
        return [debt_to_domain(debt) for debt in debts]

    def update_debt_balance(self, debt_id: int, current_amount: float, status: DebtStatus) -> None:
        """Set the outstanding balance and status of a debt or receivable."""
        debt = self._get_orm_debt(debt_id)
        debt.current_amount = current_amount
        debt.status = DebtStatus(status).value
        self._commit()

    def update_debt_details(
        self,
        debt_id: int,
        person_name: Optional[str] = None,
        due_date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> None:
        """Update descriptive fields. The original amount is immutable."""
        debt = self._get_orm_debt(debt_id)
        if person_name is not None:
            debt.person_name = person_name
        if due_date is not None:
            debt.due_date = due_date
        if description is not None:
            debt.description = description
        self._commit()

    def delete_debt(self, debt_id: int) -> None:
        """Delete a debt or receivable."""
        debt = self._get_orm_debt(debt_id)
        self._get_session().delete(debt)
        self._commit()

    # Category operations
    def create_category(self, name: str, type: TransactionType) -> int:
        """Create a category. Returns category ID."""
        session = self._get_session()
        category = Category(name=name, type=TransactionType(type).value)
        session.add(category)
        self._commit()
        return category.id

    def get_category_by_name(self, name: str, type: TransactionType) -> Optional[DomainCategory]:
        """Get category by name and type."""
        session = self._get_session()
        cat = (
            session.query(Category)
            .filter(Category.name == name, Category.type == TransactionType(type).value)
            .first()
        )
        if cat is None:
            return None
        return category_to_domain(cat)

    def list_categories(self, type: Optional[TransactionType] = None) -> list[DomainCategory]:
        """List categories, optionally filtered by type."""
        session = self._get_session()
        query = session.query(Category)
        if type is not None:
            query = query.filter(Category.type == TransactionType(type).value)
        categories = query.order_by(Category.type, Category.id).all()
        return [category_to_domain(cat) for cat in categories]

    # Fund source operations
    def create_fund_source(self, name: str) -> int:
        """Create a fund source. Returns fund source ID."""
        session = self._get_session()
        fund_source = FundSource(name=name)
        session.add(fund_source)
        self._commit()
        return fund_source.id

    def get_fund_source_by_name(self, name: str) -> Optional[DomainFundSource]:
        """Get fund source by name."""
        session = self._get_session()
        fund_source = session.query(FundSource).filter(FundSource.name == name).first()
        if fund_source is None:
            return None
        return fund_source_to_domain(fund_source)

    def list_fund_sources(self) -> list[DomainFundSource]:
        """List all fund sources."""
        session = self._get_session()
        fund_sources = session.query(FundSource).order_by(FundSource.id).all()
        return [fund_source_to_domain(fs) for fs in fund_sources]
