"""Shared pytest fixtures for dompet tests."""

import tempfile
import os
from datetime import date
import pytest

from dompet.database.factories import create_sqlite_database
from dompet.domain.cash_flow import CashFlowService
from dompet.domain.category import CategoryService
from dompet.domain.debt import DebtService
from dompet.domain.entities import DebtType
from dompet.domain.fund_source import FundSourceService
from dompet.domain.goal import GoalService
from dompet.domain.investment import InvestmentService
from dompet.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def goal_service(temp_db):
    """Create a GoalService with a temporary database."""
    return GoalService(temp_db)


@pytest.fixture
def investment_service(temp_db):
    """Create an InvestmentService with a temporary database."""
    return InvestmentService(temp_db)


@pytest.fixture
def debt_service(temp_db):
    """Create a DebtService with a temporary database."""
    return DebtService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def fund_source_service(temp_db):
    """Create a FundSourceService with a temporary database."""
    return FundSourceService(temp_db)


@pytest.fixture
def cash_flow_service(temp_db):
    """Create a CashFlowService with a temporary database."""
    return CashFlowService(temp_db)


@pytest.fixture
def sample_goal(goal_service):
    """Create a goal with nothing saved yet."""
    goal_id = goal_service.create_goal(
        name="Dana Darurat", target_amount=10_000_000, target_date=date(2025, 12, 31)
    )
    return goal_service.get_goal(goal_id)


@pytest.fixture
def sample_investment(temp_db):
    """Create an investment with cost basis 1000 and value 1500."""
    investment_id = temp_db.create_investment(
        name="Reksa Dana Saham",
        type="Reksa Dana",
        initial_amount=1000.0,
        current_value=1500.0,
        purchase_date=date(2024, 1, 10),
    )
    return temp_db.get_investment(investment_id)


@pytest.fixture
def sample_debt(debt_service):
    """Create an unpaid debt of 100."""
    debt_id = debt_service.create_debt(
        type=DebtType.DEBT, person_name="Budi", amount=100.0, due_date=date(2024, 6, 30)
    )
    return debt_service.get_debt(debt_id)


@pytest.fixture
def sample_receivable(debt_service):
    """Create an unpaid receivable of 500."""
    debt_id = debt_service.create_debt(
        type=DebtType.RECEIVABLE, person_name="Sari", amount=500.0, due_date=date(2024, 7, 31)
    )
    return debt_service.get_debt(debt_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
