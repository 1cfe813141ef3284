"""Mapper functions to convert between domain models and SQLAlchemy models.

Enumerated fields are stored as their string values and converted back to
domain enums here.
"""

from dompet.domain import entities as domain
from dompet.database.models import (
    Category as ORMCategory,
    Debt as ORMDebt,
    FundSource as ORMFundSource,
    Goal as ORMGoal,
    Investment as ORMInvestment,
    Transaction as ORMTransaction,
)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        type=domain.TransactionType(orm_transaction.type),
        amount=orm_transaction.amount,
        date=orm_transaction.date,
        category=orm_transaction.category,
        fund_source=orm_transaction.fund_source,
        description=orm_transaction.description or "",
        linked_to=orm_transaction.linked_to,
        purpose=domain.TransactionPurpose(orm_transaction.purpose or "ordinary"),
    )


def goal_to_domain(orm_goal: ORMGoal) -> domain.Goal:
    """Convert SQLAlchemy Goal model to domain Goal entity."""
    return domain.Goal(
        id=orm_goal.id,
        name=orm_goal.name,
        target_amount=orm_goal.target_amount,
        current_amount=orm_goal.current_amount,
        target_date=orm_goal.target_date,
    )


def investment_to_domain(orm_investment: ORMInvestment) -> domain.Investment:
    """Convert SQLAlchemy Investment model to domain Investment entity."""
    return domain.Investment(
        id=orm_investment.id,
        name=orm_investment.name,
        type=orm_investment.type,
        initial_amount=orm_investment.initial_amount,
        current_value=orm_investment.current_value,
        purchase_date=orm_investment.purchase_date,
    )


def debt_to_domain(orm_debt: ORMDebt) -> domain.Debt:
    """Convert SQLAlchemy Debt model to domain Debt entity."""
    return domain.Debt(
        id=orm_debt.id,
        type=domain.DebtType(orm_debt.type),
        person_name=orm_debt.person_name,
        amount=orm_debt.amount,
        current_amount=orm_debt.current_amount,
        due_date=orm_debt.due_date,
        status=domain.DebtStatus(orm_debt.status),
        description=orm_debt.description,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        type=domain.TransactionType(orm_category.type),
    )


def fund_source_to_domain(orm_fund_source: ORMFundSource) -> domain.FundSource:
    """Convert SQLAlchemy FundSource model to domain FundSource entity."""
    return domain.FundSource(id=orm_fund_source.id, name=orm_fund_source.name)
