"""Linked-ledger consistency rules.

Keeps the satellite ledgers (goals, investments, debts/receivables) in step
with the transactions linked to them:

- the balance functions (``contribute_to_goal``, ``divest``, ...) are pure and
  return an updated copy of a satellite entity;
- ``apply_forward`` runs when a linked transaction is created and
  ``apply_reverse`` when it is deleted. Both take the store explicitly and
  return the ``SatelliteChange`` they committed so that callers can undo it
  with ``revert_change`` if the matching transaction write fails.

Reversal is the exact inverse of the forward step only while no other
transaction has touched the same satellite in between.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from dompet.database.base import Database
from dompet.domain.entities import (
    Debt,
    DebtStatus,
    Goal,
    Investment,
    Link,
    LinkKind,
    Satellite,
    Transaction,
    TransactionDraft,
    TransactionPurpose,
    TransactionType,
)
from dompet.domain.errors import ValidationError, non_positive_amount
from dompet.domain.links import category_for, purpose_for, resolve_link
from dompet.logging_setup import get_logger

_logger = get_logger("dompet.ledger")

# Largest row id the SQLite store can hold.
MAX_SATELLITE_ID: int = 2**63 - 1


@dataclass(frozen=True)
class SatelliteChange:
    """A committed satellite mutation together with the state it replaced."""

    link: Link
    before: Satellite
    after: Satellite


@dataclass(frozen=True)
class ForwardResult:
    """Outcome of applying a draft to the satellite ledgers.

    ``linked_to`` is None when the draft had no link or its satellite no
    longer exists; the transaction is then stored as an ordinary one.
    """

    category: str
    purpose: TransactionPurpose
    linked_to: Optional[str] = None
    change: Optional[SatelliteChange] = None


# Goals


def contribute_to_goal(goal: Goal, amount: float) -> Goal:
    return replace(goal, current_amount=goal.current_amount + amount)


def withdraw_goal_contribution(goal: Goal, amount: float) -> Goal:
    # Not clamped: manual edits may have lowered the balance in between.
    return replace(goal, current_amount=goal.current_amount - amount)


# Investments


def top_up_investment(investment: Investment, amount: float) -> Investment:
    return replace(
        investment,
        initial_amount=investment.initial_amount + amount,
        current_value=investment.current_value + amount,
    )


def undo_top_up(investment: Investment, amount: float) -> Investment:
    return replace(
        investment,
        initial_amount=investment.initial_amount - amount,
        current_value=investment.current_value - amount,
    )


def divest(investment: Investment, amount: float) -> Investment:
    """Sell ``amount`` worth of an investment.

    The cost basis shrinks in proportion to the share of the current value
    sold. When the position has no positive value there is nothing to
    apportion and the cost basis is left untouched.
    """
    value_before_sale = investment.current_value
    initial_amount = investment.initial_amount
    if value_before_sale > 0:
        proportion_sold = min(amount / value_before_sale, 1.0)
        initial_amount = max(0.0, initial_amount * (1 - proportion_sold))
    return replace(
        investment,
        initial_amount=initial_amount,
        current_value=max(0.0, value_before_sale - amount),
    )


def undo_divestment(investment: Investment, amount: float) -> Investment:
    """Restore an investment to its state before a sale of ``amount``.

    A fully liquidated position has lost its cost basis, so in that case the
    basis is approximated as ``initial_amount + amount``.
    """
    value_after_sale = investment.current_value
    value_before_sale = value_after_sale + amount
    if value_before_sale > 0 and value_after_sale > 0:
        proportion_remaining = value_after_sale / value_before_sale
        initial_before_sale = investment.initial_amount / proportion_remaining
    else:
        initial_before_sale = investment.initial_amount + amount
    return replace(
        investment,
        initial_amount=initial_before_sale,
        current_value=value_before_sale,
    )


def realized_profit_loss(investment: Investment, amount: float) -> float:
    """Profit (positive) or loss (negative) of selling ``amount`` from ``investment``.

    ``investment`` is the position before the sale.
    """
    if investment.current_value <= 0:
        return amount
    proportion_sold = min(amount / investment.current_value, 1.0)
    return amount - investment.initial_amount * proportion_sold


# Debts and receivables


def apply_payment(debt: Debt, amount: float) -> Debt:
    remaining = debt.current_amount - amount
    return replace(
        debt,
        current_amount=max(0.0, remaining),
        status=DebtStatus.PAID if remaining <= 0 else DebtStatus.UNPAID,
    )


def undo_payment(debt: Debt, amount: float) -> Debt:
    current_amount = debt.current_amount + amount
    status = DebtStatus.UNPAID if current_amount > 0 else debt.status
    return replace(debt, current_amount=current_amount, status=status)


_FORWARD: dict[TransactionPurpose, tuple[type, Callable]] = {
    TransactionPurpose.GOAL_CONTRIBUTION: (Goal, contribute_to_goal),
    TransactionPurpose.INVESTMENT_CONTRIBUTION: (Investment, top_up_investment),
    TransactionPurpose.INVESTMENT_DIVESTMENT: (Investment, divest),
    TransactionPurpose.DEBT_PAYMENT: (Debt, apply_payment),
    TransactionPurpose.RECEIVABLE_PAYMENT: (Debt, apply_payment),
}

_REVERSE: dict[TransactionPurpose, tuple[type, Callable]] = {
    TransactionPurpose.GOAL_CONTRIBUTION: (Goal, withdraw_goal_contribution),
    TransactionPurpose.INVESTMENT_CONTRIBUTION: (Investment, undo_top_up),
    TransactionPurpose.INVESTMENT_DIVESTMENT: (Investment, undo_divestment),
    TransactionPurpose.DEBT_PAYMENT: (Debt, undo_payment),
    TransactionPurpose.RECEIVABLE_PAYMENT: (Debt, undo_payment),
}


def _dispatch(
    table: dict[TransactionPurpose, tuple[type, Callable]],
    satellite: Satellite,
    purpose: TransactionPurpose,
    amount: float,
) -> Satellite:
    expected_type, rule = table[purpose]
    if not isinstance(satellite, expected_type):
        raise ValidationError(
            f"{purpose.value} cannot be applied to a {type(satellite).__name__}"
        )
    return rule(satellite, amount)


def forward_balance(satellite: Satellite, purpose: TransactionPurpose, amount: float) -> Satellite:
    """Return the satellite after a linked transaction of ``purpose`` is recorded."""
    return _dispatch(_FORWARD, satellite, purpose, amount)


def reverse_balance(satellite: Satellite, purpose: TransactionPurpose, amount: float) -> Satellite:
    """Return the satellite after a linked transaction of ``purpose`` is removed."""
    return _dispatch(_REVERSE, satellite, purpose, amount)


# Store access


def load_satellite(db: Database, link: Link) -> Optional[Satellite]:
    """Fetch the satellite a link points to, or None if it no longer exists."""
    if link.satellite_id > MAX_SATELLITE_ID:
        return None
    if link.kind is LinkKind.GOAL:
        return db.get_goal(link.satellite_id)
    if link.kind is LinkKind.INVESTMENT:
        return db.get_investment(link.satellite_id)
    return db.get_debt(link.satellite_id)


def write_satellite(db: Database, satellite: Satellite) -> None:
    """Persist the balance fields of a satellite entity."""
    if isinstance(satellite, Goal):
        db.update_goal_balance(satellite.id, current_amount=satellite.current_amount)
    elif isinstance(satellite, Investment):
        db.update_investment_balance(
            satellite.id,
            initial_amount=satellite.initial_amount,
            current_value=satellite.current_value,
        )
    elif isinstance(satellite, Debt):
        db.update_debt_balance(
            satellite.id, current_amount=satellite.current_amount, status=satellite.status
        )
    else:
        raise TypeError(f"Not a satellite entity: {satellite!r}")


def revert_change(db: Database, change: SatelliteChange) -> None:
    """Write back the state a committed change replaced."""
    _logger.error("ledger:revert link=%s", change.link)
    write_satellite(db, change.before)


def validate_draft(draft: TransactionDraft) -> None:
    """Reject drafts that must never reach the ledger.

    Raises:
        ValidationError: If the amount is not positive or a required field is blank
    """
    TransactionType(draft.type)
    if draft.amount is None or not draft.amount > 0:
        raise ValidationError(non_positive_amount(draft.amount))
    if draft.date is None:
        raise ValidationError("Transaction date is required")
    for field_name in ("category", "fund_source", "description"):
        value = getattr(draft, field_name)
        if value is None or not str(value).strip():
            raise ValidationError(f"Transaction {field_name.replace('_', ' ')} is required")


def plan_forward(draft: TransactionDraft) -> tuple[Optional[Link], TransactionPurpose]:
    """Validate a draft and resolve its link and purpose without touching the store."""
    validate_draft(draft)
    if not draft.linked_to:
        return None, TransactionPurpose.ORDINARY
    link = resolve_link(draft.linked_to)
    return link, purpose_for(link.kind, draft.type)


def apply_forward(db: Database, draft: TransactionDraft) -> ForwardResult:
    """Apply a new transaction draft to the satellite it links to.

    Args:
        db: Ledger store holding the satellite tables
        draft: Transaction about to be recorded

    Returns:
        ForwardResult with the category, purpose and link the transaction
        should be stored with, and the committed satellite change (if any)

    Raises:
        ValidationError: If the draft or its link is invalid; nothing is written
    """
    link, purpose = plan_forward(draft)
    if link is None:
        return ForwardResult(category=draft.category, purpose=purpose)

    satellite = load_satellite(db, link)
    if satellite is None:
        _logger.warning("ledger:forward_missing_satellite link=%s", link)
        return ForwardResult(category=draft.category, purpose=TransactionPurpose.ORDINARY)

    after = forward_balance(satellite, purpose, draft.amount)
    write_satellite(db, after)
    _logger.info(
        "ledger:forward link=%s purpose=%s amount=%.2f", link, purpose.value, draft.amount
    )
    return ForwardResult(
        category=category_for(purpose) or draft.category,
        purpose=purpose,
        linked_to=str(link),
        change=SatelliteChange(link=link, before=satellite, after=after),
    )


def apply_reverse(db: Database, transaction: Transaction) -> Optional[SatelliteChange]:
    """Undo the effect a stored transaction had on its satellite.

    Args:
        db: Ledger store holding the satellite tables
        transaction: Transaction being deleted or edited

    Returns:
        The committed satellite change, or None for ordinary transactions and
        links whose satellite has been deleted
    """
    if not transaction.is_linked or not transaction.linked_to:
        return None

    link = resolve_link(transaction.linked_to)
    satellite = load_satellite(db, link)
    if satellite is None:
        _logger.warning("ledger:reverse_missing_satellite link=%s", link)
        return None

    after = reverse_balance(satellite, transaction.purpose, transaction.amount)
    write_satellite(db, after)
    _logger.info(
        "ledger:reverse link=%s purpose=%s amount=%.2f",
        link,
        transaction.purpose.value,
        transaction.amount,
    )
    return SatelliteChange(link=link, before=satellite, after=after)
