"""Investment domain service."""

import math
from datetime import date
from typing import Optional

from dompet.database.base import Database
from dompet.domain.entities import (
    Investment,
    LinkKind,
    PortfolioSummary,
    TransactionDraft,
    TransactionType,
)
from dompet.domain.errors import NotFoundError, ValidationError, investment_not_found
from dompet.domain.ledger import validate_draft
from dompet.domain.links import DIVESTMENT_CATEGORY, INVESTMENT_CATEGORY, build_link
from dompet.domain.transaction import TransactionService
from dompet.logging_setup import get_logger

_logger = get_logger("dompet.investment")


class InvestmentService:
    """Service for managing investment positions."""

    def __init__(self, db: Database):
        """Initialize investment service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transactions = TransactionService(db)

    def create_investment(
        self,
        name: str,
        type: str,
        purchase_date: date,
        initial_amount: float = 0.0,
        current_value: Optional[float] = None,
        fund_source: Optional[str] = None,
    ) -> int:
        """Create an investment position.

        When a fund source is given, the initial amount is paid out of it as a
        linked "Investasi" expense, so the cost basis is built up by the
        ledger instead of being written directly.

        Args:
            name: Investment name
            type: Free-text instrument type (e.g., "Saham", "Reksa Dana")
            purchase_date: Purchase date, also used for the funding transaction
            initial_amount: Cost basis
            current_value: Market value (defaults to the initial amount)
            fund_source: Optional fund source paying for the position

        Returns:
            Investment ID

        Raises:
            ValidationError: If the name is blank or an amount is negative
        """
        if not name or not name.strip():
            raise ValidationError("Investment name is required")
        if initial_amount < 0:
            raise ValidationError(f"Initial amount cannot be negative, got {initial_amount}")
        if current_value is None:
            current_value = initial_amount
        if current_value < 0:
            raise ValidationError(f"Current value cannot be negative, got {current_value}")

        name = name.strip()
        if not fund_source or initial_amount == 0:
            return self.db.create_investment(
                name=name,
                type=type,
                initial_amount=initial_amount,
                current_value=current_value,
                purchase_date=purchase_date,
            )

        funding = TransactionDraft(
            type=TransactionType.EXPENSE,
            amount=initial_amount,
            date=purchase_date,
            category=INVESTMENT_CATEGORY,
            fund_source=fund_source,
            description=f"Modal Awal Investasi: {name}",
        )
        # The position must not exist without the expense that paid for it.
        validate_draft(funding)
        investment_id = self.db.create_investment(
            name=name, type=type, initial_amount=0.0, current_value=0.0, purchase_date=purchase_date
        )
        try:
            self.transactions.create_transaction(
                type=funding.type,
                amount=funding.amount,
                date=funding.date,
                category=funding.category,
                fund_source=funding.fund_source,
                description=funding.description,
                linked_to=build_link(LinkKind.INVESTMENT, investment_id),
            )
        except Exception:
            _logger.warning("investment:funding_failed investment_id=%s", investment_id)
            self.db.delete_investment(investment_id)
            raise
        if current_value != initial_amount:
            self.db.update_investment_balance(investment_id, current_value=current_value)
        return investment_id

    def get_investment(self, investment_id: int) -> Optional[Investment]:
        return self.db.get_investment(investment_id)

    def require_investment(self, investment_id: int) -> Investment:
        investment = self.db.get_investment(investment_id)
        if investment is None:
            raise NotFoundError(investment_not_found(investment_id))
        return investment

    def list_investments(self) -> list[Investment]:
        return self.db.list_investments()

    def update_value(self, investment_id: int, current_value: float) -> Investment:
        """Mark an investment to market. The cost basis is unchanged.

        Raises:
            NotFoundError: If the investment does not exist
            ValidationError: If the value is negative
        """
        self.require_investment(investment_id)
        if current_value < 0:
            raise ValidationError(f"Current value cannot be negative, got {current_value}")
        self.db.update_investment_balance(investment_id, current_value=current_value)
        return self.require_investment(investment_id)

    def liquidate(
        self,
        investment_id: int,
        date: date,
        fund_source: str,
        amount: Optional[float] = None,
    ) -> int:
        """Sell all or part of an investment by recording a linked income.

        The position is kept (at zero after a full sale) so that the
        divestment can still be valued in cash-flow reports.

        Args:
            investment_id: Investment ID
            date: Sale date
            fund_source: Fund source receiving the proceeds
            amount: Proceeds; defaults to the full current value

        Returns:
            ID of the divestment transaction

        Raises:
            NotFoundError: If the investment does not exist
            ValidationError: If there is nothing to sell
        """
        investment = self.require_investment(investment_id)
        proceeds = investment.current_value if amount is None else amount
        if not proceeds > 0:
            raise ValidationError(f"Nothing to liquidate for investment '{investment.name}'")
        _logger.info(
            "investment:liquidate id=%d proceeds=%.2f full=%s",
            investment_id,
            proceeds,
            proceeds >= investment.current_value,
        )
        return self.transactions.create_transaction(
            type=TransactionType.INCOME,
            amount=proceeds,
            date=date,
            category=DIVESTMENT_CATEGORY,
            fund_source=fund_source,
            description=f"Pencairan Investasi: {investment.name}",
            linked_to=build_link(LinkKind.INVESTMENT, investment_id),
        )

    def delete_investment(self, investment_id: int) -> None:
        """Delete an investment. Its linked transactions stay in the ledger."""
        self.require_investment(investment_id)
        self.db.delete_investment(investment_id)

    def portfolio_summary(self) -> PortfolioSummary:
        investments = self.db.list_investments()
        return PortfolioSummary(
            total_initial=math.fsum(inv.initial_amount for inv in investments),
            total_current=math.fsum(inv.current_value for inv in investments),
        )
