"""Transaction domain service."""

from datetime import date
from typing import Optional

from dompet.database.base import Database
from dompet.domain.entities import (
    Transaction,
    TransactionDraft,
    TransactionType,
)
from dompet.domain.errors import NotFoundError, ValidationError, transaction_not_found
from dompet.domain.ledger import (
    ForwardResult,
    SatelliteChange,
    apply_forward,
    apply_reverse,
    plan_forward,
    revert_change,
)
from dompet.logging_setup import get_logger

_logger = get_logger("dompet.transaction")


class TransactionService:
    """Service for managing transactions and their satellite side effects."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        type: TransactionType,
        amount: float,
        date: date,
        category: str,
        fund_source: str,
        description: str,
        linked_to: Optional[str] = None,
    ) -> int:
        """Record a transaction, updating the satellite it links to.

        Args:
            type: Income or expense
            amount: Strictly positive amount
            date: Transaction date
            category: Category label (replaced by the link label for linked transactions)
            fund_source: Fund source name
            description: Free-text description
            linked_to: Optional link reference (e.g., "goal_3")

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the draft or link is invalid
        """
        draft = TransactionDraft(
            type=TransactionType(type),
            amount=amount,
            date=date,
            category=category,
            fund_source=fund_source,
            description=description,
            linked_to=linked_to or None,
        )
        result = apply_forward(self.db, draft)
        try:
            transaction_id = self._insert(draft, result)
        except Exception:
            self._compensate(result.change)
            raise
        _logger.info(
            "transaction:create id=%d purpose=%s amount=%.2f",
            transaction_id,
            result.purpose.value,
            draft.amount,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> Transaction:
        """Get transaction by ID, raising if it does not exist."""
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        linked_to: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first."""
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            type=TransactionType(type) if type is not None else None,
            category=category,
            linked_to=linked_to,
        )

    def update_transaction(
        self,
        transaction_id: int,
        type: Optional[TransactionType] = None,
        amount: Optional[float] = None,
        date: Optional[date] = None,
        category: Optional[str] = None,
        fund_source: Optional[str] = None,
        description: Optional[str] = None,
        linked_to: Optional[str] = None,
        clear_link: bool = False,
    ) -> Transaction:
        """Edit a transaction. Fields left as None keep their current value.

        When the type, amount or link changes, the old effect on the satellite
        is reversed and the new one applied, exactly as if the transaction had
        been deleted and recorded again.

        Args:
            transaction_id: Transaction ID
            type: New type
            amount: New amount
            date: New date
            category: New category label
            fund_source: New fund source
            description: New description
            linked_to: New link reference
            clear_link: Remove the link (turns the transaction into an ordinary one)

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If the transaction does not exist
            ValidationError: If the edited draft is invalid; nothing is written
        """
        old = self.require_transaction(transaction_id)
        if clear_link and linked_to:
            raise ValidationError("Cannot set and clear the link in the same edit")

        if clear_link:
            new_link = None
        elif linked_to is not None:
            new_link = linked_to or None
        else:
            new_link = old.linked_to

        draft = TransactionDraft(
            type=TransactionType(type) if type is not None else old.type,
            amount=amount if amount is not None else old.amount,
            date=date if date is not None else old.date,
            category=category if category is not None else old.category,
            fund_source=fund_source if fund_source is not None else old.fund_source,
            description=description if description is not None else old.description,
            linked_to=new_link,
        )
        plan_forward(draft)

        if old.is_linked and not self._ledger_fields_changed(old, draft):
            if category is not None and category != old.category:
                raise ValidationError(
                    f"Category of a linked transaction is set by its link ({old.category})"
                )
            self.db.update_transaction(
                transaction_id,
                type=old.type,
                amount=old.amount,
                date=draft.date,
                category=old.category,
                fund_source=draft.fund_source,
                description=draft.description,
                linked_to=old.linked_to,
                purpose=old.purpose,
            )
            return self.require_transaction(transaction_id)

        reversal = apply_reverse(self.db, old)
        try:
            result = apply_forward(self.db, draft)
        except Exception:
            self._compensate(reversal)
            raise

        try:
            self.db.update_transaction(
                transaction_id,
                type=draft.type,
                amount=draft.amount,
                date=draft.date,
                category=result.category,
                fund_source=draft.fund_source,
                description=draft.description,
                linked_to=result.linked_to,
                purpose=result.purpose,
            )
        except Exception:
            self._compensate(result.change)
            self._compensate(reversal)
            raise

        _logger.info(
            "transaction:update id=%d purpose=%s->%s",
            transaction_id,
            old.purpose.value,
            result.purpose.value,
        )
        return self.require_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction, undoing its effect on the linked satellite.

        Args:
            transaction_id: Transaction ID

        Raises:
            NotFoundError: If the transaction does not exist
        """
        transaction = self.require_transaction(transaction_id)
        reversal = apply_reverse(self.db, transaction)
        try:
            self.db.delete_transaction(transaction_id)
        except Exception:
            self._compensate(reversal)
            raise
        _logger.info(
            "transaction:delete id=%d purpose=%s", transaction_id, transaction.purpose.value
        )

    def _insert(self, draft: TransactionDraft, result: ForwardResult) -> int:
        return self.db.create_transaction(
            type=draft.type,
            amount=draft.amount,
            date=draft.date,
            category=result.category,
            fund_source=draft.fund_source,
            description=draft.description,
            linked_to=result.linked_to,
            purpose=result.purpose,
        )

    def _compensate(self, change: Optional[SatelliteChange]) -> None:
        if change is not None:
            revert_change(self.db, change)

    @staticmethod
    def _ledger_fields_changed(old: Transaction, draft: TransactionDraft) -> bool:
        return (
            old.type is not draft.type
            or old.amount != draft.amount
            or old.linked_to != draft.linked_to
        )
