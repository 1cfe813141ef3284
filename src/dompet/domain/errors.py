"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidLinkFormat(ValidationError):
    """Link reference is not of the form ``<kind>_<non-negative int>``."""


class UnknownLinkKind(ValidationError):
    """Link reference names a satellite kind that does not exist."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ExtractionError(DomainError):
    """Receipt extraction failed; the user should fill the form manually."""


class BackupError(DomainError):
    """Writing a snapshot to the backup sink failed."""


class AdviceError(DomainError):
    """The savings advisor could not produce advice."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def goal_not_found(goal_id: int) -> str:
    """Return message for missing goal."""
    return f"Goal {goal_id} not found"


def investment_not_found(investment_id: int) -> str:
    """Return message for missing investment."""
    return f"Investment {investment_id} not found"


def debt_not_found(debt_id: int) -> str:
    """Return message for missing debt or receivable."""
    return f"Debt record {debt_id} not found"


def duplicate_category(name: str, category_type: str) -> str:
    return f"Category '{name}' already exists for {category_type}"


def duplicate_fund_source(name: str) -> str:
    return f"Fund source '{name}' already exists"


def non_positive_amount(amount: float) -> str:
    """Return message for an amount that must be strictly positive."""
    return f"Amount must be positive, got {amount}"
