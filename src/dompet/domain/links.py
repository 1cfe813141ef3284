"""Link resolution between transactions and satellite entities.

A link is stored on a transaction as ``"<kind>_<satellite id>"``, for example
``"investment_3"``. Together with the transaction type it determines the
transaction's purpose and the category label assigned to it.
"""

from typing import Optional

from dompet.domain.entities import Link, LinkKind, TransactionPurpose, TransactionType
from dompet.domain.errors import InvalidLinkFormat, UnknownLinkKind, ValidationError

GOAL_SAVINGS_CATEGORY = "Tabungan Tujuan"
INVESTMENT_CATEGORY = "Investasi"
DIVESTMENT_CATEGORY = "Divestasi"
DEBT_PAYMENT_CATEGORY = "Pembayaran Utang"
RECEIVABLE_PAYMENT_CATEGORY = "Penerimaan Piutang"

_PURPOSES: dict[tuple[LinkKind, TransactionType], TransactionPurpose] = {
    (LinkKind.GOAL, TransactionType.EXPENSE): TransactionPurpose.GOAL_CONTRIBUTION,
    (LinkKind.INVESTMENT, TransactionType.EXPENSE): TransactionPurpose.INVESTMENT_CONTRIBUTION,
    (LinkKind.INVESTMENT, TransactionType.INCOME): TransactionPurpose.INVESTMENT_DIVESTMENT,
    (LinkKind.DEBT, TransactionType.EXPENSE): TransactionPurpose.DEBT_PAYMENT,
    (LinkKind.RECEIVABLE, TransactionType.INCOME): TransactionPurpose.RECEIVABLE_PAYMENT,
}

PURPOSE_CATEGORIES: dict[TransactionPurpose, str] = {
    TransactionPurpose.GOAL_CONTRIBUTION: GOAL_SAVINGS_CATEGORY,
    TransactionPurpose.INVESTMENT_CONTRIBUTION: INVESTMENT_CATEGORY,
    TransactionPurpose.INVESTMENT_DIVESTMENT: DIVESTMENT_CATEGORY,
    TransactionPurpose.DEBT_PAYMENT: DEBT_PAYMENT_CATEGORY,
    TransactionPurpose.RECEIVABLE_PAYMENT: RECEIVABLE_PAYMENT_CATEGORY,
}


def resolve_link(linked_to: str) -> Link:
    """Parse a link reference into its kind and satellite ID.

    Args:
        linked_to: Link reference (e.g., "goal_12")

    Returns:
        Link with kind and satellite ID

    Raises:
        InvalidLinkFormat: If there is no separator or the ID is not a
            non-negative integer
        UnknownLinkKind: If the kind is not goal, investment, debt or receivable
    """
    kind_part, sep, id_part = linked_to.strip().partition("_")
    if not sep:
        raise InvalidLinkFormat(f"Invalid link '{linked_to}': expected '<kind>_<id>'")

    if not (id_part.isascii() and id_part.isdigit()):
        raise InvalidLinkFormat(
            f"Invalid link '{linked_to}': '{id_part}' is not a valid non-negative integer ID"
        )

    try:
        kind = LinkKind(kind_part)
    except ValueError:
        valid = ", ".join(k.value for k in LinkKind)
        raise UnknownLinkKind(
            f"Unknown link kind '{kind_part}' in '{linked_to}'. Valid kinds: {valid}"
        ) from None

    return Link(kind=kind, satellite_id=int(id_part))


def build_link(kind: LinkKind, satellite_id: int) -> str:
    """Build the stored link reference for a satellite."""
    return str(Link(kind=LinkKind(kind), satellite_id=satellite_id))


def purpose_for(kind: LinkKind, txn_type: TransactionType) -> TransactionPurpose:
    """Return the purpose implied by linking a transaction of ``txn_type`` to ``kind``.

    Raises:
        ValidationError: If the combination has no satellite rule (for example
            an income transaction linked to a goal)
    """
    purpose = _PURPOSES.get((LinkKind(kind), TransactionType(txn_type)))
    if purpose is None:
        raise ValidationError(
            f"A {TransactionType(txn_type).value} transaction cannot be linked to a "
            f"{LinkKind(kind).value}"
        )
    return purpose


def category_for(purpose: TransactionPurpose) -> Optional[str]:
    """Return the category label assigned to linked transactions of ``purpose``."""
    return PURPOSE_CATEGORIES.get(purpose)


def link_kind_for(purpose: TransactionPurpose) -> Optional[LinkKind]:
    """Return the satellite kind a purpose operates on, or None for ordinary transactions."""
    for (kind, _), candidate in _PURPOSES.items():
        if candidate is purpose:
            return kind
    return None
