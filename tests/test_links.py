"""Tests for link resolution."""

import pytest

from dompet.domain.entities import Link, LinkKind, TransactionPurpose, TransactionType
from dompet.domain.errors import InvalidLinkFormat, UnknownLinkKind, ValidationError
from dompet.domain.links import (
    build_link,
    category_for,
    link_kind_for,
    purpose_for,
    resolve_link,
)


class TestResolveLink:
    """Tests for parsing link references."""

    @pytest.mark.parametrize(
        "reference, kind, satellite_id",
        [
            ("goal_1", LinkKind.GOAL, 1),
            ("investment_42", LinkKind.INVESTMENT, 42),
            ("debt_0", LinkKind.DEBT, 0),
            ("receivable_7", LinkKind.RECEIVABLE, 7),
        ],
    )
    def test_resolves_each_kind(self, reference, kind, satellite_id):
        assert resolve_link(reference) == Link(kind=kind, satellite_id=satellite_id)

    def test_non_integer_id_is_invalid_format(self):
        with pytest.raises(InvalidLinkFormat):
            resolve_link("goal_abc")

    def test_unknown_kind(self):
        with pytest.raises(UnknownLinkKind):
            resolve_link("unknownkind_1")

    def test_errors_are_distinguishable(self):
        """A bad ID and a bad kind raise different error types."""
        with pytest.raises(ValidationError) as bad_id:
            resolve_link("goal_abc")
        with pytest.raises(ValidationError) as bad_kind:
            resolve_link("unknownkind_1")
        assert type(bad_id.value) is not type(bad_kind.value)

    @pytest.mark.parametrize("reference", ["goal", "goal1", "", "goal_", "goal_-1", "goal_1.5"])
    def test_malformed_references(self, reference):
        with pytest.raises(InvalidLinkFormat):
            resolve_link(reference)

    def test_splits_on_first_underscore_only(self):
        # "goal_1_2" has "1_2" as its id part, which is not an integer
        with pytest.raises(InvalidLinkFormat):
            resolve_link("goal_1_2")

    def test_non_ascii_digits_rejected(self):
        with pytest.raises(InvalidLinkFormat):
            resolve_link("goal_١")

    def test_build_link_round_trip(self):
        assert build_link(LinkKind.INVESTMENT, 3) == "investment_3"
        assert resolve_link(build_link(LinkKind.DEBT, 9)) == Link(LinkKind.DEBT, 9)

    def test_link_str(self):
        assert str(Link(kind=LinkKind.RECEIVABLE, satellite_id=5)) == "receivable_5"


class TestPurposeFor:
    """Tests for the (kind, type) -> purpose table."""

    @pytest.mark.parametrize(
        "kind, txn_type, purpose, category",
        [
            (LinkKind.GOAL, TransactionType.EXPENSE, TransactionPurpose.GOAL_CONTRIBUTION, "Tabungan Tujuan"),
            (LinkKind.INVESTMENT, TransactionType.EXPENSE, TransactionPurpose.INVESTMENT_CONTRIBUTION, "Investasi"),
            (LinkKind.INVESTMENT, TransactionType.INCOME, TransactionPurpose.INVESTMENT_DIVESTMENT, "Divestasi"),
            (LinkKind.DEBT, TransactionType.EXPENSE, TransactionPurpose.DEBT_PAYMENT, "Pembayaran Utang"),
            (LinkKind.RECEIVABLE, TransactionType.INCOME, TransactionPurpose.RECEIVABLE_PAYMENT, "Penerimaan Piutang"),
        ],
    )
    def test_supported_combinations(self, kind, txn_type, purpose, category):
        assert purpose_for(kind, txn_type) is purpose
        assert category_for(purpose) == category
        assert link_kind_for(purpose) is kind

    @pytest.mark.parametrize(
        "kind, txn_type",
        [
            (LinkKind.GOAL, TransactionType.INCOME),
            (LinkKind.DEBT, TransactionType.INCOME),
            (LinkKind.RECEIVABLE, TransactionType.EXPENSE),
        ],
    )
    def test_unsupported_combinations(self, kind, txn_type):
        with pytest.raises(ValidationError):
            purpose_for(kind, txn_type)

    def test_ordinary_has_no_category_or_kind(self):
        assert category_for(TransactionPurpose.ORDINARY) is None
        assert link_kind_for(TransactionPurpose.ORDINARY) is None
