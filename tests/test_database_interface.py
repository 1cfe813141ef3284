"""Tests for Database interface returning domain models."""

import pytest
from datetime import date

from dompet.domain import entities
from dompet.domain.errors import NotFoundError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_transaction_round_trip(self, temp_db):
        """Test that transactions are stored with their purpose and link."""
        txn_id = temp_db.create_transaction(
            type=entities.TransactionType.EXPENSE,
            amount=123.45,
            date=date(2024, 1, 15),
            category="Investasi",
            fund_source="Tunai",
            description="beli reksa dana",
            linked_to="investment_1",
            purpose=entities.TransactionPurpose.INVESTMENT_CONTRIBUTION,
        )
        txn = temp_db.get_transaction(txn_id)

        assert isinstance(txn, entities.Transaction)
        assert txn.amount == 123.45
        assert txn.date == date(2024, 1, 15)
        assert txn.linked_to == "investment_1"
        assert txn.purpose is entities.TransactionPurpose.INVESTMENT_CONTRIBUTION

    def test_update_transaction_replaces_fields(self, temp_db):
        txn_id = temp_db.create_transaction(
            type="expense",
            amount=1.0,
            date=date(2024, 1, 15),
            category="Belanja",
            fund_source="Tunai",
            description="a",
        )
        temp_db.update_transaction(
            txn_id,
            type=entities.TransactionType.INCOME,
            amount=2.0,
            date=date(2024, 1, 16),
            category="Gaji",
            fund_source="Rekening Bank",
            description="b",
            linked_to=None,
            purpose=entities.TransactionPurpose.ORDINARY,
        )
        txn = temp_db.get_transaction(txn_id)
        assert txn.type is entities.TransactionType.INCOME
        assert (txn.amount, txn.category, txn.description) == (2.0, "Gaji", "b")

    def test_missing_rows(self, temp_db):
        assert temp_db.get_transaction(99) is None
        assert temp_db.get_goal(99) is None
        assert temp_db.get_investment(99) is None
        assert temp_db.get_debt(99) is None
        with pytest.raises(NotFoundError):
            temp_db.update_goal_balance(99, current_amount=1.0)
        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(99)

    def test_investment_partial_balance_update(self, temp_db):
        investment_id = temp_db.create_investment("Emas", "Komoditas", 100.0, 120.0, date(2024, 1, 1))
        temp_db.update_investment_balance(investment_id, current_value=150.0)
        investment = temp_db.get_investment(investment_id)
        assert investment.initial_amount == 100.0
        assert investment.current_value == 150.0

    def test_debt_created_with_full_balance(self, temp_db):
        debt_id = temp_db.create_debt(
            type=entities.DebtType.DEBT, person_name="Budi", amount=70.0, due_date=date(2024, 2, 1)
        )
        debt = temp_db.get_debt(debt_id)
        assert isinstance(debt, entities.Debt)
        assert debt.current_amount == 70.0
        assert debt.status is entities.DebtStatus.UNPAID

    def test_list_categories_returns_domain_models(self, temp_db):
        temp_db.create_category("Gaji", entities.TransactionType.INCOME)
        temp_db.create_category("Belanja", entities.TransactionType.EXPENSE)
        categories = temp_db.list_categories()
        assert all(isinstance(c, entities.Category) for c in categories)
        assert [c.name for c in temp_db.list_categories(entities.TransactionType.INCOME)] == ["Gaji"]
