"""Tests for the transaction service and its satellite side effects."""

from datetime import date

import pytest

from dompet.database.sqlalchemy_db import SQLAlchemyDatabase
from dompet.domain.entities import DebtStatus, TransactionPurpose, TransactionType
from dompet.domain.errors import NotFoundError, UnknownLinkKind, ValidationError
from dompet.domain.transaction import TransactionService


def add_expense(service, amount, linked_to=None, category="Makanan & Minuman", day=date(2024, 3, 1)):
    return service.create_transaction(
        type=TransactionType.EXPENSE,
        amount=amount,
        date=day,
        category=category,
        fund_source="Tunai",
        description="test",
        linked_to=linked_to,
    )


def add_income(service, amount, linked_to=None, category="Gaji", day=date(2024, 3, 1)):
    return service.create_transaction(
        type=TransactionType.INCOME,
        amount=amount,
        date=day,
        category=category,
        fund_source="Rekening Bank",
        description="test",
        linked_to=linked_to,
    )


class TestCreateTransaction:
    """Tests for recording transactions."""

    def test_create_ordinary(self, transaction_service):
        txn_id = add_expense(transaction_service, 25_000)
        txn = transaction_service.get_transaction(txn_id)
        assert txn.amount == 25_000
        assert txn.category == "Makanan & Minuman"
        assert txn.purpose is TransactionPurpose.ORDINARY
        assert txn.linked_to is None

    def test_goal_contribution(self, transaction_service, goal_service, sample_goal):
        txn_id = add_expense(transaction_service, 500_000, linked_to=f"goal_{sample_goal.id}")
        txn = transaction_service.get_transaction(txn_id)
        assert txn.purpose is TransactionPurpose.GOAL_CONTRIBUTION
        assert txn.category == "Tabungan Tujuan"
        assert txn.linked_to == f"goal_{sample_goal.id}"
        assert goal_service.get_goal(sample_goal.id).current_amount == 500_000

    def test_debt_payment_marks_paid(self, transaction_service, debt_service, sample_debt):
        add_expense(transaction_service, 150, linked_to=f"debt_{sample_debt.id}")
        debt = debt_service.get_debt(sample_debt.id)
        assert debt.current_amount == 0
        assert debt.status is DebtStatus.PAID

    def test_missing_satellite_stores_ordinary(self, transaction_service):
        txn_id = add_expense(transaction_service, 10, linked_to="goal_999")
        txn = transaction_service.get_transaction(txn_id)
        assert txn.purpose is TransactionPurpose.ORDINARY
        assert txn.linked_to is None
        assert txn.category == "Makanan & Minuman"

    @pytest.mark.parametrize(
        "linked_to",
        ["goal_99999999999999999999", "investment_9223372036854775808", "debt_9223372036854775807"],
    )
    def test_out_of_range_satellite_id_stores_ordinary(self, transaction_service, linked_to):
        txn_id = add_expense(transaction_service, 10, linked_to=linked_to)
        txn = transaction_service.get_transaction(txn_id)
        assert txn.purpose is TransactionPurpose.ORDINARY
        assert txn.linked_to is None

    def test_invalid_link_rejected(self, transaction_service):
        with pytest.raises(UnknownLinkKind):
            add_expense(transaction_service, 10, linked_to="wallet_1")
        assert transaction_service.list_transactions() == []

    def test_non_positive_amount_rejected(self, transaction_service):
        with pytest.raises(ValidationError):
            add_expense(transaction_service, 0)
        assert transaction_service.list_transactions() == []


class TestListTransactions:
    """Tests for listing transactions."""

    def test_filters(self, transaction_service, sample_goal):
        add_expense(transaction_service, 1, day=date(2024, 1, 10))
        add_income(transaction_service, 2, day=date(2024, 2, 10))
        add_expense(transaction_service, 3, linked_to=f"goal_{sample_goal.id}", day=date(2024, 3, 10))

        assert [t.amount for t in transaction_service.list_transactions()] == [3, 2, 1]
        assert [
            t.amount for t in transaction_service.list_transactions(type=TransactionType.EXPENSE)
        ] == [3, 1]
        assert [
            t.amount
            for t in transaction_service.list_transactions(
                start_date=date(2024, 2, 1), end_date=date(2024, 2, 29)
            )
        ] == [2]
        assert [
            t.amount for t in transaction_service.list_transactions(linked_to=f"goal_{sample_goal.id}")
        ] == [3]
        assert [t.amount for t in transaction_service.list_transactions(category="Gaji")] == [2]


class TestDeleteTransaction:
    """Tests for deleting transactions."""

    def test_delete_reverses_goal(self, transaction_service, goal_service, sample_goal):
        txn_id = add_expense(transaction_service, 200, linked_to=f"goal_{sample_goal.id}")
        transaction_service.delete_transaction(txn_id)
        assert transaction_service.get_transaction(txn_id) is None
        assert goal_service.get_goal(sample_goal.id).current_amount == 0

    def test_delete_reverses_divestment(self, transaction_service, temp_db, sample_investment):
        txn_id = add_income(transaction_service, 600, linked_to=f"investment_{sample_investment.id}")
        sold = temp_db.get_investment(sample_investment.id)
        assert sold.current_value == pytest.approx(900)
        assert sold.initial_amount == pytest.approx(600)

        transaction_service.delete_transaction(txn_id)
        restored = temp_db.get_investment(sample_investment.id)
        assert restored.current_value == pytest.approx(1500)
        assert restored.initial_amount == pytest.approx(1000)

    def test_delete_reopens_debt(self, transaction_service, debt_service, sample_debt):
        txn_id = add_expense(transaction_service, 100, linked_to=f"debt_{sample_debt.id}")
        assert debt_service.get_debt(sample_debt.id).status is DebtStatus.PAID
        transaction_service.delete_transaction(txn_id)
        debt = debt_service.get_debt(sample_debt.id)
        assert debt.current_amount == 100
        assert debt.status is DebtStatus.UNPAID

    def test_delete_after_satellite_removed(self, transaction_service, goal_service, sample_goal):
        txn_id = add_expense(transaction_service, 200, linked_to=f"goal_{sample_goal.id}")
        goal_service.delete_goal(sample_goal.id)
        transaction_service.delete_transaction(txn_id)
        assert transaction_service.get_transaction(txn_id) is None

    def test_delete_missing(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.delete_transaction(42)


class TestUpdateTransaction:
    """Tests for editing transactions."""

    def test_update_ordinary_fields(self, transaction_service):
        txn_id = add_expense(transaction_service, 10)
        updated = transaction_service.update_transaction(
            txn_id, amount=15, description="nasi goreng", category="Belanja"
        )
        assert updated.amount == 15
        assert updated.description == "nasi goreng"
        assert updated.category == "Belanja"

    def test_change_amount_of_goal_contribution(self, transaction_service, goal_service, sample_goal):
        txn_id = add_expense(transaction_service, 200, linked_to=f"goal_{sample_goal.id}")
        transaction_service.update_transaction(txn_id, amount=350)
        assert goal_service.get_goal(sample_goal.id).current_amount == 350

    def test_move_link_between_goals(self, transaction_service, goal_service, sample_goal):
        other_id = goal_service.create_goal("Liburan", 5_000_000, date(2025, 6, 1))
        txn_id = add_expense(transaction_service, 200, linked_to=f"goal_{sample_goal.id}")

        updated = transaction_service.update_transaction(txn_id, linked_to=f"goal_{other_id}")
        assert updated.linked_to == f"goal_{other_id}"
        assert goal_service.get_goal(sample_goal.id).current_amount == 0
        assert goal_service.get_goal(other_id).current_amount == 200

    def test_link_an_ordinary_transaction(self, transaction_service, goal_service, sample_goal):
        txn_id = add_expense(transaction_service, 80)
        updated = transaction_service.update_transaction(txn_id, linked_to=f"goal_{sample_goal.id}")
        assert updated.purpose is TransactionPurpose.GOAL_CONTRIBUTION
        assert updated.category == "Tabungan Tujuan"
        assert goal_service.get_goal(sample_goal.id).current_amount == 80

    def test_clear_link(self, transaction_service, goal_service, sample_goal):
        txn_id = add_expense(transaction_service, 80, linked_to=f"goal_{sample_goal.id}")
        updated = transaction_service.update_transaction(
            txn_id, clear_link=True, category="Lainnya"
        )
        assert updated.purpose is TransactionPurpose.ORDINARY
        assert updated.linked_to is None
        assert updated.category == "Lainnya"
        assert goal_service.get_goal(sample_goal.id).current_amount == 0

    def test_description_edit_leaves_satellite_alone(
        self, transaction_service, goal_service, sample_goal
    ):
        txn_id = add_expense(transaction_service, 200, linked_to=f"goal_{sample_goal.id}")
        updated = transaction_service.update_transaction(
            txn_id, description="setoran bulanan", date=date(2024, 3, 5)
        )
        assert updated.description == "setoran bulanan"
        assert updated.date == date(2024, 3, 5)
        assert updated.category == "Tabungan Tujuan"
        assert goal_service.get_goal(sample_goal.id).current_amount == 200

    def test_category_of_linked_transaction_is_fixed(self, transaction_service, sample_goal):
        txn_id = add_expense(transaction_service, 200, linked_to=f"goal_{sample_goal.id}")
        with pytest.raises(ValidationError):
            transaction_service.update_transaction(txn_id, category="Belanja")

    def test_invalid_edit_writes_nothing(self, transaction_service, goal_service, sample_goal):
        txn_id = add_expense(transaction_service, 200, linked_to=f"goal_{sample_goal.id}")
        with pytest.raises(ValidationError):
            transaction_service.update_transaction(txn_id, amount=-5)
        with pytest.raises(ValidationError):
            transaction_service.update_transaction(txn_id, type=TransactionType.INCOME)
        assert goal_service.get_goal(sample_goal.id).current_amount == 200
        assert transaction_service.get_transaction(txn_id).amount == 200

    def test_set_and_clear_link_together(self, transaction_service, sample_goal):
        txn_id = add_expense(transaction_service, 10)
        with pytest.raises(ValidationError):
            transaction_service.update_transaction(
                txn_id, linked_to=f"goal_{sample_goal.id}", clear_link=True
            )


class FailingDatabase(SQLAlchemyDatabase):
    """Store whose transaction writes fail after the satellite was updated."""

    def __init__(self, database_url):
        super().__init__(database_url)
        self.fail_on = set()

    def create_transaction(self, *args, **kwargs):
        if "create" in self.fail_on:
            raise RuntimeError("disk full")
        return super().create_transaction(*args, **kwargs)

    def update_transaction(self, *args, **kwargs):
        if "update" in self.fail_on:
            raise RuntimeError("disk full")
        return super().update_transaction(*args, **kwargs)

    def delete_transaction(self, *args, **kwargs):
        if "delete" in self.fail_on:
            raise RuntimeError("disk full")
        return super().delete_transaction(*args, **kwargs)


@pytest.fixture
def failing_db(tmp_path):
    db = FailingDatabase(f"sqlite:///{tmp_path / 'failing.db'}")
    yield db
    db.disconnect()


class TestCompensation:
    """A failed transaction write leaves the satellite as it was."""

    def test_failed_insert_restores_goal(self, failing_db):
        service = TransactionService(failing_db)
        goal_id = failing_db.create_goal("Motor", 20_000_000, date(2025, 1, 1), current_amount=1000)
        failing_db.fail_on = {"create"}

        with pytest.raises(RuntimeError):
            add_expense(service, 400, linked_to=f"goal_{goal_id}")

        assert failing_db.get_goal(goal_id).current_amount == 1000
        assert failing_db.list_transactions() == []

    def test_failed_delete_restores_investment(self, failing_db):
        service = TransactionService(failing_db)
        investment_id = failing_db.create_investment("Obligasi", "Obligasi", 1000, 1000, date(2024, 1, 1))
        txn_id = add_expense(service, 500, linked_to=f"investment_{investment_id}")
        failing_db.fail_on = {"delete"}

        with pytest.raises(RuntimeError):
            service.delete_transaction(txn_id)

        investment = failing_db.get_investment(investment_id)
        assert investment.initial_amount == 1500
        assert investment.current_value == 1500
        assert service.get_transaction(txn_id) is not None

    def test_failed_update_restores_both_satellites(self, failing_db):
        service = TransactionService(failing_db)
        first = failing_db.create_goal("A", 1000, date(2025, 1, 1))
        second = failing_db.create_goal("B", 1000, date(2025, 1, 1))
        txn_id = add_expense(service, 300, linked_to=f"goal_{first}")
        failing_db.fail_on = {"update"}

        with pytest.raises(RuntimeError):
            service.update_transaction(txn_id, linked_to=f"goal_{second}")

        assert failing_db.get_goal(first).current_amount == 300
        assert failing_db.get_goal(second).current_amount == 0
        assert service.get_transaction(txn_id).linked_to == f"goal_{first}"
