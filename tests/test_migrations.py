"""Tests for the schema migration scripts."""

import importlib.util
from pathlib import Path

import pytest
from sqlalchemy import create_engine, text

from dompet.database.factories import create_sqlite_database
from dompet.domain.entities import DebtStatus, TransactionPurpose

MIGRATIONS_DIR = Path(__file__).parent.parent / "migrations"


def load_migration(name):
    spec = importlib.util.spec_from_file_location(name, MIGRATIONS_DIR / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def run_sql(db_path, *statements):
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        for statement in statements:
            conn.execute(text(statement))
    engine.dispose()


@pytest.fixture
def legacy_db_path(tmp_path):
    """Database created before debt balances and transaction purposes existed."""
    db_path = tmp_path / "legacy.db"
    run_sql(
        db_path,
        """
        CREATE TABLE transactions (
            id INTEGER PRIMARY KEY,
            type VARCHAR NOT NULL,
            amount FLOAT NOT NULL,
            date DATE NOT NULL,
            category VARCHAR NOT NULL,
            fund_source VARCHAR NOT NULL,
            description VARCHAR NOT NULL,
            linked_to VARCHAR,
            created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
        """,
        """
        CREATE TABLE debts (
            id INTEGER PRIMARY KEY,
            type VARCHAR NOT NULL,
            person_name VARCHAR NOT NULL,
            amount FLOAT NOT NULL,
            due_date DATE NOT NULL,
            status VARCHAR NOT NULL,
            description VARCHAR,
            created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
        """,
        "INSERT INTO transactions (id, type, amount, date, category, fund_source, description, linked_to) "
        "VALUES (1, 'expense', 100, '2024-01-01', 'Tabungan Tujuan', 'Tunai', 'a', 'goal_1')",
        "INSERT INTO transactions (id, type, amount, date, category, fund_source, description, linked_to) "
        "VALUES (2, 'income', 50, '2024-01-02', 'Divestasi', 'Tunai', 'b', 'investment_3')",
        "INSERT INTO transactions (id, type, amount, date, category, fund_source, description, linked_to) "
        "VALUES (3, 'income', 10, '2024-01-03', 'Lainnya', 'Tunai', 'c', 'goal_1')",
        "INSERT INTO transactions (id, type, amount, date, category, fund_source, description, linked_to) "
        "VALUES (4, 'expense', 10, '2024-01-04', 'Lainnya', 'Tunai', 'd', 'rusak')",
        "INSERT INTO transactions (id, type, amount, date, category, fund_source, description) "
        "VALUES (5, 'expense', 10, '2024-01-05', 'Belanja', 'Tunai', 'e')",
        "INSERT INTO debts (id, type, person_name, amount, due_date, status) "
        "VALUES (1, 'debt', 'Budi', 100, '2024-06-30', 'unpaid')",
        "INSERT INTO debts (id, type, person_name, amount, due_date, status) "
        "VALUES (2, 'receivable', 'Sari', 500, '2024-07-31', 'paid')",
    )
    return str(db_path)


def test_add_transaction_purpose(legacy_db_path):
    migration = load_migration("migrate_add_transaction_purpose")
    migration.migrate_database(database_path=legacy_db_path)

    db = create_sqlite_database(database_path=legacy_db_path)
    purposes = {t.id: t.purpose for t in db.list_transactions()}
    db.disconnect()
    assert purposes == {
        1: TransactionPurpose.GOAL_CONTRIBUTION,
        2: TransactionPurpose.INVESTMENT_DIVESTMENT,
        3: TransactionPurpose.ORDINARY,
        4: TransactionPurpose.ORDINARY,
        5: TransactionPurpose.ORDINARY,
    }


def test_add_debt_current_amount(legacy_db_path):
    migration = load_migration("migrate_add_debt_current_amount")
    migration.migrate_database(database_path=legacy_db_path)

    db = create_sqlite_database(database_path=legacy_db_path)
    debts = {d.id: d for d in db.list_debts()}
    db.disconnect()
    assert debts[1].current_amount == 100
    assert debts[1].status is DebtStatus.UNPAID
    assert debts[2].current_amount == 0
    assert debts[2].status is DebtStatus.PAID


def test_migrations_are_idempotent(legacy_db_path, capsys):
    for name in ("migrate_add_transaction_purpose", "migrate_add_debt_current_amount"):
        migration = load_migration(name)
        migration.migrate_database(database_path=legacy_db_path)
        migration.migrate_database(database_path=legacy_db_path)
    assert capsys.readouterr().out.count("Migration already applied") == 2


@pytest.mark.parametrize(
    "linked_to,txn_type,expected",
    [
        (None, "expense", "ordinary"),
        ("debt_2", "expense", "debt_payment"),
        ("receivable_2", "income", "receivable_payment"),
        ("receivable_2", "expense", "ordinary"),
        ("investment_x", "income", "ordinary"),
    ],
)
def test_derive_purpose(linked_to, txn_type, expected):
    migration = load_migration("migrate_add_transaction_purpose")
    assert migration.derive_purpose(linked_to, txn_type) == expected
