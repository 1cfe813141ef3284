#!/usr/bin/env python3
"""Migration script to add the purpose column to the transactions table.

Older databases classified linked transactions only by their category label.
This migration adds:
- purpose (TEXT, default 'ordinary')

and derives it for existing rows from the link kind and transaction type.
Rows whose link cannot be parsed, or whose link and type have no ledger
rule, stay 'ordinary'.

Usage:
    python migrations/migrate_add_transaction_purpose.py [--db-path PATH]
"""

import sys
from pathlib import Path

# Add src to path so we can import dompet modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from dompet.database.factories import create_sqlite_database
from dompet.domain.errors import ValidationError
from dompet.domain.links import purpose_for, resolve_link


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table."""
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def derive_purpose(linked_to: str | None, txn_type: str) -> str:
    """Return the purpose value for a stored link and type."""
    if not linked_to:
        return "ordinary"
    try:
        link = resolve_link(linked_to)
        return purpose_for(link.kind, txn_type).value
    except ValidationError:
        return "ordinary"


def migrate_database(database_path: str | None = None) -> None:
    """Migrate database to add and backfill transactions.purpose.

    Args:
        database_path: Path to database file. If None, uses default location.

    Raises:
        RuntimeError: If the transactions table does not exist
    """
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    try:
        session = db.session_factory()
        try:
            engine = session.bind
        finally:
            session.close()

        if "transactions" not in inspect(engine).get_table_names():
            raise RuntimeError(
                "Table 'transactions' does not exist. Please initialize the database schema first."
            )

        if column_exists(engine, "transactions", "purpose"):
            print("Migration already applied: purpose column exists in transactions table")
            return

        print("Starting migration: adding purpose column...")

        with engine.begin() as conn:
            conn.execute(
                text("ALTER TABLE transactions ADD COLUMN purpose TEXT NOT NULL DEFAULT 'ordinary'")
            )
            print("  Added column: purpose")

            rows = conn.execute(
                text("SELECT id, type, linked_to FROM transactions WHERE linked_to IS NOT NULL")
            ).fetchall()
            updated = 0
            for row in rows:
                purpose = derive_purpose(row.linked_to, row.type)
                if purpose != "ordinary":
                    conn.execute(
                        text("UPDATE transactions SET purpose = :purpose WHERE id = :id"),
                        {"purpose": purpose, "id": row.id},
                    )
                    updated += 1
            print(f"  Classified {updated} linked transaction(s)")

        print("Migration completed successfully!")

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(description="Migrate database to add transactions.purpose")
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides DOMPET_DB_PATH environment variable)",
    )
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
