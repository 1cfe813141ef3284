#!/usr/bin/env python3
"""Migration script to add balance tracking columns to the debts table.

Debts recorded before partial payments were supported only stored the
original amount. This migration adds:
- current_amount (REAL), backfilled with the original amount (0 for paid debts)
- status (TEXT, default 'unpaid')

Usage:
    python migrations/migrate_add_debt_current_amount.py [--db-path PATH]
"""

import sys
from pathlib import Path

# Add src to path so we can import dompet modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from dompet.database.factories import create_sqlite_database


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table.

    Args:
        engine: SQLAlchemy engine
        table_name: Name of the table
        column_name: Name of the column

    Returns:
        True if column exists, False otherwise
    """
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def migrate_database(database_path: str | None = None) -> None:
    """Migrate database to add current_amount and status to debts.

    Args:
        database_path: Path to database file. If None, uses default location.

    Raises:
        RuntimeError: If the debts table does not exist
    """
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    try:
        session = db.session_factory()
        try:
            engine = session.bind
        finally:
            session.close()

        if "debts" not in inspect(engine).get_table_names():
            raise RuntimeError(
                "Table 'debts' does not exist. Please initialize the database schema first."
            )

        needs_current_amount = not column_exists(engine, "debts", "current_amount")
        needs_status = not column_exists(engine, "debts", "status")
        if not (needs_current_amount or needs_status):
            print("Migration already applied: debts table has current_amount and status")
            return

        print("Starting migration: adding debt balance columns...")

        with engine.begin() as conn:
            if needs_current_amount:
                conn.execute(text("ALTER TABLE debts ADD COLUMN current_amount REAL"))
                if needs_status:
                    backfill = "UPDATE debts SET current_amount = amount"
                else:
                    # Debts already marked paid have nothing outstanding.
                    backfill = (
                        "UPDATE debts SET current_amount = "
                        "CASE WHEN status = 'paid' THEN 0 ELSE amount END"
                    )
                result = conn.execute(text(backfill))
                print(f"  Added column: current_amount ({result.rowcount} row(s) backfilled)")

            if needs_status:
                conn.execute(
                    text("ALTER TABLE debts ADD COLUMN status TEXT NOT NULL DEFAULT 'unpaid'")
                )
                print("  Added column: status")

        print("Migration completed successfully!")

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Migrate database to add current_amount and status to debts"
    )
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
