"""Backup of the whole ledger to a bulk sink.

A snapshot holds every table in the wire shape used for cloud sync
(camelCase keys, ISO dates) and overwrites whatever the sink held before.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, UTC
from pathlib import Path
from typing import Any, Optional

from dompet.database.base import Database
from dompet.domain.entities import Category, Debt, FundSource, Goal, Investment, Transaction
from dompet.domain.errors import BackupError
from dompet.logging_setup import get_logger

_logger = get_logger("dompet.backup")

Snapshot = dict[str, Any]


def transaction_to_wire(txn: Transaction) -> dict[str, Any]:
    wire: dict[str, Any] = {
        "id": txn.id,
        "type": txn.type.value,
        "amount": txn.amount,
        "date": txn.date.isoformat(),
        "category": txn.category,
        "fundSource": txn.fund_source,
        "description": txn.description,
        "purpose": txn.purpose.value,
    }
    if txn.linked_to:
        wire["linkedTo"] = txn.linked_to
    return wire


def category_to_wire(category: Category) -> dict[str, Any]:
    return {"id": category.id, "name": category.name, "type": category.type.value}


def fund_source_to_wire(fund_source: FundSource) -> dict[str, Any]:
    return {"id": fund_source.id, "name": fund_source.name}


def goal_to_wire(goal: Goal) -> dict[str, Any]:
    return {
        "id": goal.id,
        "name": goal.name,
        "targetAmount": goal.target_amount,
        "currentAmount": goal.current_amount,
        "targetDate": goal.target_date.isoformat(),
    }


def investment_to_wire(investment: Investment) -> dict[str, Any]:
    return {
        "id": investment.id,
        "name": investment.name,
        "type": investment.type,
        "initialAmount": investment.initial_amount,
        "currentValue": investment.current_value,
        "purchaseDate": investment.purchase_date.isoformat(),
    }


def debt_to_wire(debt: Debt) -> dict[str, Any]:
    return {
        "id": debt.id,
        "type": debt.type.value,
        "personName": debt.person_name,
        "amount": debt.amount,
        "currentAmount": debt.current_amount,
        "dueDate": debt.due_date.isoformat(),
        "status": debt.status.value,
        "description": debt.description,
    }


class BackupSink(ABC):
    """Destination that accepts a full snapshot, replacing its previous contents."""

    @abstractmethod
    def write(self, snapshot: Snapshot) -> None:
        """Store the snapshot.

        Raises:
            BackupError: If the snapshot could not be stored
        """
        pass


class JSONFileSink(BackupSink):
    """Writes snapshots to a JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def write(self, snapshot: Snapshot) -> None:
        # Write to a sibling file first so a failed write leaves the old backup intact.
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise BackupError(f"Could not write backup to {self.path}: {e}") from e


class BackupService:
    """Service for exporting ledger snapshots."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_snapshot(self, now: Optional[datetime] = None) -> Snapshot:
        """Collect every table into one snapshot.

        Args:
            now: Timestamp recorded as ``lastSync`` (defaults to the current UTC time)
        """
        now = now or datetime.now(UTC)
        return {
            "transactions": [transaction_to_wire(t) for t in self.db.list_transactions()],
            "categories": [category_to_wire(c) for c in self.db.list_categories()],
            "fundSources": [fund_source_to_wire(f) for f in self.db.list_fund_sources()],
            "goals": [goal_to_wire(g) for g in self.db.list_goals()],
            "investments": [investment_to_wire(i) for i in self.db.list_investments()],
            "debts": [debt_to_wire(d) for d in self.db.list_debts()],
            "lastSync": now.isoformat(),
        }

    def export(self, sink: BackupSink, now: Optional[datetime] = None) -> Snapshot:
        """Write a snapshot to ``sink`` and return it.

        Raises:
            BackupError: If the sink rejects the snapshot
        """
        snapshot = self.build_snapshot(now)
        sink.write(snapshot)
        _logger.info(
            "backup:export transactions=%d goals=%d investments=%d debts=%d",
            len(snapshot["transactions"]),
            len(snapshot["goals"]),
            len(snapshot["investments"]),
            len(snapshot["debts"]),
        )
        return snapshot
