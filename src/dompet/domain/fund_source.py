"""Fund source domain service."""

from typing import Optional

from dompet.database.base import Database
from dompet.domain.entities import FundSource
from dompet.domain.errors import ConflictError, ValidationError, duplicate_fund_source


class FundSourceService:
    """Service for managing fund sources (cash, bank accounts, e-wallets)."""

    def __init__(self, db: Database):
        """Initialize fund source service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_fund_source(self, name: str) -> int:
        """Create a fund source.

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a fund source with the same name exists
        """
        if not name or not name.strip():
            raise ValidationError("Fund source name is required")
        name = name.strip()
        if self.db.get_fund_source_by_name(name) is not None:
            raise ConflictError(duplicate_fund_source(name))
        return self.db.create_fund_source(name=name)

    def get_fund_source_by_name(self, name: str) -> Optional[FundSource]:
        return self.db.get_fund_source_by_name(name)

    def list_fund_sources(self) -> list[FundSource]:
        return self.db.list_fund_sources()
