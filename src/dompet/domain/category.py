"""Category domain service."""

from typing import Optional

from dompet.database.base import Database
from dompet.domain.entities import Category, TransactionType
from dompet.domain.errors import ConflictError, ValidationError, duplicate_category


class CategoryService:
    """Service for managing income and expense categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, name: str, type: TransactionType) -> int:
        """Create a category.

        Args:
            name: Category name
            type: Transaction direction the category applies to

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a category with the same name and type exists
        """
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        name = name.strip()
        category_type = TransactionType(type)
        if self.db.get_category_by_name(name, category_type) is not None:
            raise ConflictError(duplicate_category(name, category_type.value))
        return self.db.create_category(name=name, type=category_type)

    def get_category_by_name(self, name: str, type: TransactionType) -> Optional[Category]:
        """Get category by name and type.

        Returns:
            Category entity or None if not found
        """
        return self.db.get_category_by_name(name, TransactionType(type))

    def list_categories(self, type: Optional[TransactionType] = None) -> list[Category]:
        """List categories, optionally only those of one type."""
        return self.db.list_categories(type=TransactionType(type) if type is not None else None)

    def category_names(self, type: TransactionType) -> list[str]:
        return [c.name for c in self.list_categories(type)]
