"""Data access helpers for categories."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from forum_core.models.category import Category
from forum_core.models.status import CategoryStatus

__all__ = ["CategoryRepository"]


class CategoryRepository:
    """Thin wrapper around database access for category entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, category_id: str) -> Category | None:
        """Return a category by identifier regardless of status."""
        return self.session.get(Category, category_id)

    def get_active(self, category_id: str) -> Category | None:
        """Return the category only if it is active."""
        return self.session.scalars(
            select(Category).where(
                Category.id == category_id,
                Category.status == CategoryStatus.ACTIVE,
            )
        ).first()

    def get_by_name(self, name: str) -> Category | None:
        return self.session.scalars(select(Category).where(Category.name == name)).first()

    def list_active(self, limit: int | None = None) -> list[Category]:
        """Return active categories, busiest first."""
        stmt = (
            select(Category)
            .where(Category.status == CategoryStatus.ACTIVE)
            .order_by(Category.post_count.desc(), Category.name.asc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt))

    def add(self, category: Category) -> Category:
        """Stage a new category and flush so its identifier is assigned."""
        self.session.add(category)
        self.session.flush()
        return category

    def increment_post_count(self, category_id: str, delta: int) -> int:
        """Atomically add ``delta`` to ``post_count``; return rows touched."""
        result = self.session.execute(
            update(Category)
            .where(Category.id == category_id)
            .values(post_count=Category.post_count + delta, updated_at=Category.updated_at)
        )
        return result.rowcount
