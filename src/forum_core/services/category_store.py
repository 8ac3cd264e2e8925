"""Category records and their published-post counters."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum_core.core.errors import ConflictError, NotFoundError
from forum_core.db.session import unit_of_work
from forum_core.models.category import Category
from forum_core.models.status import CategoryStatus
from forum_core.repositories.category_repo import CategoryRepository
from forum_core.schemas.category import CategoryCreate

logger = logging.getLogger(__name__)


class CategoryStore:
    """Owns category rows and is the only writer of ``post_count``."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = CategoryRepository(session)

    def list_active(self, limit: int | None = None) -> list[Category]:
        """Return active categories ordered by post count, busiest first."""
        return self.repo.list_active(limit)

    def create(self, data: CategoryCreate) -> Category:
        """Create an active category with a zero post count.

        Raises:
            ConflictError: If another category already uses the name.
        """
        try:
            with unit_of_work(self.session):
                if self.repo.get_by_name(data.name) is not None:
                    raise ConflictError(f"Category {data.name!r} already exists")
                category = self.repo.add(
                    Category(
                        name=data.name,
                        description=data.description,
                        icon=data.icon,
                        color=data.color,
                        post_count=0,
                        status=CategoryStatus.ACTIVE,
                    )
                )
        except IntegrityError as exc:
            # Another create with the same name committed between check and insert.
            raise ConflictError(f"Category {data.name!r} already exists") from exc
        logger.info("Created category %s (%s)", category.id, data.name)
        return category

    def get_active(self, category_id: str) -> Category:
        """Return an active category or raise ``NotFoundError``."""
        category = self.repo.get_active(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    def increment_post_count(self, category_id: str, delta: int) -> None:
        """Atomically add ``delta`` (possibly negative) to the category's post count.

        Runs inside the caller's unit of work so the counter moves with the
        post write that caused it.
        """
        if delta == 0:
            return
        if not self.repo.increment_post_count(category_id, delta):
            raise NotFoundError("Category not found")
        logger.debug("Category %s post_count %+d", category_id, delta)

    def set_status(self, category_id: str, status: CategoryStatus) -> Category:
        """Activate or deactivate a category; inactive ones refuse new posts."""
        with unit_of_work(self.session):
            category = self.repo.get(category_id)
            if category is None:
                raise NotFoundError("Category not found")
            category.status = status
        logger.info("Category %s is now %s", category_id, status.value)
        return category
