"""Seed the default discussion categories.

Safe to run repeatedly: categories that already exist by name are left alone.
"""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from forum_core.core.errors import ConflictError
from forum_core.db.session import SessionLocal
from forum_core.schemas.category import CategoryCreate
from forum_core.services.category_store import CategoryStore

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: tuple[CategoryCreate, ...] = (
    CategoryCreate(
        name="Tech Talk",
        description="Technical discussion and Q&A",
        icon="Code",
        color="#3B82F6",
    ),
    CategoryCreate(
        name="Case Studies",
        description="Success stories and lessons learned",
        icon="TrendingUp",
        color="#10B981",
    ),
    CategoryCreate(
        name="Product Feedback",
        description="Suggestions and feature requests",
        icon="MessageSquare",
        color="#F59E0B",
    ),
    CategoryCreate(
        name="Industry News",
        description="News and trend analysis",
        icon="Newspaper",
        color="#8B5CF6",
    ),
)


def seed_categories(session: Session) -> list[str]:
    """Create any missing default category and return the names created."""
    store = CategoryStore(session)
    created: list[str] = []
    for data in DEFAULT_CATEGORIES:
        try:
            store.create(data)
        except ConflictError:
            logger.debug("Category %s already present", data.name)
            continue
        created.append(data.name)
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the default forum categories")
    parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    with SessionLocal() as session:
        try:
            created = seed_categories(session)
        except Exception as exc:
            print(f"[seed_categories] ERROR: {exc}", file=sys.stderr)
            sys.exit(1)
    if created:
        print(f"[seed_categories] created {', '.join(created)}")
    else:
        print("[seed_categories] all default categories already exist")


if __name__ == "__main__":
    main()
