"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, distinct, func, or_, select, update
from sqlalchemy.orm import Session

from forum_core.models.post import Post, PostTag, normalize_tags
from forum_core.models.status import ContentStatus
from forum_core.schemas.post import PostFilter

__all__ = ["PostRepository", "like_pattern"]


def like_pattern(term: str) -> str:
    """Return a ``%term%`` pattern with LIKE wildcards in ``term`` escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self, post_id: str) -> Post | None:
        """Return a post by identifier in any status."""
        return self.session.get(Post, post_id)

    def get_published(self, post_id: str) -> Post | None:
        """Return a post only if it is published."""
        return self.session.scalars(
            select(Post).where(Post.id == post_id, Post.status == ContentStatus.PUBLISHED)
        ).first()

    def add(self, post: Post) -> Post:
        """Stage a new post and flush so its identifier is assigned."""
        self.session.add(post)
        self.session.flush()
        return post

    def _bump(self, post_id: str, **deltas: int) -> int:
        values = {name: getattr(Post, name) + delta for name, delta in deltas.items()}
        # Counter moves are not edits; keep updated_at as it was.
        values["updated_at"] = Post.updated_at
        result = self.session.execute(update(Post).where(Post.id == post_id).values(**values))
        return result.rowcount

    def increment_view_count(self, post_id: str) -> int:
        return self._bump(post_id, view_count=1)

    def adjust_like_count(self, post_id: str, delta: int) -> int:
        return self._bump(post_id, like_count=delta)

    def adjust_reply_count(self, post_id: str, delta: int) -> int:
        return self._bump(post_id, reply_count=delta)

    def record_reply(self, post_id: str, when: datetime) -> int:
        """Count a new published reply and stamp ``last_reply_at`` in one statement."""
        result = self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(
                reply_count=Post.reply_count + 1,
                last_reply_at=when,
                updated_at=Post.updated_at,
            )
        )
        return result.rowcount

    def like_count(self, post_id: str) -> int | None:
        """Re-read the stored like counter."""
        return self.session.scalar(select(Post.like_count).where(Post.id == post_id))

    def view_count(self, post_id: str) -> int | None:
        return self.session.scalar(select(Post.view_count).where(Post.id == post_id))

    def filter_conditions(self, filters: PostFilter | None) -> list[ColumnElement[bool]]:
        """Translate listing filters into WHERE clauses over published posts."""
        conditions: list[ColumnElement[bool]] = [Post.status == ContentStatus.PUBLISHED]
        if filters is None:
            return conditions

        if filters.category_id:
            conditions.append(Post.category_id == filters.category_id)

        if filters.search:
            pattern = like_pattern(filters.search.strip())
            conditions.append(
                or_(
                    Post.title.ilike(pattern, escape="\\"),
                    Post.content.ilike(pattern, escape="\\"),
                )
            )

        tags = normalize_tags(filters.tags)
        if tags:
            # Any of the requested tags is enough.
            conditions.append(
                Post.id.in_(select(PostTag.post_id).where(PostTag.tag.in_(tags)))
            )

        if filters.author_id:
            conditions.append(Post.author_id == filters.author_id)

        if filters.is_pinned is not None:
            conditions.append(Post.is_pinned == filters.is_pinned)

        return conditions

    def count(self, conditions: Sequence[ColumnElement[bool]]) -> int:
        return self.session.scalar(select(func.count()).select_from(Post).where(*conditions)) or 0

    def page(
        self,
        conditions: Sequence[ColumnElement[bool]],
        order_by: Sequence[Any],
        *,
        offset: int,
        limit: int,
    ) -> list[Post]:
        """Return one ordered slice of the posts matching ``conditions``."""
        stmt = select(Post).where(*conditions).order_by(*order_by).offset(offset).limit(limit)
        return list(self.session.scalars(stmt))

    def count_published(self) -> int:
        return self.count([Post.status == ContentStatus.PUBLISHED])

    def count_distinct_authors(self, since: datetime | None = None) -> int:
        """Count distinct post authors, optionally only those who posted ``since``."""
        stmt = select(func.count(distinct(Post.author_id)))
        if since is not None:
            stmt = stmt.where(Post.created_at >= since)
        return self.session.scalar(stmt) or 0
