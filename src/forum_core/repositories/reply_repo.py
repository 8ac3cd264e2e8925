"""Data access helpers for replies."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.orm import Session

from forum_core.models.reply import Reply
from forum_core.models.status import ContentStatus

__all__ = ["ReplyRepository"]


class ReplyRepository:
    """Thin wrapper around database access for reply entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, reply_id: str) -> Reply | None:
        """Return a reply by identifier in any status."""
        return self.session.get(Reply, reply_id)

    def get_published(self, reply_id: str, post_id: str | None = None) -> Reply | None:
        """Return a published reply, optionally requiring it to sit under ``post_id``."""
        stmt = select(Reply).where(Reply.id == reply_id, Reply.status == ContentStatus.PUBLISHED)
        if post_id is not None:
            stmt = stmt.where(Reply.post_id == post_id)
        return self.session.scalars(stmt).first()

    def add(self, reply: Reply) -> Reply:
        self.session.add(reply)
        self.session.flush()
        return reply

    def adjust_like_count(self, reply_id: str, delta: int) -> int:
        """Atomically add ``delta`` to the reply's like counter."""
        result = self.session.execute(
            update(Reply)
            .where(Reply.id == reply_id)
            .values(like_count=Reply.like_count + delta, updated_at=Reply.updated_at)
        )
        return result.rowcount

    def like_count(self, reply_id: str) -> int | None:
        return self.session.scalar(select(Reply.like_count).where(Reply.id == reply_id))

    def level_conditions(self, post_id: str, parent_id: str | None) -> list[ColumnElement[bool]]:
        """Return WHERE clauses for one level of a post's published replies."""
        conditions: list[ColumnElement[bool]] = [
            Reply.post_id == post_id,
            Reply.status == ContentStatus.PUBLISHED,
        ]
        if parent_id is None:
            conditions.append(Reply.parent_id.is_(None))
        else:
            conditions.append(Reply.parent_id == parent_id)
        return conditions

    def count(self, conditions: Sequence[ColumnElement[bool]]) -> int:
        return self.session.scalar(select(func.count()).select_from(Reply).where(*conditions)) or 0

    def page(
        self,
        conditions: Sequence[ColumnElement[bool]],
        order_by: Sequence[Any],
        *,
        offset: int,
        limit: int,
    ) -> list[Reply]:
        stmt = select(Reply).where(*conditions).order_by(*order_by).offset(offset).limit(limit)
        return list(self.session.scalars(stmt))

    def list_published_for_post(self, post_id: str) -> list[Reply]:
        """Return every published reply of a post, oldest first."""
        stmt = (
            select(Reply)
            .where(Reply.post_id == post_id, Reply.status == ContentStatus.PUBLISHED)
            .order_by(Reply.created_at.asc(), Reply.id.asc())
        )
        return list(self.session.scalars(stmt))

    def count_published(self) -> int:
        return self.count([Reply.status == ContentStatus.PUBLISHED])
