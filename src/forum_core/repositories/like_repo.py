"""Data access helpers for the like relation."""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from forum_core.models.like import Like
from forum_core.models.status import TargetType

__all__ = ["LikeRepository"]


class LikeRepository:
    """Queries over ``forum_like`` rows keyed by (user, target, target type)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, user_id: str, target_id: str, target_type: TargetType) -> Like | None:
        """Return the unique like row for the tuple, if any."""
        return self.session.scalars(
            select(Like).where(
                Like.user_id == user_id,
                Like.target_id == target_id,
                Like.target_type == target_type,
            )
        ).first()

    def add(self, user_id: str, target_id: str, target_type: TargetType) -> Like:
        """Insert a like and flush immediately so the unique constraint is checked now."""
        like = Like(user_id=user_id, target_id=target_id, target_type=target_type)
        self.session.add(like)
        self.session.flush()
        return like

    def delete_by_id(self, like_id: str) -> int:
        """Delete one like row; return the number of rows removed (0 or 1)."""
        result = self.session.execute(
            delete(Like).where(Like.id == like_id).execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_for_target(self, target_id: str, target_type: TargetType) -> int:
        """Delete every like pointing at a target."""
        result = self.session.execute(
            delete(Like)
            .where(Like.target_id == target_id, Like.target_type == target_type)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def count_for_target(self, target_id: str, target_type: TargetType) -> int:
        return self.session.scalar(
            select(func.count())
            .select_from(Like)
            .where(Like.target_id == target_id, Like.target_type == target_type)
        ) or 0

    def liked_target_ids(
        self,
        user_id: str,
        target_type: TargetType,
        target_ids: Iterable[str],
    ) -> set[str]:
        """Return which of ``target_ids`` the user has liked, in one query."""
        ids = list(target_ids)
        if not ids:
            return set()
        rows = self.session.scalars(
            select(Like.target_id).where(
                Like.user_id == user_id,
                Like.target_type == target_type,
                Like.target_id.in_(ids),
            )
        )
        return set(rows)
