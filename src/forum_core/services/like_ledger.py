"""Like/unlike bookkeeping for posts and replies."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum_core.core.errors import NotFoundError
from forum_core.db.session import unit_of_work
from forum_core.models.status import TargetType
from forum_core.repositories.like_repo import LikeRepository
from forum_core.repositories.post_repo import PostRepository
from forum_core.repositories.reply_repo import ReplyRepository
from forum_core.schemas.like import LikeResult

logger = logging.getLogger(__name__)


class LikeLedger:
    """Single source of truth for whether a user likes a post or reply.

    The ledger is the only code that moves ``like_count`` on posts and
    replies. Each toggle is one transaction: the like row and the counter
    change commit together.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.likes = LikeRepository(session)
        self.posts = PostRepository(session)
        self.replies = ReplyRepository(session)

    def toggle(self, user_id: str, target_id: str, target_type: TargetType) -> LikeResult:
        """Flip the like state of ``user_id`` on a target.

        Returns the new state and the counter as re-read from the target row.
        If a concurrent toggle by the same user inserts first, the unique
        constraint rejects ours; the transaction is rolled back and the
        current state is reported instead of an error. An existing like can
        always be taken back, even after the target was hidden.

        Raises:
            NotFoundError: If a new like targets something missing or not
                published.
        """
        try:
            with unit_of_work(self.session):
                existing = self.likes.find(user_id, target_id, target_type)
                if existing is not None:
                    # A concurrent unlike may already have removed the row.
                    if self.likes.delete_by_id(existing.id):
                        self._adjust(target_id, target_type, -1)
                    is_liked = False
                else:
                    self._ensure_target(target_id, target_type)
                    self.likes.add(user_id, target_id, target_type)
                    self._adjust(target_id, target_type, 1)
                    is_liked = True
                like_count = self._read_count(target_id, target_type)
        except IntegrityError:
            logger.warning(
                "Concurrent like on %s %s by %s; resolving to current state",
                target_type.value,
                target_id,
                user_id,
            )
            return self.current(user_id, target_id, target_type)

        logger.info(
            "User %s %s %s %s (count=%d)",
            user_id,
            "liked" if is_liked else "unliked",
            target_type.value,
            target_id,
            like_count,
        )
        return LikeResult(is_liked=is_liked, like_count=like_count)

    def current(self, user_id: str, target_id: str, target_type: TargetType) -> LikeResult:
        """Report the stored like state and counter without changing anything."""
        return LikeResult(
            is_liked=self.is_liked(user_id, target_id, target_type),
            like_count=self._read_count(target_id, target_type),
        )

    def is_liked(self, user_id: str, target_id: str, target_type: TargetType) -> bool:
        return self.likes.find(user_id, target_id, target_type) is not None

    def liked_ids(
        self,
        user_id: str,
        target_type: TargetType,
        target_ids: Iterable[str],
    ) -> set[str]:
        """Return the subset of ``target_ids`` liked by ``user_id`` using one query."""
        return self.likes.liked_target_ids(user_id, target_type, target_ids)

    def purge_target(self, target_id: str, target_type: TargetType) -> int:
        """Delete every like on a target; runs inside the caller's unit of work."""
        removed = self.likes.delete_for_target(target_id, target_type)
        logger.debug("Removed %d likes from %s %s", removed, target_type.value, target_id)
        return removed

    def _ensure_target(self, target_id: str, target_type: TargetType) -> None:
        if target_type == TargetType.POST:
            found = self.posts.get_published(target_id) is not None
        else:
            found = self.replies.get_published(target_id) is not None
        if not found:
            raise NotFoundError(f"{target_type.value.capitalize()} not found")

    def _adjust(self, target_id: str, target_type: TargetType, delta: int) -> None:
        if target_type == TargetType.POST:
            self.posts.adjust_like_count(target_id, delta)
        else:
            self.replies.adjust_like_count(target_id, delta)

    def _read_count(self, target_id: str, target_type: TargetType) -> int:
        if target_type == TargetType.POST:
            count = self.posts.like_count(target_id)
        else:
            count = self.replies.like_count(target_id)
        return count or 0
