"""Threaded replies and the per-post reply counter."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_core.core.errors import (
    LockedResourceError,
    NotFoundError,
    PermissionDeniedError,
)
from forum_core.core.settings import settings
from forum_core.db.session import unit_of_work
from forum_core.db.time import utcnow
from forum_core.models.reply import Reply
from forum_core.models.status import (
    ContentStatus,
    TargetType,
    ensure_transition,
    published_delta,
)
from forum_core.repositories.post_repo import PostRepository
from forum_core.repositories.reply_repo import ReplyRepository
from forum_core.repositories.user_repo import UserRepository
from forum_core.schemas.actor import Actor
from forum_core.schemas.common import normalize_paging
from forum_core.schemas.reply import ReplySort, ReplyUpdate
from forum_core.services.like_ledger import LikeLedger

logger = logging.getLogger(__name__)

REPLY_ORDERINGS = {
    ReplySort.LATEST: (Reply.created_at.desc(),),
    ReplySort.OLDEST: (Reply.created_at.asc(),),
    ReplySort.POPULAR: (Reply.like_count.desc(), Reply.created_at.desc()),
}


class ReplyTree:
    """Owns replies, their parent/child edges and ``Post.reply_count``.

    Replies are listed one level at a time. Deleting a reply does not touch
    its children: they stay visible under a deleted parent.
    """

    def __init__(self, session: Session, like_ledger: LikeLedger | None = None) -> None:
        self.session = session
        self.replies = ReplyRepository(session)
        self.posts = PostRepository(session)
        self.users = UserRepository(session)
        self.like_ledger = like_ledger or LikeLedger(session)

    def get(self, reply_id: str) -> Reply:
        """Return a reply in any status except deleted."""
        reply = self.replies.get(reply_id)
        if reply is None or reply.status == ContentStatus.DELETED:
            raise NotFoundError("Reply not found")
        return reply

    def list_top_level(
        self,
        post_id: str,
        sort: ReplySort = ReplySort.LATEST,
        page: int = 1,
        limit: int | None = None,
    ) -> tuple[list[Reply], int]:
        """Return one page of top-level replies and the total across pages."""
        return self._list_level(post_id, None, sort, page, limit)

    def list_children(
        self,
        parent_id: str,
        sort: ReplySort = ReplySort.LATEST,
        page: int = 1,
        limit: int | None = None,
    ) -> tuple[list[Reply], int]:
        """Return one page of direct children of ``parent_id``.

        The parent itself may be hidden or deleted; its children are still listed.
        """
        parent = self.replies.get(parent_id)
        if parent is None:
            raise NotFoundError("Parent reply not found")
        return self._list_level(parent.post_id, parent_id, sort, page, limit)

    def _list_level(
        self,
        post_id: str,
        parent_id: str | None,
        sort: ReplySort,
        page: int,
        limit: int | None,
    ) -> tuple[list[Reply], int]:
        page, limit = normalize_paging(
            page,
            settings.default_page_size if limit is None else limit,
            settings.max_page_size,
        )
        conditions = self.replies.level_conditions(post_id, parent_id)
        total = self.replies.count(conditions)
        order_by = (*REPLY_ORDERINGS[sort], Reply.id.desc())
        items = self.replies.page(conditions, order_by, offset=(page - 1) * limit, limit=limit)
        return items, total

    def create(
        self,
        post_id: str,
        actor: Actor,
        content: str,
        parent_id: str | None = None,
    ) -> Reply:
        """Create a reply and count it on the post.

        Raises:
            NotFoundError: Post, author or parent reply is missing or not published.
            LockedResourceError: The post is locked for replies.
        """
        with unit_of_work(self.session):
            post = self.posts.get_published(post_id)
            if post is None:
                raise NotFoundError("Post not found")
            if post.is_locked:
                raise LockedResourceError("Post is locked for replies")
            if self.users.get(actor.id) is None:
                raise NotFoundError("User not found")
            if parent_id is not None and self.replies.get_published(parent_id, post_id) is None:
                raise NotFoundError("Parent reply not found")

            reply = self.replies.add(
                Reply(
                    post_id=post_id,
                    parent_id=parent_id,
                    author_id=actor.id,
                    author_name=actor.display_name,
                    author_avatar=actor.avatar_url,
                    author_role=actor.role,
                    content=content,
                    like_count=0,
                    is_author=post.author_id == actor.id,
                    status=ContentStatus.PUBLISHED,
                )
            )
            self.posts.record_reply(post_id, utcnow())
        logger.info("Reply %s created on post %s by %s", reply.id, post_id, actor.id)
        return reply

    def update(self, reply_id: str, patch: ReplyUpdate, actor: Actor) -> Reply:
        """Edit content or move a reply between published and hidden.

        Publishing a hidden reply again counts as replying, so the post must
        still be published and unlocked.
        """
        with unit_of_work(self.session):
            reply = self.get(reply_id)
            if not actor.owns(reply.author_id):
                raise PermissionDeniedError("Permission denied")
            if patch.content is not None:
                reply.content = patch.content
            if patch.status is not None and patch.status != reply.status:
                ensure_transition(reply.status, patch.status)
                if patch.status == ContentStatus.PUBLISHED:
                    post = self.posts.get_published(reply.post_id)
                    if post is None:
                        raise NotFoundError("Post not found")
                    if post.is_locked:
                        raise LockedResourceError("Post is locked for replies")
                delta = published_delta(reply.status, patch.status)
                reply.status = patch.status
                if delta:
                    self.posts.adjust_reply_count(reply.post_id, delta)
        logger.info("Reply %s updated by %s", reply_id, actor.id)
        return reply

    def soft_delete(self, reply_id: str, actor: Actor) -> None:
        """Tombstone a reply, drop its likes and uncount it from the post."""
        with unit_of_work(self.session):
            reply = self.get(reply_id)
            if not actor.owns(reply.author_id):
                raise PermissionDeniedError("Permission denied")
            previous = reply.status
            ensure_transition(previous, ContentStatus.DELETED)
            reply.status = ContentStatus.DELETED
            reply.like_count = 0
            self.like_ledger.purge_target(reply.id, TargetType.REPLY)
            delta = published_delta(previous, ContentStatus.DELETED)
            if delta:
                self.posts.adjust_reply_count(reply.post_id, delta)
        logger.info("Reply %s deleted by %s", reply_id, actor.id)
