"""Read side: filtered, sorted and paginated listings annotated for the reader."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_core.core.errors import NotFoundError
from forum_core.core.settings import settings
from forum_core.models.post import Post
from forum_core.models.reply import Reply
from forum_core.models.status import TargetType
from forum_core.repositories.post_repo import PostRepository
from forum_core.repositories.reply_repo import ReplyRepository
from forum_core.schemas.common import Page, normalize_paging
from forum_core.schemas.post import PostFilter, PostResponse, PostSort
from forum_core.schemas.reply import ReplyNode, ReplyResponse, ReplySort
from forum_core.services.like_ledger import LikeLedger
from forum_core.services.reply_tree import ReplyTree

logger = logging.getLogger(__name__)

POST_ORDERINGS = {
    PostSort.LATEST: (Post.is_pinned.desc(), Post.created_at.desc()),
    PostSort.POPULAR: (Post.like_count.desc(), Post.reply_count.desc(), Post.created_at.desc()),
    PostSort.MOST_REPLIES: (Post.reply_count.desc(), Post.created_at.desc()),
    PostSort.MOST_VIEWS: (Post.view_count.desc(), Post.created_at.desc()),
}


class QueryEngine:
    """Stateless listing queries; never writes."""

    def __init__(
        self,
        session: Session,
        like_ledger: LikeLedger | None = None,
        reply_tree: ReplyTree | None = None,
    ) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.replies = ReplyRepository(session)
        self.like_ledger = like_ledger or LikeLedger(session)
        self.reply_tree = reply_tree or ReplyTree(session, self.like_ledger)

    def list_posts(
        self,
        filters: PostFilter | None = None,
        sort: PostSort = PostSort.LATEST,
        page: int = 1,
        limit: int | None = None,
        actor_id: str | None = None,
    ) -> Page[PostResponse]:
        """Return one page of published posts matching every filter.

        ``total`` counts the whole filtered set, so a page past the end
        comes back empty with accurate totals.
        """
        page, limit = normalize_paging(
            page,
            settings.default_page_size if limit is None else limit,
            settings.max_page_size,
        )
        conditions = self.posts.filter_conditions(filters)
        total = self.posts.count(conditions)
        order_by = (*POST_ORDERINGS[sort], Post.id.desc())
        rows = self.posts.page(conditions, order_by, offset=(page - 1) * limit, limit=limit)

        items = [PostResponse.model_validate(row) for row in rows]
        if actor_id is not None:
            liked = self.like_ledger.liked_ids(actor_id, TargetType.POST, (p.id for p in items))
            for item in items:
                item.is_liked = item.id in liked
        logger.debug("Listed %d of %d posts (page %d, sort %s)", len(items), total, page, sort)
        return Page[PostResponse].build(items, total=total, page=page, limit=limit)

    def list_replies(
        self,
        post_id: str,
        parent_id: str | None = None,
        sort: ReplySort = ReplySort.LATEST,
        page: int = 1,
        limit: int | None = None,
        actor_id: str | None = None,
    ) -> Page[ReplyResponse]:
        """Return one level of a post's reply tree.

        Without ``parent_id`` the top-level replies are listed; otherwise the
        direct children of that reply, which must belong to ``post_id``.
        """
        if self.posts.get_published(post_id) is None:
            raise NotFoundError("Post not found")
        page, limit = normalize_paging(
            page,
            settings.default_page_size if limit is None else limit,
            settings.max_page_size,
        )
        if parent_id is None:
            rows, total = self.reply_tree.list_top_level(post_id, sort, page, limit)
        else:
            parent = self.replies.get(parent_id)
            if parent is None or parent.post_id != post_id:
                raise NotFoundError("Parent reply not found")
            rows, total = self.reply_tree.list_children(parent_id, sort, page, limit)

        items = [ReplyResponse.model_validate(row) for row in rows]
        self._annotate_replies(items, actor_id)
        return Page[ReplyResponse].build(items, total=total, page=page, limit=limit)

    def reply_thread(self, post_id: str, actor_id: str | None = None) -> list[ReplyNode]:
        """Assemble every published reply of a post into a nested forest.

        Children are ordered oldest first. A reply whose parent is hidden or
        deleted is returned as a root.
        """
        if self.posts.get_published(post_id) is None:
            raise NotFoundError("Post not found")
        rows: list[Reply] = self.replies.list_published_for_post(post_id)
        nodes = {row.id: ReplyNode.model_validate(row) for row in rows}
        self._annotate_replies(list(nodes.values()), actor_id)

        roots: list[ReplyNode] = []
        for row in rows:
            node = nodes[row.id]
            parent = nodes.get(row.parent_id) if row.parent_id else None
            if parent is None:
                roots.append(node)
            else:
                parent.children.append(node)
        return roots

    def _annotate_replies(self, items: list[ReplyResponse], actor_id: str | None) -> None:
        if actor_id is None or not items:
            return
        liked = self.like_ledger.liked_ids(actor_id, TargetType.REPLY, (r.id for r in items))
        for item in items:
            item.is_liked = item.id in liked
