# src/forum_core/services/forum.py
"""Operation contract of the forum core.

``ForumService`` wires the stores together over one session and converts
ORM rows into response schemas while that session is still open. The HTTP
layer and scripts talk to this class only.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from forum_core.core.errors import PermissionDeniedError
from forum_core.models.status import CategoryStatus, TargetType
from forum_core.schemas.actor import Actor
from forum_core.schemas.category import CategoryCreate, CategoryResponse
from forum_core.schemas.common import Page
from forum_core.schemas.like import LikeResult
from forum_core.schemas.post import PostCreate, PostFilter, PostResponse, PostSort, PostUpdate
from forum_core.schemas.reply import (
    ReplyNode,
    ReplyResponse,
    ReplySort,
    ReplyUpdate,
)
from forum_core.schemas.stats import ForumStats
from forum_core.services.category_store import CategoryStore
from forum_core.services.like_ledger import LikeLedger
from forum_core.services.post_store import PostStore
from forum_core.services.query_engine import QueryEngine
from forum_core.services.read_tracker import ReadTracker
from forum_core.services.reply_tree import ReplyTree
from forum_core.services.stats_service import StatsService


class ForumService:
    """Facade over the category, post, reply, like and query components."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.categories = CategoryStore(session)
        self.likes = LikeLedger(session)
        self.reads = ReadTracker(session)
        self.replies = ReplyTree(session, self.likes)
        self.posts = PostStore(session, self.categories, self.likes, self.reads)
        self.queries = QueryEngine(session, self.likes, self.replies)
        self.stats = StatsService(session, self.categories)

    # Categories

    def list_categories(self) -> list[CategoryResponse]:
        return [CategoryResponse.model_validate(c) for c in self.categories.list_active()]

    def create_category(self, actor: Actor, data: CategoryCreate) -> CategoryResponse:
        if not actor.is_admin:
            raise PermissionDeniedError("Only admins can create categories")
        return CategoryResponse.model_validate(self.categories.create(data))

    def set_category_status(
        self, actor: Actor, category_id: str, status: CategoryStatus
    ) -> CategoryResponse:
        if not actor.is_admin:
            raise PermissionDeniedError("Only admins can change category status")
        return CategoryResponse.model_validate(self.categories.set_status(category_id, status))

    # Posts

    def create_post(self, actor: Actor, data: PostCreate) -> PostResponse:
        return PostResponse.model_validate(self.posts.create(actor, data))

    def list_posts(
        self,
        filters: PostFilter | None = None,
        sort: PostSort = PostSort.LATEST,
        page: int = 1,
        limit: int | None = None,
        actor_id: str | None = None,
    ) -> Page[PostResponse]:
        return self.queries.list_posts(filters, sort, page, limit, actor_id)

    def get_post(self, post_id: str, actor_id: str | None = None) -> PostResponse:
        """Open a post for reading: counts the view and reports ``is_liked``."""
        response = PostResponse.model_validate(self.posts.open(post_id, actor_id))
        if actor_id is not None:
            response.is_liked = self.likes.is_liked(actor_id, post_id, TargetType.POST)
        return response

    def update_post(self, post_id: str, patch: PostUpdate, actor: Actor) -> PostResponse:
        return PostResponse.model_validate(self.posts.update(post_id, patch, actor))

    def delete_post(self, post_id: str, actor: Actor) -> None:
        self.posts.soft_delete(post_id, actor)

    def set_post_lock(self, post_id: str, locked: bool, actor: Actor) -> PostResponse:
        return PostResponse.model_validate(self.posts.set_locked(post_id, locked, actor))

    def set_post_pinned(self, post_id: str, pinned: bool, actor: Actor) -> PostResponse:
        return PostResponse.model_validate(self.posts.set_pinned(post_id, pinned, actor))

    # Replies

    def create_reply(
        self,
        actor: Actor,
        post_id: str,
        content: str,
        parent_id: str | None = None,
    ) -> ReplyResponse:
        return ReplyResponse.model_validate(
            self.replies.create(post_id, actor, content, parent_id)
        )

    def list_replies(
        self,
        post_id: str,
        parent_id: str | None = None,
        sort: ReplySort = ReplySort.LATEST,
        page: int = 1,
        limit: int | None = None,
        actor_id: str | None = None,
    ) -> Page[ReplyResponse]:
        return self.queries.list_replies(post_id, parent_id, sort, page, limit, actor_id)

    def reply_thread(self, post_id: str, actor_id: str | None = None) -> list[ReplyNode]:
        return self.queries.reply_thread(post_id, actor_id)

    def update_reply(self, reply_id: str, patch: ReplyUpdate, actor: Actor) -> ReplyResponse:
        return ReplyResponse.model_validate(self.replies.update(reply_id, patch, actor))

    def delete_reply(self, reply_id: str, actor: Actor) -> None:
        self.replies.soft_delete(reply_id, actor)

    # Likes and stats

    def toggle_like(self, actor_id: str, target_id: str, target_type: TargetType) -> LikeResult:
        if target_type == TargetType.POST:
            return self.posts.toggle_like(actor_id, target_id)
        return self.posts.toggle_reply_like(actor_id, target_id)

    def get_stats(self) -> ForumStats:
        return self.stats.get_stats()
