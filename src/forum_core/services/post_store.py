"""Post lifecycle and the cross-entity updates it drives."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum_core.core.errors import NotFoundError, PermissionDeniedError
from forum_core.db.session import unit_of_work
from forum_core.models.post import Post
from forum_core.models.status import (
    ContentStatus,
    TargetType,
    ensure_transition,
    published_delta,
)
from forum_core.repositories.post_repo import PostRepository
from forum_core.repositories.user_repo import UserRepository
from forum_core.schemas.actor import Actor
from forum_core.schemas.like import LikeResult
from forum_core.schemas.post import PostCreate, PostUpdate
from forum_core.services.category_store import CategoryStore
from forum_core.services.like_ledger import LikeLedger
from forum_core.services.read_tracker import ReadTracker

logger = logging.getLogger(__name__)


class PostStore:
    """Owns posts and keeps category counters, likes and read markers in step.

    Every public write runs as one unit of work: the post change and all
    counter or cascade updates it implies commit together.
    """

    def __init__(
        self,
        session: Session,
        categories: CategoryStore | None = None,
        like_ledger: LikeLedger | None = None,
        read_tracker: ReadTracker | None = None,
    ) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.users = UserRepository(session)
        self.categories = categories or CategoryStore(session)
        self.like_ledger = like_ledger or LikeLedger(session)
        self.read_tracker = read_tracker or ReadTracker(session)

    def create(self, actor: Actor, data: PostCreate) -> Post:
        """Publish a new post and count it in its category.

        Author and category display fields are copied onto the post.

        Raises:
            NotFoundError: If the category is missing or inactive, or the
                author is unknown.
        """
        with unit_of_work(self.session):
            category = self.categories.get_active(data.category_id)
            if self.users.get(actor.id) is None:
                raise NotFoundError("User not found")

            post = Post(
                title=data.title,
                content=data.content,
                author_id=actor.id,
                author_name=actor.display_name,
                author_avatar=actor.avatar_url,
                author_role=actor.role,
                category_id=category.id,
                category_name=category.name,
                required_plan=data.required_plan,
                view_count=0,
                like_count=0,
                reply_count=0,
                is_pinned=False,
                is_locked=False,
                status=ContentStatus.PUBLISHED,
            )
            post.replace_tags(data.tags)
            self.posts.add(post)
            self.categories.increment_post_count(category.id, 1)
        logger.info("Post %s created in category %s by %s", post.id, data.category_id, actor.id)
        return post

    def get(self, post_id: str) -> Post:
        """Return a published post without recording a read."""
        post = self.posts.get_published(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def open(self, post_id: str, actor_id: str | None = None) -> Post:
        """Return a published post, recording the read and counting the view.

        A reader's repeat visits do not add views; anonymous reads always do.
        """
        self.get(post_id)
        if actor_id is None:
            with unit_of_work(self.session):
                self.increment_view_count(post_id)
        else:
            self._track_read(actor_id, post_id)
        return self.get(post_id)

    def _track_read(self, actor_id: str, post_id: str) -> None:
        try:
            with unit_of_work(self.session):
                if self.read_tracker.record_read(actor_id, post_id):
                    self.increment_view_count(post_id)
        except IntegrityError:
            # A parallel first read by the same user won; its view already counted.
            logger.warning("Concurrent first read of post %s by %s", post_id, actor_id)
            with unit_of_work(self.session):
                self.read_tracker.record_read(actor_id, post_id)

    def increment_view_count(self, post_id: str) -> None:
        """Atomically add one view; runs inside the caller's unit of work."""
        if not self.posts.increment_view_count(post_id):
            raise NotFoundError("Post not found")

    def update(self, post_id: str, patch: PostUpdate, actor: Actor) -> Post:
        """Edit a post as its author or an admin.

        Moving a post to another category, or in or out of ``published``,
        shifts the category counters in the same transaction as the edit.
        """
        with unit_of_work(self.session):
            post = self._get_editable(post_id, actor)
            previous = post.status
            target = patch.status or previous
            ensure_transition(previous, target)

            if patch.category_id is not None and patch.category_id != post.category_id:
                new_category = self.categories.get_active(patch.category_id)
                if previous == ContentStatus.PUBLISHED:
                    self.categories.increment_post_count(post.category_id, -1)
                if target == ContentStatus.PUBLISHED:
                    self.categories.increment_post_count(new_category.id, 1)
                post.category_id = new_category.id
                post.category_name = new_category.name
            else:
                if target == ContentStatus.PUBLISHED and previous != ContentStatus.PUBLISHED:
                    # Republishing counts the post again, which an inactive category refuses.
                    self.categories.get_active(post.category_id)
                self.categories.increment_post_count(
                    post.category_id, published_delta(previous, target)
                )
            post.status = target

            if patch.title is not None:
                post.title = patch.title
            if patch.content is not None:
                post.content = patch.content
            if patch.tags is not None:
                post.replace_tags(patch.tags)
            if patch.required_plan is not None:
                post.required_plan = patch.required_plan
        logger.info("Post %s updated by %s", post_id, actor.id)
        return post

    def soft_delete(self, post_id: str, actor: Actor) -> None:
        """Tombstone a post and clean up what points at it.

        Likes on the post and every read marker are removed and the category
        count drops by one. Replies are left untouched.
        """
        with unit_of_work(self.session):
            post = self._get_editable(post_id, actor)
            previous = post.status
            ensure_transition(previous, ContentStatus.DELETED)
            post.status = ContentStatus.DELETED
            post.like_count = 0
            likes = self.like_ledger.purge_target(post_id, TargetType.POST)
            reads = self.read_tracker.purge_post(post_id)
            self.categories.increment_post_count(
                post.category_id, published_delta(previous, ContentStatus.DELETED)
            )
        logger.info(
            "Post %s deleted by %s (%d likes, %d reads removed)",
            post_id,
            actor.id,
            likes,
            reads,
        )

    def set_locked(self, post_id: str, locked: bool, actor: Actor) -> Post:
        """Open or close a post for replies; author or admin."""
        with unit_of_work(self.session):
            post = self._get_editable(post_id, actor)
            post.is_locked = locked
        logger.info("Post %s %s by %s", post_id, "locked" if locked else "unlocked", actor.id)
        return post

    def set_pinned(self, post_id: str, pinned: bool, actor: Actor) -> Post:
        """Pin or unpin a post; admin only since pins reorder everyone's listing."""
        if not actor.is_admin:
            raise PermissionDeniedError("Permission denied")
        with unit_of_work(self.session):
            post = self._get_editable(post_id, actor)
            post.is_pinned = pinned
        logger.info("Post %s %s by %s", post_id, "pinned" if pinned else "unpinned", actor.id)
        return post

    def toggle_like(self, actor_id: str, post_id: str) -> LikeResult:
        return self.like_ledger.toggle(actor_id, post_id, TargetType.POST)

    def toggle_reply_like(self, actor_id: str, reply_id: str) -> LikeResult:
        return self.like_ledger.toggle(actor_id, reply_id, TargetType.REPLY)

    def _get_editable(self, post_id: str, actor: Actor) -> Post:
        post = self.posts.get(post_id)
        if post is None or post.status == ContentStatus.DELETED:
            raise NotFoundError("Post not found")
        if not actor.owns(post.author_id):
            raise PermissionDeniedError("Permission denied")
        return post
