"""Community-wide aggregate figures."""
from __future__ import annotations

from datetime import timedelta

from sqlalchemy.orm import Session

from forum_core.core.settings import settings
from forum_core.db.time import utcnow
from forum_core.repositories.post_repo import PostRepository
from forum_core.repositories.reply_repo import ReplyRepository
from forum_core.schemas.category import CategoryResponse
from forum_core.schemas.stats import ForumStats
from forum_core.services.category_store import CategoryStore


class StatsService:
    def __init__(self, session: Session, categories: CategoryStore | None = None) -> None:
        self.session = session
        self.posts = PostRepository(session)
        self.replies = ReplyRepository(session)
        self.categories = categories or CategoryStore(session)

    def get_stats(self) -> ForumStats:
        """Count published content, authors and the busiest categories.

        ``total_users`` counts everyone who has ever written a post;
        ``active_users`` only those who posted inside the activity window.
        """
        since = utcnow() - timedelta(days=settings.active_user_window_days)
        top = self.categories.list_active(limit=settings.top_categories_limit)
        return ForumStats(
            total_posts=self.posts.count_published(),
            total_users=self.posts.count_distinct_authors(),
            total_replies=self.replies.count_published(),
            active_users=self.posts.count_distinct_authors(since=since),
            top_categories=[CategoryResponse.model_validate(c) for c in top],
        )
