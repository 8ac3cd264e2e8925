# src/forum_core/services/__init__.py
"""Business logic services for the forum core."""

from .category_store import CategoryStore
from .forum import ForumService
from .like_ledger import LikeLedger
from .post_store import PostStore
from .query_engine import QueryEngine
from .read_tracker import ReadTracker
from .reply_tree import ReplyTree
from .stats_service import StatsService

__all__ = [
    "CategoryStore",
    "ForumService",
    "LikeLedger",
    "PostStore",
    "QueryEngine",
    "ReadTracker",
    "ReplyTree",
    "StatsService",
]
