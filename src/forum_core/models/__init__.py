"""SQLAlchemy models for the forum core."""

from .category import Category
from .like import Like
from .post import Post, PostTag
from .read_record import ReadRecord
from .reply import Reply
from .status import CategoryStatus, ContentStatus, RequiredPlan, TargetType, UserRole
from .user import User

__all__ = [
    "Category",
    "Like",
    "Post", "PostTag",
    "ReadRecord",
    "Reply",
    "CategoryStatus", "ContentStatus", "RequiredPlan", "TargetType", "UserRole",
    "User",
]
