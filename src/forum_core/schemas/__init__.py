"""
Pydantic schemas for API request/response models.

These schemas define the structure of forum data for serialization and validation.
"""

from .actor import Actor
from .category import CategoryCreate, CategoryResponse, CategoryStatusUpdate
from .common import Page, normalize_paging
from .like import LikeResult, LikeToggle
from .post import (
    PostCreate,
    PostFilter,
    PostLockUpdate,
    PostPinUpdate,
    PostResponse,
    PostSort,
    PostUpdate,
)
from .reply import ReplyCreate, ReplyNode, ReplyResponse, ReplySort, ReplyUpdate
from .stats import ForumStats

__all__ = [
    "Actor",
    "CategoryCreate", "CategoryResponse", "CategoryStatusUpdate",
    "Page", "normalize_paging",
    "LikeResult", "LikeToggle",
    "PostCreate", "PostFilter", "PostLockUpdate", "PostPinUpdate",
    "PostResponse", "PostSort", "PostUpdate",
    "ReplyCreate", "ReplyNode", "ReplyResponse", "ReplySort", "ReplyUpdate",
    "ForumStats",
]
