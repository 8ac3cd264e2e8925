# src/forum_core/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    categories_router,
    likes_router,
    posts_router,
    replies_router,
    stats_router,
)

__all__ = [
    "categories_router",
    "likes_router",
    "posts_router",
    "replies_router",
    "stats_router",
]
