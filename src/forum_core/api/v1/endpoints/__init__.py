# src/forum_core/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .categories import router as categories_router
from .likes import router as likes_router
from .posts import router as posts_router
from .replies import router as replies_router
from .stats import router as stats_router

__all__ = [
    "categories_router",
    "likes_router",
    "posts_router",
    "replies_router",
    "stats_router",
]
