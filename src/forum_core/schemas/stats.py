"""Community statistics schema."""

from pydantic import BaseModel

from .category import CategoryResponse


class ForumStats(BaseModel):
    total_posts: int
    total_users: int
    total_replies: int
    active_users: int
    top_categories: list[CategoryResponse]
