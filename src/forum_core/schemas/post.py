"""Post-related Pydantic schemas."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from forum_core.models.status import ContentStatus, RequiredPlan, UserRole


class PostSort(StrEnum):
    """Sort policies for post listings."""

    LATEST = "latest"
    POPULAR = "popular"
    MOST_REPLIES = "mostReplies"
    MOST_VIEWS = "mostViews"


class PostFilter(BaseModel):
    """Predicates ANDed together when listing posts."""

    category_id: str | None = None
    search: str | None = Field(None, description="Case-insensitive substring of title or content")
    tags: list[str] | None = Field(None, description="Match posts carrying any of these tags")
    author_id: str | None = None
    is_pinned: bool | None = None


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    category_id: str
    tags: list[str] = Field(default_factory=list)
    required_plan: RequiredPlan = RequiredPlan.FREE


class PostUpdate(BaseModel):
    """Partial update of a post; omitted fields are left untouched."""

    title: str | None = Field(None, min_length=1, max_length=200)
    content: str | None = Field(None, min_length=1)
    category_id: str | None = None
    tags: list[str] | None = None
    required_plan: RequiredPlan | None = None
    status: ContentStatus | None = None

    @field_validator("status")
    @classmethod
    def _no_delete_via_update(cls, value: ContentStatus | None) -> ContentStatus | None:
        if value == ContentStatus.DELETED:
            raise ValueError("use the delete operation to remove a post")
        return value


class PostLockUpdate(BaseModel):
    is_locked: bool


class PostPinUpdate(BaseModel):
    is_pinned: bool


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    author_id: str
    author_name: str
    author_avatar: str | None
    author_role: UserRole
    category_id: str
    category_name: str
    tags: list[str]
    required_plan: RequiredPlan
    view_count: int
    like_count: int
    reply_count: int
    is_pinned: bool
    is_locked: bool
    status: ContentStatus
    last_reply_at: datetime | None
    created_at: datetime
    updated_at: datetime
    # Only set when the listing was requested on behalf of a user.
    is_liked: bool | None = None
