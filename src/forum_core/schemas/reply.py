"""Reply-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from forum_core.models.status import ContentStatus, UserRole


class ReplySort(StrEnum):
    LATEST = "latest"
    OLDEST = "oldest"
    POPULAR = "popular"


class ReplyCreate(BaseModel):
    """Schema for creating a reply; ``parent_id`` nests it under another reply."""

    content: str = Field(..., min_length=1)
    parent_id: str | None = None


class ReplyUpdate(BaseModel):
    content: str | None = Field(None, min_length=1)
    status: ContentStatus | None = None

    @field_validator("status")
    @classmethod
    def _no_delete_via_update(cls, value: ContentStatus | None) -> ContentStatus | None:
        if value == ContentStatus.DELETED:
            raise ValueError("use the delete operation to remove a reply")
        return value


class ReplyResponse(BaseModel):
    """Schema for reply information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    parent_id: str | None
    author_id: str
    author_name: str
    author_avatar: str | None
    author_role: UserRole
    content: str
    like_count: int
    is_author: bool
    status: ContentStatus
    created_at: datetime
    updated_at: datetime
    is_liked: bool | None = None


class ReplyNode(ReplyResponse):
    """A reply together with its nested children."""

    children: list[ReplyNode] = Field(default_factory=list)


ReplyNode.model_rebuild()
