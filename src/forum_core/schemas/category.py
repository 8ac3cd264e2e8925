"""Category-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from forum_core.models.status import CategoryStatus


class CategoryCreate(BaseModel):
    """Schema for creating a new category."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    icon: str = Field(default="MessageSquare", max_length=50)
    color: str = Field(default="#3B82F6", max_length=20)


class CategoryStatusUpdate(BaseModel):
    status: CategoryStatus


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    icon: str
    color: str
    post_count: int
    status: CategoryStatus
    created_at: datetime
    updated_at: datetime
