"""Like-related Pydantic schemas."""

from pydantic import BaseModel

from forum_core.models.status import TargetType


class LikeToggle(BaseModel):
    """Body of a like toggle request."""

    target_type: TargetType = TargetType.POST


class LikeResult(BaseModel):
    """Outcome of a toggle: the new state and the re-read counter."""

    is_liked: bool
    like_count: int
