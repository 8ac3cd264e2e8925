"""Community statistics endpoint."""

from fastapi import APIRouter

from forum_core.schemas.stats import ForumStats

from ..dependencies import ForumServiceDep

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=ForumStats)
async def get_stats(forum: ForumServiceDep) -> ForumStats:
    """Return post, reply and author totals plus the busiest categories."""
    return forum.get_stats()
