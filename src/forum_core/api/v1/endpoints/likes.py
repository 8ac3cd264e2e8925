# src/forum_core/api/v1/endpoints/likes.py
"""Like toggle endpoint for posts and replies."""

from __future__ import annotations

from fastapi import APIRouter

from forum_core.schemas.like import LikeResult, LikeToggle

from ..dependencies import CurrentActorDep, ForumServiceDep

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("/{target_id}", response_model=LikeResult)
async def toggle_like(
    target_id: str,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
    toggle: LikeToggle | None = None,
) -> LikeResult:
    """Like the target, or remove the like if the caller already gave one.

    Args:
        target_id: Post or reply identifier
        current_actor: Authenticated caller
        forum: Forum service bound to the request session
        toggle: Optional body naming the target type; defaults to a post

    Returns:
        The new like state and the target's like count
    """
    target = toggle or LikeToggle()
    return forum.toggle_like(current_actor.id, target_id, target.target_type)
