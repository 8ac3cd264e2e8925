# src/forum_core/api/v1/endpoints/replies.py
"""Endpoints for editing and deleting individual replies."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from forum_core.schemas.reply import ReplyResponse, ReplyUpdate

from ..dependencies import CurrentActorDep, ForumServiceDep

router = APIRouter(prefix="/replies", tags=["replies"])


@router.put("/{reply_id}", response_model=ReplyResponse)
async def update_reply(
    reply_id: str,
    patch: ReplyUpdate,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> ReplyResponse:
    """Edit a reply's content or hide/unhide it."""
    return forum.update_reply(reply_id, patch, current_actor)


@router.delete("/{reply_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reply(
    reply_id: str,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> Response:
    forum.delete_reply(reply_id, current_actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
