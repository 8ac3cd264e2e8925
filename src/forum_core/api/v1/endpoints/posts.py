# src/forum_core/api/v1/endpoints/posts.py
"""Post and reply-listing endpoints for the forum API."""

from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from forum_core.core.settings import settings
from forum_core.schemas.actor import Actor
from forum_core.schemas.common import Page
from forum_core.schemas.post import (
    PostCreate,
    PostFilter,
    PostLockUpdate,
    PostPinUpdate,
    PostResponse,
    PostSort,
    PostUpdate,
)
from forum_core.schemas.reply import ReplyCreate, ReplyNode, ReplyResponse, ReplySort

from ..dependencies import CurrentActorDep, ForumServiceDep, OptionalActorDep

router = APIRouter(prefix="/posts", tags=["posts"])


def _actor_id(actor: Actor | None) -> str | None:
    return actor.id if actor is not None else None


@router.get("/", response_model=Page[PostResponse])
async def list_posts(
    forum: ForumServiceDep,
    current_actor: OptionalActorDep,
    category_id: str | None = Query(None, description="Only posts in this category"),
    search: str | None = Query(None, description="Substring of title or content"),
    tags: list[str] | None = Query(None, description="Posts carrying any of these tags"),
    author_id: str | None = Query(None),
    is_pinned: bool | None = Query(None),
    sort: PostSort = Query(PostSort.LATEST),
    page: int = Query(1, description="1-indexed page number"),
    limit: int = Query(settings.default_page_size, description="Page size"),
) -> Page[PostResponse]:
    """List published posts with filters, sorting and pagination.

    Args:
        forum: Forum service bound to the request session
        current_actor: Caller, if a bearer token was sent; enables ``is_liked``
        category_id: Filter by category
        search: Case-insensitive search over title and content
        tags: Match any of the given tags
        author_id: Filter by author
        is_pinned: Filter by pinned flag
        sort: Sort policy
        page: Page number, clamped to at least 1
        limit: Page size, clamped to the configured maximum

    Returns:
        One page of posts plus totals
    """
    filters = PostFilter(
        category_id=category_id,
        search=search,
        tags=tags,
        author_id=author_id,
        is_pinned=is_pinned,
    )
    return forum.list_posts(filters, sort, page, limit, _actor_id(current_actor))


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> PostResponse:
    """Publish a new post in an active category."""
    return forum.create_post(current_actor, post_data)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    forum: ForumServiceDep,
    current_actor: OptionalActorDep,
) -> PostResponse:
    """Open a post; counts the view and records the read for signed-in users."""
    return forum.get_post(post_id, _actor_id(current_actor))


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    patch: PostUpdate,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> PostResponse:
    return forum.update_post(post_id, patch, current_actor)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> Response:
    """Soft-delete a post as its author or an admin."""
    forum.delete_post(post_id, current_actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{post_id}/lock", response_model=PostResponse)
async def set_post_lock(
    post_id: str,
    lock_update: PostLockUpdate,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> PostResponse:
    return forum.set_post_lock(post_id, lock_update.is_locked, current_actor)


@router.put("/{post_id}/pin", response_model=PostResponse)
async def set_post_pinned(
    post_id: str,
    pin_update: PostPinUpdate,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> PostResponse:
    """Pin or unpin a post (admins only)."""
    return forum.set_post_pinned(post_id, pin_update.is_pinned, current_actor)


@router.post(
    "/{post_id}/replies",
    response_model=ReplyResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    post_id: str,
    reply_data: ReplyCreate,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> ReplyResponse:
    """Reply to a post, or to another reply when ``parent_id`` is given."""
    return forum.create_reply(current_actor, post_id, reply_data.content, reply_data.parent_id)


@router.get("/{post_id}/replies", response_model=Page[ReplyResponse])
async def list_replies(
    post_id: str,
    forum: ForumServiceDep,
    current_actor: OptionalActorDep,
    parent_id: str | None = Query(None, description="List children of this reply"),
    sort: ReplySort = Query(ReplySort.LATEST),
    page: int = Query(1),
    limit: int = Query(settings.default_page_size),
) -> Page[ReplyResponse]:
    """List one level of a post's replies."""
    return forum.list_replies(post_id, parent_id, sort, page, limit, _actor_id(current_actor))


@router.get("/{post_id}/thread", response_model=list[ReplyNode])
async def reply_thread(
    post_id: str,
    forum: ForumServiceDep,
    current_actor: OptionalActorDep,
) -> list[ReplyNode]:
    """Return the whole reply tree of a post, nested."""
    return forum.reply_thread(post_id, _actor_id(current_actor))
