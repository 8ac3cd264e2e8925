# src/forum_core/api/v1/endpoints/categories.py
"""Category endpoints for the forum API."""

from __future__ import annotations

from fastapi import APIRouter, status

from forum_core.schemas.category import (
    CategoryCreate,
    CategoryResponse,
    CategoryStatusUpdate,
)

from ..dependencies import CurrentActorDep, ForumServiceDep

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=list[CategoryResponse])
async def list_categories(forum: ForumServiceDep) -> list[CategoryResponse]:
    """List active categories, busiest first."""
    return forum.list_categories()


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> CategoryResponse:
    """Create a new category (admins only)."""
    return forum.create_category(current_actor, category_data)


@router.put("/{category_id}/status", response_model=CategoryResponse)
async def set_category_status(
    category_id: str,
    status_update: CategoryStatusUpdate,
    current_actor: CurrentActorDep,
    forum: ForumServiceDep,
) -> CategoryResponse:
    """Activate or deactivate a category (admins only)."""
    return forum.set_category_status(current_actor, category_id, status_update.status)
