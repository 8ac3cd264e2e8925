# tests/test_post_store.py
"""Tests for the post lifecycle and the counters it keeps in step."""

import pytest

from forum_core.core.errors import NotFoundError, PermissionDeniedError
from forum_core.models import Category, Like, Post
from forum_core.models.status import (
    CategoryStatus,
    ContentStatus,
    RequiredPlan,
    TargetType,
    UserRole,
)
from forum_core.repositories.read_repo import ReadRecordRepository
from forum_core.schemas import Actor, PostCreate, PostUpdate
from forum_core.services import PostStore


def _post_count(db_session, category_id: str) -> int:
    return db_session.get(Category, category_id).post_count


def _published_in(db_session, category_id: str) -> int:
    return (
        db_session.query(Post)
        .filter(Post.category_id == category_id, Post.status == ContentStatus.PUBLISHED)
        .count()
    )


def test_create_snapshots_author_and_category(db_session, actor, test_user, category) -> None:
    store = PostStore(db_session)
    post = store.create(
        actor,
        PostCreate(
            title="Snapshot",
            content="Body",
            category_id=category.id,
            tags=["b", "a", "b", "  a "],
        ),
    )

    assert post.author_id == test_user.id
    assert post.author_name == "Test User"
    assert post.author_avatar == test_user.avatar_url
    assert post.author_role == UserRole.USER
    assert post.category_name == "General"
    assert post.tags == ["a", "b"]
    assert post.required_plan == RequiredPlan.FREE
    assert post.status == ContentStatus.PUBLISHED
    assert (post.view_count, post.like_count, post.reply_count) == (0, 0, 0)
    assert _post_count(db_session, category.id) == 1


def test_create_rejects_unknown_author(db_session, category) -> None:
    ghost = Actor(id="ghost", display_name="Ghost")
    with pytest.raises(NotFoundError):
        PostStore(db_session).create(ghost, PostCreate(title="t", content="c", category_id=category.id))
    assert _post_count(db_session, category.id) == 0


def test_create_rejects_unknown_category(db_session, actor) -> None:
    with pytest.raises(NotFoundError):
        PostStore(db_session).create(actor, PostCreate(title="t", content="c", category_id="nope"))


def test_category_counter_stays_consistent(
    db_session, actor, category, second_category
) -> None:
    store = PostStore(db_session)
    posts = [
        store.create(actor, PostCreate(title=f"p{i}", content="c", category_id=category.id))
        for i in range(3)
    ]

    store.update(posts[0].id, PostUpdate(category_id=second_category.id), actor)
    store.update(posts[1].id, PostUpdate(status=ContentStatus.HIDDEN), actor)
    store.update(
        posts[1].id,
        PostUpdate(status=ContentStatus.PUBLISHED, category_id=second_category.id),
        actor,
    )
    store.update(posts[2].id, PostUpdate(status=ContentStatus.HIDDEN), actor)
    store.soft_delete(posts[2].id, actor)
    store.soft_delete(posts[0].id, actor)

    for category_id in (category.id, second_category.id):
        assert _post_count(db_session, category_id) == _published_in(db_session, category_id)
    assert _post_count(db_session, category.id) == 0
    assert _post_count(db_session, second_category.id) == 1


def test_category_change_refreshes_name(db_session, actor, test_post, category, second_category) -> None:
    updated = PostStore(db_session).update(
        test_post.id, PostUpdate(category_id=second_category.id, title="Moved"), actor
    )

    assert updated.category_id == second_category.id
    assert updated.category_name == "Announcements"
    assert updated.title == "Moved"
    assert _post_count(db_session, category.id) == 0
    assert _post_count(db_session, second_category.id) == 1


def test_hidden_post_moved_between_categories_is_not_counted(
    db_session, actor, test_post, category, second_category
) -> None:
    store = PostStore(db_session)
    store.update(test_post.id, PostUpdate(status=ContentStatus.HIDDEN), actor)
    store.update(test_post.id, PostUpdate(category_id=second_category.id), actor)

    assert _post_count(db_session, category.id) == 0
    assert _post_count(db_session, second_category.id) == 0


def test_failed_update_rolls_back_everything(db_session, actor, test_post, category) -> None:
    with pytest.raises(NotFoundError):
        PostStore(db_session).update(
            test_post.id, PostUpdate(title="Changed", category_id="missing"), actor
        )

    post = db_session.get(Post, test_post.id)
    assert post.title == "Hello forum"
    assert post.category_id == category.id
    assert _post_count(db_session, category.id) == 1


def test_update_replaces_tags_and_plan(db_session, actor, test_post) -> None:
    updated = PostStore(db_session).update(
        test_post.id, PostUpdate(tags=["welcome", "news"], required_plan=RequiredPlan.PRO), actor
    )

    assert updated.tags == ["news", "welcome"]
    assert updated.required_plan == RequiredPlan.PRO


def test_only_author_or_admin_may_edit(db_session, other_actor, admin_actor, test_post) -> None:
    store = PostStore(db_session)
    with pytest.raises(PermissionDeniedError):
        store.update(test_post.id, PostUpdate(title="Hijack"), other_actor)
    with pytest.raises(PermissionDeniedError):
        store.soft_delete(test_post.id, other_actor)

    updated = store.update(test_post.id, PostUpdate(title="Moderated"), admin_actor)
    assert updated.title == "Moderated"


def test_soft_delete_cascades_likes_and_reads(
    db_session, actor, test_user, other_user, test_post, category
) -> None:
    store = PostStore(db_session)
    store.toggle_like(test_user.id, test_post.id)
    store.toggle_like(other_user.id, test_post.id)
    store.open(test_post.id, test_user.id)
    store.open(test_post.id, other_user.id)

    store.soft_delete(test_post.id, actor)

    post = db_session.get(Post, test_post.id)
    assert post.status == ContentStatus.DELETED
    assert post.like_count == 0
    assert db_session.query(Like).filter(Like.target_type == TargetType.POST).count() == 0
    assert ReadRecordRepository(db_session).count_for_post(test_post.id) == 0
    assert _post_count(db_session, category.id) == 0


def test_deleted_post_is_gone(db_session, actor, test_post) -> None:
    store = PostStore(db_session)
    store.soft_delete(test_post.id, actor)

    with pytest.raises(NotFoundError):
        store.get(test_post.id)
    with pytest.raises(NotFoundError):
        store.update(test_post.id, PostUpdate(title="again"), actor)
    with pytest.raises(NotFoundError):
        store.soft_delete(test_post.id, actor)


def test_hidden_post_is_not_readable(db_session, actor, test_post) -> None:
    store = PostStore(db_session)
    store.update(test_post.id, PostUpdate(status=ContentStatus.HIDDEN), actor)

    with pytest.raises(NotFoundError):
        store.open(test_post.id)


def test_pin_requires_admin(db_session, actor, admin_actor, test_post) -> None:
    store = PostStore(db_session)
    with pytest.raises(PermissionDeniedError):
        store.set_pinned(test_post.id, True, actor)

    assert store.set_pinned(test_post.id, True, admin_actor).is_pinned is True


def test_lock_by_author_or_admin(db_session, actor, other_actor, admin_actor, test_post) -> None:
    store = PostStore(db_session)
    assert store.set_locked(test_post.id, True, actor).is_locked is True
    with pytest.raises(PermissionDeniedError):
        store.set_locked(test_post.id, False, other_actor)
    assert store.set_locked(test_post.id, False, admin_actor).is_locked is False


def test_view_counter_does_not_touch_updated_at(db_session, test_post) -> None:
    before = db_session.get(Post, test_post.id).updated_at
    PostStore(db_session).open(test_post.id)

    assert db_session.get(Post, test_post.id).updated_at == before


def test_republish_into_inactive_category_is_rejected(db_session, forum, actor, test_post, category) -> None:
    store = PostStore(db_session)
    store.update(test_post.id, PostUpdate(status=ContentStatus.HIDDEN), actor)
    forum.categories.set_status(category.id, CategoryStatus.INACTIVE)

    with pytest.raises(NotFoundError):
        store.update(test_post.id, PostUpdate(status=ContentStatus.PUBLISHED), actor)

    assert db_session.get(Post, test_post.id).status == ContentStatus.HIDDEN
    assert _post_count(db_session, category.id) == 0


def test_hiding_post_in_inactive_category_still_uncounts(db_session, forum, actor, test_post, category) -> None:
    forum.categories.set_status(category.id, CategoryStatus.INACTIVE)

    PostStore(db_session).update(test_post.id, PostUpdate(status=ContentStatus.HIDDEN), actor)

    assert _post_count(db_session, category.id) == 0
