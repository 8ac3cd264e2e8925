# tests/test_reply_tree.py
"""Tests for threaded replies and the per-post reply counter."""

from datetime import timedelta

import pytest

from forum_core.core.errors import LockedResourceError, NotFoundError, PermissionDeniedError
from forum_core.db.time import utcnow
from forum_core.models import Like, Post, Reply
from forum_core.models.status import ContentStatus, TargetType
from forum_core.schemas import PostCreate, ReplySort, ReplyUpdate
from forum_core.services import ReplyTree


def _reply_count(db_session, post_id: str) -> int:
    return db_session.get(Post, post_id).reply_count


def test_create_reply_counts_and_stamps_post(db_session, actor, other_actor, test_post) -> None:
    tree = ReplyTree(db_session)

    own = tree.create(test_post.id, actor, "Author here")
    theirs = tree.create(test_post.id, other_actor, "Visitor here")

    assert own.is_author is True
    assert theirs.is_author is False
    assert theirs.author_name == "Other User"
    post = db_session.get(Post, test_post.id)
    assert post.reply_count == 2
    assert post.last_reply_at is not None


def test_nested_reply_requires_parent_under_same_post(
    db_session, forum, actor, test_post, category
) -> None:
    tree = ReplyTree(db_session)
    other_post = forum.posts.create(
        actor, PostCreate(title="Other", content="c", category_id=category.id)
    )
    foreign_parent = tree.create(other_post.id, actor, "elsewhere")

    with pytest.raises(NotFoundError) as excinfo:
        tree.create(test_post.id, actor, "misplaced", parent_id=foreign_parent.id)
    assert "Parent reply" in excinfo.value.message
    assert _reply_count(db_session, test_post.id) == 0

    parent = tree.create(test_post.id, actor, "parent")
    child = tree.create(test_post.id, actor, "child", parent_id=parent.id)
    assert child.parent_id == parent.id
    assert _reply_count(db_session, test_post.id) == 2


def test_reply_on_locked_post_is_rejected(db_session, actor, test_post) -> None:
    forum_post = db_session.get(Post, test_post.id)
    forum_post.is_locked = True
    db_session.commit()

    with pytest.raises(LockedResourceError):
        ReplyTree(db_session).create(test_post.id, actor, "too late")
    assert _reply_count(db_session, test_post.id) == 0
    assert db_session.query(Reply).count() == 0


def test_reply_on_missing_post(db_session, actor) -> None:
    with pytest.raises(NotFoundError):
        ReplyTree(db_session).create("missing", actor, "hello?")


def test_soft_delete_uncounts_and_drops_likes(db_session, actor, other_user, test_post) -> None:
    forum_tree = ReplyTree(db_session)
    reply = forum_tree.create(test_post.id, actor, "to be removed")
    forum_tree.like_ledger.toggle(other_user.id, reply.id, TargetType.REPLY)

    forum_tree.soft_delete(reply.id, actor)

    stored = db_session.get(Reply, reply.id)
    assert stored.status == ContentStatus.DELETED
    assert stored.like_count == 0
    assert db_session.query(Like).count() == 0
    assert _reply_count(db_session, test_post.id) == 0
    with pytest.raises(NotFoundError):
        forum_tree.soft_delete(reply.id, actor)


def test_children_survive_parent_delete(db_session, actor, test_post) -> None:
    tree = ReplyTree(db_session)
    parent = tree.create(test_post.id, actor, "parent")
    child = tree.create(test_post.id, actor, "child", parent_id=parent.id)

    tree.soft_delete(parent.id, actor)

    children, total = tree.list_children(parent.id)
    assert total == 1
    assert [r.id for r in children] == [child.id]
    assert _reply_count(db_session, test_post.id) == 1


def test_hide_and_unhide_adjust_reply_count(db_session, actor, test_post) -> None:
    tree = ReplyTree(db_session)
    reply = tree.create(test_post.id, actor, "now you see me")

    tree.update(reply.id, ReplyUpdate(status=ContentStatus.HIDDEN), actor)
    assert _reply_count(db_session, test_post.id) == 0

    edited = tree.update(
        reply.id, ReplyUpdate(status=ContentStatus.PUBLISHED, content="back again"), actor
    )
    assert edited.content == "back again"
    assert _reply_count(db_session, test_post.id) == 1


def test_deleting_hidden_reply_does_not_double_count(db_session, actor, test_post) -> None:
    tree = ReplyTree(db_session)
    reply = tree.create(test_post.id, actor, "hidden then deleted")
    tree.update(reply.id, ReplyUpdate(status=ContentStatus.HIDDEN), actor)

    tree.soft_delete(reply.id, actor)

    assert _reply_count(db_session, test_post.id) == 0


def test_only_author_or_admin_may_change_reply(db_session, actor, other_actor, admin_actor, test_post) -> None:
    tree = ReplyTree(db_session)
    reply = tree.create(test_post.id, actor, "mine")

    with pytest.raises(PermissionDeniedError):
        tree.update(reply.id, ReplyUpdate(content="yours now"), other_actor)
    with pytest.raises(PermissionDeniedError):
        tree.soft_delete(reply.id, other_actor)

    tree.soft_delete(reply.id, admin_actor)
    assert _reply_count(db_session, test_post.id) == 0


def test_list_top_level_sorting(db_session, actor, other_user, test_post) -> None:
    tree = ReplyTree(db_session)
    first = tree.create(test_post.id, actor, "first")
    second = tree.create(test_post.id, actor, "second")
    first.created_at = utcnow() - timedelta(minutes=5)
    db_session.commit()
    tree.create(test_post.id, actor, "nested", parent_id=first.id)
    tree.like_ledger.toggle(other_user.id, first.id, TargetType.REPLY)

    latest, total = tree.list_top_level(test_post.id)
    oldest, _ = tree.list_top_level(test_post.id, ReplySort.OLDEST)
    popular, _ = tree.list_top_level(test_post.id, ReplySort.POPULAR)

    assert total == 2
    assert [r.id for r in latest] == [second.id, first.id]
    assert [r.id for r in oldest] == [first.id, second.id]
    assert [r.id for r in popular] == [first.id, second.id]


def test_unhide_on_locked_post_is_rejected(db_session, forum, actor, test_post) -> None:
    tree = ReplyTree(db_session)
    reply = tree.create(test_post.id, actor, "hidden before the lock")
    tree.update(reply.id, ReplyUpdate(status=ContentStatus.HIDDEN), actor)
    forum.posts.set_locked(test_post.id, True, actor)

    with pytest.raises(LockedResourceError):
        tree.update(reply.id, ReplyUpdate(status=ContentStatus.PUBLISHED), actor)

    assert _reply_count(db_session, test_post.id) == 0
    assert db_session.get(Reply, reply.id).status == ContentStatus.HIDDEN


def test_unhide_on_deleted_post_is_rejected(db_session, forum, actor, test_post) -> None:
    tree = ReplyTree(db_session)
    reply = tree.create(test_post.id, actor, "hidden before the delete")
    tree.update(reply.id, ReplyUpdate(status=ContentStatus.HIDDEN), actor)
    forum.posts.soft_delete(test_post.id, actor)

    with pytest.raises(NotFoundError):
        tree.update(reply.id, ReplyUpdate(status=ContentStatus.PUBLISHED), actor)

    assert _reply_count(db_session, test_post.id) == 0


def test_hiding_reply_on_locked_post_is_allowed(db_session, forum, actor, test_post) -> None:
    tree = ReplyTree(db_session)
    reply = tree.create(test_post.id, actor, "hide me later")
    forum.posts.set_locked(test_post.id, True, actor)

    tree.update(reply.id, ReplyUpdate(status=ContentStatus.HIDDEN), actor)

    assert _reply_count(db_session, test_post.id) == 0
