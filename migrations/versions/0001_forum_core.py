"""forum core tables

Revision ID: 0001_forum_core
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_forum_core"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    """Create categories, posts, tags, replies, likes and read markers."""
    op.create_table(
        "forum_user",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "forum_category",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(length=50), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=False),
        sa.Column("post_count", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_forum_category_status", "forum_category", ["status"])

    op.create_table(
        "forum_post",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.String(length=36), nullable=False),
        sa.Column("author_name", sa.Text(), nullable=False),
        sa.Column("author_avatar", sa.Text(), nullable=True),
        sa.Column("author_role", sa.String(length=16), nullable=False),
        sa.Column("category_id", sa.String(length=36), nullable=False),
        sa.Column("category_name", sa.String(length=100), nullable=False),
        sa.Column("required_plan", sa.String(length=16), nullable=False),
        sa.Column("view_count", sa.Integer(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False),
        sa.Column("reply_count", sa.Integer(), nullable=False),
        sa.Column("is_pinned", sa.Boolean(), nullable=False),
        sa.Column("is_locked", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        _timestamp("last_reply_at", nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["author_id"], ["forum_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["category_id"], ["forum_category.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forum_post_author_id", "forum_post", ["author_id"])
    op.create_index("ix_forum_post_category_status", "forum_post", ["category_id", "status"])
    op.create_index("ix_forum_post_status_created", "forum_post", ["status", "created_at"])

    op.create_table(
        "forum_post_tag",
        sa.Column("post_id", sa.String(length=36), nullable=False),
        sa.Column("tag", sa.String(length=50), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["forum_post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "tag"),
    )
    op.create_index("ix_forum_post_tag_tag", "forum_post_tag", ["tag"])

    op.create_table(
        "forum_reply",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("post_id", sa.String(length=36), nullable=False),
        sa.Column("parent_id", sa.String(length=36), nullable=True),
        sa.Column("author_id", sa.String(length=36), nullable=False),
        sa.Column("author_name", sa.Text(), nullable=False),
        sa.Column("author_avatar", sa.Text(), nullable=True),
        sa.Column("author_role", sa.String(length=16), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False),
        sa.Column("is_author", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["post_id"], ["forum_post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["forum_reply.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["forum_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forum_reply_parent_id", "forum_reply", ["parent_id"])
    op.create_index("ix_forum_reply_author_id", "forum_reply", ["author_id"])
    op.create_index(
        "ix_forum_reply_post_parent_status",
        "forum_reply",
        ["post_id", "parent_id", "status"],
    )

    op.create_table(
        "forum_like",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("target_id", sa.String(length=36), nullable=False),
        sa.Column("target_type", sa.String(length=16), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["forum_user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "target_id", "target_type", name="uq_forum_like_user_target"
        ),
    )
    op.create_index("ix_forum_like_target", "forum_like", ["target_type", "target_id"])

    op.create_table(
        "forum_read",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("post_id", sa.String(length=36), nullable=False),
        _timestamp("read_at"),
        sa.ForeignKeyConstraint(["user_id"], ["forum_user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["post_id"], ["forum_post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "post_id", name="uq_forum_read_user_post"),
    )
    op.create_index("ix_forum_read_user_id", "forum_read", ["user_id"])
    op.create_index("ix_forum_read_post_id", "forum_read", ["post_id"])


def downgrade() -> None:
    """Drop every forum table in reverse dependency order."""
    op.drop_table("forum_read")
    op.drop_table("forum_like")
    op.drop_table("forum_reply")
    op.drop_table("forum_post_tag")
    op.drop_table("forum_post")
    op.drop_table("forum_category")
    op.drop_table("forum_user")
