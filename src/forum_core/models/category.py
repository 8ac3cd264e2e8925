"""SQLAlchemy model for discussion categories."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_core.db.ids import new_id
from forum_core.db.session import Base
from forum_core.db.time import utcnow
from forum_core.models.status import CategoryStatus, enum_column


class Category(Base):
    """Category grouping posts, with a denormalized count of published posts."""

    __tablename__ = "forum_category"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Lucide icon name rendered by the frontend.
    icon: Mapped[str] = mapped_column(String(50), nullable=False, default="MessageSquare")
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="#3B82F6")
    # Number of published posts; only CategoryStore moves it.
    post_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[CategoryStatus] = mapped_column(
        enum_column(CategoryStatus),
        nullable=False,
        default=CategoryStatus.ACTIVE,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
