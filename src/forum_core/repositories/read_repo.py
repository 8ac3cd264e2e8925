"""Data access helpers for read markers."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from forum_core.models.read_record import ReadRecord

__all__ = ["ReadRecordRepository"]


class ReadRecordRepository:
    """Queries over ``forum_read`` rows keyed by (user, post)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def find(self, user_id: str, post_id: str) -> ReadRecord | None:
        return self.session.scalars(
            select(ReadRecord).where(ReadRecord.user_id == user_id, ReadRecord.post_id == post_id)
        ).first()

    def add(self, user_id: str, post_id: str, when: datetime) -> ReadRecord:
        """Insert a read marker and flush so a duplicate fails immediately."""
        record = ReadRecord(user_id=user_id, post_id=post_id, read_at=when)
        self.session.add(record)
        self.session.flush()
        return record

    def touch(self, user_id: str, post_id: str, when: datetime) -> int:
        result = self.session.execute(
            update(ReadRecord)
            .where(ReadRecord.user_id == user_id, ReadRecord.post_id == post_id)
            .values(read_at=when)
        )
        return result.rowcount

    def delete_for_post(self, post_id: str) -> int:
        result = self.session.execute(
            delete(ReadRecord)
            .where(ReadRecord.post_id == post_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def count_for_post(self, post_id: str) -> int:
        return self.session.scalar(
            select(func.count()).select_from(ReadRecord).where(ReadRecord.post_id == post_id)
        ) or 0
