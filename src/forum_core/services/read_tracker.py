"""Per-user read markers that decide whether a view is new."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_core.db.time import utcnow
from forum_core.repositories.read_repo import ReadRecordRepository

logger = logging.getLogger(__name__)


class ReadTracker:
    """Upserts read markers; a first read is what counts as a new view."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.reads = ReadRecordRepository(session)

    def record_read(self, user_id: str, post_id: str) -> bool:
        """Insert or refresh the read marker; return True only on the first read.

        Runs inside the caller's unit of work. The insert is flushed at once,
        so a concurrent first read by the same user surfaces here as an
        ``IntegrityError`` that the caller resolves.
        """
        now = utcnow()
        if self.reads.find(user_id, post_id) is not None:
            self.reads.touch(user_id, post_id, now)
            return False
        self.reads.add(user_id, post_id, now)
        logger.debug("First read of post %s by %s", post_id, user_id)
        return True

    def purge_post(self, post_id: str) -> int:
        """Delete every read marker of a post; runs inside the caller's unit of work."""
        return self.reads.delete_for_post(post_id)
