"""Typed error taxonomy raised by the forum stores.

Callers branch on the exception class (or its ``code``) to choose a
transport-level response; the stores never raise bare ``Exception``.
"""
from __future__ import annotations


class ForumError(Exception):
    """Base class for every domain error raised by the forum core."""

    code = "forum_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ForumError):
    """A category, post, reply or parent reply is missing or not visible."""

    code = "not_found"


class PermissionDeniedError(ForumError):
    """The actor is neither the owner nor an admin."""

    code = "permission_denied"


class LockedResourceError(ForumError):
    """A reply was attempted on a locked post."""

    code = "locked"


class InvalidTransitionError(ForumError):
    """A status change is not allowed by the transition table."""

    code = "invalid_transition"


class ConflictError(ForumError):
    """A uniqueness rule outside the like/read ledgers was violated."""

    code = "conflict"
