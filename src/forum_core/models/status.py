"""Closed status vocabularies and the content status transition table."""
from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Enum

from forum_core.core.errors import InvalidTransitionError


class ContentStatus(StrEnum):
    """Lifecycle state shared by posts and replies."""

    PUBLISHED = "published"
    HIDDEN = "hidden"
    DELETED = "deleted"


class CategoryStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class TargetType(StrEnum):
    """Discriminator for what a like points at."""

    POST = "post"
    REPLY = "reply"


class RequiredPlan(StrEnum):
    FREE = "free"
    PRO = "pro"


class UserRole(StrEnum):
    ADMIN = "admin"
    USER = "user"


CONTENT_TRANSITIONS: dict[ContentStatus, frozenset[ContentStatus]] = {
    ContentStatus.PUBLISHED: frozenset({ContentStatus.HIDDEN, ContentStatus.DELETED}),
    ContentStatus.HIDDEN: frozenset({ContentStatus.PUBLISHED, ContentStatus.DELETED}),
    ContentStatus.DELETED: frozenset(),  # Terminal state
}


def can_transition(current: ContentStatus, target: ContentStatus) -> bool:
    """Return True if ``current -> target`` is allowed (same state included)."""
    if current == target:
        return True
    return target in CONTENT_TRANSITIONS[current]


def ensure_transition(current: ContentStatus, target: ContentStatus) -> None:
    """Raise if the transition table forbids ``current -> target``."""
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot change status from {current.value} to {target.value}"
        )


def published_delta(current: ContentStatus, target: ContentStatus) -> int:
    """Return the counter adjustment implied by a status change.

    Counters only track published rows, so entering ``published`` adds one and
    leaving it removes one.
    """
    was = current == ContentStatus.PUBLISHED
    now = target == ContentStatus.PUBLISHED
    return int(now) - int(was)


def enum_column(enum_cls: type[StrEnum]) -> Enum:
    """Return a portable column type storing the enum's string values."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=16,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )
