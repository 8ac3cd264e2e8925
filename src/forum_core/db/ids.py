"""Identifier helpers for database models."""

import uuid


def new_id() -> str:
    """Return a fresh UUID4 string used as a primary key."""
    return str(uuid.uuid4())
