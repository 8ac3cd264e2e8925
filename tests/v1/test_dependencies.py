# mypy: ignore-errors
# tests/v1/test_dependencies.py
"""Tests for bearer token handling and actor resolution."""

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from jose import JWTError

from forum_core.api.v1.dependencies import get_current_actor, get_optional_actor
from forum_core.core.security import create_access_token, decode_subject
from forum_core.models.status import UserRole


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_token_round_trip(test_user) -> None:
    assert decode_subject(create_access_token(test_user.id)) == test_user.id


def test_expired_token_fails_to_decode(test_user) -> None:
    token = create_access_token(test_user.id, expires_minutes=-5)
    with pytest.raises(JWTError):
        decode_subject(token)


def test_current_actor_snapshot(db_session, admin_user) -> None:
    actor = get_current_actor(_credentials(create_access_token(admin_user.id)), db_session)

    assert actor.id == admin_user.id
    assert actor.display_name == "Admin User"
    assert actor.role == UserRole.ADMIN
    assert actor.is_admin


def test_unknown_user_is_unauthorized(db_session) -> None:
    with pytest.raises(HTTPException) as excinfo:
        get_current_actor(_credentials(create_access_token("nobody")), db_session)
    assert excinfo.value.status_code == 401
    assert excinfo.value.detail == "User not found"


def test_optional_actor_allows_anonymous(db_session) -> None:
    assert get_optional_actor(None, db_session) is None
