"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from forum_core.core.security import decode_subject
from forum_core.db.session import get_db
from forum_core.repositories.user_repo import UserRepository
from forum_core.schemas.actor import Actor
from forum_core.services.forum import ForumService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _credentials_error(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _resolve_actor(token: str, db: Session) -> Actor:
    try:
        subject = decode_subject(token)
    except JWTError as err:
        raise _credentials_error() from err
    if subject is None:
        raise _credentials_error()

    user = UserRepository(db).get(subject)
    if user is None:
        raise _credentials_error("User not found")
    return Actor.from_user(user)


def get_current_actor(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> Actor:
    """Resolve the authenticated caller from a JWT bearer token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        Actor snapshot of the caller's user record

    Raises:
        HTTPException: If the token is invalid or the user is unknown
    """
    return _resolve_actor(credentials.credentials, db)


def get_optional_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(optional_bearer_scheme)],
    db: SessionDep,
) -> Actor | None:
    """Like ``get_current_actor`` but lets anonymous readers through."""
    if credentials is None:
        return None
    return _resolve_actor(credentials.credentials, db)


def get_forum_service(db: SessionDep) -> ForumService:
    return ForumService(db)


# Type aliases for endpoint signatures
CurrentActorDep = Annotated[Actor, Depends(get_current_actor)]
OptionalActorDep = Annotated[Actor | None, Depends(get_optional_actor)]
ForumServiceDep = Annotated[ForumService, Depends(get_forum_service)]
