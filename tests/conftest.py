# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from forum_core.core.security import create_access_token  # noqa: E402
from forum_core.db.session import Base  # noqa: E402
from forum_core.db.session import get_db as app_get_session  # noqa: E402
from forum_core.main import app as fastapi_app  # noqa: E402
from forum_core.models import Category, Post, User  # noqa: E402
from forum_core.models.status import UserRole  # noqa: E402
from forum_core.schemas import Actor, CategoryCreate, PostCreate  # noqa: E402
from forum_core.services import ForumService  # noqa: E402

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Stores commit their own units of work, so each test gets a real session
    # and the tables are emptied afterwards.
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def forum(db_session: Session) -> ForumService:
    return ForumService(db_session)


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists identity snapshot rows."""

    def _make_user(display_name: str | None = None, role: UserRole = UserRole.USER) -> User:
        number = next(_USER_COUNTER)
        user = User(
            display_name=display_name or f"User {number}",
            avatar_url=f"https://avatars.example/{number}.png",
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("Test User")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second, unrelated user."""
    return make_user("Other User")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("Admin User", UserRole.ADMIN)


@pytest.fixture()
def actor(test_user: User) -> Actor:
    return Actor.from_user(test_user)


@pytest.fixture()
def other_actor(other_user: User) -> Actor:
    return Actor.from_user(other_user)


@pytest.fixture()
def admin_actor(admin_user: User) -> Actor:
    return Actor.from_user(admin_user)


@pytest.fixture()
def category(forum: ForumService) -> Category:
    """Create a default active category."""
    return forum.categories.create(CategoryCreate(name="General", description="Anything goes"))


@pytest.fixture()
def second_category(forum: ForumService) -> Category:
    return forum.categories.create(CategoryCreate(name="Announcements"))


@pytest.fixture()
def test_post(forum: ForumService, actor: Actor, category: Category) -> Post:
    """Create a baseline published post by the primary test user."""
    return forum.posts.create(
        actor,
        PostCreate(
            title="Hello forum",
            content="Test post content",
            category_id=category.id,
            tags=["intro", "welcome"],
        ),
    )


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(other_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    token = create_access_token(admin_user.id)
    return {"Authorization": f"Bearer {token}"}
