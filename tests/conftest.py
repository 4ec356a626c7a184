# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Generator, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("IMAGES_DIR", tempfile.mkdtemp(prefix="postboard-images-"))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from postboard.core.context import RequestContext
from postboard.core.security import hash_password
from postboard.core.tokens import get_token_service
from postboard.db.session import Base
from postboard.db.session import get_db as app_get_session
from postboard.main import app as fastapi_app
from postboard.models import Post, User
from postboard.services.broadcast import PostBroadcaster
from postboard.services.images import ImageStore, get_image_store

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret-pass"


@pytest.fixture()
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
    SessionLocal = sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def image_store(tmp_path: Path) -> ImageStore:
    """Image store rooted in a per-test directory."""
    store = ImageStore(tmp_path / "images", "images")
    store.ensure_root()
    return store


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI, db_session: Session, image_store: ImageStore
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_image_store] = lambda: image_store
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_image_store, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db: Session, email: str, name: str) -> User:
    user = User(email=email, password=hash_password(TEST_PASSWORD), name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _make_user(db_session, "alice@example.com", "Alice")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _make_user(db_session, "bob@example.com", "Bob")


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = get_token_service().issue(test_user.id, test_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = get_token_service().issue(other_user.id, other_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def user_ctx(test_user: User) -> RequestContext:
    return RequestContext.authenticated(test_user.id)


@pytest.fixture()
def other_ctx(other_user: User) -> RequestContext:
    return RequestContext.authenticated(other_user.id)


@pytest.fixture()
def test_post(db_session: Session, test_user: User) -> Post:
    """Create a baseline post owned by the primary user."""
    post = Post(
        title="First post",
        content="Hello from the test suite",
        image_url="images/original.png",
    )
    test_user.posts.append(post)
    db_session.commit()
    db_session.refresh(post)
    return post


@pytest.fixture()
def five_posts(db_session: Session, test_user: User) -> list[Post]:
    """Five posts with strictly increasing creation times, oldest first."""
    base = datetime(2024, 1, 1, tzinfo=UTC)
    posts = []
    for i in range(5):
        post = Post(
            title=f"Post number {i}",
            content=f"Content number {i}",
            image_url=f"images/post-{i}.png",
            created_at=base + timedelta(minutes=i),
            updated_at=base + timedelta(minutes=i),
        )
        test_user.posts.append(post)
        posts.append(post)
    db_session.commit()
    return posts


@pytest.fixture()
def broadcaster() -> AsyncMock:
    """Stand-in broadcaster recording published events."""
    return AsyncMock(spec=PostBroadcaster)


@pytest.fixture()
def images() -> MagicMock:
    """Stand-in image store recording deletions."""
    return MagicMock(spec=ImageStore)


@pytest.fixture()
def test_password() -> str:
    """Plaintext password of every fixture user."""
    return TEST_PASSWORD
