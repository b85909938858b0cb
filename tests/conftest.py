# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from chirp_stage.api.v1.dependencies import get_storage_dep
from chirp_stage.db.session import Base
from chirp_stage.db.session import get_db as app_get_session
from chirp_stage.main import app as fastapi_app
from chirp_stage.models import Account, Follow, Post, PostStatus, Reaction, ReactionType
from tests.helpers import BASE_TIME, FakeStorage, auth_headers

TEST_DB_URL = "sqlite://"

_USERNAME_COUNTER = count(1)


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
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even though services commit.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(app: FastAPI, db_session: Session, storage: FakeStorage) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_storage_dep] = lambda: storage
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_storage_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_account(db_session: Session) -> Callable[..., Account]:
    """Return a factory persisting accounts."""

    def _make(username: str | None = None, *, is_public: bool = True) -> Account:
        name = username or f"user{next(_USERNAME_COUNTER)}"
        account = Account(username=name, name=name.title(), is_public=is_public)
        db_session.add(account)
        db_session.commit()
        db_session.refresh(account)
        return account

    return _make


@pytest.fixture()
def make_follow(db_session: Session) -> Callable[..., Follow]:
    """Return a factory persisting follow edges."""

    def _make(follower: Account, followed: Account, *, removed: bool = False) -> Follow:
        edge = Follow(
            follower_id=follower.id,
            followed_id=followed.id,
            deleted_at=BASE_TIME if removed else None,
        )
        db_session.add(edge)
        db_session.commit()
        return edge

    return _make


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory persisting posts at controlled timestamps."""

    def _make(
        author: Account,
        content: str = "hello",
        *,
        minutes: int = 0,
        created_at: datetime | None = None,
        status: PostStatus = PostStatus.APPROVED,
        parent: Post | None = None,
        images: list[str] | None = None,
    ) -> Post:
        post = Post(
            author_id=author.id,
            content=content,
            images=images,
            status=status,
            parent_id=parent.id if parent else None,
            created_at=created_at or BASE_TIME + timedelta(minutes=minutes),
        )
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def make_reaction(db_session: Session) -> Callable[..., Reaction]:
    """Return a factory persisting reactions."""

    def _make(account: Account, post: Post, reaction_type: ReactionType) -> Reaction:
        reaction = Reaction(reactioner_id=account.id, post_id=post.id, type=reaction_type)
        db_session.add(reaction)
        db_session.commit()
        return reaction

    return _make


@pytest.fixture()
def alice(make_account: Callable[..., Account]) -> Account:
    """Public account used as the default viewer."""
    return make_account("alice")


@pytest.fixture()
def bob(make_account: Callable[..., Account]) -> Account:
    """Second public account."""
    return make_account("bob")


@pytest.fixture()
def carol(make_account: Callable[..., Account]) -> Account:
    """Private account."""
    return make_account("carol", is_public=False)


@pytest.fixture()
def alice_headers(alice: Account) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_headers(bob: Account) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def carol_headers(carol: Account) -> dict[str, str]:
    return auth_headers(carol)
