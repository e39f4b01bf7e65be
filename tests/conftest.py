# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator, Sequence
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from community_leaderboard.core.security import hash_password
from community_leaderboard.db.session import Base
from community_leaderboard.db.session import get_db as app_get_session
from community_leaderboard.main import app as fastapi_app
from community_leaderboard.models import Community, ExperiencePoint, User

TEST_DB_URL = "sqlite://"

_EMAIL_COUNTER = count(1)
_COMMUNITY_COUNTER = count(1)
_PASSWORD_HASH = hash_password("secret", salt="testsalt")

MakeUser = Callable[..., User]
MakeCommunity = Callable[..., Community]


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
        session.close()

        # Services commit, so each test wipes the tables on the way out.
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
def make_community(db_session: Session) -> MakeCommunity:
    """Return a factory that persists an empty community."""

    def _make(name: str | None = None, logo: str | None = None, total_experience: int = 0) -> Community:
        community = Community(
            name=name or f"Community {next(_COMMUNITY_COUNTER)}",
            logo=logo,
            total_experience=total_experience,
            member_count=0,
        )
        db_session.add(community)
        db_session.commit()
        return community

    return _make


@pytest.fixture()
def make_user(db_session: Session) -> MakeUser:
    """Return a factory that persists a user with the given point history."""

    def _make(points: Sequence[int] = (), email: str | None = None) -> User:
        user = User(
            email=email or f"user{next(_EMAIL_COUNTER)}@example.com",
            password_hash=_PASSWORD_HASH,
            profile_picture=None,
        )
        user.experience_points = [ExperiencePoint(points=value) for value in points]
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def community(make_community: MakeCommunity) -> Community:
    """Create a default test community."""
    return make_community(name="Test Community", logo="https://example.com/logo.png")


@pytest.fixture()
def test_user(make_user: MakeUser) -> User:
    """Create a user with experience history [10, 5]."""
    return make_user(points=[10, 5], email="test@example.com")
