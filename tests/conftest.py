# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from stackit.core.security import create_access_token, hash_password
from stackit.db.session import Base, enable_sqlite_foreign_keys
from stackit.db.session import get_db as app_get_session
from stackit.main import app as fastapi_app
from stackit.models import Answer, Question, User
from stackit.models.user import ROLE_ADMIN, ROLE_USER

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct-horse"

# Argon2id is deliberately slow; hash the shared fixture password once.
_TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


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
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with the shared test password."""

    def _make_user(username: str, role: str = ROLE_USER) -> User:
        user = User(username=username, password_hash=_TEST_PASSWORD_HASH, role=role)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second user."""
    return make_user("bob")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("root", role=ROLE_ADMIN)


def auth_headers(user: User) -> dict[str, str]:
    """Return authorization headers carrying a fresh token for ``user``."""
    token = create_access_token(user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture()
def test_question(db_session: Session, test_user: User) -> Question:
    """Create a question owned by the primary test user."""
    question = Question(
        title="How do I reverse a list?",
        description="Looking for the idiomatic way.",
        user_id=test_user.id,
    )
    db_session.add(question)
    db_session.commit()
    db_session.refresh(question)
    return question


@pytest.fixture()
def test_answer(db_session: Session, test_question: Question, other_user: User) -> Answer:
    """Create an answer by the secondary user on the primary user's question."""
    answer = Answer(
        question_id=test_question.id,
        user_id=other_user.id,
        content="Use reversed() or slice with [::-1].",
    )
    db_session.add(answer)
    db_session.commit()
    db_session.refresh(answer)
    return answer


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Expose `auth_headers` to tests that create extra users."""
    return auth_headers


@pytest.fixture()
def test_password() -> str:
    """Plain-text password shared by every fixture user."""
    return TEST_PASSWORD
