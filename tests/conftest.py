"""
Registrar Portal - Test Configuration and Fixtures
"""
import os
from typing import Callable, Dict, Generator

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-testing"
os.environ.pop("DEFAULT_ADMIN_PASSWORD", None)
os.environ.pop("ADMIN_TOKEN", None)

from app import app
from api.routes.auth import create_user_token
from core.database import get_db
from core.dependencies import get_user_manager
from models.base import Base
from schemas.user import User
from utils.user_manager import UserManager

# Low bcrypt cost keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every session of one test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """Test client with the database dependency pointed at the test engine."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    def override_get_user_manager(db: Session = Depends(get_db)) -> UserManager:
        return UserManager(db, bcrypt_rounds=TEST_BCRYPT_ROUNDS)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_user_manager] = override_get_user_manager
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_manager(db_session) -> UserManager:
    return UserManager(db_session, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def student(user_manager) -> User:
    return user_manager.signup_student(
        email="juan@example.edu",
        student_id="2021-00001",
        first_name="Juan",
        last_name="Dela Cruz",
        password="studentpass123",
    )


@pytest.fixture
def other_student(user_manager) -> User:
    return user_manager.signup_student(
        email="maria@example.edu",
        student_id="2021-00002",
        first_name="Maria",
        last_name="Santos",
        password="studentpass456",
    )


@pytest.fixture
def admin(user_manager) -> User:
    return user_manager.ensure_admin("registrar@example.edu", "adminpass123")


@pytest.fixture
def headers_for() -> Callable[[User], Dict[str, str]]:
    """Build an Authorization header for a user."""

    def _headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _headers


@pytest.fixture
def student_headers(student, headers_for) -> Dict[str, str]:
    return headers_for(student)


@pytest.fixture
def admin_headers(admin, headers_for) -> Dict[str, str]:
    return headers_for(admin)
