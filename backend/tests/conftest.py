"""Shared test fixtures for the recent courses block."""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"
os.environ["ALLOW_PUBLIC_REGISTER"] = "true"
os.environ["WWWROOT"] = "https://lms.test"

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.config import get_settings
from app.core.database import Base, engine, get_db, SessionLocal
from app.core.limiter import limiter
from app.models import Course, LogEntry, RoleAssignment, User, UserPreference
from app.models.context import CONTEXT_COURSE
from app.services.auth_service import create_token, create_user
from app.services.contexts import course_context


def override_get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db
client = TestClient(app)

NOW = datetime(2026, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def reset_db():
    """Drop and recreate all tables between tests for isolation."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    limiter.reset()
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_session():
    """Provide a database session for test setup."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _make_user(db, username: str, role: str = "user") -> tuple[User, str]:
    user = create_user(db, username=username, password="secret123", full_name=username.title(), role=role)
    return user, create_token(user)


@pytest.fixture
def admin_user(db_session):
    """Create an admin user and return (user, token) tuple."""
    return _make_user(db_session, "testadmin", role="admin")


@pytest.fixture
def student_user(db_session):
    """Create a regular user and return (user, token) tuple."""
    return _make_user(db_session, "student1")


@pytest.fixture
def other_user(db_session):
    return _make_user(db_session, "student2")


@pytest.fixture
def guest_user(db_session):
    return _make_user(db_session, "guest", role="guest")


@pytest.fixture
def auth_headers(admin_user):
    _, token = admin_user
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(student_user):
    _, token = student_user
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def site_course(db_session):
    course = Course(id=1, fullname="Test Site", shortname="site", visible=True)
    db_session.add(course)
    db_session.commit()
    return course


@pytest.fixture
def make_course(db_session):
    """Factory: create a course (and its context)."""
    def _make(course_id: int, visible: bool = True, guest_access: bool = False) -> Course:
        course = Course(
            id=course_id,
            fullname=f"Course {course_id}",
            shortname=f"C{course_id}",
            visible=visible,
            guest_access=guest_access,
        )
        db_session.add(course)
        db_session.flush()
        course_context(db_session, course_id)
        db_session.commit()
        return course
    return _make


@pytest.fixture
def enrol(db_session):
    """Factory: assign a role to a user in a course context."""
    def _enrol(user: User, course_id: int, role: str = "student") -> RoleAssignment:
        ra = RoleAssignment(user_id=user.id, context_id=course_context(db_session, course_id).id, role=role)
        db_session.add(ra)
        db_session.commit()
        return ra
    return _enrol


@pytest.fixture
def log_view(db_session):
    """Factory: record a 'course viewed' event in the activity log."""
    def _log(user: User, course_id: int, when: datetime, action: str = "viewed", target: str = "course",
             context_level: int = CONTEXT_COURSE) -> LogEntry:
        entry = LogEntry(
            user_id=user.id,
            course_id=course_id,
            context_level=context_level,
            context_instance_id=course_id,
            target=target,
            action=action,
            time_created=int(when.timestamp()),
        )
        db_session.add(entry)
        db_session.commit()
        return entry
    return _log


@pytest.fixture
def set_userlimit(db_session):
    def _set(user: User, userlimit: int | None) -> UserPreference:
        pref = UserPreference(user_id=user.id, userlimit=userlimit)
        db_session.add(pref)
        db_session.commit()
        return pref
    return _set
