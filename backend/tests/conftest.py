"""
LifeVault - Test Configuration and Fixtures

Every test gets a fresh in-memory SQLite database; the app's get_db
dependency is overridden to hand out that session.
"""

import os
import tempfile

import pytest

# Set testing environment before the app reads its settings
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['UPLOAD_DIR'] = tempfile.mkdtemp(prefix='lifevault-uploads-')
os.environ.pop('DEFAULT_ADMIN_PHONE', None)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.auth import create_access_token
from app.core.database import Base, get_db
from app.modules.users.models import User, UserRole
from app.modules.users.services import create_user

TEST_PIN = '1234'

test_engine = create_engine(
    'sqlite://',
    connect_args={'check_same_thread': False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# =============================================================================
# DATABASE / CLIENT
# =============================================================================

@pytest.fixture
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session):
    """Test client whose requests share the test session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# USERS
# =============================================================================

@pytest.fixture
def make_user(db_session):
    """Factory: make_user(role, phone=..., email=...) -> persisted User."""
    counter = {'n': 0}

    def _make(role: UserRole = UserRole.OWNER, **overrides) -> User:
        counter['n'] += 1
        n = counter['n']
        fields = {
            'name': f'Test {role.value} {n}',
            'phone': f'98765{n:05d}',
            'email': f'{role.value}{n}@example.com',
            'pin': TEST_PIN,
            'role': role,
        }
        fields.update(overrides)
        return create_user(db_session, **fields)

    return _make


@pytest.fixture
def owner(make_user) -> User:
    return make_user(UserRole.OWNER)


@pytest.fixture
def other_owner(make_user) -> User:
    return make_user(UserRole.OWNER)


@pytest.fixture
def nominee_user(make_user) -> User:
    return make_user(UserRole.NOMINEE)


@pytest.fixture
def admin(make_user) -> User:
    return make_user(UserRole.ADMIN)


@pytest.fixture
def super_admin(make_user) -> User:
    return make_user(UserRole.SUPER_ADMIN)


def auth_headers_for(user: User) -> dict:
    """Bearer header for a user."""
    return {'Authorization': f'Bearer {create_access_token(user)}'}


@pytest.fixture
def headers_for():
    """Factory fixture: headers_for(user) -> bearer header dict."""
    return auth_headers_for


@pytest.fixture
def owner_headers(owner) -> dict:
    return auth_headers_for(owner)


@pytest.fixture
def other_owner_headers(other_owner) -> dict:
    return auth_headers_for(other_owner)


@pytest.fixture
def nominee_headers(nominee_user) -> dict:
    return auth_headers_for(nominee_user)


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth_headers_for(admin)


@pytest.fixture
def super_admin_headers(super_admin) -> dict:
    return auth_headers_for(super_admin)
