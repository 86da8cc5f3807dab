"""
Shared fixtures for the API test suite.

Each test gets its own application built by ``create_app`` on an in-memory
SQLite database. Object storage is a MagicMock; tokens are signed with a
throwaway secret.
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

import motorsports.auth as auth_module
from motorsports.auth import create_access_token, get_password_hash
from motorsports.config import Settings
from motorsports.main import create_app
from motorsports.models.event import Event
from motorsports.models.user import User, UserRole
from motorsports.models.vehicle import Vehicle
from motorsports.services.storage import ObjectStorage, get_storage

TEST_PASSWORD = "password123"


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Minimum bcrypt cost keeps the suite fast."""
    monkeypatch.setattr(auth_module, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        LOG_JSON=False,
        LOG_LEVEL="WARNING",
        S3_BUCKET_NAME="test-bucket",
        S3_REGION="eu-west-2",
    )


@pytest.fixture
def storage_client() -> MagicMock:
    """Stands in for the boto3 S3 client."""
    client = MagicMock()
    client.generate_presigned_url.side_effect = (
        lambda op, Params, ExpiresIn: f"https://signed.example/{op}/{Params['Key']}?expires={ExpiresIn}"
    )
    return client


@pytest.fixture
def storage(settings, storage_client) -> ObjectStorage:
    return ObjectStorage(settings, client=storage_client)


@pytest.fixture
def app(settings, storage):
    application = create_app(settings)
    application.dependency_overrides[get_storage] = lambda: storage
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(client, app):
    """A session on the app's database, available once the app has started."""
    session = app.state.session_factory()
    yield session
    session.close()


def _persist(db, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role=UserRole.USER.value, email=None, is_active=True, password=TEST_PASSWORD):
        counter["n"] += 1
        user = User(
            email=email or f"{role}{counter['n']}@team.example",
            password_hash=get_password_hash(password),
            first_name=role.capitalize(),
            last_name=f"Tester{counter['n']}",
            role=role,
            is_active=is_active,
        )
        return _persist(db, user)
    return _make


@pytest.fixture
def headers_for(settings):
    def _headers(user) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user, settings)}"}
    return _headers


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN.value)


@pytest.fixture
def member(make_user):
    return make_user(UserRole.USER.value)


@pytest.fixture
def viewer(make_user):
    return make_user(UserRole.VIEWER.value)


@pytest.fixture
def admin_headers(admin, headers_for):
    return headers_for(admin)


@pytest.fixture
def member_headers(member, headers_for):
    return headers_for(member)


@pytest.fixture
def viewer_headers(viewer, headers_for):
    return headers_for(viewer)


@pytest.fixture
def vehicle(db):
    return _persist(db, Vehicle(make="Porsche", model="911 GT3 R", year=2023, category="GT3", number="7"))


@pytest.fixture
def event(db):
    start = datetime(2026, 5, 16, 9, 0, tzinfo=timezone.utc)
    return _persist(db, Event(
        name="Spa 6 Hours",
        type="Race",
        venue="Circuit de Spa-Francorchamps",
        location="Stavelot, Belgium",
        start_date=start,
        end_date=start + timedelta(days=1),
    ))
