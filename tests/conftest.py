"""
Pytest configuration and fixtures for tests.

Every test gets its own in-memory SQLite database (StaticPool, one shared
connection), the seeded demo catalog and services wired to it.
"""

import os
from datetime import datetime, timezone
from unittest.mock import MagicMock

# Environment must be set before anything from shopcart is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["REDIS_URL"] = ""
os.environ["CATALOG_URL"] = ""
os.environ["CELERY_BROKER_URL"] = ""
os.environ["CELERY_RESULT_BACKEND"] = ""
os.environ["SESSION_SINGLE_ACTIVE"] = "true"
os.environ["SEED_CATALOG"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shopcart.api.deps import get_authority, get_lock_service
from shopcart.data.database import Base, get_db, make_engine
import shopcart.data.models  # noqa: F401
from shopcart.data.seed import seed_catalog
from shopcart.main import create_app
from shopcart.services.cart_service import CartService
from shopcart.services.catalog import SqlCatalog
from shopcart.services.notification_service import NotificationService
from shopcart.services.order_service import OrderService
from shopcart.services.session_authority import SessionAuthority
from shopcart.services.user_service import UserService

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"

# Seeded demo catalog (see shopcart/data/seed.py)
HEADPHONES_ID = 1
COFFEE_ID = 4


class FakeClock:
    """Callable clock for SessionAuthority, moved by hand in tests."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed_catalog(session)
    yield session
    session.close()


@pytest.fixture
def catalog(db):
    return SqlCatalog(db)


@pytest.fixture
def authority():
    return SessionAuthority(secret=TEST_SECRET, ttl_seconds=3600)


@pytest.fixture
def user_service(db, authority):
    return UserService(db, authority, single_active=True)


@pytest.fixture
def notifier():
    return MagicMock(spec=NotificationService)


@pytest.fixture
def cart_service(db, catalog):
    return CartService(db=db, catalog=catalog)


@pytest.fixture
def order_service(db, catalog, notifier):
    return OrderService(db=db, catalog=catalog, notification_service=notifier)


@pytest.fixture
def alice(user_service):
    return user_service.register("alice", "secret1")


@pytest.fixture
def bob(user_service):
    return user_service.register("bob", "secret2")


@pytest.fixture
def client(session_factory, authority):
    """TestClient with a fresh session per request and the demo catalog seeded."""
    seed_session = session_factory()
    seed_catalog(seed_session)
    seed_session.close()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_authority] = lambda: authority
    app.dependency_overrides[get_lock_service] = lambda: None
    return TestClient(app)


def signup_and_login(client: TestClient, username: str, password: str) -> dict:
    """Registers a user and returns Authorization headers for it."""
    resp = client.post("/users", json={"username": username, "password": password})
    assert resp.status_code == 201, resp.text
    resp = client.post("/users/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}
