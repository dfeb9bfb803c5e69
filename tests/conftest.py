"""
Shared fixtures: an isolated in-memory database per test, a fixed clock,
an in-memory token store and a TestClient wired to all three.
"""

import os

os.environ["ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TOKEN_STORE_URL"] = "memory://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SENTRY_DSN"] = ""

from datetime import date

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from app.database import build_engine, get_db, init_db
from app.dependencies import get_lifecycle, get_token_store
from app.models.meal_plan import MealPlan
from app.models.user import User, UserRole
from app.services.auth import create_access_token, hash_password
from app.services.meal_plans import seed_meal_plans
from app.services.subscription_lifecycle import SubscriptionLifecycle
from app.services.token_store import MemoryTokenStore
from main import app


TODAY = date(2025, 6, 15)


def no_sleep(_seconds: float) -> None:
    return None


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def lifecycle(db) -> SubscriptionLifecycle:
    return SubscriptionLifecycle(db, today=lambda: TODAY, retry_base_delay=0, sleep=no_sleep)


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def plans(db):
    """Default meal plans keyed by name."""
    seed_meal_plans(db)
    return {plan.name: plan for plan in db.query(MealPlan).all()}


@pytest.fixture
def make_user(db):
    def _make_user(email="customer@example.com", full_name="Sari Wijaya", role=UserRole.USER, password="secret123"):
        user = User(
            full_name=full_name,
            email=email,
            password_hash=hash_password(password),
            role=int(role),
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def user(make_user) -> User:
    return make_user()


@pytest.fixture
def other_user(make_user) -> User:
    return make_user(email="other@example.com", full_name="Budi Santoso")


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user(email="admin@example.com", full_name="Admin", role=UserRole.ADMIN)


def bearer(user: User) -> dict:
    token = create_access_token({"sub": str(user.id), "role": int(user.role)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for(client):
    """Build bearer + CSRF headers for any user."""

    def _headers_for(user: User) -> dict:
        headers = bearer(user)
        response = client.get("/auth/csrf-token", headers=headers)
        assert response.status_code == 200
        headers["X-CSRF-Token"] = response.json()["csrf_token"]
        return headers

    return _headers_for


@pytest.fixture
def client(db, token_store):
    def override_get_db():
        yield db

    def override_get_lifecycle(session: Session = Depends(get_db)):
        return SubscriptionLifecycle(session, today=lambda: TODAY, retry_base_delay=0, sleep=no_sleep)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_store] = lambda: token_store
    app.dependency_overrides[get_lifecycle] = override_get_lifecycle

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(headers_for, user) -> dict:
    """Bearer and CSRF headers for ``user``."""
    return headers_for(user)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def bearer_for():
    """Bearer-only headers (no CSRF token) for any user."""
    return bearer
