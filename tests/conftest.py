# /tests/conftest.py

from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.deps import get_current_clerk_user_id, get_llm_service, get_rate_limiter
from app.core.exceptions import UnauthenticatedError
from app.db import base  # noqa: F401  (registers every model on Base.metadata)
from app.db.base_class import Base
from app.db.database import get_db
from app.main import app
from app.services.database_service import DatabaseService
from app.services.llm_service import LLMService
from app.services.rate_limit_service import RateLimiter

from .fakes import FakeLLMClient


# --- Database Fixtures ---

@pytest.fixture
def engine():
    """A fresh in-memory SQLite database per test, shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def db_service(db_session):
    return DatabaseService(db_session=db_session)


@pytest.fixture
def make_user(db_service) -> Callable:
    """Factory for persisted users; defaults to a free user whose trial has expired."""
    counter = {"n": 0}

    def _make_user(**overrides):
        counter["n"] += 1
        now = datetime.now(timezone.utc)
        record = {
            "clerk_user_id": f"user_clerk_{counter['n']}",
            "email": f"user{counter['n']}@example.com",
            "subscription_tier": "free",
            "generations_limit": 10,
            "generations_count_current_month": 0,
            "usage_reset_at": now + timedelta(days=20),
            "created_at": now - timedelta(days=10),
        }
        record.update(overrides)
        return db_service.create_user(record)

    return _make_user


# --- LLM Fixtures ---

@pytest.fixture
def fake_client():
    return FakeLLMClient()


@pytest.fixture
def llm_service(fake_client):
    return LLMService(clients={"openai": fake_client}, preferred="openai")


# --- API Fixtures ---

@pytest.fixture
def api_state():
    """Mutable knobs the API fixture reads per request: the signed-in user and the limiter."""
    return {"clerk_user_id": None, "rate_limiter": RateLimiter(client=None)}


@pytest.fixture
def client(db_session, llm_service, api_state):
    """
    A TestClient wired to the in-memory database and the fake LLM. The
    lifespan is not entered, so no real LLM clients or Redis are built.
    """
    def override_get_db():
        yield db_session

    def override_clerk_user_id():
        if api_state["clerk_user_id"] is None:
            raise UnauthenticatedError()
        return api_state["clerk_user_id"]

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_clerk_user_id] = override_clerk_user_id
    app.dependency_overrides[get_llm_service] = lambda: llm_service
    app.dependency_overrides[get_rate_limiter] = lambda: api_state["rate_limiter"]

    yield TestClient(app)

    app.dependency_overrides.clear()
