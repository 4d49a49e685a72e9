import os
import random
import sys
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Configure before any rebound module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("FORCE_GENERIC_JSON", "1")
os.environ["ANALYSIS_LATENCY_SECONDS"] = "0"
os.environ["ANALYZE_RATE_LIMIT"] = "10/minute"

# Ensure the project root is on sys.path so `import rebound` works when running
# pytest from the repository root without an install.
ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from rebound.app import app
from rebound.db.session import Base, get_db
from rebound.services import symptom_analysis
from rebound.services.taxonomy import get_taxonomy


# In-memory SQLite shared across connections
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def create_schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def _override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    app.state.limiter.reset()
    yield


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def taxonomy():
    return get_taxonomy()


@pytest.fixture
def seeded_rng(monkeypatch):
    """Make route-level analysis deterministic; returns the seed used."""
    seed = 1234
    monkeypatch.setattr(symptom_analysis, "_rng", random.Random(seed))
    return seed


@pytest.fixture
def user_id():
    # Tests share one in-memory database; a fresh user keeps them isolated
    return f"user-{uuid.uuid4().hex[:12]}"


@pytest.fixture
def headers(user_id):
    return {"X-User-Id": user_id}
