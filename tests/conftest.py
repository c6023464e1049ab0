"""Pytest fixtures: a fresh in-memory database per test and an API client."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from credit_pricing.db.base import Base
from credit_pricing.db.session import build_engine, build_session_factory
from credit_pricing.main import create_app
from credit_pricing.models import credit_rows  # noqa: F401


SAMPLE_CSV = (
    b"Email,Name,CreditScore,CreditLines,MaskedPhoneNumber\n"
    b"ann@example.com,Ann Lee,700,3,(***) ***-0123\n"
    b"bob@example.com,Bob Roy,650,5,(***) ***-0456\n"
)


@pytest.fixture
def sample_csv() -> bytes:
    return SAMPLE_CSV


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = build_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(upload_dir):
    app = create_app(database_url="sqlite://", upload_dir=str(upload_dir))
    with TestClient(app) as test_client:
        yield test_client
