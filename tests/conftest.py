import asyncio

import pytest
from fastapi.testclient import TestClient

from mwangaza.core.config import settings
from mwangaza.db import query as mock_db
from mwangaza.db.store import MemoryStore, set_store
from mwangaza.auth.permissions import DEPARTMENT_BY_ROLE
from mwangaza.auth.schemas import Principal
from mwangaza.auth.utils import create_access_token
from mwangaza.main import app


@pytest.fixture(autouse=True)
def store(monkeypatch):
    """Fresh in-memory store with initialised tables and no artificial latency."""
    monkeypatch.setattr(settings, "QUERY_LATENCY_MS", 0)
    fresh = MemoryStore()
    set_store(fresh)
    asyncio.run(mock_db.test_connection())
    yield fresh
    set_store(None)


@pytest.fixture
def http():
    return TestClient(app)


def make_principal(role):
    return Principal(
        id=f"{role}-1",
        name=f"Test {role.replace('_', ' ').title()}",
        email=f"{role}@mwangaza.org",
        role=role,
        department=DEPARTMENT_BY_ROLE[role],
    )


@pytest.fixture
def headers_for():
    """Build bearer headers for a principal with the given role."""
    def make(role):
        token = create_access_token(make_principal(role))
        return {"Authorization": f"Bearer {token}"}
    return make
