"""
tests/conftest.py -- Shared test fixtures for StockRoom integration tests.

This module provides:
  - stores: fresh UserStore / CatalogStore / TokenService wired into app.state
  - client: TestClient running the real app against those stores
  - token / auth_headers: a registered user and a valid bearer token

Design: the real lifespan is swapped for one that installs the test-owned
stores, so each test starts from the seed catalog and no users, and tests
can reach into the same store objects the routes use.

DEBUG must be set before any api/ or core/ import so get_settings() can
auto-generate SECRET_KEY instead of raising ValueError. BCRYPT_ROUNDS is
lowered so hashing does not dominate the test run.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import NamedTuple

# CRITICAL: Set env before any api/core import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.store import UserStore
from auth.tokens import TokenService
from catalog.store import CatalogStore

TEST_SECRET = "stockroom-test-secret-key-0123456789abcdef"
TEST_PASSWORD = "correct horse battery staple"


class Stores(NamedTuple):
    user_store: UserStore
    catalog: CatalogStore
    token_service: TokenService


def _patch_lifespan(stores: Stores):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = stores.user_store
        app.state.catalog = stores.catalog
        app.state.token_service = stores.token_service
        yield

    return test_lifespan


@pytest.fixture
def stores() -> Stores:
    """Fresh in-memory stores, installed as the app's lifespan state."""
    s = Stores(
        user_store=UserStore(bcrypt_rounds=4),
        catalog=CatalogStore(),
        token_service=TokenService(secret_key=TEST_SECRET, lifetime_seconds=3600, expires_in="1h"),
    )
    app.router.lifespan_context = _patch_lifespan(s)
    return s


@pytest.fixture
def client(stores: Stores) -> Generator[TestClient, None, None]:
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture
def token(stores: Stores) -> str:
    """Register 'testuser' directly in the store and return a valid token for it."""
    user = stores.user_store.register("testuser", TEST_PASSWORD)
    return stores.token_service.issue(user)


@pytest.fixture
def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def expired_token(stores: Stores) -> str:
    """A correctly signed token whose lifetime ended an hour ago."""
    user = stores.user_store.register("lateuser", TEST_PASSWORD)
    two_hours_ago = datetime.now(timezone.utc) - timedelta(hours=2)
    issuer = TokenService(secret_key=TEST_SECRET, lifetime_seconds=3600, clock=lambda: two_hours_ago)
    return issuer.issue(user)
