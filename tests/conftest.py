"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from iurl.common.logging_config import setup_logging
from iurl.identity import CallerIdentity, JWTIdentityProvider
from iurl.registry import RedirectRegistry
from iurl.storage.memory import InMemoryRedirectStore
from iurl_web import create_app

JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger) -> InMemoryRedirectStore:
    """Fresh in-memory store per test."""
    return InMemoryRedirectStore(logger=logger)


@pytest.fixture
def registry(store, logger) -> RedirectRegistry:
    return RedirectRegistry(store=store, logger=logger)


@pytest.fixture
def caller() -> CallerIdentity:
    return CallerIdentity(uid="u1")


@pytest.fixture
def config() -> Config:
    return Config(
        _env_file=None,
        storage_backend="memory",
        base_url="http://testserver",
        path_prefix="/s",
        auth_jwt_secret=JWT_SECRET,
    )


@pytest.fixture
def identity_provider(config) -> JWTIdentityProvider:
    return JWTIdentityProvider(secret=config.auth_jwt_secret)


@pytest.fixture
def auth_headers(identity_provider):
    """Authorization headers for caller ``test-user-123``."""
    token = identity_provider.issue("test-user-123")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app(registry, config, logger):
    """Create test FastAPI app backed by the in-memory store."""
    return create_app(registry=registry, config=config, logger=logger)


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
