"""
Pytest configuration and shared fixtures for user-directory tests.
"""

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from user_directory.api.app import create_app
from user_directory.lib.config import APIConfig, AuthConfig, Config
from user_directory.lib.security import TokenValidator
from user_directory.services.user_store import UserStore, seed_users


TEST_SECRET = "test-secret-key-for-the-user-directory-suite"


@pytest.fixture
def test_config() -> Config:
    """Configuration for testing environment."""
    return Config(
        auth=AuthConfig(
            issuer="https://test-issuer.example.com",
            audience="https://test-audience.example.com",
            secret_key=TEST_SECRET,
        ),
        api=APIConfig(log_level="DEBUG"),
    )


@pytest.fixture
def store() -> UserStore:
    """Store holding the two demo users."""
    return UserStore(seed_users())


@pytest.fixture
def app(test_config: Config, store: UserStore):
    """Create test FastAPI application instance."""
    return create_app(test_config, store)


@pytest.fixture
def client(app) -> TestClient:
    """Create test client for API testing."""
    return TestClient(app)


@pytest.fixture
def token_validator(test_config: Config) -> TokenValidator:
    return TokenValidator(test_config.auth)


@pytest.fixture
def auth_headers(token_validator: TokenValidator) -> Dict[str, str]:
    """Authorization header carrying a valid bearer token."""
    token = token_validator.issue_token("test-user")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def reset_config_manager(monkeypatch):
    """Drop the cached global configuration manager and its env overrides."""
    from user_directory.lib import config as config_module

    monkeypatch.setattr(config_module, "_config_manager", None)
    for name in (
        "JWT_ISSUER", "JWT_AUDIENCE", "JWT_SECRET_KEY", "JWT_CLOCK_SKEW_SECONDS",
        "API_HOST", "API_PORT", "API_DEBUG", "LOG_LEVEL", "LOG_DIR", "SEED_DEMO_USERS",
    ):
        # setenv first so anything a test loads from a .env file is undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
