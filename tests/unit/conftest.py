"""
Unit Test Fixtures.

Nothing here touches a database or the real config/.env. Token tests get
their secret and JWT settings from these stubs.
"""

from types import SimpleNamespace

import pytest

from studyplanner.backend.core.config_schema import JwtSchema

TEST_JWT_SECRET = "unit-test-secret-long-enough-for-hs256-signing"


@pytest.fixture
def jwt_config() -> JwtSchema:
    """Validated JWT section with a short lifetime and a test audience."""
    return JwtSchema(algorithm="HS256", access_token_expire_minutes=30, audience="test-api")


@pytest.fixture
def stub_settings() -> SimpleNamespace:
    """Stand-in for Settings; only the attributes security.py reads."""
    return SimpleNamespace(db_password="unused", jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def stub_app_config(jwt_config: JwtSchema) -> SimpleNamespace:
    return SimpleNamespace(security=SimpleNamespace(jwt=jwt_config))
