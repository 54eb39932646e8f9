"""
Integration Test Fixtures.

The full FastAPI app over httpx's ASGI transport. ``client`` shares the
test's database session with the app, so rows made with ``make_note``
are visible to requests and everything is rolled back afterwards.
Tokens are signed with a stub secret; no config/.env is read.
"""

from collections.abc import AsyncGenerator, Callable, Iterator
from types import SimpleNamespace
from typing import Any
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient, Response
from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.core.database import get_db_session

TEST_JWT_SECRET = "integration-test-secret-key-long-enough-for-hs256"


@pytest.fixture
def test_settings() -> Iterator[SimpleNamespace]:
    settings = SimpleNamespace(db_password="unused", jwt_secret=TEST_JWT_SECRET)
    with patch("studyplanner.backend.core.security.get_settings", return_value=settings):
        yield settings


def _client_for(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
async def client(db_session: AsyncSession, test_settings: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    from studyplanner.backend.main import create_app

    async def same_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app = create_app()
    app.dependency_overrides[get_db_session] = same_session
    async with _client_for(app) as http:
        yield http
    app.dependency_overrides.clear()


@pytest.fixture
async def client_no_db(test_settings: SimpleNamespace) -> AsyncGenerator[AsyncClient, None]:
    """For routes that never open a session (health, /users/me)."""
    from studyplanner.backend.main import create_app

    async with _client_for(create_app()) as http:
        yield http


@pytest.fixture
def make_auth_headers(test_settings: SimpleNamespace) -> Callable[..., dict[str, str]]:
    """``make_auth_headers("carol", email=...)`` -> Authorization header for that subject."""
    from studyplanner.backend.core.security import create_access_token

    def _headers(user_id: str, **claims: Any) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token({'sub': user_id, **claims})}"}

    return _headers


@pytest.fixture
def alice(make_auth_headers) -> dict[str, str]:
    return make_auth_headers(
        "alice",
        email="alice@example.edu",
        user_metadata={"full_name": "Alice Liddell"},
    )


@pytest.fixture
def bob(make_auth_headers) -> dict[str, str]:
    return make_auth_headers("bob", email="bob@example.edu")


class ApiAssertions:
    """Checks on the response envelope; each returns the parsed body."""

    @staticmethod
    def _body(response: Response, status: int) -> dict[str, Any]:
        assert response.status_code == status, f"{response.status_code} != {status}: {response.text}"
        return response.json()

    @classmethod
    def assert_success(cls, response: Response, expected_status: int = 200) -> dict[str, Any]:
        body = cls._body(response, expected_status)
        assert body["success"] is True, body
        return body

    @classmethod
    def assert_error(cls, response: Response, expected_status: int, expected_code: str | None = None) -> dict[str, Any]:
        body = cls._body(response, expected_status)
        assert body["success"] is False, body
        assert body["error"], body
        if expected_code:
            assert body["error"]["code"] == expected_code, body["error"]
        return body

    @classmethod
    def assert_validation_error(cls, response: Response, field: str | None = None) -> dict[str, Any]:
        body = cls.assert_error(response, 422, "VAL_REQUEST_INVALID")
        if field:
            failing = [item["field"] for item in body["error"]["details"]["validation_errors"]]
            assert any(field in name for name in failing), failing
        return body


@pytest.fixture
def api() -> type[ApiAssertions]:
    return ApiAssertions
