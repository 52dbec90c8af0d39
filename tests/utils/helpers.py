from typing import Any

import httpx


def create_auth_headers(token: str) -> dict[str, str]:
    """Create Authorization headers with Bearer token."""
    return {"Authorization": f"Bearer {token}"}


def set_access_token_cookie(client: httpx.AsyncClient, access_token: str) -> None:
    """Set only the access token cookie on the test client."""
    client.cookies.set("access_token", access_token)


def assert_error_response(
    response: httpx.Response, status_code: int, error_code: str
) -> dict[str, Any]:
    """Assert the standard error envelope and return its ``error`` object."""
    assert response.status_code == status_code, response.text
    data = response.json()
    assert data["success"] is False
    assert data["error"]["code"] == error_code
    assert data["error"]["message"]
    error: dict[str, Any] = data["error"]
    return error
