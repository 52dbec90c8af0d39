"""
Tests for access token verification on protected and public routes.
"""

import uuid

import pytest
from httpx import AsyncClient

from learnhub.auth.models.user import UserRole
from learnhub.auth.roles import is_instructor
from learnhub.core.security import create_access_token, decode_token
from tests.utils.factories import create_course_factory, create_user_factory
from tests.utils.helpers import assert_error_response, create_auth_headers


def test_token_round_trip(test_learner):
    token = create_access_token({"sub": str(test_learner.id)})

    payload = decode_token(token)

    assert payload is not None
    assert payload["sub"] == str(test_learner.id)
    assert payload["type"] == "access"


def test_expired_token_is_rejected(test_learner):
    token = create_access_token({"sub": str(test_learner.id)}, expires_minutes=-1)

    assert decode_token(token) is None


def test_role_checks(test_instructor, test_learner):
    assert is_instructor(test_instructor) is True
    assert is_instructor(test_learner) is False


@pytest.mark.asyncio
async def test_unknown_user_is_unauthorized(test_client: AsyncClient):
    token = create_access_token({"sub": str(uuid.uuid4())})

    response = await test_client.get(
        "/api/v1/enrollments/mine", headers=create_auth_headers(token)
    )

    assert_error_response(response, 401, "UNAUTHORIZED")


@pytest.mark.asyncio
async def test_token_without_user_id(test_client: AsyncClient):
    token = create_access_token({"email": "nobody@example.com"})

    response = await test_client.get(
        "/api/v1/enrollments/mine", headers=create_auth_headers(token)
    )

    assert_error_response(response, 401, "UNAUTHORIZED")


@pytest.mark.asyncio
async def test_inactive_user_is_forbidden(test_client: AsyncClient, db_session):
    user = create_user_factory(db_session, role=UserRole.LEARNER, is_active=False)
    token = create_access_token({"sub": str(user.id)})

    response = await test_client.get(
        "/api/v1/enrollments/mine", headers=create_auth_headers(token)
    )

    assert_error_response(response, 403, "FORBIDDEN")


@pytest.mark.asyncio
async def test_invalid_token_rejected_on_public_route(
    test_client: AsyncClient, db_session, test_instructor
):
    course = create_course_factory(db_session, test_instructor)

    response = await test_client.get(
        f"/api/v1/courses/{course.id}", headers=create_auth_headers("garbage")
    )

    assert_error_response(response, 401, "UNAUTHORIZED")
