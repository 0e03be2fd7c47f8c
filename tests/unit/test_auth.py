"""Unit tests for the auth dependency."""

import uuid

import pytest
from fastapi import HTTPException

from backend.app.api.auth import AuthenticatedUser, StubTokenVerifier, require_auth


class RejectAll:
    def verify(self, token: str) -> AuthenticatedUser | None:
        return None


def test_stub_verifier_accepts_uuid_and_email() -> None:
    user_id = uuid.uuid4()

    user = StubTokenVerifier().verify(f"{user_id}:ops@example.com")

    assert user is not None
    assert user.user_id == user_id
    assert user.email == "ops@example.com"


@pytest.mark.parametrize(
    "token", ["no-separator", "not-a-uuid:ops@example.com", f"{uuid.uuid4()}:nobody"]
)
def test_stub_verifier_rejects_malformed_tokens(token: str) -> None:
    assert StubTokenVerifier().verify(token) is None


def test_require_auth_returns_user() -> None:
    user_id = uuid.uuid4()

    user = require_auth(StubTokenVerifier(), authorization=f"Bearer {user_id}:a@b.co")

    assert user.user_id == user_id


def test_require_auth_missing_header() -> None:
    with pytest.raises(HTTPException) as exc_info:
        require_auth(StubTokenVerifier(), authorization=None)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Missing or invalid authorization header"


def test_require_auth_wrong_scheme() -> None:
    with pytest.raises(HTTPException) as exc_info:
        require_auth(StubTokenVerifier(), authorization="Basic dXNlcjpwYXNz")

    assert exc_info.value.status_code == 401


def test_require_auth_rejected_token() -> None:
    with pytest.raises(HTTPException) as exc_info:
        require_auth(RejectAll(), authorization=f"Bearer {uuid.uuid4()}:a@b.co")

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid bearer token"
