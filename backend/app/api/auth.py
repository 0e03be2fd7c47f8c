"""Minimal auth dependency.

Only answers "authenticated or not". Token issuance and password handling
live elsewhere; the verifier is a Protocol so a real one can be swapped in
through FastAPI dependency overrides.
"""

import uuid
from typing import Annotated, Protocol

from fastapi import Depends, Header, HTTPException, status
from pydantic import BaseModel


class AuthenticatedUser(BaseModel):
    """Identity attached to an authenticated request."""

    user_id: uuid.UUID
    email: str


class TokenVerifier(Protocol):
    """Turns a bearer token into a user, or None if invalid."""

    def verify(self, token: str) -> AuthenticatedUser | None:
        """Verify a bearer token.

        Args:
            token: Raw token without the "Bearer " prefix

        Returns:
            AuthenticatedUser or None if the token is invalid
        """
        ...


class StubTokenVerifier:
    """Accepts "<user_uuid>:<email>" tokens. For development and tests."""

    def verify(self, token: str) -> AuthenticatedUser | None:
        """Parse a stub token."""
        if ":" not in token:
            return None
        user_id_str, email = token.split(":", 1)
        try:
            user_id = uuid.UUID(user_id_str)
        except ValueError:
            return None
        if "@" not in email:
            return None
        return AuthenticatedUser(user_id=user_id, email=email)


def get_token_verifier() -> TokenVerifier:
    """Default verifier; override in the app for real token validation."""
    return StubTokenVerifier()


def require_auth(
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedUser:
    """Extract and verify the bearer token.

    Args:
        verifier: Token verifier
        authorization: Authorization header (e.g., "Bearer <token>")

    Returns:
        The authenticated user

    Raises:
        HTTPException: 401 if the header is missing or the token is invalid
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[7:]  # Strip "Bearer "
    user = verifier.verify(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
