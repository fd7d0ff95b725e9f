"""Identity token verification.

Sign-up, sign-in and email verification are handled by the external identity
provider. It hands the client a signed JWT carrying the caller's uid, email,
verification flag and display name; this module only checks the signature and
turns the claims into a ``Caller``.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel, Field

from ideahub.app.core.config import settings
from ideahub.app.core.exceptions import AuthError

bearer_scheme = HTTPBearer(auto_error=False)


class Caller(BaseModel):
    """Identity of the authenticated caller."""

    uid: str = Field(..., description="User ID from the identity provider")
    email: str | None = Field(None, description="Email address")
    email_verified: bool = Field(False, description="Whether the email was verified")
    name: str | None = Field(None, description="Display name from the identity provider")


def issue_identity_token(
    uid: str,
    email: str | None = None,
    email_verified: bool = False,
    name: str | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """
    Sign an identity token with the shared secret.

    Used by local tooling and tests in place of the identity provider.
    """
    expire = datetime.now(timezone.utc) + (
        expires_in or timedelta(hours=settings.jwt_expiration_hours)
    )
    payload = {
        "sub": uid,
        "email": email,
        "email_verified": email_verified,
        "name": name,
        "exp": expire,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_identity_token(token: str) -> Caller:
    """
    Verify an identity token and return the caller it describes.

    Raises:
        AuthError: If the token is invalid, expired, or has no subject
    """
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthError(f"Invalid identity token: {e}", authenticated=False)

    uid = claims.get("sub")
    if not uid:
        raise AuthError("Identity token has no subject", authenticated=False)

    return Caller(
        uid=uid,
        email=claims.get("email"),
        email_verified=bool(claims.get("email_verified", False)),
        name=claims.get("name"),
    )


async def get_current_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Caller:
    """FastAPI dependency resolving the bearer token into a Caller."""
    if credentials is None:
        raise AuthError("No authenticated user found", authenticated=False)
    return decode_identity_token(credentials.credentials)


async def get_optional_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Caller | None:
    """Like get_current_caller, but anonymous requests resolve to None."""
    if credentials is None:
        return None
    return decode_identity_token(credentials.credentials)
