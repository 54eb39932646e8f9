"""
Bearer Token Verification.

Sign-up and sign-in happen at the identity provider. This module only
checks the HS256 signature, audience and expiry of the tokens it issues
and turns their claims into an Identity:

    sub                       -> Identity.user_id (the owner id)
    email                     -> Identity.email
    user_metadata.full_name   -> Identity.name

``create_access_token`` mints tokens of the same shape for the CLI and tests.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from studyplanner.backend.core.config import get_app_config, get_settings
from studyplanner.backend.core.exceptions import AuthenticationError
from studyplanner.backend.core.logging import get_logger
from studyplanner.backend.core.utils import utc_now

logger = get_logger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str | None = None
    name: str = ""


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Sign ``data`` plus ``exp`` and ``aud``; the input dict is left untouched.

    Args:
        data: claims, ``sub`` being the user id
        expires_delta: lifetime, defaults to access_token_expire_minutes
    """
    jwt_config = get_app_config().security.jwt
    lifetime = expires_delta or timedelta(minutes=jwt_config.access_token_expire_minutes)
    claims = {**data, "exp": utc_now() + lifetime, "aud": jwt_config.audience}
    return jwt.encode(claims, get_settings().jwt_secret, algorithm=jwt_config.algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Verified claims. Any failure is AuthenticationError("Invalid or expired token")."""
    jwt_config = get_app_config().security.jwt
    try:
        return jwt.decode(
            token,
            get_settings().jwt_secret,
            algorithms=[jwt_config.algorithm],
            audience=jwt_config.audience,
        )
    except JWTError as e:
        logger.warning("Token decode failed", extra={"error": str(e)})
        raise AuthenticationError("Invalid or expired token") from e


def identity_from_token(token: str) -> Identity:
    claims = decode_token(token)
    if not claims.get("sub"):
        raise AuthenticationError("Token has no subject")

    profile = claims.get("user_metadata") or {}
    return Identity(
        user_id=str(claims["sub"]),
        email=claims.get("email"),
        name=profile.get("full_name", ""),
    )
