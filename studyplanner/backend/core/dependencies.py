"""
FastAPI Dependencies.

    DbSession        request-scoped AsyncSession (commit on success)
    CurrentIdentity  caller resolved from ``Authorization: Bearer <jwt>``
    OwnerId          that caller's user id, the scope of every note and grade query
"""

from typing import Annotated

import structlog
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from studyplanner.backend.core.database import get_db_session
from studyplanner.backend.core.exceptions import AuthenticationError
from studyplanner.backend.core.security import Identity, identity_from_token

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_current_identity(authorization: str | None = Header(None)) -> Identity:
    """
    Raises:
        AuthenticationError: header missing, not a bearer token, or the token fails verification
    """
    if not authorization:
        raise AuthenticationError("No token provided")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Expected a bearer token")

    identity = identity_from_token(token)
    structlog.contextvars.bind_contextvars(owner_id=identity.user_id)
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


async def get_owner_id(identity: CurrentIdentity) -> str:
    return identity.user_id


OwnerId = Annotated[str, Depends(get_owner_id)]
