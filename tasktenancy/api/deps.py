"""FastAPI dependencies for authentication and tenant resolution."""

import logging
import uuid
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktenancy.core.database import get_session
from tasktenancy.core.errors import InternalError, Unauthorized
from tasktenancy.core.security import InvalidToken, TokenService
from tasktenancy.models.user import User

logger = logging.getLogger(__name__)

# auto_error=False so a missing header maps to our own 401 body
bearer_scheme = HTTPBearer(auto_error=False)


class AuthContext:
    """Resolved identity carried through a request."""

    __slots__ = ("user_id", "tenant_id")

    def __init__(self, user_id: uuid.UUID, tenant_id: uuid.UUID) -> None:
        self.user_id = user_id
        self.tenant_id = tenant_id


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> AuthContext:
    """Resolve ``Authorization: Bearer <token>`` to an AuthContext.

    The tenant comes from the signed token claim, not from the user row;
    the user lookup only confirms the account still exists.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Access denied")

    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidToken as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise Unauthorized("Invalid token") from exc

    try:
        user = await session.get(User, claims.user_id)
    except SQLAlchemyError as exc:
        logger.exception("Authentication lookup failed for user %s", claims.user_id)
        raise InternalError() from exc

    if user is None:
        raise Unauthorized("Invalid token")

    return AuthContext(user_id=user.id, tenant_id=claims.tenant_id)


# Typed shorthand for use in route signatures
Auth = Annotated[AuthContext, Depends(get_auth_context)]
Session = Annotated[AsyncSession, Depends(get_session)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
