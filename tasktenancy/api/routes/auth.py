"""Authentication endpoints: register + login."""

import logging

from fastapi import APIRouter, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select

from tasktenancy.api.deps import Session, Tokens
from tasktenancy.core.errors import DuplicateEmail, InternalError, Unauthorized
from tasktenancy.core.security import hash_password, verify_password
from tasktenancy.models.base import new_uuid
from tasktenancy.models.user import LoginRequest, RegisterRequest, TokenResponse, User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, session: Session, tokens: Tokens) -> TokenResponse:
    """Create a user with a fresh tenant and return a bearer token."""
    try:
        existing = await session.execute(select(User).where(User.email == body.email))
        if existing.scalar_one_or_none() is not None:
            raise DuplicateEmail()

        user = User(
            username=body.username,
            email=body.email,
            password_hash=await run_in_threadpool(hash_password, body.password),
            tenant_id=new_uuid(),
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
    except IntegrityError as exc:
        # Lost a race against a concurrent registration for the same email
        await session.rollback()
        raise DuplicateEmail() from exc
    except SQLAlchemyError as exc:
        logger.exception("Registration error")
        raise InternalError() from exc

    logger.info("Registered user %s (tenant %s)", user.id, user.tenant_id)
    return TokenResponse(token=tokens.issue(user.id, user.tenant_id))


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, session: Session, tokens: Tokens) -> TokenResponse:
    """Authenticate with email + password, receive a bearer token."""
    try:
        result = await session.execute(select(User).where(User.email == body.email))
        user = result.scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("Authentication error")
        raise InternalError() from exc

    if user is None:
        raise Unauthorized(INVALID_CREDENTIALS)
    try:
        valid = await run_in_threadpool(verify_password, body.password, user.password_hash)
    except ValueError as exc:
        # Stored hash is not one passlib recognises
        logger.exception("Unreadable password hash for user %s", user.id)
        raise InternalError() from exc
    if not valid:
        raise Unauthorized(INVALID_CREDENTIALS)

    logger.info("User %s logged in", user.id)
    return TokenResponse(token=tokens.issue(user.id, user.tenant_id))
