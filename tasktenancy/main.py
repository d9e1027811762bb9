"""FastAPI application entrypoint."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import ValidationError as PydanticValidationError

from tasktenancy.api.routes import api_router
from tasktenancy.core.config import Settings, get_settings
from tasktenancy.core.database import Database
from tasktenancy.core.errors import ValidationError
from tasktenancy.core.logging_setup import setup_logging
from tasktenancy.core.security import TokenService
from tasktenancy.core.validation import first_error_message

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_dir)

    # Startup: ensure tables exist
    try:
        await app.state.db.init()
    except Exception:
        logger.exception("Error connecting to the database")
        raise
    logger.info("Database connected")

    yield

    await app.state.db.dispose()


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> Response:
    """Report the first violated rule as a 400 instead of FastAPI's 422 list."""
    return await http_exception_handler(request, ValidationError(first_error_message(exc.errors())))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and wire its process-wide dependencies."""
    settings = settings or get_settings()

    app = FastAPI(
        title="TaskTenancy",
        version="0.1.0",
        description="Multi-tenant task management API",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.db = Database.from_settings(settings)

    # ── CORS ─────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",")],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    # ── API routes ───────────────────────────────────────────────
    app.include_router(api_router)

    @app.get("/", tags=["system"])
    async def root() -> dict:
        return {"message": "Welcome to the Task Manager API"}

    @app.get("/health", tags=["system"])
    async def health_check() -> dict:
        return {"status": "ok"}

    return app


def run() -> None:
    """Console entrypoint: load settings and serve with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except PydanticValidationError as exc:
        setup_logging("INFO", None)
        missing = ", ".join(
            str(err["loc"][0]).upper() for err in exc.errors() if err.get("loc")
        )
        logger.error("Invalid configuration, check environment / .env: %s", missing)
        sys.exit(1)

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
