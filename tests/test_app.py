"""App wiring: settings, startup, logging and system routes."""

import logging

import pytest
from httpx import AsyncClient
from pydantic import ValidationError
from sqlalchemy import inspect

from tasktenancy import main
from tasktenancy.core.config import Settings, get_settings
from tasktenancy.core.logging_setup import setup_logging


@pytest.mark.asyncio
async def test_root_and_health(client: AsyncClient):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Welcome to the Task Manager API"}

    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


def test_settings_require_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, jwt_secret_key="secret")


def test_settings_require_signing_secret(monkeypatch):
    monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, database_url="sqlite+aiosqlite://")


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db:5432/tasks")
    monkeypatch.setenv("JWT_SECRET_KEY", "from-env")
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.database_url.endswith("/tasks")
    assert settings.jwt_secret_key == "from-env"
    assert settings.port == 8080
    assert settings.jwt_expire_minutes == 60


def test_run_exits_without_database_url(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("JWT_SECRET_KEY", "secret")
    monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)
    get_settings.cache_clear()
    try:
        with pytest.raises(SystemExit) as excinfo:
            main.run()
    finally:
        get_settings.cache_clear()
    assert excinfo.value.code == 1


@pytest.mark.asyncio
async def test_lifespan_creates_tables(app, monkeypatch):
    monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)

    async with app.router.lifespan_context(app):
        async with app.state.db.engine.connect() as conn:
            tables = await conn.run_sync(lambda c: inspect(c).get_table_names())
    assert {"users", "tasks"} <= set(tables)


def test_setup_logging_writes_combined_and_error_files(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("INFO", tmp_path)
        log = logging.getLogger("tasktenancy.test")
        log.info("hello")
        log.error("broken")
        for h in root.handlers:
            h.flush()

        combined = (tmp_path / "combined.log").read_text(encoding="utf-8")
        errors = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert "hello" in combined and "broken" in combined
        assert "broken" in errors and "hello" not in errors
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
