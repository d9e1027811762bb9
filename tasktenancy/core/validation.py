"""Payload validation for registration, login and task bodies.

The ``validate_*`` helpers are pure: they run the same pydantic schemas the
HTTP handlers accept and return the first violation as a human-readable
message, or ``None`` when the payload is acceptable. ``first_error_message``
is shared with the app-level ``RequestValidationError`` handler so both paths
produce identical wording.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from tasktenancy.models.task import TaskWrite
from tasktenancy.models.user import LoginRequest, RegisterRequest

# Path segments FastAPI prepends to a location ("body", "query", ...).
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _field_label(loc: Sequence[Any]) -> str:
    parts = [str(p) for p in loc if p not in _LOCATION_PREFIXES]
    if parts:
        return ".".join(parts)
    return str(loc[0]) if loc else "value"


def format_error(error: Mapping[str, Any]) -> str:
    """Render one pydantic error dict as a single sentence."""
    field = _field_label(error.get("loc", ()))
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f'"{field}" is required'
    if kind == "json_invalid":
        return "Request body is not valid JSON"
    if kind == "string_type":
        return f'"{field}" must be a string'
    if kind == "string_too_short":
        return f'"{field}" length must be at least {ctx.get("min_length")} characters long'
    if kind == "string_too_long":
        return (
            f'"{field}" length must be less than or equal to '
            f'{ctx.get("max_length")} characters long'
        )
    if kind == "enum":
        allowed = re.findall(r"'([^']*)'", str(ctx.get("expected", "")))
        return f'"{field}" must be one of [{", ".join(allowed)}]'
    if kind.startswith("date"):
        return f'"{field}" must be a valid date'
    if kind == "value_error" and "email" in str(error.get("msg", "")):
        return f'"{field}" must be a valid email'
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return f'"{field}" must be of type object'
    return f'"{field}" {error.get("msg", "is invalid")}'


def first_error_message(errors: Sequence[Mapping[str, Any]]) -> str:
    if not errors:
        return "Invalid request"
    return format_error(errors[0])


def _validate(schema: type[BaseModel], data: Any) -> str | None:
    try:
        schema.model_validate(data)
    except PydanticValidationError as exc:
        return first_error_message(exc.errors())
    return None


def validate_registration(data: Any) -> str | None:
    return _validate(RegisterRequest, data)


def validate_login(data: Any) -> str | None:
    return _validate(LoginRequest, data)


def validate_task(data: Any) -> str | None:
    return _validate(TaskWrite, data)
