"""Task model: every row belongs to exactly one tenant."""

import uuid
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Annotated, Any

from pydantic import BeforeValidator
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from tasktenancy.models.base import CamelModel, TimestampMixin, new_uuid


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


_DATE_FORMATS = ("%Y/%m/%d", "%m/%d/%Y")


def _coerce_due_date(value: Any) -> Any:
    """Normalise ISO datetimes, slash dates and epoch milliseconds to a date.

    Anything unrecognised is returned untouched so the ``date`` validator
    reports it.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    return value


DueDate = Annotated[date, BeforeValidator(_coerce_due_date)]


class Task(TimestampMixin, SQLModel, table=True):
    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=new_uuid, primary_key=True)
    tenant_id: uuid.UUID = Field(nullable=False, index=True)

    title: str = Field(nullable=False)
    description: str = Field(nullable=False)
    due_date: date = Field(nullable=False)
    priority: TaskPriority = Field(nullable=False)


# ── Pydantic schemas ─────────────────────────────────────────

class TaskWrite(CamelModel):
    """Body for both create and full-replacement update.

    Unknown keys (``tenantId`` included) are dropped; the tenant always
    comes from the authenticated caller.
    """

    title: str = PydanticField(min_length=3)
    description: str = PydanticField(min_length=5)
    due_date: DueDate
    priority: TaskPriority


class TaskRead(CamelModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    title: str
    description: str
    due_date: date
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime


class TaskDeleted(CamelModel):
    message: str = "Task deleted successfully"
