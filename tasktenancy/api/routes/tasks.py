"""Task CRUD: every query scoped to the caller's tenant_id."""

import logging
import uuid

from fastapi import APIRouter, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from tasktenancy.api.deps import Auth, Session
from tasktenancy.core.errors import InternalError, NotFound
from tasktenancy.models.base import utcnow
from tasktenancy.models.task import Task, TaskDeleted, TaskRead, TaskWrite

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(body: TaskWrite, auth: Auth, session: Session) -> TaskRead:
    task = Task(
        tenant_id=auth.tenant_id,
        title=body.title,
        description=body.description,
        due_date=body.due_date,
        priority=body.priority,
    )
    try:
        session.add(task)
        await session.commit()
        await session.refresh(task)
    except SQLAlchemyError as exc:
        logger.exception("Failed to create task for tenant %s", auth.tenant_id)
        raise InternalError() from exc

    logger.info("Created task %s for tenant %s", task.id, auth.tenant_id)
    return TaskRead.model_validate(task)


@router.get("", response_model=list[TaskRead])
async def list_tasks(auth: Auth, session: Session) -> list[TaskRead]:
    stmt = (
        select(Task)
        .where(Task.tenant_id == auth.tenant_id)
        .order_by(Task.created_at.asc())  # type: ignore[union-attr]
    )
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as exc:
        logger.exception("Failed to list tasks for tenant %s", auth.tenant_id)
        raise InternalError() from exc
    return [TaskRead.model_validate(t) for t in result.scalars().all()]


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: str,
    body: TaskWrite,
    auth: Auth,
    session: Session,
) -> TaskRead:
    try:
        task = await _get_or_404(task_id, auth.tenant_id, session)

        for field, value in body.model_dump().items():
            setattr(task, field, value)
        task.updated_at = utcnow()

        session.add(task)
        await session.commit()
        await session.refresh(task)
    except SQLAlchemyError as exc:
        logger.exception("Failed to update task %s", task_id)
        raise InternalError() from exc

    logger.info("Updated task %s for tenant %s", task.id, auth.tenant_id)
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", response_model=TaskDeleted)
async def delete_task(task_id: str, auth: Auth, session: Session) -> TaskDeleted:
    try:
        task = await _get_or_404(task_id, auth.tenant_id, session)
        await session.delete(task)
        await session.commit()
    except SQLAlchemyError as exc:
        logger.exception("Failed to delete task %s", task_id)
        raise InternalError() from exc

    logger.info("Deleted task %s for tenant %s", task_id, auth.tenant_id)
    return TaskDeleted()


# ── Internal helper ───────────────────────────────────────────

async def _get_or_404(task_id: str, tenant_id: uuid.UUID, session: AsyncSession) -> Task:
    """Fetch a task by (id, tenant_id). Malformed ids are treated as missing."""
    try:
        parsed = uuid.UUID(task_id)
    except ValueError:
        raise NotFound("Task not found") from None

    stmt = select(Task).where(
        Task.id == parsed,
        Task.tenant_id == tenant_id,
    )
    result = await session.execute(stmt)
    task = result.scalar_one_or_none()
    if task is None:
        raise NotFound("Task not found")
    return task
