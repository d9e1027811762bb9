"""Import all models so SQLModel.metadata picks them up."""

from tasktenancy.models.task import Task, TaskDeleted, TaskPriority, TaskRead, TaskWrite
from tasktenancy.models.user import LoginRequest, RegisterRequest, TokenResponse, User

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "Task",
    "TaskDeleted",
    "TaskPriority",
    "TaskRead",
    "TaskWrite",
    "TokenResponse",
    "User",
]
