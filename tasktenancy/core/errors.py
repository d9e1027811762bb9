"""HTTP-facing error taxonomy.

Every class is an ``HTTPException`` so FastAPI renders it as
``{"detail": "<message>"}`` with the matching status code.
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """Request payload failed a validation rule (first violation only)."""

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class DuplicateEmail(HTTPException):
    def __init__(self, detail: str = "Email already exists") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class Unauthorized(HTTPException):
    """Authentication failed. Messages stay generic on purpose."""

    def __init__(self, detail: str = "Access denied") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InternalError(HTTPException):
    """Unexpected failure. The cause is logged, never returned."""

    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
