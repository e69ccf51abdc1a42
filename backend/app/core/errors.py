"""Error taxonomy shared by services and mapped to HTTP responses in main"""
from typing import Any


class AppError(Exception):
    """Base error carrying an HTTP status and a stable code"""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(AppError):
    """Missing/invalid field or unresolvable foreign reference. Nothing was written."""

    status_code = 400
    code = "validation_error"


class PermissionDeniedError(AppError):
    status_code = 403
    code = "permission_denied"


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class ConflictError(AppError):
    """Uniqueness violation"""

    status_code = 409
    code = "conflict"


class PersistenceError(AppError):
    """Transaction or connectivity failure, always after a full rollback"""

    status_code = 500
    code = "persistence_error"
