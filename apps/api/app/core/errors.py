from __future__ import annotations

from typing import Any


class LifecycleError(Exception):
    """Base error for failures surfaced to API callers through the error envelope."""

    status_code = 500
    code = "internal_error"

    def __init__(self, message: str, *, details: Any = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class UnauthorizedError(LifecycleError):
    """No valid identity could be resolved for the request."""

    status_code = 401
    code = "unauthorized"

    def __init__(self, message: str = "Unauthorized - Please login") -> None:
        super().__init__(message)


class ForbiddenError(LifecycleError):
    """A valid identity lacks the capability. The message never names the required role."""

    status_code = 403
    code = "forbidden"

    def __init__(self) -> None:
        super().__init__("Forbidden - Insufficient permissions")


class NotFoundError(LifecycleError):
    status_code = 404
    code = "not_found"


class RecordValidationError(LifecycleError):
    """Malformed input on a write path. Carries the offending field name."""

    status_code = 400
    code = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message, details=[{"field": field, "message": message}])


class InfrastructureError(LifecycleError):
    status_code = 500
    code = "infrastructure_error"

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
