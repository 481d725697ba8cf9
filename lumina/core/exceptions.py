# lumina/core/exceptions.py
from typing import Any


class AppError(Exception):
    """Error a route can surface to the caller as ``{"error": ..., "details"?: ...}``."""

    status_code = 400

    def __init__(self, message: str, *, status_code: int | None = None, details: Any = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict:
        body: dict[str, Any] = {"error": str(self)}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    status_code = 422

    def __init__(self, message: str = "Invalid data", *, details: Any = None) -> None:
        super().__init__(message, details=details)


class UnauthorizedError(AppError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class ConflictError(AppError):
    status_code = 409

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message)


class ServiceUnavailableError(AppError):
    status_code = 503

    def __init__(self, message: str = "Service unavailable") -> None:
        super().__init__(message)
