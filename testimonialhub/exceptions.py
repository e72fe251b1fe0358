# testimonialhub/exceptions.py
"""Error kinds raised by validation, models and services.

Each kind carries the HTTP status the errors blueprint answers with, so
route handlers can simply let them propagate.
"""
from __future__ import annotations


class AppError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationFailed(AppError):
    """One or more fields broke a rule; `errors` is a list of {field, message}."""

    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: list[dict]):
        self.errors = list(errors)
        super().__init__()

    def to_dict(self) -> dict:
        return {"error": self.message, "details": self.errors}

    def messages(self) -> list[str]:
        return [e["message"] for e in self.errors]


class ModelValidationError(ValidationFailed):
    """A storage-layer constraint was violated (required field, bounds, enum)."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__([{"field": field, "message": message}])


class AuthenticationRequired(AppError):
    status_code = 401
    message = "Unauthorized"


class NotFound(AppError):
    status_code = 404

    def __init__(self, resource: str = "Resource", message: str | None = None):
        super().__init__(message or f"{resource} not found")


class Conflict(AppError):
    status_code = 409
    message = "Conflict"
