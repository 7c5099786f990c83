"""
Application exception hierarchy.

Handlers raise these; the error handler registered in main.create_app()
turns each one into a JSON body of the form
{"message": ..., "error": ...} with the matching HTTP status.

    DrugInfoError
    ├── ValidationError   → 400
    ├── AuthError         → 401
    ├── NotFoundError     → 404
    ├── ConflictError     → 409
    └── StoreError        → 500
"""

from typing import Any, Dict, Optional


class DrugInfoError(Exception):
    """Base class for all application errors.

    ``message`` is safe to return to the client; ``context`` is logged
    server-side only.
    """

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred", context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def detail(self) -> str:
        """Value returned in the response's ``error`` field."""
        return self.error_code


class ValidationError(DrugInfoError):
    """Missing or malformed client input."""

    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str = "Validation failed", fields: Optional[list] = None,
                 context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class AuthError(DrugInfoError):
    status_code = 401
    error_code = "auth_error"

    def __init__(self, message: str = "Invalid credentials", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class NotFoundError(DrugInfoError):
    """No record matches the lookup."""

    status_code = 404
    error_code = "not_found"

    def __init__(self, resource: str = "Record", key: Optional[str] = None,
                 message: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        if message is None:
            message = f"{resource} not found" if key is None else f"{resource} '{key}' not found"
        ctx = context or {}
        ctx["resource"] = resource
        if key is not None:
            ctx["key"] = key
        super().__init__(message=message, context=ctx)


class ConflictError(DrugInfoError):
    """Uniqueness or duplicate violation."""

    status_code = 409
    error_code = "conflict"

    def __init__(self, message: str = "Record already exists", context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)


class StoreError(DrugInfoError):
    """Underlying store failure. The driver message travels in ``error``."""

    status_code = 500
    error_code = "store_error"

    def __init__(self, message: str = "A database error occurred. Please try again later.",
                 cause: Optional[BaseException] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, context=context)
        self.cause = cause

    def detail(self) -> str:
        return str(self.cause) if self.cause is not None else self.error_code
