"""
Error hierarchy.

Every failure the service layer can surface is a UsersAPIError carrying the
HTTP status the transport layer maps it to.
"""

from typing import Any, Iterable, Optional


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten Pydantic error dicts into field/message/type entries."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]


class UsersAPIError(Exception):
    """Base exception for all Users API errors."""

    code: str = "INTERNAL_ERROR"
    http_status: int = 500

    def __init__(self, message: str, details: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {"error": error}


class ValidationError(UsersAPIError):
    """Malformed or missing input, detected before any store access."""

    code = "VALIDATION_ERROR"
    http_status = 400


class NotFoundError(UsersAPIError):
    """No row matches the requested key."""

    code = "RESOURCE_NOT_FOUND"
    http_status = 404

    def __init__(self, resource_type: str, key: Any):
        super().__init__(f"{resource_type} '{key}' not found")
        self.resource_type = resource_type
        self.key = key


class ConflictError(UsersAPIError):
    """A store constraint rejected the write (duplicate email, bad foreign key)."""

    code = "CONFLICT"
    http_status = 409


class UnknownStoreError(UsersAPIError):
    """Any other data-store failure, e.g. lost connectivity."""

    code = "STORE_ERROR"
    http_status = 500

    def __init__(self, message: str, operation: str):
        super().__init__(f"Database {operation} failed: {message}")
        self.operation = operation
