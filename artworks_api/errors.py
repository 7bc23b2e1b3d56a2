"""
Error hierarchy for the Artworks API.

Every error carries a machine-readable code and the HTTP status the handler
layer maps it to. Store errors keep the operation and table they failed on so
logs can point at the statement without leaking driver text to clients.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ArtworksError(Exception):
    """Base exception for all Artworks API errors."""

    code: str = "INTERNAL_ERROR"
    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, Any]:
        """Convert to the REST error envelope."""
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(ArtworksError):
    """Client input fault: malformed body, bad path id, id mismatch."""

    code = "VALIDATION_ERROR"
    http_status = 400


class InvalidAction(ArtworksError):
    """A save was requested with something other than INSERT or UPDATE."""

    code = "INVALID_ACTION"
    http_status = 500

    def __init__(self, action: Any) -> None:
        super().__init__(
            f"The given action {action!r} is not valid, it should be either INSERT or UPDATE"
        )
        self.action = action


class NotFound(ArtworksError):
    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, artwork_id: int) -> None:
        super().__init__(f"Unable to find an artwork with id: {artwork_id}")
        self.artwork_id = artwork_id


class QueryError(ArtworksError):
    """
    Statement preparation, execution or row-decode failure.

    Parameters
    ----------
    operation : str
        Repository operation that failed (e.g. "fetch", "save:insert").
    table : str
        Table the statement targeted.
    cause : Exception, optional
        Underlying driver or decode error.
    """

    code = "QUERY_ERROR"
    http_status = 500

    def __init__(self, operation: str, table: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Unable to run {operation} on the {table} table")
        self.operation = operation
        self.table = table
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}. Err: {self.cause}"


__all__ = [
    "ArtworksError",
    "InvalidAction",
    "NotFound",
    "QueryError",
    "ValidationError",
]
