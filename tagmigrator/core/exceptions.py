"""
Custom exceptions for the tag migration tool.

None of these are recovered from locally: they propagate out of the
pipeline and terminate the run.
"""

from typing import Any


class MigrationException(Exception):
    """Base exception for all migration errors."""

    def __init__(
        self,
        error: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a reportable dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ServerRequestException(MigrationException):
    """The management server answered a request with a non-2xx status."""

    def __init__(
        self,
        method: str,
        path: str,
        status_code: int,
        body: str = "",
    ):
        self.method = method
        self.path = path
        self.status_code = status_code
        super().__init__(
            error="server_error",
            message=f"{method} {path} failed with HTTP {status_code}",
            details={"status_code": status_code, "body": body} if body else {"status_code": status_code},
        )


class AuthenticationException(ServerRequestException):
    """401 - Missing, expired or rejected session."""

    def __init__(self, method: str, path: str, body: str = ""):
        super().__init__(method, path, 401, body)
        self.error = "unauthorized"


class CategoryNotFoundException(MigrationException):
    """An annotation refers to a category that was never materialized."""

    def __init__(self, category_name: str):
        super().__init__(
            error="category_not_found",
            message=f"Tag category '{category_name}' not found",
        )


class TagNotFoundException(MigrationException):
    """A tag could not be looked up by name within its category."""

    def __init__(self, tag_name: str, category_name: str):
        super().__init__(
            error="tag_not_found",
            message=f"Tag '{tag_name}' not found in category '{category_name}'",
            details={"category": category_name},
        )
