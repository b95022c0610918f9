"""Exceptions raised by the gitrest client."""

from __future__ import annotations


class GitAPIError(Exception):
    """Base exception for service errors.

    Raised as-is when the status code has no more specific mapping.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        type_key: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.type_key = type_key
        super().__init__(message)


TransportError = GitAPIError


class UnauthorizedError(GitAPIError):
    """401/403 - Missing, invalid or insufficient credentials."""


class NotFoundError(GitAPIError):
    """404 - Resource not found."""


class ConflictError(GitAPIError):
    """409 - The request conflicts with the current state of the resource."""

    def __init__(self, details: dict | str, **kwargs) -> None:
        self.details = details
        super().__init__(str(details), **kwargs)


class ValidationError(GitAPIError):
    """400 - Malformed request, with details from the service."""

    def __init__(self, details: dict | str, **kwargs) -> None:
        self.details = details
        super().__init__(str(details), **kwargs)


class RateLimitedError(GitAPIError):
    """429 - Rate limit exceeded."""

    def __init__(self, message: str, *, retry_after: float | None = None, **kwargs) -> None:
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


class InvalidIdentityError(ValueError):
    """A project/repository/entity identity that cannot be routed."""
