"""Domain exceptions for the merchandise API.

Defines domain-level exceptions that represent business rule violations
and backing-store failures. Presentation layer maps them to HTTP
responses in exception handlers (app.core.exception_handlers).
"""

from typing import Any


class MerchApiException(Exception):
    """Base exception for all application errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(MerchApiException):
    """Raised when input validation fails (e.g. page out of range, unknown sort field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or query parameter that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(MerchApiException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(MerchApiException):
    """Raised when the user's role does not allow the operation."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        role: str | None = None,
    ) -> None:
        """Initialize with message and the role that was rejected.

        Args:
            message: Human-readable message.
            role: Role carried by the caller's token, if known.
        """
        details = {"role": role} if role else {}
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(MerchApiException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'Product', 'University').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(MerchApiException):
    """Raised when a write collides with a unique value (email, username, name)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "CONFLICT", details)


class BackingStoreException(MerchApiException):
    """Raised when the relational store fails a fetch or write.

    Fatal for the current request; surfaced as a server error.
    """

    def __init__(self, operation: str, reason: str | None = None) -> None:
        """Initialize with the failed operation and optional driver reason.

        Args:
            operation: What was attempted (e.g. 'fetch_page', 'create').
            reason: Optional low-level reason (logged, not returned to clients).
        """
        super().__init__(
            f"Data store error during {operation}",
            "BACKING_STORE_ERROR",
            {"operation": operation, "reason": reason} if reason else {"operation": operation},
        )


class CacheUnavailableException(MerchApiException):
    """Raised by the cache adapter when Redis is unreachable, slow or failing.

    Never fatal: every caller catches it and falls back to the data store.
    """

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Cache unavailable during {operation}",
            "CACHE_UNAVAILABLE",
            {"operation": operation},
        )
