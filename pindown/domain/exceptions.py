"""Domain exceptions for the pindown application.

Defines the error taxonomy shared by the identity resolver, access guard
and repositories: authentication, authorization, validation, not_found,
conflict and server. Presentation layer maps them to HTTP responses in
exception handlers using error_type.
"""

from typing import Any


class PinDownException(Exception):
    """Base exception for all pindown application errors.

    All custom exceptions inherit from this class so the presentation layer
    can map them to HTTP responses using message, error_code, error_type
    and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        error_type: Taxonomy bucket (class attribute on subclasses).
        details: Additional error context (e.g. resource_type, resource_id).
    """

    error_type: str = "server"

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

    def to_dict(self) -> dict[str, Any]:
        """Return the error body used in API responses (without timestamp)."""
        body: dict[str, Any] = {
            "code": self.error_code,
            "type": self.error_type,
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body


class AuthenticationException(PinDownException):
    """Raised when no valid credential was presented or resolution failed.

    Messages are deliberately generic: they never reveal whether a token or
    an API key came close to working.
    """

    error_type = "authentication"

    def __init__(
        self,
        message: str = "Invalid authentication credentials",
        error_code: str = "AUTH_INVALID",
    ) -> None:
        super().__init__(message, error_code)

    @classmethod
    def required(cls) -> "AuthenticationException":
        """No credential resolved to a principal."""
        return cls("Valid ID token or API key required", "AUTH_REQUIRED")

    @classmethod
    def invalid(cls) -> "AuthenticationException":
        """Resolution failed unexpectedly."""
        return cls("Invalid authentication credentials", "AUTH_INVALID")


class AuthorizationException(PinDownException):
    """Raised when a resolved principal lacks rights on a visible resource."""

    error_type = "authorization"

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "You do not have permission to access this resource",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'pin', 'pinboard').
            action: Optional action that was attempted (e.g. 'write').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ValidationException(PinDownException):
    """Raised when input is malformed (e.g. unparseable JSON dataset payload)."""

    error_type = "validation"

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_FAILED", details)


class ResourceNotFoundException(PinDownException):
    """Raised when a resource is absent or not visible to the caller."""

    error_type = "not_found"

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'pin', 'dataset').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConcurrencyConflictException(PinDownException):
    """Raised when a conditional write kept losing to concurrent writers."""

    error_type = "conflict"

    def __init__(self, resource_type: str, resource_id: str, attempts: int) -> None:
        super().__init__(
            f"{resource_type.capitalize()} was modified concurrently; retry.",
            "CONCURRENT_MODIFICATION",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "attempts": attempts,
            },
        )


class DocumentStoreException(PinDownException):
    """Raised when the document store fails unexpectedly.

    The underlying reason is kept in details only; the message stays generic.
    """

    error_type = "server"

    def __init__(self, operation: str, path: str, reason: str) -> None:
        super().__init__(
            "Document store operation failed",
            "STORE_ERROR",
            {"operation": operation, "path": path, "reason": reason},
        )
