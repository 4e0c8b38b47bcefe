"""Domain exceptions for the RenoTimeline scheduler.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class RenoTimelineException(Exception):
    """Base exception for all RenoTimeline application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

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

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(RenoTimelineException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(RenoTimelineException):
    """Raised when a caller fails the scheduler shared-secret check."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class ResourceNotFoundException(RenoTimelineException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'workflow', 'task').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class UnsupportedActionException(RenoTimelineException):
    """Raised when a workflow definition contains an action type the executor cannot run."""

    def __init__(self, action_type: str | None, workflow_id: str | None = None) -> None:
        details: dict[str, Any] = {"action_type": action_type}
        if workflow_id:
            details["workflow_id"] = workflow_id
        super().__init__(
            f"Unsupported workflow action type: {action_type!r}",
            "UNSUPPORTED_ACTION",
            details,
        )


class InvalidActionConfigException(RenoTimelineException):
    """Raised when a known action has an unusable config (e.g. no recipient)."""

    def __init__(self, action_type: str, reason: str) -> None:
        super().__init__(
            f"Invalid {action_type} action: {reason}",
            "INVALID_ACTION_CONFIG",
            {"action_type": action_type, "reason": reason},
        )


class SqlNotConfiguredException(RenoTimelineException):
    """Raised when an operation requires the SQL database but no engine is available."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
