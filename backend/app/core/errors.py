"""API error classes.

Every error the API returns carries a machine-readable code, a message and
an HTTP status, and is rendered by the handlers in app.main into the
{"error": {...}} envelope.

Navigation failures raised by app.navigation are plain domain exceptions;
from_navigation_error() translates them at the API edge.
"""

from app.navigation.errors import (
    InvalidTransitionError,
    NavigationError,
    ScreenPayloadError,
    UnknownScreenError,
)


class APIError(Exception):
    """Base class for API errors.

    All API errors have a code, message, and HTTP status.
    Subclasses set default status_code.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional list of additional error details.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: list[dict] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ValidationError(APIError):
    """Field validation failed (400).

    Use for request body validation errors and screen payload rejections.
    """

    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details=details,
        )


class UnauthorizedError(APIError):
    """Authentication required (401)."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            code="UNAUTHORIZED",
            message=message,
            status_code=401,
        )


class ForbiddenError(APIError):
    """Not allowed to access resource (403).

    Use when auth is valid but the user's role lacks permission.
    """

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            code="FORBIDDEN",
            message=message,
            status_code=403,
        )


class NotFoundError(APIError):
    """Resource not found (404).

    Use when requested resource doesn't exist OR doesn't belong to user.
    Revealing "exists but not yours" would leak information.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
        )


class ConflictError(APIError):
    """Duplicate or conflicting resource (409).

    Accepts custom code for specific conflict types.
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: list[dict] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details,
        )


class InvalidStateError(APIError):
    """Business rule violation (422).

    Use when request is syntactically valid but violates business rules,
    e.g. completing a screen that has no forward route.
    """

    def __init__(self, message: str) -> None:
        super().__init__(
            code="INVALID_STATE_TRANSITION",
            message=message,
            status_code=422,
        )


class UnknownScreenAPIError(APIError):
    """Transition target outside the view registry (422)."""

    def __init__(self, message: str) -> None:
        super().__init__(
            code="UNKNOWN_SCREEN",
            message=message,
            status_code=422,
        )


class InternalError(APIError):
    """Unexpected server error (500).

    Use for unhandled exceptions. Never expose stack traces to clients.
    """

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
        )


def from_navigation_error(exc: NavigationError) -> APIError:
    """Translate a navigation failure into its API error.

    Args:
        exc: Error raised by the navigation layer.

    Returns:
        APIError carrying the matching code and status.
    """
    if isinstance(exc, UnknownScreenError):
        return UnknownScreenAPIError(exc.message)
    if isinstance(exc, ScreenPayloadError):
        return ValidationError(exc.message, details=exc.details)
    if isinstance(exc, InvalidTransitionError):
        return InvalidStateError(exc.message)
    return InternalError()
