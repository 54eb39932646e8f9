"""
Application Exceptions.

Services raise these; exception_handlers.py turns them into the error
envelope. Each class carries its own machine-readable code, and the HTTP
status for it is chosen by the handler.
"""


class ApplicationError(Exception):
    """Root of every error the API reports on purpose."""

    code = "SYS_INTERNAL_ERROR"
    default_message = "Internal error"

    def __init__(self, message: str | None = None, code: str | None = None) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Missing record, or a record owned by someone else. Callers cannot tell which."""

    code = "RES_NOT_FOUND"
    default_message = "Resource not found"


class ValidationError(ApplicationError):
    code = "VAL_VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class AuthenticationError(ApplicationError):
    """No usable identity: token missing, malformed, expired or unsigned."""

    code = "AUTH_UNAUTHORIZED"
    default_message = "Authentication required"


class AuthorizationError(ApplicationError):
    code = "AUTHZ_FORBIDDEN"
    default_message = "Permission denied"


class ConflictError(ApplicationError):
    code = "RES_CONFLICT"
    default_message = "Resource conflict"


class DatabaseError(ApplicationError):
    code = "SYS_DATABASE_ERROR"
    default_message = "Database error"
