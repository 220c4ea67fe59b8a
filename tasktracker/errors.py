"""Domain errors raised by the service layer.

Each error carries the HTTP status and the public message the API boundary
reports. Internal causes (which login factor failed, why a token was rejected,
whether a task is missing or belongs to someone else) are logged where they
are detected and never attached to these errors.
"""


class TaskTrackerError(Exception):
    """Base class for all errors reported to API callers."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, details: list[str] | None = None):
        super().__init__(self.message)
        self.details = details or []


class ValidationError(TaskTrackerError):
    """Client input is malformed."""

    status_code = 400
    message = "Validation error"

    def __init__(self, reasons: list[str]):
        super().__init__(details=reasons)

    @property
    def reasons(self) -> list[str]:
        return self.details


class DuplicateIdentity(TaskTrackerError):
    """The email is already registered."""

    status_code = 409
    message = "Email already registered"

    def __init__(self):
        super().__init__(details=["Use a different email or log in instead"])


class InvalidCredentials(TaskTrackerError):
    """Login failed. Deliberately silent on which factor was wrong."""

    status_code = 401
    message = "Incorrect email or password"


class Unauthenticated(TaskTrackerError):
    """No bearer token was presented."""

    status_code = 401
    message = "Authentication required"


class InvalidToken(TaskTrackerError):
    """A token was presented but failed validation or has expired."""

    status_code = 403
    message = "Invalid or expired token"


class Forbidden(InvalidToken):
    """Raised by the authorization gate when a presented token is rejected."""


class NotFound(TaskTrackerError):
    """The record does not exist or is not owned by the caller."""

    status_code = 404
    message = "Task not found"

    def __init__(self, resource: str = "Task"):
        self.message = f"{resource} not found"
        super().__init__()


class InternalFailure(TaskTrackerError):
    """Store unavailable or an unexpected fault."""

    status_code = 500
    message = "Internal server error"
