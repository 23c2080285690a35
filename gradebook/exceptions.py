"""
gradebook/exceptions.py
Typed exceptions for the grading and progress engine

Two kinds of failure reach callers:
- InvalidIdentifierError: malformed learner/course id, rejected before any query (client error)
- UpstreamUnavailableError: a collaborator query failed or timed out (transient server error)

"No data" is never an exception: empty enrollments or submissions yield zeroed reports.
"""
from typing import Any, Optional


class GradebookException(Exception):
    """Base exception for the gradebook"""
    status_code: int = 500

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidIdentifierError(GradebookException):
    """
    Raised when a learner/course id is not a well-formed identifier.

    Examples:
    - "abc" passed as learner id
    - 0 or a negative number
    - True/False (bool is an int subclass, but never an id)
    """
    status_code = 400

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r}", self.status_code)


class UpstreamUnavailableError(GradebookException):
    """
    Raised when a collaborator (store, catalog, enrollment provider) fails or times out.

    Carries enough context to retry: which collaborator, which operation, which course.
    """
    status_code = 503

    def __init__(
        self,
        collaborator: str,
        operation: str,
        course_id: Optional[int] = None,
        timed_out: bool = False,
        reason: Optional[str] = None,
    ):
        self.collaborator = collaborator
        self.operation = operation
        self.course_id = course_id
        self.timed_out = timed_out
        self.reason = reason

        message = f"{collaborator}.{operation} {'timed out' if timed_out else 'failed'}"
        if course_id is not None:
            message += f" for course {course_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message, self.status_code)

    def to_details(self) -> dict:
        return {
            "collaborator": self.collaborator,
            "operation": self.operation,
            "course_id": self.course_id,
            "timed_out": self.timed_out,
        }


class ReportTimeoutError(UpstreamUnavailableError):
    """Raised when a whole report exceeds its time budget. Partial data is never returned."""
    status_code = 504

    def __init__(self, operation: str, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            collaborator="report",
            operation=operation,
            timed_out=True,
            reason=f"exceeded {timeout_seconds}s",
        )


class AuthRequiredError(GradebookException):
    """No learner identity could be resolved for the request."""
    status_code = 401

    def __init__(self, message: str = "User is not authenticated"):
        super().__init__(message, self.status_code)
