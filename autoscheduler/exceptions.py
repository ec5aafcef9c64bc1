"""
Error types raised at the dict boundary of the scheduler.

The engine itself degrades malformed data to defaults and never raises; these
cover structurally invalid requests only.
"""


class SchedulerError(Exception):
    """Base exception for scheduler errors"""

    def __init__(self, message: str, error_code: str | None = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidRequestError(SchedulerError):
    """Raised when a schedule request cannot be interpreted"""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        if field:
            message = f"Validation error for field '{field}': {message}"
        super().__init__(message, "VALIDATION_ERROR")
