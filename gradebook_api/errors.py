"""Domain errors raised by the store, resolver and operations.

Each error carries the HTTP status it is reported with; the app module
turns them into ``{"detail": message}`` responses.
"""


class GradebookError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GradebookError):
    """Malformed or out-of-range input (empty name, grade outside [0, 10], bad index)."""
    status_code = 400


class NotFoundError(GradebookError):
    status_code = 404


class ConflictError(GradebookError):
    """A subject with the same name already exists for the student."""
    status_code = 409


class PersistenceError(GradebookError):
    """The collection could not be read from or written to disk."""
    status_code = 500
