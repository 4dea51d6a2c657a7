class NotFoundError(Exception):
    """Raised when a category or task id does not exist."""


class ValidationError(Exception):
    """Raised when a required field is missing or empty."""


class StorageError(Exception):
    """Raised when the task database cannot complete an operation."""


class ApiError(Exception):
    """Raised by the client when an API call fails or the server is unreachable."""

    def __init__(self, message: str, status_code: int | None = None, error_code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
