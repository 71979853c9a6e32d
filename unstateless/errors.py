"""Custom error types for unstateless."""


INDEX_ERROR_MESSAGE = (
    "Unstateless error: an explicit key is required when creating shared "
    "state inside a render function."
)


class UnstatelessError(Exception):
    """Base error for all unstateless errors."""
    pass


class InvalidIdentityError(UnstatelessError):
    """Raised when shared state is created inside a render phase without a key."""

    message = INDEX_ERROR_MESSAGE

    def __init__(self):
        super().__init__(self.message)


class StorageError(UnstatelessError):
    """Raised by storage backends when the backing store cannot be read or written."""

    def __init__(self, operation: str, key: str = None, cause: Exception = None):
        self.operation = operation
        self.key = key
        self.cause = cause
        msg = f"Storage {operation} failed"
        if key is not None:
            msg += f" for key '{key}'"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
