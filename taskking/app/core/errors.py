from typing import Optional


class TaskStoreError(Exception):
    """Raised when the task store cannot complete an operation."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class TaskValidationError(TaskStoreError):
    """Raised when task fields cannot be coerced to the store schema."""
