"""Taskboard exception hierarchy

Every store failure surfaces as one of these types; the gateway maps them to
HTTP status codes (400 / 404 / 500).
"""


class TaskboardError(Exception):
    """Base class for record store errors"""

    error = "Internal store error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RecordValidationError(TaskboardError):
    """A required field is missing/empty or a field value is invalid"""

    error = "Validation failed"

    def __init__(self, message: str, error: str | None = None) -> None:
        """
        Args:
            message: human-readable detail
            error: short error label, defaults to the class label
        """
        super().__init__(message)
        if error is not None:
            self.error = error


class RecordNotFoundError(TaskboardError):
    """No live record has the requested id"""

    error = "Task not found"

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Task with id {record_id} does not exist")
        self.record_id = record_id


class StoreError(TaskboardError):
    """Persistence failure (connectivity loss, constraint violation, I/O error)"""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error
