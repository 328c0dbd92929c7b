"""Error types and the JSON error envelope returned by the API."""

from typing import Any, Dict, List, Optional

from .models.task import utc_now


class TaskServiceError(Exception):
    """Base class for business errors raised by the task service."""


class ValidationError(TaskServiceError):
    """Raised when a task payload violates the validation rules.

    Args:
        errors: One message per failed rule, in rule order
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        self.message = ", ".join(self.errors)
        super().__init__(self.message)


def error_body(
    status_code: int,
    error: str,
    message: str,
    details: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Build the error envelope shared by every failing response.

    Args:
        status_code: HTTP status code
        error: Short error label
        message: Human readable message
        details: Per-rule validation messages, validation failures only

    Returns:
        JSON-serializable error body
    """
    body: Dict[str, Any] = {
        "error": error,
        "message": message,
        "status": status_code,
        # Same "Z" suffix pydantic writes for response timestamps
        "timestamp": utc_now().isoformat().replace("+00:00", "Z"),
    }

    if details is not None:
        body["details"] = details

    return body
