"""Validation rules for task payloads."""

from typing import Any, List

from ..models.task import TaskStatus

TITLE_REQUIRED = "Title is required and must be a string"
TITLE_NOT_STRING = "Title must be a string"
DESCRIPTION_NOT_STRING = "Description must be a string"
BODY_NOT_OBJECT = "Request body must be a JSON object"


def status_message() -> str:
    """Message reported for an unknown status."""
    return f"Status must be one of: {', '.join(TaskStatus.values())}"


def is_present(value: Any) -> bool:
    """Whether a payload value counts as supplied.

    Follows JSON truthiness: null, false, 0 and "" are absent while any
    array or object is present, even an empty one.
    """
    if isinstance(value, (list, dict)):
        return True
    return bool(value)


def validate_task(payload: Any, is_update: bool = False) -> List[str]:
    """Check a candidate task payload.

    Args:
        payload: Decoded JSON request body
        is_update: Title is optional for updates

    Returns:
        Error messages in rule order, empty if the payload is valid
    """
    if not isinstance(payload, dict):
        return [BODY_NOT_OBJECT]

    errors = []
    title = payload.get("title")
    description = payload.get("description")
    status = payload.get("status")

    if not is_update and (not is_present(title) or not isinstance(title, str)):
        errors.append(TITLE_REQUIRED)

    # Applies to updates too, where title is optional
    if is_present(title) and not isinstance(title, str):
        errors.append(TITLE_NOT_STRING)

    if is_present(description) and not isinstance(description, str):
        errors.append(DESCRIPTION_NOT_STRING)

    if is_present(status) and status not in TaskStatus.values():
        errors.append(status_message())

    return errors
