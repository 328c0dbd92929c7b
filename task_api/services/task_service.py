"""Task service implementing the business rules over the task store."""

import logging
from typing import Any, Dict, List, Optional

from ..errors import ValidationError
from ..models.task import Task, TaskStatus, new_task_id, utc_now
from .task_store import TaskStore
from .validation import is_present, validate_task

logger = logging.getLogger(__name__)

# Fields a client may change through an update
MUTABLE_FIELDS = ("title", "description", "status")


class TaskService:
    """Service for task CRUD operations and statistics."""

    def __init__(self, store: Optional[TaskStore] = None):
        """Initialize the task service.

        Args:
            store: Backing task store; a new empty one is created if omitted
        """
        self._store = store if store is not None else TaskStore()
        logger.info("Task service initialized with in-memory storage")

    @property
    def store(self) -> TaskStore:
        return self._store

    def get_all_tasks(self) -> List[Task]:
        """Get all tasks in insertion order."""
        tasks = self._store.get_all()
        logger.debug(f"Listed {len(tasks)} tasks")
        return tasks

    def get_task(self, task_id: str) -> Optional[Task]:
        """Get a task by ID.

        Args:
            task_id: Task ID

        Returns:
            Task if found, None otherwise
        """
        task = self._store.get(task_id)
        if task:
            logger.debug(f"Retrieved task {task_id}: {task.title}")
        else:
            logger.debug(f"Task {task_id} not found")
        return task

    def create_task(self, payload: Dict[str, Any]) -> Task:
        """Create a new task.

        Args:
            payload: Task data with ``title`` and optional ``description`` and ``status``

        Returns:
            Created task

        Raises:
            ValidationError: If the payload breaks a validation rule
        """
        errors = validate_task(payload)
        if errors:
            raise ValidationError(errors)

        now = utc_now()
        task = Task(
            id=new_task_id(),
            title=payload["title"],
            description=payload.get("description") or "",
            status=payload.get("status") or TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

        with self._store.lock:
            # Ids are unique among live tasks
            while task.id in self._store:
                task = task.model_copy(update={"id": new_task_id()})
            self._store.put(task)

        logger.info(f"Created task {task.id}: {task.title}")
        return task

    def update_task(self, task_id: str, payload: Dict[str, Any]) -> Optional[Task]:
        """Update a task.

        Supplied fields are merged over the stored record; ``id`` and
        ``created_at`` never change.

        Args:
            task_id: Task ID
            payload: Fields to change

        Returns:
            Updated task if found, None otherwise

        Raises:
            ValidationError: If the payload breaks a validation rule
        """
        with self._store.lock:
            task = self._store.get(task_id)
            if not task:
                logger.warning(f"Task {task_id} not found for update")
                return None

            errors = validate_task(payload, is_update=True)
            if errors:
                raise ValidationError(errors)

            updated = task.touched(**self._changes(payload))
            self._store.put(updated)

        logger.info(f"Updated task {task_id}: {updated.title}")
        return updated

    @staticmethod
    def _changes(payload: Dict[str, Any]) -> Dict[str, Any]:
        """Pick the fields of a validated update payload to merge.

        Absent title or status values leave the stored value alone; an empty
        string description clears the description.
        """
        changes = {}

        for field in MUTABLE_FIELDS:
            if field not in payload:
                continue
            value = payload[field]
            if field == "description":
                if isinstance(value, str):
                    changes[field] = value
            elif is_present(value):
                changes[field] = value

        return changes

    def delete_task(self, task_id: str) -> bool:
        """Delete a task.

        Args:
            task_id: Task ID

        Returns:
            True if task was deleted, False if not found
        """
        if self._store.remove(task_id):
            logger.info(f"Deleted task {task_id}")
            return True

        logger.warning(f"Task {task_id} not found for deletion")
        return False

    def get_stats(self) -> Dict[str, Any]:
        """Get task statistics.

        Returns:
            Total count and a per-status breakdown. Tasks with a status
            outside the known set count towards the total only.
        """
        tasks = self._store.get_all()
        by_status = {status: 0 for status in TaskStatus.values()}

        for task in tasks:
            if task.status in by_status:
                by_status[task.status] += 1

        return {
            "total": len(tasks),
            "byStatus": by_status,
        }

    def clear_all_tasks(self) -> int:
        """Clear all tasks (for testing/development).

        Returns:
            Number of tasks that were cleared
        """
        count = self._store.clear()
        logger.warning(f"Cleared all {count} tasks")
        return count
