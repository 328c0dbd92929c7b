"""In-memory task storage."""

import logging
from threading import RLock
from typing import Dict, List, Optional

from ..models.task import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """Authoritative in-memory collection of tasks keyed by id.

    Tasks are kept in insertion order. Every operation takes ``lock``; it is
    re-entrant so callers can hold it across a read-modify-write sequence.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._tasks: Dict[str, Task] = {}
        self.lock = RLock()
        logger.debug("Task store initialized")

    def get_all(self) -> List[Task]:
        """Get all tasks in insertion order."""
        with self.lock:
            return list(self._tasks.values())

    def get(self, task_id: str) -> Optional[Task]:
        """Get a task by id, or None if it is not stored."""
        with self.lock:
            return self._tasks.get(task_id)

    def put(self, task: Task) -> Task:
        """Insert or overwrite the record for ``task.id``.

        Overwriting keeps the task's original position in the listing order.
        """
        with self.lock:
            self._tasks[task.id] = task
            return task

    def remove(self, task_id: str) -> bool:
        """Delete a task.

        Returns:
            True if a record was removed, False if none existed
        """
        with self.lock:
            return self._tasks.pop(task_id, None) is not None

    def clear(self) -> int:
        """Remove every task.

        Returns:
            Number of tasks that were removed
        """
        with self.lock:
            count = len(self._tasks)
            self._tasks.clear()
            return count

    def __len__(self) -> int:
        with self.lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self.lock:
            return task_id in self._tasks
