"""Task operations over the persisted collection."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Generic, List, Optional, TypeVar

from .errors import TaskNotFoundError, TaskTrackerError
from .state.tasks import Task, TaskStatus, TaskStore, next_id, now
from .utils.logger import Logger

T = TypeVar("T")

ALL = "all"


@dataclass
class OperationResult(Generic[T]):
    success: bool
    value: Optional[T] = None
    error: Optional[TaskTrackerError] = None

    @property
    def message(self) -> str:
        return str(self.error) if self.error else ""

    def unwrap(self) -> T:
        """Return the value, or raise the error the operation failed with."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def _run(func: Callable[..., T]) -> Callable[..., OperationResult[T]]:
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> OperationResult[T]:
        try:
            return OperationResult(success=True, value=func(*args, **kwargs))
        except TaskTrackerError as exc:
            return OperationResult(success=False, error=exc)

    return wrapper


class TaskOperations:
    """Add, rename, delete, re-status and list tasks.

    Every call performs a fresh load from the store; mutating calls save the
    whole collection before returning. Failures come back as an
    OperationResult carrying the error rather than being raised.
    """

    def __init__(self, store: TaskStore, logger: Optional[Logger] = None) -> None:
        self.store = store
        self.logger = logger

    @staticmethod
    def _find(tasks: List[Task], task_id: int) -> Task:
        task = next((task for task in tasks if task.id == task_id), None)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    @_run
    def add(self, name: str) -> Task:
        """Create a task at the end of the collection."""
        tasks = self.store.load()
        task = Task(id=next_id(tasks), name=name, status=TaskStatus.NOT_DONE, created_at=now())
        tasks.append(task)
        self.store.save(tasks)
        if self.logger:
            self.logger.log_task_added(task)
        return task

    @_run
    def update(self, task_id: int, new_name: str) -> Task:
        """Rename a task."""
        tasks = self.store.load()
        task = self._find(tasks, task_id)
        old_name = task.name
        task.name = new_name
        self.store.save(tasks)
        if self.logger:
            self.logger.log_task_renamed(task, old_name)
        return task

    @_run
    def remove(self, task_id: int) -> Task:
        """Delete a task and return it."""
        tasks = self.store.load()
        task = self._find(tasks, task_id)
        self.store.save([t for t in tasks if t.id != task_id])
        if self.logger:
            self.logger.log_task_deleted(task)
        return task

    @_run
    def set_status(self, task_id: int, status: TaskStatus) -> Task:
        tasks = self.store.load()
        task = self._find(tasks, task_id)
        old_status = task.status
        task.status = status
        self.store.save(tasks)
        if self.logger:
            self.logger.log_status_changed(task, old_status)
        return task

    @_run
    def list(self, status_filter: str = ALL) -> List[Task]:
        """List tasks in stored order, optionally only those with one status."""
        tasks = self.store.load()
        if status_filter == ALL:
            return tasks
        return [task for task in tasks if task.status.value == status_filter]
