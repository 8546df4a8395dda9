"""Error taxonomy for the task tracker core."""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base exception for task tracker errors."""


class CorruptDataError(TaskTrackerError):
    """Raised when the task document exists but cannot be interpreted."""


class StorageWriteError(TaskTrackerError):
    """Raised when the task document could not be written."""


class ConfigError(TaskTrackerError):
    """Raised when a configuration file cannot be parsed."""


class TaskNotFoundError(TaskTrackerError):
    """Raised when no task matches the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task with ID {task_id} not found")
        self.task_id = task_id
