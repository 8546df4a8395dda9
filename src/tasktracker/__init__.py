"""tasktracker - a command-line task tracker backed by a JSON document."""

__version__ = "0.1.0"
__author__ = "tasktracker Contributors"

from .config import ConfigLoader
from .errors import CorruptDataError, StorageWriteError, TaskNotFoundError, TaskTrackerError
from .operations import OperationResult, TaskOperations
from .state.tasks import Task, TaskStatus, TaskStore

__all__ = [
    "ConfigLoader",
    "CorruptDataError",
    "OperationResult",
    "StorageWriteError",
    "Task",
    "TaskNotFoundError",
    "TaskOperations",
    "TaskStatus",
    "TaskStore",
    "TaskTrackerError",
]
