"""State management modules."""

from .persistence import Persistence
from .tasks import Task, TaskStatus, TaskStore

__all__ = ["Persistence", "Task", "TaskStatus", "TaskStore"]
