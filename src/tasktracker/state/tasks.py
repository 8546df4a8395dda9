"""Task records and the JSON-backed task store."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import CorruptDataError
from .persistence import Persistence


class TaskStatus(Enum):
    NOT_DONE = "not-done"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def values(cls) -> List[str]:
        return [status.value for status in cls]


RECORD_FIELDS = ("id", "name", "status", "createdAt")


def now() -> datetime:
    """Current UTC time at the precision the document stores."""
    current = datetime.now(timezone.utc)
    return current.replace(microsecond=current.microsecond // 1000 * 1000)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing ``Z`` and naive values mean UTC."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format as UTC ISO-8601 with milliseconds, e.g. 2024-05-01T09:30:00.000Z."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


class Task:
    """Represents a single task."""

    def __init__(
        self,
        id: int,
        name: str,
        status: TaskStatus = TaskStatus.NOT_DONE,
        created_at: Optional[datetime] = None,
    ) -> None:
        self.id = id
        self.name = name
        self.status = status
        self.created_at = created_at or now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a document record."""
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "createdAt": format_timestamp(self.created_at),
        }

    @staticmethod
    def from_dict(data: Any) -> "Task":
        """Create from a document record, rejecting anything not task-shaped."""
        if not isinstance(data, dict):
            raise CorruptDataError(f"expected a task record, got {type(data).__name__}")

        missing = [key for key in RECORD_FIELDS if key not in data]
        if missing:
            raise CorruptDataError(f"task record is missing {', '.join(missing)}")

        task_id = data["id"]
        # bool is an int subclass
        if not isinstance(task_id, int) or isinstance(task_id, bool) or task_id < 1:
            raise CorruptDataError(f"invalid task id {task_id!r}")

        name = data["name"]
        if not isinstance(name, str):
            raise CorruptDataError(f"task {task_id} has a non-text name")

        try:
            status = TaskStatus(data["status"])
        except ValueError as exc:
            raise CorruptDataError(f"task {task_id} has unknown status {data['status']!r}") from exc

        created_at = data["createdAt"]
        if not isinstance(created_at, str):
            raise CorruptDataError(f"task {task_id} has a non-text createdAt")
        try:
            timestamp = parse_timestamp(created_at)
        except ValueError as exc:
            raise CorruptDataError(f"task {task_id} has invalid createdAt {created_at!r}") from exc

        return Task(id=task_id, name=name, status=status, created_at=timestamp)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Task(id={self.id}, name={self.name!r}, status={self.status.value})"


def next_id(tasks: List[Task]) -> int:
    """Next task id: one past the highest id in use, or 1."""
    return max((task.id for task in tasks), default=0) + 1


class TaskStore:
    """Loads and saves the whole task collection as one JSON document."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> List[Task]:
        """Load tasks from disk; a missing document is an empty collection."""
        data = Persistence.load_json(self.path, default=[])
        if not isinstance(data, list):
            raise CorruptDataError(f"{self.path} does not contain a list of tasks")

        tasks: List[Task] = []
        seen = set()
        for index, entry in enumerate(data):
            try:
                task = Task.from_dict(entry)
            except CorruptDataError as exc:
                raise CorruptDataError(f"{self.path}: record {index}: {exc}") from exc
            if task.id in seen:
                raise CorruptDataError(f"{self.path}: duplicate task id {task.id}")
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def save(self, tasks: List[Task]) -> None:
        """Overwrite the document with the full collection."""
        Persistence.save_json(self.path, [task.to_dict() for task in tasks])
