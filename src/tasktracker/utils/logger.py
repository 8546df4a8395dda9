"""JSON-lines event log for task mutations."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from ..state.tasks import Task, TaskStatus


class Logger:
    """Minimal logger that appends task events to a log file."""

    def __init__(self, log_file: Path) -> None:
        self.log_file = Path(log_file).expanduser()

    def _write(self, payload: dict) -> None:
        entry = {"timestamp": datetime.now(timezone.utc).isoformat(), **payload}
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with self.log_file.open("a", encoding="utf-8") as fp:
                fp.write(json.dumps(entry) + "\n")
        except OSError:
            # The event log never decides whether a command succeeded.
            return

    def log_task_added(self, task: Task) -> None:
        self._write({"event": "added", "task_id": task.id, "name": task.name})

    def log_task_renamed(self, task: Task, old_name: str) -> None:
        self._write({"event": "renamed", "task_id": task.id, "old_name": old_name, "name": task.name})

    def log_task_deleted(self, task: Task) -> None:
        self._write({"event": "deleted", "task_id": task.id, "name": task.name})

    def log_status_changed(self, task: Task, old_status: TaskStatus) -> None:
        self._write(
            {"event": "status", "task_id": task.id, "old_status": old_status.value, "status": task.status.value}
        )
