"""Helpers for reading and atomically writing JSON documents."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from ..errors import CorruptDataError, StorageWriteError


class Persistence:
    """Handles JSON document reads and atomic writes."""

    @staticmethod
    def load_json(file_path: Path, default: Any = None) -> Any:
        """Load JSON from file, return default if not found.

        Raises CorruptDataError when the file cannot be read or parsed.
        """
        if not file_path.exists():
            return default

        try:
            with file_path.open("r", encoding="utf-8") as fp:
                return json.load(fp)
        except (json.JSONDecodeError, RecursionError) as exc:
            raise CorruptDataError(f"{file_path} is not valid JSON: {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise CorruptDataError(f"Unable to read {file_path}: {exc}") from exc

    @staticmethod
    def save_json(file_path: Path, data: Any) -> None:
        """Atomically save JSON to file, replacing any previous content."""
        try:
            Persistence.ensure_dir(file_path.parent)
            tmp_fd, tmp_path = tempfile.mkstemp(dir=file_path.parent, suffix=".tmp")
        except OSError as exc:
            raise StorageWriteError(f"Unable to write {file_path}: {exc}") from exc

        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2)
                fp.write("\n")
                fp.flush()
                os.fsync(fp.fileno())
            os.replace(tmp_path, file_path)
        except OSError as exc:
            raise StorageWriteError(f"Unable to write {file_path}: {exc}") from exc
        finally:
            if os.path.exists(tmp_path):
                with contextlib.suppress(OSError):
                    os.remove(tmp_path)

    @staticmethod
    def ensure_dir(dir_path: Path) -> None:
        """Create directory if it doesn't exist."""
        dir_path.mkdir(parents=True, exist_ok=True)
