"""Configuration loader for tasktracker (global + project TOML with env overrides)."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for Python <3.11
    import tomli as tomllib  # type: ignore

from .errors import ConfigError

ENV_PREFIX = "TASKTRACKER_"
PROJECT_DIR_NAME = ".tasktracker"


class ConfigLoader:
    """
    Handles configuration loading from multiple sources with priority resolution.

    Priority (highest → lowest):
    1. Command-line options (applied by the CLI, not here)
    2. Environment variables (TASKTRACKER_<SECTION>_<KEY>)
    3. Project config (.tasktracker/config.toml, searched upward from cwd)
    4. Global config (~/.config/tasktracker/config.toml)
    5. Built-in defaults
    """

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.global_dir = self.get_global_config_dir()
        self.project_dir = self.get_project_config_dir(self.cwd)

        self.config: Dict[str, Any] = self._get_default_config()
        self._load_all()

    # ------------------------------------------------------------------ #
    # Public getters
    # ------------------------------------------------------------------ #
    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-separated key."""
        keys = key.split(".")
        value: Any = self.config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def storage_path(self) -> Path:
        """Location of the task document; relative paths resolve against cwd."""
        path = Path(str(self.get("storage.path", "tasks.json"))).expanduser()
        return path if path.is_absolute() else self.cwd / path

    def log_file(self) -> Optional[Path]:
        """Event log location, or None when the event log is disabled."""
        value = str(self.get("general.log_file", "")).strip()
        return Path(value).expanduser() if value else None

    def date_format(self) -> str:
        return str(self.get("display.date_format", "%x"))

    # ------------------------------------------------------------------ #
    # Load/merge helpers
    # ------------------------------------------------------------------ #
    def _load_all(self) -> None:
        """Load all configuration files with proper priority."""
        self._merge_file(self.global_dir / "config.toml")
        if self.project_dir:
            self._merge_file(self.project_dir / "config.toml")
        self._apply_env_overrides()

    def _merge_file(self, config_file: Path) -> None:
        if not config_file.exists():
            return
        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Unable to read config {config_file}: {exc}") from exc
        self._deep_merge(self.config, data)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides (TASKTRACKER_SECTION_KEY)."""
        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            section, _, name = key[len(ENV_PREFIX) :].lower().partition("_")
            if not section or not name:
                continue
            self._set_nested(self.config, f"{section}.{name}", value)

    # ------------------------------------------------------------------ #
    # Static paths/helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def get_global_config_dir() -> Path:
        """Get platform-specific global config directory following XDG spec."""
        system = platform.system()
        if system == "Windows":
            base = Path(os.environ.get("APPDATA", "~\\AppData\\Roaming")).expanduser()
        else:
            xdg = os.environ.get("XDG_CONFIG_HOME")
            base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
        return base / "tasktracker"

    @staticmethod
    def get_project_config_dir(start: Path) -> Path | None:
        """Find .tasktracker directory in the start or parent directories."""
        for parent in [start] + list(start.parents):
            config_dir = parent / PROJECT_DIR_NAME
            if config_dir.is_dir():
                return config_dir
        return None

    # ------------------------------------------------------------------ #
    # Default content
    # ------------------------------------------------------------------ #
    def _get_default_config(self) -> Dict[str, Any]:
        return {
            "general": {
                "log_file": "",
            },
            "storage": {
                "path": "tasks.json",
            },
            "display": {
                "date_format": "%x",
            },
        }

    # ------------------------------------------------------------------ #
    # Utility helpers
    # ------------------------------------------------------------------ #
    def _deep_merge(self, base: dict, override: dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested(self, d: dict, path: str, value: Any) -> None:
        keys = path.split(".")
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value
