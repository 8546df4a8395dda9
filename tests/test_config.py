from pathlib import Path

import pytest

from tasktracker.config import ConfigLoader
from tasktracker.errors import ConfigError


def _write_config(directory: Path, text: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "config.toml").write_text(text, encoding="utf-8")


def test_defaults(isolated_config: Path) -> None:
    config = ConfigLoader()

    assert config.storage_path() == isolated_config / "tasks.json"
    assert config.log_file() is None
    assert config.date_format() == "%x"


def test_global_config(tmp_path: Path) -> None:
    _write_config(tmp_path / "xdg" / "tasktracker", '[storage]\npath = "/data/todo.json"\n')

    config = ConfigLoader()

    assert config.storage_path() == Path("/data/todo.json")


def test_project_config_overrides_global(tmp_path: Path, isolated_config: Path) -> None:
    _write_config(tmp_path / "xdg" / "tasktracker", '[storage]\npath = "global.json"\n[display]\ndate_format = "%d/%m"\n')
    _write_config(isolated_config / ".tasktracker", '[storage]\npath = "project.json"\n')
    nested = isolated_config / "src" / "pkg"
    nested.mkdir(parents=True)

    config = ConfigLoader(cwd=nested)

    assert config.project_dir == isolated_config / ".tasktracker"
    assert config.storage_path() == nested / "project.json"
    # untouched keys fall through from the global file
    assert config.date_format() == "%d/%m"


def test_env_overrides_files(isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_config(isolated_config / ".tasktracker", '[storage]\npath = "project.json"\n')
    monkeypatch.setenv("TASKTRACKER_STORAGE_PATH", "env.json")
    monkeypatch.setenv("TASKTRACKER_GENERAL_LOG_FILE", "~/events.log")

    config = ConfigLoader()

    assert config.storage_path() == isolated_config / "env.json"
    assert config.log_file() == Path("~/events.log").expanduser()
    assert config.get("general.log_file") == "~/events.log"


def test_get_with_default() -> None:
    config = ConfigLoader()
    assert config.get("storage.missing", "fallback") == "fallback"
    assert config.get("storage.path.deeper", "fallback") == "fallback"


def test_malformed_toml_raises(tmp_path: Path) -> None:
    _write_config(tmp_path / "xdg" / "tasktracker", "[storage\npath = \n")
    with pytest.raises(ConfigError):
        ConfigLoader()
