"""Helpers for loading publish settings from TOML."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

try:  # pragma: no cover - Python 3.11+ includes tomllib
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older versions
    import tomli as tomllib  # type: ignore[no-redef]

from ..errors import ConfigError

DEFAULT_CONFIG_NAME = "batch-publish.toml"
CONFIG_ENV_VAR = "BATCH_PUBLISH_CONFIG"
DEFAULT_ROOT = "libs"
DEFAULT_TOOL = "wally"


@dataclass(slots=True)
class ToolSettings:
    """Overrides for the external publish command line."""

    executable: str | None = None
    arguments: list[str] | None = None
    path_flag: str | None = None
    extra_args: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PublishSettings:
    root: Path
    tool: str = DEFAULT_TOOL
    timeout: float | None = None
    concurrency: int = 1
    include_files: bool = False
    exclude: list[str] = field(default_factory=list)
    dry_run: bool = False
    tool_settings: ToolSettings = field(default_factory=ToolSettings)
    source: Path | None = None

    def with_overrides(self, **overrides: Any) -> "PublishSettings":
        """Return a copy with every non-``None`` override applied."""

        values = {key: value for key, value in overrides.items() if value is not None}
        if "root" in values:
            values["root"] = Path(values["root"])
        updated = replace(self, **values)
        _validate(updated)
        return updated


def _config_path(explicit: str | os.PathLike[str] | None = None) -> tuple[Path, bool]:
    if explicit:
        return Path(explicit), True
    env_value = os.environ.get(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value), True
    return Path.cwd() / DEFAULT_CONFIG_NAME, False


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fp:
            return tomllib.load(fp)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _as_str_list(value: Any, *, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"'{key}' must be a string or a list of strings")


def _optional_timeout(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'timeout' must be a number, got {value!r}")
    return float(value)


def _as_bool(value: Any, *, key: str, default: bool = False) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _validate(settings: PublishSettings) -> None:
    if settings.concurrency < 1:
        raise ConfigError(f"'concurrency' must be at least 1, got {settings.concurrency}")
    if settings.timeout is not None and settings.timeout <= 0:
        raise ConfigError(f"'timeout' must be positive, got {settings.timeout}")


def _build_tool_settings(data: dict[str, Any]) -> ToolSettings:
    arguments = data.get("arguments")
    return ToolSettings(
        executable=data.get("executable"),
        arguments=_as_str_list(arguments, key="tool.arguments") if arguments is not None else None,
        path_flag=data.get("path_flag"),
        extra_args=_as_str_list(data.get("extra_args"), key="tool.extra_args"),
    )


def load_settings(config_path: str | os.PathLike[str] | None = None) -> PublishSettings:
    """Load settings from ``config_path``, the env var, or the working directory.

    A missing default file yields the built-in defaults. A file that was named
    explicitly must exist.
    """

    path, explicit = _config_path(config_path)
    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return PublishSettings(root=Path.cwd() / DEFAULT_ROOT)

    data = _load_toml(path)
    publish_section = data.get("publish", {})
    tool_section = data.get("tool", {})

    base_dir = path.resolve().parent
    root = Path(str(publish_section.get("root", DEFAULT_ROOT)))
    if not root.is_absolute():
        root = base_dir / root

    try:
        concurrency = int(publish_section.get("concurrency", 1))
    except (TypeError, ValueError) as exc:
        raise ConfigError("'concurrency' must be an integer") from exc

    settings = PublishSettings(
        root=root,
        tool=str(publish_section.get("tool", DEFAULT_TOOL)),
        timeout=_optional_timeout(publish_section.get("timeout")),
        concurrency=concurrency,
        include_files=_as_bool(publish_section.get("include_files"), key="publish.include_files"),
        exclude=_as_str_list(publish_section.get("exclude"), key="publish.exclude"),
        dry_run=_as_bool(publish_section.get("dry_run"), key="publish.dry_run"),
        tool_settings=_build_tool_settings(tool_section),
        source=path,
    )
    _validate(settings)
    return settings


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_NAME",
    "PublishSettings",
    "ToolSettings",
    "load_settings",
]
