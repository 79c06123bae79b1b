"""Factory helpers for publish tools."""

from __future__ import annotations

from typing import Callable, Mapping

from ..errors import ConfigError
from ..settings import ToolSettings
from .base import CommandTool, PublishTool, ToolFactory

ToolBuilder = Callable[[ToolSettings], PublishTool]


def build_wally(settings: ToolSettings) -> PublishTool:
    """``wally publish --project-path <path>``."""
    return CommandTool(
        name="wally",
        executable=settings.executable or "wally",
        arguments=tuple(settings.arguments) if settings.arguments is not None else ("publish",),
        path_flag=settings.path_flag or "--project-path",
        extra_args=tuple(settings.extra_args),
    )


def build_command(settings: ToolSettings) -> PublishTool:
    if not settings.executable:
        raise ConfigError("Tool 'command' requires [tool].executable to be set")
    return CommandTool(
        name="command",
        executable=settings.executable,
        arguments=tuple(settings.arguments or ()),
        path_flag=settings.path_flag,
        extra_args=tuple(settings.extra_args),
    )


DEFAULT_BUILDERS: dict[str, ToolBuilder] = {
    "wally": build_wally,
    "command": build_command,
}


class DictToolFactory(ToolFactory):
    """Registry-backed factory."""

    def __init__(
        self,
        builders: Mapping[str, ToolBuilder] | None = None,
        *,
        settings: ToolSettings | None = None,
    ) -> None:
        source = DEFAULT_BUILDERS if builders is None else builders
        self._builders = {key.lower(): value for key, value in source.items()}
        self._settings = settings or ToolSettings()

    @property
    def names(self) -> list[str]:
        return sorted(self._builders)

    def create(self, name: str) -> PublishTool:
        key = name.lower()
        try:
            builder = self._builders[key]
        except KeyError as exc:
            available = ", ".join(self.names) or "<none>"
            raise ValueError(f"Unsupported publish tool: {name} (available: {available})") from exc
        return builder(self._settings)
