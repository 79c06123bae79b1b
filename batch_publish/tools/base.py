"""Base contracts for external publish tools."""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence

from ..errors import ToolNotFoundError


class PublishTool(ABC):
    """Builds the command line that publishes one project directory."""

    name: str

    @abstractmethod
    def build_command(self, project_path: Path) -> list[str]:
        """Return the argv that publishes ``project_path``."""

    def prepare(self) -> None:
        """Execute pre-flight checks before any task is spawned."""


@dataclass(slots=True)
class CommandTool(PublishTool):
    """Argv template: ``executable arguments... path_flag <path> extra_args...``."""

    name: str
    executable: str
    arguments: Sequence[str] = ()
    path_flag: str | None = None
    extra_args: Sequence[str] = field(default_factory=tuple)

    def build_command(self, project_path: Path) -> list[str]:
        command = [self.executable, *self.arguments]
        if self.path_flag:
            command.append(self.path_flag)
        command.append(str(project_path))
        command.extend(self.extra_args)
        return command

    def prepare(self) -> None:
        if shutil.which(self.executable) is None:
            raise ToolNotFoundError(self.executable)


class ToolFactory(Protocol):
    """Factory interface for retrieving configured publish tools."""

    def create(self, name: str) -> PublishTool:
        """Return the publish tool registered under ``name``."""
