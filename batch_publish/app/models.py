"""Data model for publish tasks and batch reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from ..core.process import ProcessResult


@dataclass(slots=True)
class PublishTask:
    """One attempt to publish a single entry of the root directory."""

    name: str
    project_path: Path
    command: list[str] = field(default_factory=list)
    status: str = "pending"
    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    returncode: int | None = None
    duration: float = 0.0

    STATUS_PENDING = "pending"
    STATUS_SUCCESS = "success"
    STATUS_FAILURE = "failure"
    STATUS_PLANNED = "planned"

    @property
    def done(self) -> bool:
        return self.status != self.STATUS_PENDING

    @property
    def succeeded(self) -> bool:
        return self.status == self.STATUS_SUCCESS

    @property
    def failed(self) -> bool:
        return self.status == self.STATUS_FAILURE

    @property
    def has_warning(self) -> bool:
        return self.succeeded and bool(self.stderr.strip())

    def _complete(self, status: str) -> None:
        if self.done:
            raise RuntimeError(f"Task '{self.name}' already completed with status {self.status}")
        self.status = status

    def mark_success(self, result: ProcessResult) -> None:
        self._complete(self.STATUS_SUCCESS)
        self._absorb(result)

    def mark_failed(self, error: str, *, result: ProcessResult | None = None) -> None:
        self._complete(self.STATUS_FAILURE)
        self.error = error
        if result is not None:
            self._absorb(result)

    def mark_planned(self) -> None:
        self._complete(self.STATUS_PLANNED)

    def _absorb(self, result: ProcessResult) -> None:
        self.stdout = result.stdout
        self.stderr = result.stderr
        self.returncode = result.returncode
        self.duration = result.elapsed

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "project_path": str(self.project_path),
            "command": self.command,
            "status": self.status,
            "returncode": self.returncode,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "error": self.error,
            "duration": round(self.duration, 3),
        }


@dataclass(slots=True)
class BatchReport:
    """Outcome of one ``publish_all`` call."""

    root: Path
    tasks: list[PublishTask] = field(default_factory=list)
    fatal_error: str | None = None

    @property
    def attempted(self) -> list[PublishTask]:
        return [task for task in self.tasks if task.succeeded or task.failed]

    @property
    def succeeded(self) -> list[PublishTask]:
        return [task for task in self.tasks if task.succeeded]

    @property
    def failed(self) -> list[PublishTask]:
        return [task for task in self.tasks if task.failed]

    @property
    def planned(self) -> list[PublishTask]:
        return [task for task in self.tasks if task.status == PublishTask.STATUS_PLANNED]

    @property
    def ok(self) -> bool:
        return self.fatal_error is None and not self.failed

    def to_dict(self) -> dict[str, object]:
        return {
            "root": str(self.root),
            "fatal_error": self.fatal_error,
            "attempted": len(self.attempted),
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
            "planned": len(self.planned),
            "tasks": [task.to_dict() for task in self.tasks],
        }


@dataclass(slots=True)
class PublishHooks:
    before_task: Callable[[PublishTask], None] | None = None
    after_task: Callable[[PublishTask], None] | None = None
    on_fatal: Callable[[Path, BaseException], None] | None = None
    on_finish: Callable[[BatchReport], None] | None = None


__all__ = ["BatchReport", "PublishHooks", "PublishTask"]
