"""Batch driver that publishes every project directory under a root."""

from __future__ import annotations

import asyncio
import fnmatch
import os
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from ..core.process import ProcessError, ProcessExitError, ProcessResult, ProcessRunner
from ..settings import PublishSettings, load_settings
from ..tools import DictToolFactory, PublishTool, ToolFactory
from ..utils.logging import get_logger
from .models import BatchReport, PublishHooks, PublishTask
from .report import logging_hooks

LOGGER = get_logger(__name__)


class CommandRunner(Protocol):
    async def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        """Run ``argv`` and return its captured result."""


class BatchPublisher:
    """Runs the publish tool once per entry, each task isolated from the rest."""

    def __init__(
        self,
        tool: PublishTool,
        *,
        runner: CommandRunner | None = None,
        timeout: float | None = None,
        concurrency: int = 1,
        include_files: bool = False,
        exclude: Iterable[str] = (),
        dry_run: bool = False,
        hooks: PublishHooks | None = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self._tool = tool
        self._runner: CommandRunner = runner or ProcessRunner()
        self._timeout = timeout
        self._concurrency = concurrency
        self._include_files = include_files
        self._exclude = tuple(exclude)
        self._dry_run = dry_run
        self._hooks = hooks or PublishHooks()

    @classmethod
    def from_settings(
        cls,
        settings: PublishSettings,
        *,
        runner: CommandRunner | None = None,
        factory: ToolFactory | None = None,
        hooks: PublishHooks | None = None,
    ) -> "BatchPublisher":
        tool_factory = factory or DictToolFactory(settings=settings.tool_settings)
        return cls(
            tool_factory.create(settings.tool),
            runner=runner,
            timeout=settings.timeout,
            concurrency=settings.concurrency,
            include_files=settings.include_files,
            exclude=settings.exclude,
            dry_run=settings.dry_run,
            hooks=hooks,
        )

    @property
    def tool(self) -> PublishTool:
        return self._tool

    def discover(self, root: str | os.PathLike[str]) -> list[str]:
        """Return the entry names under ``root`` that will be published.

        Raises ``OSError`` when the directory cannot be listed.
        """

        base = Path(root)
        selected: list[str] = []
        for entry in sorted(base.iterdir(), key=lambda path: path.name):
            if not self._include_files and not entry.is_dir():
                LOGGER.debug(
                    "Skipping non-directory entry %s",
                    entry.name,
                    extra={"event": "publish.skip", "entry": entry.name, "reason": "not-a-directory"},
                )
                continue
            if any(fnmatch.fnmatch(entry.name, pattern) for pattern in self._exclude):
                LOGGER.debug(
                    "Skipping excluded entry %s",
                    entry.name,
                    extra={"event": "publish.skip", "entry": entry.name, "reason": "excluded"},
                )
                continue
            selected.append(entry.name)
        return selected

    def publish_all(self, root: str | os.PathLike[str]) -> BatchReport:
        return asyncio.run(self.publish_all_async(root))

    async def publish_all_async(self, root: str | os.PathLike[str]) -> BatchReport:
        base = Path(root)
        report = BatchReport(root=base)
        try:
            names = self.discover(base)
        except OSError as exc:
            report.fatal_error = str(exc)
            if self._hooks.on_fatal:
                self._hooks.on_fatal(base, exc)
            return report

        report.tasks = [PublishTask(name=name, project_path=base / name) for name in names]

        if self._concurrency == 1:
            for task in report.tasks:
                await self._publish_one(task)
        else:
            semaphore = asyncio.Semaphore(self._concurrency)

            async def guarded(task: PublishTask) -> None:
                async with semaphore:
                    await self._publish_one(task)

            await asyncio.gather(*(guarded(task) for task in report.tasks))

        if self._hooks.on_finish:
            self._hooks.on_finish(report)
        return report

    async def _publish_one(self, task: PublishTask) -> PublishTask:
        try:
            task.command = self._tool.build_command(task.project_path)
            if self._hooks.before_task:
                self._hooks.before_task(task)
            if self._dry_run:
                task.mark_planned()
            else:
                result = await self._runner.run(task.command, timeout=self._timeout)
                result.check()
                task.mark_success(result)
        except ProcessExitError as exc:
            task.mark_failed(str(exc), result=exc.result)
        except (ProcessError, OSError) as exc:
            task.mark_failed(str(exc))
        except Exception as exc:
            LOGGER.debug("Unexpected task failure", exc_info=True, extra={"entry": task.name})
            task.mark_failed(f"{type(exc).__name__}: {exc}")

        if self._hooks.after_task:
            self._hooks.after_task(task)
        return task


def publish_all(
    root: str | os.PathLike[str] | None = None,
    *,
    settings: PublishSettings | None = None,
    tool: PublishTool | None = None,
    runner: CommandRunner | None = None,
    hooks: PublishHooks | None = None,
) -> BatchReport:
    """Publish every entry under ``root`` and log the outcome of each.

    Listing and per-task failures are reported, never raised.
    """

    resolved = settings or load_settings()
    target = Path(root) if root is not None else resolved.root
    active_hooks = hooks or logging_hooks()
    if tool is None:
        publisher = BatchPublisher.from_settings(resolved, runner=runner, hooks=active_hooks)
    else:
        publisher = BatchPublisher(
            tool,
            runner=runner,
            timeout=resolved.timeout,
            concurrency=resolved.concurrency,
            include_files=resolved.include_files,
            exclude=resolved.exclude,
            dry_run=resolved.dry_run,
            hooks=active_hooks,
        )
    return publisher.publish_all(target)


__all__ = [
    "BatchPublisher",
    "BatchReport",
    "CommandRunner",
    "PublishHooks",
    "PublishTask",
    "publish_all",
]
