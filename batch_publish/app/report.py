"""Console reporting for publish outcomes."""

from __future__ import annotations

import json
from pathlib import Path

from ..utils.logging import get_logger
from .models import BatchReport, PublishHooks, PublishTask

LOGGER = get_logger(__name__)


def report_started(task: PublishTask) -> None:
    LOGGER.debug(
        "Publishing %s",
        task.name,
        extra={"event": "publish.start", "entry": task.name, "command": task.command},
    )


def report_task(task: PublishTask) -> None:
    if task.status == PublishTask.STATUS_PLANNED:
        LOGGER.info(
            "Would publish %s: %s",
            task.name,
            " ".join(task.command),
            extra={"event": "publish.planned", "entry": task.name, "command": task.command},
        )
        return

    if task.succeeded:
        LOGGER.info(
            "Success for %s: %s",
            task.name,
            task.stdout.rstrip(),
            extra={
                "event": "publish.success",
                "entry": task.name,
                "returncode": task.returncode,
                "duration": round(task.duration, 3),
            },
        )
        if task.has_warning:
            LOGGER.warning(
                "Error for %s: %s",
                task.name,
                task.stderr.rstrip(),
                extra={"event": "publish.stderr", "entry": task.name},
            )
        return

    LOGGER.error(
        "Execution failed for %s: %s",
        task.name,
        task.error,
        extra={"event": "publish.failure", "entry": task.name, "returncode": task.returncode},
    )


def report_fatal(root: Path, exc: BaseException) -> None:
    LOGGER.error(
        "Failed to read directory: %s",
        exc,
        extra={"event": "publish.fatal", "root": str(root), "error_type": type(exc).__name__},
    )


def report_summary(report: BatchReport) -> None:
    LOGGER.info(
        "Publish finished: %d attempted, %d succeeded, %d failed",
        len(report.attempted),
        len(report.succeeded),
        len(report.failed),
        extra={
            "event": "publish.summary",
            "root": str(report.root),
            "planned": len(report.planned),
            "failed_entries": [task.name for task in report.failed],
        },
    )


def logging_hooks() -> PublishHooks:
    return PublishHooks(
        before_task=report_started,
        after_task=report_task,
        on_fatal=report_fatal,
        on_finish=report_summary,
    )


def render_json(report: BatchReport) -> str:
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)


def render_table(report: BatchReport) -> str:
    if report.fatal_error:
        return f"<fatal> {report.fatal_error}"
    if not report.tasks:
        return "<no-entries>"
    width = max(len("Entry"), *(len(task.name) for task in report.tasks))
    lines = ["  ".join(("Entry".ljust(width), "Status".ljust(8), "Detail"))]
    for task in report.tasks:
        if task.failed:
            detail = task.error or ""
        elif task.status == PublishTask.STATUS_PLANNED:
            detail = " ".join(task.command)
        else:
            detail = task.stdout.strip().splitlines()[-1] if task.stdout.strip() else ""
        lines.append("  ".join((task.name.ljust(width), task.status.ljust(8), detail)).rstrip())
    return "\n".join(lines)


__all__ = [
    "logging_hooks",
    "render_json",
    "render_table",
    "report_fatal",
    "report_summary",
    "report_task",
]
