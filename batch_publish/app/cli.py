"""Command-line interface for batch publishing."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from ..errors import BatchPublishError
from ..settings import PublishSettings, load_settings
from ..utils.logging import configure_logging, get_logger
from .publisher import BatchPublisher, BatchReport, CommandRunner
from .report import logging_hooks, render_json, render_table

LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_TASK_FAILED = 1
EXIT_FATAL = 2


def main(argv: Sequence[str] | None = None, *, runner: CommandRunner | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        structured=not args.log_plain,
        stream=sys.stderr,
    )

    handler: Callable[..., int] | None = getattr(args, "handler", None)
    if handler is None:
        parser.print_help(sys.stderr)
        return EXIT_FATAL
    try:
        return handler(args, runner=runner)
    except (BatchPublishError, ValueError) as exc:
        LOGGER.error(
            "%s",
            exc,
            extra={"event": "cli.error", "command": args.command, "error_type": type(exc).__name__},
        )
        return EXIT_FATAL


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batch-publish",
        description="Publish every project directory under a root with an external tool",
    )
    parser.add_argument("--config", help="Path to configuration file", default=None)
    parser.add_argument(
        "--log-plain",
        action="store_true",
        help="Use plain-text logs instead of JSON",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    _add_publish_command(subparsers)
    _add_list_command(subparsers)

    return parser


def _add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", nargs="?", default=None, help="Directory holding the projects")
    parser.add_argument(
        "--include-files",
        action="store_true",
        default=None,
        help="Treat plain files as publish targets too",
    )
    parser.add_argument(
        "--exclude",
        nargs="+",
        metavar="PATTERN",
        default=None,
        help="Glob patterns of entry names to skip",
    )


def _add_publish_command(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    publish_parser = subparsers.add_parser("publish", help="Publish every entry under the root")
    _add_selection_arguments(publish_parser)
    publish_parser.add_argument("--tool", default=None, help="Publish tool name (e.g. wally)")
    publish_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-entry timeout in seconds",
    )
    publish_parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Number of entries published at once (default 1)",
    )
    publish_parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Print the commands without running them",
    )
    publish_parser.add_argument(
        "--format",
        choices=("log", "json", "table"),
        default="log",
        help="Extra summary printed after the run",
    )
    publish_parser.set_defaults(handler=_handle_publish)


def _add_list_command(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    list_parser = subparsers.add_parser("list", help="Show the entries that would be published")
    _add_selection_arguments(list_parser)
    list_parser.set_defaults(handler=_handle_list)


def _resolve_settings(args: argparse.Namespace) -> PublishSettings:
    settings = load_settings(args.config)
    return settings.with_overrides(
        root=args.root,
        tool=getattr(args, "tool", None),
        timeout=getattr(args, "timeout", None),
        concurrency=getattr(args, "concurrency", None),
        include_files=args.include_files,
        exclude=args.exclude,
        dry_run=getattr(args, "dry_run", None),
    )


def _handle_publish(args: argparse.Namespace, *, runner: CommandRunner | None = None) -> int:
    settings = _resolve_settings(args)
    publisher = BatchPublisher.from_settings(settings, runner=runner, hooks=logging_hooks())
    if not settings.dry_run:
        publisher.tool.prepare()

    LOGGER.info(
        "Batch publish started",
        extra={
            "event": "cli.command",
            "command": "publish",
            "root": str(settings.root),
            "tool": settings.tool,
            "dry_run": settings.dry_run,
        },
    )
    report = publisher.publish_all(settings.root)

    if args.format == "json":
        print(render_json(report))
    elif args.format == "table":
        print(render_table(report))

    return _exit_code(report)


def _handle_list(args: argparse.Namespace, *, runner: CommandRunner | None = None) -> int:
    settings = _resolve_settings(args)
    publisher = BatchPublisher.from_settings(settings, runner=runner)
    try:
        names = publisher.discover(settings.root)
    except OSError as exc:
        LOGGER.error(
            "Failed to read directory: %s",
            exc,
            extra={"event": "cli.error", "command": "list", "root": str(settings.root)},
        )
        return EXIT_FATAL
    for name in names:
        print(name)
    return EXIT_OK


def _exit_code(report: BatchReport) -> int:
    if report.fatal_error is not None:
        return EXIT_FATAL
    if report.failed:
        return EXIT_TASK_FAILED
    return EXIT_OK


__all__ = ["main"]
