"""Asynchronous child-process execution with captured output."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

_LOGGER = logging.getLogger(__name__)


class ProcessError(Exception):
    """Base class for child-process failures."""


class ProcessExitError(ProcessError):
    """Raised when a child process exits with a non-zero status."""

    def __init__(self, result: "ProcessResult") -> None:
        detail = result.stderr.strip() or result.stdout.strip()
        message = f"Command {' '.join(result.argv)!r} exited with status {result.returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.result = result


class ProcessTimeoutError(ProcessError):
    """Raised when a child process does not finish within its timeout."""

    def __init__(self, argv: Sequence[str], timeout: float) -> None:
        super().__init__(f"Command {' '.join(argv)!r} timed out after {timeout:g}s")
        self.argv = list(argv)
        self.timeout = timeout


@dataclass(slots=True)
class ProcessResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str
    elapsed: float

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def check(self) -> "ProcessResult":
        if not self.ok:
            raise ProcessExitError(self)
        return self


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


class ProcessRunner:
    """Spawns commands with ``asyncio`` and collects stdout/stderr."""

    async def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> ProcessResult:
        """Run ``argv`` to completion.

        Spawn failures propagate as ``OSError``; a timeout kills the child and
        raises :class:`ProcessTimeoutError`.
        """

        command = [str(part) for part in argv]
        _LOGGER.debug("Spawning %s", command)
        started = time.monotonic()
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=str(cwd) if cwd else None,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError as exc:
            process.kill()
            await process.wait()
            raise ProcessTimeoutError(command, timeout or 0) from exc

        return ProcessResult(
            argv=command,
            returncode=process.returncode if process.returncode is not None else -1,
            stdout=_decode(stdout),
            stderr=_decode(stderr),
            elapsed=time.monotonic() - started,
        )


__all__ = [
    "ProcessError",
    "ProcessExitError",
    "ProcessResult",
    "ProcessRunner",
    "ProcessTimeoutError",
]
