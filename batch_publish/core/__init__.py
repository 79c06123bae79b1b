"""Core primitives for running external commands."""

from .process import (
    ProcessError,
    ProcessExitError,
    ProcessResult,
    ProcessRunner,
    ProcessTimeoutError,
)

__all__ = [
    "ProcessError",
    "ProcessExitError",
    "ProcessResult",
    "ProcessRunner",
    "ProcessTimeoutError",
]
