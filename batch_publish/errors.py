"""Exception types shared across the package."""

from __future__ import annotations


class BatchPublishError(Exception):
    """Base class for errors raised by batch_publish."""


class ConfigError(BatchPublishError):
    """Raised when settings cannot be loaded or are invalid."""


class ToolNotFoundError(BatchPublishError):
    """Raised when the publish tool executable is not available on PATH."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Publish tool executable not found on PATH: {executable}")
        self.executable = executable


__all__ = ["BatchPublishError", "ConfigError", "ToolNotFoundError"]
