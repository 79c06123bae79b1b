"""Publish every package under a directory with an external publish tool."""

from __future__ import annotations

from .app import BatchPublisher, BatchReport, PublishTask, publish_all

__version__ = "0.1.0"

__all__ = ["BatchPublisher", "BatchReport", "PublishTask", "publish_all", "__version__"]
