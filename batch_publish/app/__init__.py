"""Batch publishing driver and its command-line surface."""

from __future__ import annotations

from .publisher import BatchPublisher, BatchReport, PublishHooks, PublishTask, publish_all

__all__ = [
    "BatchPublisher",
    "BatchReport",
    "PublishHooks",
    "PublishTask",
    "publish_all",
]
