"""Publish tool integration package."""

from __future__ import annotations

from .base import CommandTool, PublishTool, ToolFactory
from .factory import DEFAULT_BUILDERS, DictToolFactory

__all__ = [
    "CommandTool",
    "DEFAULT_BUILDERS",
    "DictToolFactory",
    "PublishTool",
    "ToolFactory",
]
