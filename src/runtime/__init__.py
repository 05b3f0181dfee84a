"""Runtime engine exports."""

from .commands import CommandDispatcher, CommandResult
from .loop import RuntimeBootstrap, RuntimeEngine

__all__ = ["CommandDispatcher", "CommandResult", "RuntimeBootstrap", "RuntimeEngine"]
