# thinking_tools/core/errors.py
from __future__ import annotations
from typing import Optional


class ConfigError(Exception):
    """Startup configuration problem (missing credential, unknown provider)."""


class ToolError(Exception):
    """Base for every failure a tool invocation can surface to the caller.

    `tool` is filled in by the dispatcher once the error crosses its boundary.
    """

    def __init__(self, message: str, tool: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.tool = tool

    def __str__(self) -> str:
        if self.tool:
            return f"[{self.tool}] {self.message}"
        return self.message

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "tool": self.tool, "detail": self.message}


class ValidationError(ToolError):
    def __init__(self, field: str, message: str, tool: Optional[str] = None):
        super().__init__(f"Invalid argument '{field}': {message}", tool=tool)
        self.field = field


class UnknownToolError(ToolError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", tool=name)
        self.name = name


class FileReadError(ToolError):
    pass


class EmptyDatasetError(ToolError):
    pass


class InsufficientColumnsError(ToolError):
    pass


class ModelRequestError(ToolError):
    pass


class FileWriteError(ToolError):
    pass
