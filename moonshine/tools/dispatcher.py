"""
Tool dispatcher - validates arguments, runs handlers, returns ToolResult.

This is the boundary where exceptions stop: every call returns a tagged
result, and transports only ever see ToolResult.
"""

from typing import Any

import pydantic

from moonshine.models.result import ErrorKind, ToolResult
from moonshine.services.engine import MoonshineEngine
from moonshine.tools.registry import TOOLS, TOOLS_BY_NAME, ToolDefinition
from moonshine.utils.exceptions import MoonshineError
from moonshine.utils.logger import get_logger

logger = get_logger(__name__)


def describe_validation_error(error: pydantic.ValidationError) -> str:
    """Compact one-line summary of pydantic validation errors."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "(root)"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


class ToolDispatcher:
    """Runs tools against an engine."""

    def __init__(self, engine: MoonshineEngine):
        self.engine = engine

    def list_tools(self) -> list[ToolDefinition]:
        return list(TOOLS)

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """
        Call a tool by name.

        Args:
            name: Tool name
            arguments: Raw argument object from the transport

        Returns:
            ToolResult with the payload, or the error kind and message
        """
        tool = TOOLS_BY_NAME.get(name)
        if tool is None:
            return ToolResult.failure(ErrorKind.VALIDATION, f"Unknown tool: {name}")

        try:
            args = tool.args_model.model_validate(arguments or {})
        except pydantic.ValidationError as e:
            message = f"Invalid input: {describe_validation_error(e)}"
            logger.warning(f"Input validation failed for tool {name}: {message}")
            return ToolResult.failure(ErrorKind.VALIDATION, message)

        try:
            data = await tool.handler(self.engine, args)
        except MoonshineError as e:
            logger.warning(f"Tool {name} failed ({e.kind}): {e.message}")
            return ToolResult.failure(e.kind, e.message)
        except Exception as e:
            logger.exception(f"Internal error in tool {name}")
            return ToolResult.failure(ErrorKind.INTERNAL, f"Internal error in {name}: {e}")

        return ToolResult.success(data)
