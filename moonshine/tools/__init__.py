"""
Tool surface shared by the MCP and HTTP transports.
"""

from moonshine.tools.dispatcher import ToolDispatcher
from moonshine.tools.registry import TOOLS, TOOLS_BY_NAME, ToolDefinition

__all__ = [
    "ToolDispatcher",
    "ToolDefinition",
    "TOOLS",
    "TOOLS_BY_NAME",
]
