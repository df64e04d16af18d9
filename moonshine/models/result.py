"""
Tagged tool result shared by every transport.
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Failure categories reported to callers."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    PERMISSION = "permission"
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class ToolError(BaseModel):
    """Error half of a tool result."""

    kind: ErrorKind
    message: str


class ToolResult(BaseModel):
    """Success payload or error, never both."""

    ok: bool
    data: Any = None
    error: ToolError | None = None

    @classmethod
    def success(cls, data: Any) -> "ToolResult":
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json")
        elif isinstance(data, list):
            data = [
                item.model_dump(mode="json") if isinstance(item, BaseModel) else item
                for item in data
            ]
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, kind: ErrorKind | str, message: str) -> "ToolResult":
        return cls(ok=False, error=ToolError(kind=ErrorKind(kind), message=message))

    def to_text(self) -> str:
        """Render for text transports: payload JSON on success, message on error."""
        if self.ok:
            return json.dumps(self.data, indent=2, ensure_ascii=False)
        return self.error.message
