# tool_protocol.py
import json
from typing import Optional
from pydantic import BaseModel

ERROR_PREFIX = "Error executing MCP tool: "


class ToolError(BaseModel):
    type: str                 # exception class name (ExecutionFailed / RuntimeError / etc)
    message: str              # text shown to the LLM

    @classmethod
    def from_exception(cls, err: BaseException) -> "ToolError":
        message = str(err)
        if not message:
            # nothing readable in str(err); fall back to a structured dump
            message = json.dumps(
                {"type": type(err).__name__, "args": list(err.args)},
                default=str,
            )
        return cls(type=type(err).__name__, message=message)


class ToolResult(BaseModel):
    success: bool
    output: Optional[str] = None
    error: Optional[ToolError] = None

    def render(self) -> str:
        if self.success:
            return self.output or ""
        return f"{ERROR_PREFIX}{self.error.type}: {self.error.message}"
