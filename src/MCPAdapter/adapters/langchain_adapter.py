# langchain_adapter.py
import json
import logging
from typing import Any, Dict, Iterable, Optional, Type

from langchain_core.tools import StructuredTool
from mcp.types import Tool
from pydantic import BaseModel

from MCPAdapter.adapters.base import BaseAdapter
from MCPAdapter.adapters.result_decoder import decode_tool_result
from MCPAdapter.adapters.schema import schema_to_model
from MCPAdapter.connectors.base import BaseConnector
from MCPAdapter.mcp_tools.tool_protocol import ToolError, ToolResult

NO_NAME = "NO NAME"


class LangChainAdapter(BaseAdapter):
    """
    Turns MCP tools into LangChain ``StructuredTool`` objects.

    The produced tools are async only. LangChain sees the JSON schema of the
    translated arguments model; the tool validates its input against the
    model itself, so input that does not match raises a pydantic
    ``ValidationError`` and only the fields the caller set are sent to the
    server. Anything that goes wrong during the call itself comes back as an
    ``"Error executing MCP tool: ..."`` string so the agent can read it as an
    observation.
    """

    def __init__(self, disallowed_tools: Optional[Iterable[str]] = None):
        super().__init__(disallowed_tools)

    def convert_tool(self, tool: Tool, connector: BaseConnector) -> Optional[StructuredTool]:
        if tool.name in self.disallowed_tools:
            return None

        name = tool.name or NO_NAME
        args_model = schema_to_model(getattr(tool, "inputSchema", None), model_name=f"{name}_args")

        async def call_mcp_tool(**kwargs: Any) -> str:
            arguments = validate_arguments(args_model, kwargs)
            result = await invoke_mcp_tool(tool.name, arguments, connector)
            return result.render()

        return StructuredTool(
            name=name,
            description=tool.description or "",
            args_schema=args_model.model_json_schema(),
            coroutine=call_mcp_tool,
        )


def validate_arguments(args_model: Type[BaseModel], kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate tool input and return the JSON arguments to send.

    Fields the caller left out stay out, defaults included; property names
    are restored from their aliases.

    Raises
    ------
    pydantic.ValidationError
        The input does not match the tool's schema.
    """
    validated = args_model.model_validate(kwargs)
    arguments = validated.model_dump(mode="json", by_alias=True, exclude_unset=True)
    for key, value in (validated.model_extra or {}).items():
        arguments.setdefault(key, value)
    return arguments


async def invoke_mcp_tool(tool_name: str, arguments: Dict[str, Any], connector: BaseConnector) -> ToolResult:
    """
    Call one MCP tool and decode its result.

    Never raises for failures of the call or of the decoding; those are
    logged and returned as a failed ``ToolResult``.
    """
    try:
        logging.debug(f'MCP tool "{tool_name}" received input: {json.dumps(arguments, default=str)}')

        result = await connector.call_tool(tool_name, arguments)
        return ToolResult(success=True, output=decode_tool_result(result))
    except Exception as e:
        logging.error(f"Error executing MCP tool: {e}")
        return ToolResult(success=False, error=ToolError.from_exception(e))
