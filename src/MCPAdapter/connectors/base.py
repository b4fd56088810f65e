# base.py
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from mcp.types import CallToolResult, Tool


class BaseConnector(ABC):
    """
    Call capability of one MCP server.

    The adapter only needs two operations from a server: listing its tools
    and calling one of them. How the connection is made is up to subclasses.
    """

    @abstractmethod
    async def list_tools(self) -> List[Tool]:
        ...

    @abstractmethod
    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> CallToolResult:
        ...
