# client_connector.py
from typing import Any, Dict, List

from langchain_mcp_adapters.client import MultiServerMCPClient
from mcp.types import CallToolResult, Tool

from MCPAdapter.connectors.base import BaseConnector


class ClientConnector(BaseConnector):
    """
    Connector for one server of a ``MultiServerMCPClient``.

    A fresh session is opened (and initialized by the client) for every
    operation, so the connector holds no live connection between calls.

    Attributes
    ----------
    client: MultiServerMCPClient
    server_name: str
    """

    def __init__(self, client: MultiServerMCPClient, server_name: str):
        self.client = client
        self.server_name = server_name

    async def list_tools(self) -> List[Tool]:
        tools: List[Tool] = []
        cursor = None
        async with self.client.session(self.server_name) as session:
            while True:
                page = await session.list_tools(cursor=cursor)
                tools.extend(page.tools)
                cursor = page.nextCursor
                if not cursor:
                    break
        return tools

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> CallToolResult:
        async with self.client.session(self.server_name) as session:
            return await session.call_tool(name, arguments)

    def __repr__(self) -> str:
        return f"ClientConnector(server_name={self.server_name!r})"
