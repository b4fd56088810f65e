# base.py
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from mcp.types import Tool

from MCPAdapter.connectors.base import BaseConnector


class BaseAdapter(ABC):
    """
    Converts the tools of MCP servers into objects of some agent framework.

    Attributes
    ----------
    disallowed_tools: frozenset
        Tool names that are never converted. Fixed at construction.
    """

    def __init__(self, disallowed_tools: Optional[Iterable[str]] = None):
        self.disallowed_tools = frozenset(disallowed_tools or ())

    @abstractmethod
    def convert_tool(self, tool: Tool, connector: BaseConnector) -> Optional[Any]:
        """Convert one tool; return ``None`` when it must be skipped."""

    async def create_tools_from_connector(self, connector: BaseConnector) -> List[Any]:
        """
        Convert every tool a connector lists. Listing errors propagate.
        """
        converted = []
        for tool in await connector.list_tools():
            framework_tool = self.convert_tool(tool, connector)
            if framework_tool is not None:
                converted.append(framework_tool)
        return converted

    async def create_tools(self, connectors: Iterable[BaseConnector]) -> List[Any]:
        """
        Convert the tools of several connectors, in connector order.

        A connector whose tools cannot be listed is logged and skipped so
        the remaining servers still register.
        """
        tools = []
        for connector in connectors:
            try:
                tools.extend(await self.create_tools_from_connector(connector))
            except Exception as e:
                logging.error(f"❌ Failed to list tools from {connector!r}: {e}")
        logging.info(f"✅ Converted {len(tools)} MCP tools")
        return tools
