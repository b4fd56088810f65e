# mcp_manager.py
import logging
from typing import Any, List, Optional
from langchain_mcp_adapters.client import MultiServerMCPClient

from MCPAdapter.adapters.base import BaseAdapter
from MCPAdapter.connectors.client_connector import ClientConnector
from MCPAdapter.core.config.mcp_config import MCPConfig


class MCPManager:
    """
    MCP tool manager - owns the MCP client, exposes one connector per
    configured server and runs tool discovery through an adapter.

    Attributes
    ----------
    client: Optional[MultiServerMCPClient]
    """

    def __init__(self):

        self.client: Optional[MultiServerMCPClient] = None
        self.server_names: List[str] = []


    async def create_mcp_client(self, mcp_config: MCPConfig) -> MultiServerMCPClient:
        """
        Create the MCP client for every server in the config

        Returns
        -------
        MultiServerMCPClient

        Raises
        ------
        RuntimeError
            when the client cannot be created
        """
        if self.client:
            await self.close()

        try:
            servers = mcp_config.servers
            self.client = MultiServerMCPClient(servers)
            self.server_names = list(servers)
            logging.info(f"✅ MCP client created for servers {self.server_names} ({mcp_config.path})")
            return self.client
        except Exception as e:
            self.client = None
            self.server_names = []
            raise RuntimeError(f"Failed to initialize MCP client: {e}") from e


    def connectors(self) -> List[ClientConnector]:
        if self.client is None:
            raise RuntimeError("MCP client is not initialized, call create_mcp_client first")
        return [ClientConnector(self.client, name) for name in self.server_names]


    async def get_tools(self, adapter: BaseAdapter) -> List[Any]:
        """
        Convert the tools of all configured servers with ``adapter``
        """
        return await adapter.create_tools(self.connectors())


    async def close(self) -> None:
        """
        Close the MCP client if it supports it; never raises
        """
        if not self.client:
            return

        try:
            if hasattr(self.client, 'close'):
                await self.client.close()
                logging.info("✅ Done closing MCP client")
            else:
                logging.debug("ℹ️ No need to close MCP client explicitly")
        except Exception as e:
            logging.error(f"⚠️ Error closing MCP client: {e}")
        finally:
            self.client = None
            self.server_names = []
