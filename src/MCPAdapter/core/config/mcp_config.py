import os
import json
import logging
from typing import Dict, Any
from pydantic import BaseModel

# ------------------------
# MCP server configuration
# ------------------------

class MCPConfig(BaseModel):
    path: str  # path of the JSON file the servers were read from
    config: Dict[str, Any]

    @classmethod
    def from_env(cls) -> "MCPConfig":
        path = os.getenv("MCP_CONFIG")
        if not path:
            raise ValueError("Environment variable 'MCP_CONFIG' is not set.")

        config = cls._load_config(path)
        return cls(path=path, config=config)

    @classmethod
    def _load_config(cls, config_file: str) -> Dict[str, Any]:
        """
        Load the MCP JSON config file; a missing or unparsable file raises.

        Parameters
        ----------
        config_file : str
            Path of the MCP config file

        Returns
        -------
        dict
            Parsed configuration
        """
        if not os.path.exists(config_file):
            raise FileNotFoundError(f"MCP config file does not exist: {config_file}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse MCP config file: {config_file}, error: {e}") from e

        if not isinstance(config, dict):
            raise ValueError(f"MCP config file must contain a JSON object: {config_file}")

        logging.info(f"✅ Loaded MCP config file: {config_file}")
        return config

    @property
    def servers(self) -> Dict[str, Dict[str, Any]]:
        """Server connections keyed by name (``mcpServers`` is unwrapped)."""
        servers = self.config.get("mcpServers", self.config)
        if not isinstance(servers, dict):
            raise ValueError("'mcpServers' must be a JSON object")
        return servers
