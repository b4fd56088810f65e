from pydantic import BaseModel

from MCPAdapter.core.config.adapter_config import AdapterConfig
from MCPAdapter.core.config.mcp_config import MCPConfig


class AllConfig(BaseModel):
    adapter: AdapterConfig
    mcp: MCPConfig

    @classmethod
    def from_env(cls) -> "AllConfig":
        adapter_config = AdapterConfig.from_env()
        mcp_config = MCPConfig.from_env()

        return cls(
            adapter = adapter_config,
            mcp = mcp_config,
        )
