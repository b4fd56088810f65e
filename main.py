#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import asyncio
import json
import logging
import os
from dotenv import load_dotenv

from MCPAdapter.adapters.langchain_adapter import LangChainAdapter
from MCPAdapter.core.config.all_config import AllConfig
from MCPAdapter.manager.mcp.mcp_manager import MCPManager


async def main(configs: AllConfig):
    """List the LangChain tools built from the configured MCP servers; optionally call one."""
    manager = MCPManager()
    try:
        await manager.create_mcp_client(configs.mcp)
        adapter = LangChainAdapter(configs.adapter.disallowed_tools)
        tools = await manager.get_tools(adapter)

        for tool in tools:
            logging.info(f"🔧 {tool.name}: {tool.description}")

        tool_name = os.getenv("TOOL_NAME")
        if not tool_name:
            return

        by_name = {tool.name: tool for tool in tools}
        if tool_name not in by_name:
            logging.error(f"❌ Tool not available: {tool_name}")
            return

        tool_args = json.loads(os.getenv("TOOL_ARGS") or "{}")
        logging.info(f"🚀 Calling {tool_name} with {tool_args}")
        output = await by_name[tool_name].ainvoke(tool_args)
        print(output)

    except Exception as e:
        logging.exception("❌ Run failed: %s", e)
    finally:
        await manager.close()


if __name__ == "__main__":
    load_dotenv()
    configs = AllConfig.from_env()

    logging.basicConfig(
        level=configs.adapter.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s"
    )

    asyncio.run(main(configs))
