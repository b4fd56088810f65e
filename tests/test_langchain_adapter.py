# -*- coding: utf-8 -*-
"""
MCP tool -> LangChain StructuredTool adapter tests
"""
import asyncio
import logging
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from langchain_core.tools import StructuredTool
from mcp.types import CallToolResult, TextContent, Tool
from pydantic import ValidationError

from MCPAdapter.adapters.langchain_adapter import NO_NAME, LangChainAdapter
from MCPAdapter.connectors.base import BaseConnector


WEATHER_SCHEMA = {
    "type": "object",
    "properties": {
        "city": {"type": "string"},
        "days": {"type": "integer", "default": 3},
    },
    "required": ["city"],
}


def text_result(*texts, is_error=False):
    return CallToolResult(
        content=[TextContent(type="text", text=t) for t in texts],
        isError=is_error,
    )


class FakeConnector(BaseConnector):
    """Connector returning canned results and recording calls"""

    def __init__(self, tools=(), result=None, error=None, list_error=None):
        self.tools = list(tools)
        self.result = result
        self.error = error
        self.list_error = list_error
        self.calls = []

    async def list_tools(self):
        if self.list_error:
            raise self.list_error
        return self.tools

    async def call_tool(self, name, arguments):
        self.calls.append((name, arguments))
        if self.error:
            raise self.error
        return self.result

    def __repr__(self):
        return "FakeConnector()"


@pytest.fixture
def weather_tool():
    return Tool(name="get_weather", description="Current weather", inputSchema=WEATHER_SCHEMA)


class TestConvertTool:
    """Building StructuredTool objects"""

    def test_disallowed_tool_is_skipped_before_translation(self, weather_tool):
        adapter = LangChainAdapter(disallowed_tools=["get_weather"])

        with patch("MCPAdapter.adapters.langchain_adapter.schema_to_model") as translate:
            assert adapter.convert_tool(weather_tool, FakeConnector()) is None

        translate.assert_not_called()

    def test_disallow_list_is_frozen(self):
        names = ["a"]
        adapter = LangChainAdapter(names)
        names.append("b")

        assert adapter.disallowed_tools == frozenset({"a"})

    def test_tool_metadata(self, weather_tool):
        lc_tool = LangChainAdapter().convert_tool(weather_tool, FakeConnector())

        assert isinstance(lc_tool, StructuredTool)
        assert lc_tool.name == "get_weather"
        assert lc_tool.description == "Current weather"
        assert set(lc_tool.args) == {"city", "days"}

    def test_missing_description_becomes_empty(self):
        tool = Tool(name="ping", inputSchema={"type": "object", "properties": {}})

        lc_tool = LangChainAdapter().convert_tool(tool, FakeConnector())

        assert lc_tool.description == ""

    def test_missing_name_uses_placeholder(self):
        tool = SimpleNamespace(name=None, description=None, inputSchema=None)

        lc_tool = LangChainAdapter().convert_tool(tool, FakeConnector())

        assert lc_tool.name == NO_NAME


class TestInvokeTool:
    """Calling converted tools"""

    @pytest.mark.asyncio
    async def test_success_returns_decoded_text(self, weather_tool):
        connector = FakeConnector(result=text_result("Sunny", ", 21C"))
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        output = await lc_tool.ainvoke({"city": "Paris"})

        assert output == "Sunny, 21C"
        assert connector.calls == [("get_weather", {"city": "Paris"})]

    @pytest.mark.asyncio
    async def test_tool_without_schema_takes_no_arguments(self):
        connector = FakeConnector(result=text_result("pong"))
        tool = SimpleNamespace(name="ping", description="Ping", inputSchema=None)
        lc_tool = LangChainAdapter().convert_tool(tool, connector)

        assert await lc_tool.ainvoke({}) == "pong"
        assert connector.calls == [("ping", {})]

    @pytest.mark.asyncio
    async def test_nested_input_reaches_connector_as_dicts(self):
        schema = {
            "type": "object",
            "properties": {
                "query": {
                    "type": "object",
                    "properties": {
                        "tag": {"type": "string"},
                        "limit": {"type": "integer"},
                    },
                    "required": ["tag"],
                },
            },
            "required": ["query"],
        }
        connector = FakeConnector(result=text_result("ok"))
        lc_tool = LangChainAdapter().convert_tool(Tool(name="search", inputSchema=schema), connector)

        await lc_tool.ainvoke({"query": {"tag": "x"}})

        assert connector.calls == [("search", {"query": {"tag": "x"}})]

    @pytest.mark.asyncio
    async def test_omitted_optional_fields_are_not_sent(self):
        schema = {
            "type": "object",
            "properties": {
                "q": {"type": "string"},
                "limit": {"type": "integer"},
                "page": {"type": "integer", "default": 1},
            },
            "required": ["q"],
        }
        connector = FakeConnector(result=text_result("ok"))
        lc_tool = LangChainAdapter().convert_tool(Tool(name="search", inputSchema=schema), connector)

        await lc_tool.ainvoke({"q": "x"})
        await lc_tool.ainvoke({"q": "y", "limit": 5})

        assert connector.calls == [
            ("search", {"q": "x"}),
            ("search", {"q": "y", "limit": 5}),
        ]

    @pytest.mark.asyncio
    async def test_awkward_property_names_are_sent_unchanged(self):
        schema = {
            "type": "object",
            "properties": {"schema": {"type": "string"}, "user-id": {"type": "string"}},
            "required": ["schema"],
        }
        connector = FakeConnector(result=text_result("ok"))
        lc_tool = LangChainAdapter().convert_tool(Tool(name="query", inputSchema=schema), connector)

        assert set(lc_tool.args) == {"schema", "user-id"}
        await lc_tool.ainvoke({"schema": "public", "user-id": "u1"})

        assert connector.calls == [("query", {"schema": "public", "user-id": "u1"})]

    @pytest.mark.asyncio
    async def test_permissive_schema_passes_input_through(self, caplog):
        schema = {"type": "object", "properties": {"x": {"type": "frobnicate"}}}
        connector = FakeConnector(result=text_result("ok"))

        with caplog.at_level(logging.WARNING):
            lc_tool = LangChainAdapter().convert_tool(Tool(name="loose", inputSchema=schema), connector)

        assert "Failed to convert JSON schema" in caplog.text
        assert await lc_tool.ainvoke({"x": 1, "y": "z"}) == "ok"
        assert connector.calls == [("loose", {"x": 1, "y": "z"})]

    @pytest.mark.asyncio
    async def test_invalid_input_raises_validation_error(self, weather_tool):
        connector = FakeConnector(result=text_result("unused"))
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        with pytest.raises(ValidationError):
            await lc_tool.ainvoke({"days": 2})

        assert connector.calls == []

    @pytest.mark.asyncio
    async def test_connector_failure_becomes_error_string(self, weather_tool):
        connector = FakeConnector(error=RuntimeError("connection lost"))
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        output = await lc_tool.ainvoke({"city": "Paris"})

        assert output == "Error executing MCP tool: RuntimeError: connection lost"

    @pytest.mark.asyncio
    async def test_error_flag_becomes_error_string(self, weather_tool):
        connector = FakeConnector(result=text_result("city unknown", is_error=True))
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        output = await lc_tool.ainvoke({"city": "Atlantis"})

        assert output.startswith("Error executing MCP tool: ExecutionFailed: Tool execution failed: ")
        assert "city unknown" in output

    @pytest.mark.asyncio
    async def test_empty_result_becomes_error_string(self, weather_tool):
        connector = FakeConnector(result=CallToolResult(content=[]))
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        output = await lc_tool.ainvoke({"city": "Paris"})

        assert output == "Error executing MCP tool: EmptyResult: Tool execution returned no content"

    @pytest.mark.asyncio
    async def test_unsupported_content_becomes_error_string(self, weather_tool):
        connector = FakeConnector(result={"content": [{"type": "audio", "data": "x"}]})
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        output = await lc_tool.ainvoke({"city": "Paris"})

        assert output == "Error executing MCP tool: UnsupportedContentType: Unexpected content type: audio"

    @pytest.mark.asyncio
    async def test_error_without_message_is_rendered_structurally(self, weather_tool):
        connector = FakeConnector(error=RuntimeError())
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        output = await lc_tool.ainvoke({"city": "Paris"})

        assert output == 'Error executing MCP tool: RuntimeError: {"type": "RuntimeError", "args": []}'

    @pytest.mark.asyncio
    async def test_invocation_and_failure_are_logged(self, weather_tool, caplog):
        connector = FakeConnector(error=RuntimeError("connection lost"))
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        with caplog.at_level(logging.DEBUG):
            await lc_tool.ainvoke({"city": "Paris"})

        messages = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (logging.DEBUG, 'MCP tool "get_weather" received input: {"city": "Paris"}') in messages
        assert (logging.ERROR, "Error executing MCP tool: connection lost") in messages

    @pytest.mark.asyncio
    async def test_concurrent_invocations_are_independent(self, weather_tool):
        connector = FakeConnector(result=text_result("ok"))
        lc_tool = LangChainAdapter().convert_tool(weather_tool, connector)

        outputs = await asyncio.gather(
            lc_tool.ainvoke({"city": "Paris"}),
            lc_tool.ainvoke({"city": "Rome", "days": 1}),
        )

        assert outputs == ["ok", "ok"]
        assert sorted(connector.calls, key=lambda c: c[1]["city"]) == [
            ("get_weather", {"city": "Paris"}),
            ("get_weather", {"city": "Rome", "days": 1}),
        ]


class TestCreateTools:
    """Listing and converting the tools of several connectors"""

    @pytest.mark.asyncio
    async def test_tools_of_all_connectors_in_order(self):
        first = FakeConnector(tools=[
            Tool(name="a", inputSchema={"type": "object"}),
            Tool(name="secret", inputSchema={"type": "object"}),
        ])
        second = FakeConnector(tools=[Tool(name="b", inputSchema={"type": "object"})])
        adapter = LangChainAdapter(disallowed_tools=["secret"])

        tools = await adapter.create_tools([first, second])

        assert [t.name for t in tools] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_broken_connector_is_skipped(self, caplog):
        broken = FakeConnector(list_error=ConnectionError("refused"))
        healthy = FakeConnector(tools=[Tool(name="b", inputSchema={"type": "object"})])

        with caplog.at_level(logging.ERROR):
            tools = await LangChainAdapter().create_tools([broken, healthy])

        assert [t.name for t in tools] == ["b"]
        assert "refused" in caplog.text

    @pytest.mark.asyncio
    async def test_single_connector_listing_error_propagates(self):
        broken = FakeConnector(list_error=ConnectionError("refused"))

        with pytest.raises(ConnectionError):
            await LangChainAdapter().create_tools_from_connector(broken)

    @pytest.mark.asyncio
    async def test_created_tool_calls_its_own_connector(self):
        first = FakeConnector(tools=[Tool(name="a", inputSchema={"type": "object"})], result=text_result("1"))
        second = FakeConnector(tools=[Tool(name="b", inputSchema={"type": "object"})], result=text_result("2"))

        tools = await LangChainAdapter().create_tools([first, second])

        assert [await t.ainvoke({}) for t in tools] == ["1", "2"]
        assert first.calls == [("a", {})]
        assert second.calls == [("b", {})]
