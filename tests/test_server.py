import asyncio

import pytest

from fastmcp import Client

from qweather_mcp.config import SERVER_NAME, QWeatherConfig
from qweather_mcp.errors import UnknownToolError
from qweather_mcp.models.base import ToolRegistry
from qweather_mcp.server import MCPServer
from qweather_mcp.services.weather_service import TOOL_NAMES


def test_server_registers_weather_tools(config):
    server = MCPServer(config)

    assert server.name == SERVER_NAME
    assert server.registry.get_service("weather") is not None
    assert [tool.name for tool in server.registry.list_tools()] == list(TOOL_NAMES)


def test_server_routes_calls_to_weather_service(config, make_service):
    service, upstream = make_service(body={"now": {"temp": "20", "text": "晴"}})
    server = MCPServer(config, weather_service=service)

    result = asyncio.run(server.call_tool("get-weather", {"location": "116.40,39.90"}))
    assert "天气: 晴" in result[0].text
    assert len(upstream.requests) == 1


def test_server_rejects_unknown_tool(config):
    server = MCPServer(config)
    with pytest.raises(UnknownToolError):
        asyncio.run(server.call_tool("get-climate", {}))


def test_registry_refuses_duplicate_tool_names(config, make_service):
    registry = ToolRegistry()
    first, _ = make_service()
    registry.register_service(first)

    second, _ = make_service()
    with pytest.raises(ValueError, match="already registered"):
        registry.register_service(second)


def call_over_mcp(server, name, arguments):
    """Call a tool through an in-memory MCP client session."""

    async def go():
        async with Client(server.mcp) as client:
            return await client.call_tool(name, arguments, raise_on_error=False)

    return asyncio.run(go())


def list_over_mcp(server):
    async def go():
        async with Client(server.mcp) as client:
            return await client.list_tools()

    return asyncio.run(go())


def test_mcp_call_renders_weather(config, make_service):
    service, upstream = make_service(body={"now": {"temp": "20", "text": "晴"}})
    server = MCPServer(config, weather_service=service)

    result = call_over_mcp(server, "get-weather", {"location": "116.40,39.90"})
    assert not result.is_error
    assert "温度: 20°C" in result.content[0].text
    assert upstream.requests[0].url.path == "/v7/weather/now"


def test_mcp_call_upstream_404_is_not_an_error(config, make_service):
    service, _ = make_service(status_code=404, body={"code": "404"})
    server = MCPServer(config, weather_service=service)

    result = call_over_mcp(server, "weather-warning", {"location": "101010100"})
    assert not result.is_error
    assert result.content[0].text == "当前 101010100 地区暂无天气预警信息"


def test_mcp_call_reports_every_missing_field(config, make_service):
    service, upstream = make_service()
    server = MCPServer(config, weather_service=service)

    result = call_over_mcp(server, "indices-forecast", {})
    assert result.is_error
    text = result.content[0].text
    assert "location" in text
    assert "type" in text
    assert upstream.requests == []


def test_mcp_call_reports_range_and_missing_field(config, make_service):
    service, upstream = make_service()
    server = MCPServer(config, weather_service=service)

    result = call_over_mcp(server, "city-lookup", {"number": 50})
    assert result.is_error
    text = result.content[0].text
    assert "location" in text
    assert "number" in text
    assert upstream.requests == []


def test_mcp_call_unknown_tool(config, make_service):
    service, upstream = make_service()
    server = MCPServer(config, weather_service=service)

    result = call_over_mcp(server, "get-climate", {"location": "x"})
    assert result.is_error
    assert "get-climate" in result.content[0].text
    assert upstream.requests == []


def test_mcp_call_signing_failure_sends_no_request(make_service):
    unsigned = QWeatherConfig(api_host="https://api.qweather.test")
    service, upstream = make_service(body={"now": {"temp": "20"}}, service_config=unsigned)
    server = MCPServer(unsigned, weather_service=service)

    result = call_over_mcp(server, "get-weather", {"location": "116.40,39.90"})
    assert result.is_error
    assert "private key" in result.content[0].text
    assert upstream.requests == []


def test_advertised_schemas_leave_validation_to_dispatch(config):
    tools = {tool.name: tool for tool in list_over_mcp(MCPServer(config))}

    assert set(tools) == set(TOOL_NAMES)
    for tool in tools.values():
        assert not tool.inputSchema.get("required")
    assert set(tools["indices-forecast"].inputSchema["properties"]) == {"location", "type", "days", "lang"}


def test_run_logs_startup_line_then_serves_stdio(config, monkeypatch, caplog):
    server = MCPServer(config)
    transports = []

    async def fake_run_async(transport):
        assert "Weather-zhcn MCP Server starting on stdio" in caplog.text
        transports.append(transport)

    monkeypatch.setattr(server.mcp, "run_async", fake_run_async)
    with caplog.at_level("INFO", logger="qweather_mcp.server"):
        asyncio.run(server.run())

    assert transports == ["stdio"]
