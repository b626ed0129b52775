"""
MCP server wiring and process entry point.
"""
import asyncio
import logging
import sys
from typing import Any, List, Mapping, Optional, Sequence

from fastmcp import FastMCP
from mcp.types import TextContent

from .config import SERVER_NAME, QWeatherConfig, load_config
from .models.base import ToolRegistry
from .services.weather_service import WeatherService

logger = logging.getLogger(__name__)


class MCPServer:
    """Weather MCP server: one FastMCP instance with the weather service's tools."""

    def __init__(self, config: QWeatherConfig, name: str = SERVER_NAME, weather_service: Optional[WeatherService] = None):
        logger.info(f"Initializing MCPServer with name={name}")
        self.config = config
        self.name = name
        self.mcp = FastMCP(name)
        self.registry = ToolRegistry()
        self.registry.register_service(weather_service or WeatherService(config))
        self.registry.register_all_tools(self.mcp)

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]]) -> List[TextContent]:
        """Run a tool by name without going through the MCP transport."""
        return await self.registry.dispatch(name, arguments)

    async def run(self):
        """Serve over stdio until the client disconnects."""
        logger.info("Weather-zhcn MCP Server starting on stdio")
        await self.mcp.run_async("stdio")

    def get_mcp_instance(self) -> FastMCP:
        """Get the underlying FastMCP instance."""
        return self.mcp


async def main(argv: Optional[Sequence[str]] = None):
    """Load configuration and serve until stdin closes."""
    config = load_config(argv)
    server = MCPServer(config)
    await server.run()


def run():
    """Console entry point; exits non-zero if startup or serving fails."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        asyncio.run(main())
    except Exception as e:
        logger.exception(f"Fatal error in main(): {e}")
        sys.exit(1)
