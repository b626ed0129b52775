"""
Base models and classes for the MCP server.
"""
from typing import Any, Dict, List, Mapping, Optional
from abc import ABC, abstractmethod
from mcp.types import TextContent
import openai
import logging

from ..errors import UnknownToolError

logger = logging.getLogger(__name__)


class RichToolDescription(openai.BaseModel):
    """Rich tool description model for MCP server compatibility."""
    description: str
    use_when: str
    side_effects: Optional[str] = None


class ToolDefinition(openai.BaseModel):
    """A tool as advertised to MCP clients: name, description and input schema."""
    name: str
    description: str
    input_schema: Dict[str, Any]


class BaseServiceConfig(openai.BaseModel):
    """Base configuration for services."""
    timeout: int = 30


class BaseAPIClient:
    """Base class for API clients; gives each client its own logger."""

    def __init__(self, config: BaseServiceConfig = None):
        self.config = config or BaseServiceConfig()
        self.logger = logging.getLogger(self.__class__.__name__)


class ToolService(ABC):
    """Base class for tool services."""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(f"ToolService.{name}")

    @abstractmethod
    def get_tool_descriptions(self) -> Dict[str, RichToolDescription]:
        """Get tool descriptions for this service, keyed by tool name."""
        pass

    @abstractmethod
    def list_tools(self) -> List[ToolDefinition]:
        """Get the definitions of every tool this service answers."""
        pass

    @abstractmethod
    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]]) -> List[TextContent]:
        """Run one of this service's tools."""
        pass

    @abstractmethod
    def register_tools(self, mcp):
        """Register tools with the MCP server."""
        pass


class ToolRegistry:
    """Central registry for managing tool services and routing tool calls."""

    def __init__(self):
        self.services: Dict[str, ToolService] = {}
        self.tools: Dict[str, ToolService] = {}
        self.logger = logging.getLogger("ToolRegistry")

    def register_service(self, service: ToolService):
        """Register a tool service and index its tool names."""
        names = [definition.name for definition in service.list_tools()]
        for name in names:
            if name in self.tools:
                raise ValueError(f"Tool {name!r} is already registered")
        self.services[service.name] = service
        for name in names:
            self.tools[name] = service
        self.logger.info(f"Registered service: {service.name}")

    def get_service(self, name: str) -> Optional[ToolService]:
        """Get a service by name."""
        return self.services.get(name)

    def list_tools(self) -> List[ToolDefinition]:
        """Get every registered tool definition."""
        return [tool for service in self.services.values() for tool in service.list_tools()]

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]]) -> List[TextContent]:
        """Route a tool call to the service that owns the tool."""
        service = self.tools.get(name)
        if service is None:
            raise UnknownToolError(name)
        return await service.dispatch(name, arguments)

    def register_all_tools(self, mcp):
        """Register all tools from all services."""
        for service in self.services.values():
            try:
                service.register_tools(mcp)
                self.logger.info(f"Successfully registered tools for service: {service.name}")
            except Exception as e:
                self.logger.error(f"Failed to register tools for service {service.name}: {e}")
                raise
