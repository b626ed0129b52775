"""
Models package for the MCP server.
"""
from .base import (
    RichToolDescription,
    ToolDefinition,
    BaseAPIClient,
    BaseServiceConfig,
    ToolService,
    ToolRegistry,
)
from .arguments import (
    WeatherArguments,
    CityLookupArguments,
    WeatherWarningArguments,
    IndicesForecastArguments,
    validate_arguments,
)

__all__ = [
    "RichToolDescription",
    "ToolDefinition",
    "BaseAPIClient",
    "BaseServiceConfig",
    "ToolService",
    "ToolRegistry",
    "WeatherArguments",
    "CityLookupArguments",
    "WeatherWarningArguments",
    "IndicesForecastArguments",
    "validate_arguments",
]
