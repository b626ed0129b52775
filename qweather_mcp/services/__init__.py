"""
Services package for the MCP server.
"""
from .credentials import CredentialSigner, mint
from .qweather_client import FetchResult, QWeatherClient
from .weather_service import TOOL_NAMES, WeatherService

__all__ = [
    "CredentialSigner",
    "mint",
    "FetchResult",
    "QWeatherClient",
    "TOOL_NAMES",
    "WeatherService",
]
