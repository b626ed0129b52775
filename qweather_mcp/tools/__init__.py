"""
Tools package for the MCP server.
"""
from .weather_tools import register_weather_tools

__all__ = [
    "register_weather_tools",
]
