"""
QWeather MCP server: weather lookup tools for MCP clients.
"""
from .config import SERVER_VERSION as __version__

__all__ = ["__version__"]
