"""
Configuration module for the QWeather MCP server.

Settings come from command-line flags first, then environment variables
(a ``.env`` file is honoured), then built-in defaults. The result is a
frozen :class:`QWeatherConfig` built once at startup.
"""
import argparse
import logging
import os
from typing import Optional, Sequence

from dotenv import load_dotenv
from pydantic import ConfigDict, Field, field_validator

from .models.base import BaseServiceConfig

logger = logging.getLogger(__name__)

# Server settings
SERVER_NAME = "weather-zhcn"
SERVER_VERSION = "1.0.0"

# API configurations
DEFAULT_API_HOST = "https://devapi.qweather.com"

# Request settings
REQUEST_TIMEOUT = 30

# Environment fallbacks for the command-line flags
ENV_API_HOST = "QWEATHER_API_HOST"
ENV_PRIVATE_KEY = "QWEATHER_PRIVATE_KEY"
ENV_KEY_ID = "QWEATHER_KEY_ID"
ENV_PROJECT_ID = "QWEATHER_PROJECT_ID"


class QWeatherConfig(BaseServiceConfig):
    """Immutable process-wide settings for talking to QWeather."""

    model_config = ConfigDict(frozen=True)

    api_host: str = DEFAULT_API_HOST
    private_key: str = Field(default="", repr=False)
    key_id: str = ""
    project_id: str = ""
    timeout: int = REQUEST_TIMEOUT

    @field_validator("api_host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("private_key")
    @classmethod
    def _restore_newlines(cls, value: str) -> str:
        # A PEM passed through a single-line flag arrives with literal "\n".
        return value.replace("\\n", "\n").strip()


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the parser for the server's startup flags."""
    parser = argparse.ArgumentParser(
        prog="qweather-mcp",
        description="QWeather MCP server over stdio.",
    )
    parser.add_argument("--apiHost", dest="api_host", help=f"QWeather API host (default {DEFAULT_API_HOST})")
    parser.add_argument("--privateKey", dest="private_key", help="Ed25519 private key, PKCS#8 PEM text")
    parser.add_argument("--keyId", dest="key_id", help="Credential key ID from the QWeather console")
    parser.add_argument("--projectId", dest="project_id", help="QWeather project ID (the JWT subject)")
    return parser


def load_config(argv: Optional[Sequence[str]] = None) -> QWeatherConfig:
    """Build the server configuration from flags, environment and defaults."""
    load_dotenv()

    args, unknown = build_arg_parser().parse_known_args(argv)
    if unknown:
        logger.warning(f"Ignoring unrecognised arguments: {unknown}")

    config = QWeatherConfig(
        api_host=args.api_host or os.getenv(ENV_API_HOST) or DEFAULT_API_HOST,
        private_key=args.private_key or os.getenv(ENV_PRIVATE_KEY, ""),
        key_id=args.key_id or os.getenv(ENV_KEY_ID, ""),
        project_id=args.project_id or os.getenv(ENV_PROJECT_ID, ""),
    )

    if not config.private_key:
        logger.warning("No private key configured; every weather request will fail to sign")
    logger.info(f"Configuration loaded (api_host={config.api_host}, key_id={config.key_id or '-'})")
    return config
