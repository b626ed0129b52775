"""
Entry point for the QWeather MCP server.

Usage:
    python main.py --apiHost=https://devapi.qweather.com \\
        --privateKey="$(cat ed25519-private.pem)" --keyId=KEY_ID --projectId=PROJECT_ID

Flags fall back to QWEATHER_API_HOST, QWEATHER_PRIVATE_KEY, QWEATHER_KEY_ID
and QWEATHER_PROJECT_ID (a .env file is read as well).
"""
from qweather_mcp.server import run


if __name__ == "__main__":
    run()
