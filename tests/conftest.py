"""Pytest configuration and shared fixtures.

Adds the repository root to ``sys.path`` so :mod:`qweather_mcp` imports
without installation, and provides a signing key plus a weather service
wired to an in-process fake of the QWeather API.
"""

import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

import httpx
import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from qweather_mcp.config import QWeatherConfig
from qweather_mcp.services.qweather_client import QWeatherClient
from qweather_mcp.services.weather_service import WeatherService


class FakeUpstream:
    """Records every request and answers with one canned response."""

    def __init__(self, status_code=200, body=None, content=None, exc=None):
        self.status_code = status_code
        self.body = body
        self.content = content
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body if self.body is not None else {})


@pytest.fixture(scope="session")
def signing_keys():
    key = Ed25519PrivateKey.generate()
    private_pem = key.private_bytes(Encoding.PEM, PrivateFormat.PKCS8, NoEncryption()).decode()
    public_pem = key.public_key().public_bytes(Encoding.PEM, PublicFormat.SubjectPublicKeyInfo).decode()
    return private_pem, public_pem


@pytest.fixture
def config(signing_keys):
    private_pem, _ = signing_keys
    return QWeatherConfig(
        api_host="https://api.qweather.test",
        private_key=private_pem,
        key_id="KID123",
        project_id="PROJ456",
    )


@pytest.fixture
def make_service(config):
    """Build ``(service, upstream)`` where upstream fakes the QWeather API."""

    def factory(status_code=200, body=None, content=None, exc=None, service_config=None):
        upstream = FakeUpstream(status_code=status_code, body=body, content=content, exc=exc)
        cfg = service_config or config
        client = QWeatherClient(cfg, transport=httpx.MockTransport(upstream))
        return WeatherService(cfg, client=client), upstream

    return factory
