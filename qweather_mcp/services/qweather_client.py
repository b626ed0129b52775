"""
HTTP client for the QWeather API.
"""
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from ..config import QWeatherConfig
from ..errors import UpstreamError
from ..models.base import BaseAPIClient
from .credentials import CredentialSigner


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one upstream request: either ``data`` or ``error`` is set."""

    data: Optional[Dict[str, Any]] = None
    error: Optional[UpstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class QWeatherClient(BaseAPIClient):
    """Issues authenticated GET requests against the configured QWeather host.

    Each :meth:`fetch` mints its own credential and makes at most one
    request. Upstream failures are logged and returned as a failed
    :class:`FetchResult`; nothing is retried.
    """

    def __init__(
        self,
        config: QWeatherConfig,
        signer: Optional[CredentialSigner] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(config)
        self.signer = signer or CredentialSigner(config)
        self.transport = transport

    def build_url(self, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Full request URL; parameters that are ``None`` are left out."""
        query = {key: value for key, value in (params or {}).items() if value is not None}
        return str(httpx.URL(f"{self.config.api_host}{path}", params=query))

    async def fetch(self, path: str, params: Optional[Mapping[str, Any]] = None) -> FetchResult:
        """GET ``path`` with a fresh bearer credential.

        Raises:
            SigningError: when no credential can be minted; no request is sent
        """
        url = self.build_url(path, params)
        token = self.signer.mint()
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }

        self.logger.info(f"Fetching URL: {url}")
        async with httpx.AsyncClient(transport=self.transport, timeout=self.config.timeout) as client:
            try:
                response = await client.get(url, headers=headers)
            except httpx.HTTPError as e:
                return self._failed(UpstreamError(url, reason=repr(e)))

        if not response.is_success:
            return self._failed(UpstreamError(url, status_code=response.status_code))

        try:
            data = response.json()
        except ValueError as e:
            return self._failed(UpstreamError(url, reason=f"invalid JSON body: {e}"))
        if not isinstance(data, dict):
            return self._failed(UpstreamError(url, reason="response body is not a JSON object"))

        return FetchResult(data=data)

    def _failed(self, error: UpstreamError) -> FetchResult:
        self.logger.error(f"Error making QWeather request: {error}")
        return FetchResult(error=error)
