"""Base HTTP client for upstream platform services."""

import logging
from typing import Any

import httpx

from app.services.errors import UpstreamError

logger = logging.getLogger(__name__)


class ServiceClient:
    """
    Thin JSON-over-HTTP client for one upstream service.

    Every call forwards the caller's Authorization header unchanged; the
    upstream service decides whose data "/me" refers to.
    """

    service_name = "upstream"

    def __init__(self, base_url: str, timeout: float = 30, transport: httpx.AsyncBaseTransport | None = None):
        """
        Args:
            base_url: Root URL of the service (no trailing path)
            timeout: Seconds before the HTTP request is abandoned
            transport: Optional httpx transport, used to stub the service in tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _send(self, path: str, token: str) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            return await client.get(path, headers={"Authorization": token, "Accept": "application/json"})

    async def get_json(self, path: str, token: str) -> Any:
        """GET a JSON document. Raises UpstreamError on any failure."""
        try:
            response = await self._send(path, token)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(self.service_name, f"HTTP {e.response.status_code} from {path}") from e
        except httpx.HTTPError as e:
            raise UpstreamError(self.service_name, f"request to {path} failed: {e!r}") from e
        except ValueError as e:
            raise UpstreamError(self.service_name, f"invalid JSON from {path}") from e

    async def get_list(self, path: str, token: str) -> list:
        data = await self.get_json(path, token)
        # A null body means "nothing yet", same as an empty list
        if data is None:
            return []
        if not isinstance(data, list):
            raise UpstreamError(self.service_name, f"expected a list from {path}, got {type(data).__name__}")
        return data

    async def get_object(self, path: str, token: str) -> dict:
        data = await self.get_json(path, token)
        if not isinstance(data, dict):
            raise UpstreamError(self.service_name, f"expected an object from {path}, got {type(data).__name__}")
        return data
