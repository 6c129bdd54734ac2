"""Upstream service clients."""

from dataclasses import dataclass

import httpx

from app.clients.auth import AuthServiceClient
from app.clients.investor import InvestorServiceClient
from app.clients.pitch import PitchServiceClient
from app.clients.startup import StartupServiceClient
from app.config import Settings


@dataclass(frozen=True)
class UpstreamClients:
    """The facet-producing services, bundled for the facet fetchers."""

    startup: StartupServiceClient
    pitch: PitchServiceClient
    investor: InvestorServiceClient

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> "UpstreamClients":
        timeout = settings.upstream_timeout
        return cls(
            startup=StartupServiceClient(settings.startup_service_url, timeout, transport),
            pitch=PitchServiceClient(settings.pitch_service_url, timeout, transport),
            investor=InvestorServiceClient(settings.investor_service_url, timeout, transport),
        )


__all__ = [
    "AuthServiceClient",
    "InvestorServiceClient",
    "PitchServiceClient",
    "StartupServiceClient",
    "UpstreamClients",
]
