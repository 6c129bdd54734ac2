"""Facet registry: maps each facet to the upstream call that produces it.

A facet fetcher is a coroutine ``fetch(clients, token, user_id) -> int``.
Fetchers validate what the upstream returns; anything malformed raises
UpstreamError so the aggregator treats the facet as unavailable instead of
persisting garbage.
"""

import enum
import logging
from dataclasses import asdict, dataclass
from functools import partial
from typing import Any, Awaitable, Callable
from uuid import UUID

from app.clients import UpstreamClients
from app.services.errors import FacetUnavailable, UpstreamError

logger = logging.getLogger(__name__)


class Facet(str, enum.Enum):
    PROFILE_COMPLETION = "profile_completion"
    GENERATED_CONTENT = "generated_content"
    MATCHES = "matches"
    ACTIVE_RELATIONSHIPS = "active_relationships"
    MILESTONES = "milestones"


@dataclass(frozen=True)
class SnapshotFields:
    """The full aggregate field set. Written to the store as one unit."""

    profile_completion: int = 0
    generated_content_count: int = 0
    match_count: int = 0
    active_relationship_count: int = 0
    milestone_count: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class FacetResult:
    """Outcome of one facet fetch: a value or the failure that replaced it."""

    facet: Facet
    value: int | None = None
    error: FacetUnavailable | None = None

    @classmethod
    def success(cls, facet: Facet, value: int) -> "FacetResult":
        return cls(facet=facet, value=value)

    @classmethod
    def failure(cls, facet: Facet, cause: BaseException) -> "FacetResult":
        return cls(facet=facet, error=FacetUnavailable(facet.value, cause))

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: int) -> int:
        return self.value if self.ok else default


FacetFetcher = Callable[[UpstreamClients, str, UUID], Awaitable[int]]
FacetSource = Callable[[UUID], Awaitable[int]]

# Facet -> fetcher mapping
_REGISTRY: dict[Facet, FacetFetcher] = {}


def register_facet(facet: Facet):
    """Decorator to register the fetcher for a facet."""
    def decorator(fn: FacetFetcher):
        _REGISTRY[facet] = fn
        logger.debug(f"Registered fetcher for facet: {facet.value}")
        return fn
    return decorator


def get_facet_fetcher(facet: Facet) -> FacetFetcher | None:
    """Look up the fetcher for a given facet."""
    return _REGISTRY.get(facet)


def list_facets() -> list[Facet]:
    """List all facets with a registered fetcher."""
    return list(_REGISTRY.keys())


def build_sources(clients: UpstreamClients, token: str) -> dict[Facet, FacetSource]:
    """Bind every registered fetcher to one caller's credential.

    The result maps facet -> ``fetch(user_id)``, the shape the aggregator
    consumes.
    """
    return {facet: partial(fetcher, clients, token) for facet, fetcher in _REGISTRY.items()}


def _read_int(payload: dict, key: str, service: str, upper: int | None = None) -> int:
    """Read a non-negative integer field. A missing or null field reads as 0."""
    value: Any = payload.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise UpstreamError(service, f"{key} is not an integer: {value!r}")
    if value < 0 or (upper is not None and value > upper):
        raise UpstreamError(service, f"{key} out of range: {value}")
    return value


# --- Fetchers ---

@register_facet(Facet.PROFILE_COMPLETION)
async def fetch_profile_completion(clients: UpstreamClients, token: str, user_id: UUID) -> int:
    startup = await clients.startup.get_my_startup(token)
    return _read_int(startup, "profileCompletion", clients.startup.service_name, upper=100)


@register_facet(Facet.MILESTONES)
async def fetch_milestones(clients: UpstreamClients, token: str, user_id: UUID) -> int:
    startup = await clients.startup.get_my_startup(token)
    return _read_int(startup, "milestonesCount", clients.startup.service_name)


@register_facet(Facet.GENERATED_CONTENT)
async def fetch_generated_content(clients: UpstreamClients, token: str, user_id: UUID) -> int:
    return len(await clients.pitch.get_my_pitches(token))


@register_facet(Facet.MATCHES)
async def fetch_matches(clients: UpstreamClients, token: str, user_id: UUID) -> int:
    return len(await clients.investor.get_my_matches(token))


@register_facet(Facet.ACTIVE_RELATIONSHIPS)
async def fetch_active_relationships(clients: UpstreamClients, token: str, user_id: UUID) -> int:
    return len(await clients.investor.get_active_connections(token))
