"""Role strategy: which facets a role aggregates and how they merge.

Adding a role means registering another RoleProfile; the aggregator never
branches on role names.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Mapping

from app.services.errors import UnknownRole
from app.services.facets import Facet, FacetResult, SnapshotFields

logger = logging.getLogger(__name__)

MergeFn = Callable[[Mapping[Facet, FacetResult]], SnapshotFields]

# Investor profiles have no partial-completion concept
INVESTOR_PROFILE_COMPLETION = 100


@dataclass(frozen=True)
class RoleProfile:
    role: str
    facets: tuple[Facet, ...]
    merge: MergeFn

    def __post_init__(self):
        if not self.facets:
            raise ValueError(f"Role {self.role} must aggregate at least one facet")


# Role name (upper case) -> profile
_PROFILES: dict[str, RoleProfile] = {}


def register_role(profile: RoleProfile) -> RoleProfile:
    """Register (or replace) the profile for a role."""
    _PROFILES[profile.role.upper()] = profile
    logger.debug(f"Registered role profile: {profile.role}")
    return profile


def resolve(role: str) -> RoleProfile:
    """Look up the profile for a role. Raises UnknownRole."""
    profile = _PROFILES.get((role or "").strip().upper())
    if profile is None:
        raise UnknownRole(role)
    return profile


def list_roles() -> list[str]:
    return list(_PROFILES.keys())


def _merge_startup(results: Mapping[Facet, FacetResult]) -> SnapshotFields:
    return SnapshotFields(
        profile_completion=results[Facet.PROFILE_COMPLETION].value_or(0),
        generated_content_count=results[Facet.GENERATED_CONTENT].value_or(0),
        match_count=results[Facet.MATCHES].value_or(0),
        active_relationship_count=results[Facet.ACTIVE_RELATIONSHIPS].value_or(0),
        milestone_count=results[Facet.MILESTONES].value_or(0),
    )


def _merge_investor(results: Mapping[Facet, FacetResult]) -> SnapshotFields:
    # TODO: count matching startups once the investor service exposes it
    return SnapshotFields(
        profile_completion=INVESTOR_PROFILE_COMPLETION,
        active_relationship_count=results[Facet.ACTIVE_RELATIONSHIPS].value_or(0),
    )


STARTUP = register_role(RoleProfile(
    role="STARTUP",
    facets=(
        Facet.PROFILE_COMPLETION,
        Facet.GENERATED_CONTENT,
        Facet.MATCHES,
        Facet.ACTIVE_RELATIONSHIPS,
        Facet.MILESTONES,
    ),
    merge=_merge_startup,
))

INVESTOR = register_role(RoleProfile(
    role="INVESTOR",
    facets=(Facet.ACTIVE_RELATIONSHIPS,),
    merge=_merge_investor,
))
