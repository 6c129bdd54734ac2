"""
Role strategy unit tests.
Role lookup, facet lists and merge functions.
"""

import pytest

from app.services import role_strategy
from app.services.errors import UnknownRole
from app.services.facets import Facet, FacetResult, SnapshotFields
from app.services.role_strategy import RoleProfile


def _results(values: dict[Facet, int], failed: tuple[Facet, ...] = ()) -> dict[Facet, FacetResult]:
    results = {facet: FacetResult.success(facet, value) for facet, value in values.items()}
    for facet in failed:
        results[facet] = FacetResult.failure(facet, TimeoutError())
    return results


class TestResolve:

    @pytest.mark.parametrize("role", ["STARTUP", "INVESTOR"])
    def test_known_roles_have_facets(self, role):
        profile = role_strategy.resolve(role)
        assert profile.role == role
        assert len(profile.facets) > 0

    def test_lookup_is_case_insensitive(self):
        assert role_strategy.resolve("startup") is role_strategy.STARTUP
        assert role_strategy.resolve(" Investor ") is role_strategy.INVESTOR

    @pytest.mark.parametrize("role", ["ADMIN", "", "producer", None])
    def test_unknown_role(self, role):
        with pytest.raises(UnknownRole):
            role_strategy.resolve(role)

    def test_list_roles(self):
        assert {"STARTUP", "INVESTOR"} <= set(role_strategy.list_roles())

    def test_startup_facets_in_order(self):
        assert role_strategy.STARTUP.facets == (
            Facet.PROFILE_COMPLETION,
            Facet.GENERATED_CONTENT,
            Facet.MATCHES,
            Facet.ACTIVE_RELATIONSHIPS,
            Facet.MILESTONES,
        )

    def test_investor_only_fetches_relationships(self):
        assert role_strategy.INVESTOR.facets == (Facet.ACTIVE_RELATIONSHIPS,)


class TestMerge:

    def test_startup_maps_each_facet_to_its_field(self):
        results = _results({
            Facet.PROFILE_COMPLETION: 80,
            Facet.GENERATED_CONTENT: 3,
            Facet.MATCHES: 5,
            Facet.ACTIVE_RELATIONSHIPS: 2,
            Facet.MILESTONES: 1,
        })

        assert role_strategy.STARTUP.merge(results) == SnapshotFields(80, 3, 5, 2, 1)

    def test_startup_failed_facet_defaults_to_zero(self):
        results = _results(
            {
                Facet.PROFILE_COMPLETION: 80,
                Facet.GENERATED_CONTENT: 3,
                Facet.ACTIVE_RELATIONSHIPS: 2,
                Facet.MILESTONES: 1,
            },
            failed=(Facet.MATCHES,),
        )

        assert role_strategy.STARTUP.merge(results) == SnapshotFields(80, 3, 0, 2, 1)

    def test_investor_completion_is_constant(self):
        results = _results({Facet.ACTIVE_RELATIONSHIPS: 4})

        assert role_strategy.INVESTOR.merge(results) == SnapshotFields(
            profile_completion=100,
            active_relationship_count=4,
        )

    def test_investor_completion_survives_relationship_failure(self):
        results = _results({}, failed=(Facet.ACTIVE_RELATIONSHIPS,))

        fields = role_strategy.INVESTOR.merge(results)
        assert fields.profile_completion == 100
        assert fields.active_relationship_count == 0


class TestRegisterRole:

    def test_new_role_is_data_only(self):
        mentor = RoleProfile(
            role="MENTOR",
            facets=(Facet.ACTIVE_RELATIONSHIPS,),
            merge=lambda results: SnapshotFields(
                active_relationship_count=results[Facet.ACTIVE_RELATIONSHIPS].value_or(0),
            ),
        )
        try:
            role_strategy.register_role(mentor)
            assert role_strategy.resolve("mentor") is mentor
        finally:
            role_strategy._PROFILES.pop("MENTOR", None)

    def test_profile_needs_a_facet(self):
        with pytest.raises(ValueError):
            RoleProfile(role="EMPTY", facets=(), merge=lambda results: SnapshotFields())
