"""Tests for safer route planning.

Directions come from FakeDirectionsProvider: the primary route runs due
north through the incidents, detours are whatever each test hands back.
"""

import logging
from unittest.mock import MagicMock

import pytest

from conftest import (
    END,
    EAST_DETOUR_GEOMETRY,
    MIDPOINT,
    PRIMARY_GEOMETRY,
    START,
    FakeDirectionsProvider,
    make_incident,
    make_route,
)
from streetwise_routing.algorithms.clustering.direction_prober import CompassDirection, generate_waypoint
from streetwise_routing.algorithms.optimization.route_planner import (
    ROUTE_TYPE_FASTEST,
    ROUTE_TYPE_SAFEST,
    RouteCandidate,
    SaferRoutePlanner,
    detour_percentage,
)
from streetwise_routing.algorithms.scoring.safety_scorer import SafetyScorer
from streetwise_routing.config import SafetyConfig
from streetwise_routing.data.distance_utils import offset_coordinate
from streetwise_routing.exceptions import DirectionsError, NoRouteFoundError, RouteValidationError

PLANNER_LOGGER = "streetwise_routing.algorithms.optimization.route_planner"


def _safe_detour(distance=2500.0):
    return lambda waypoints: make_route(EAST_DETOUR_GEOMETRY, distance=distance)


def _same_as_primary(waypoints):
    return make_route(PRIMARY_GEOMETRY, distance=2100.0)


def _planner(store, provider):
    return SaferRoutePlanner(provider, SafetyScorer(store))


def _one_cluster(store):
    store._incidents.append(make_incident("harassment", MIDPOINT))


def _two_clusters(store):
    store._incidents.append(make_incident("harassment", offset_coordinate(START, 0, 500)))
    store._incidents.append(make_incident("aggressive", offset_coordinate(START, 0, 1500)))


class TestDetourPercentage:

    def test_relative_increase(self):
        assert detour_percentage(2500, 2000) == 25.0

    def test_zero_original_distance(self):
        assert detour_percentage(0, 0) == 0.0
        assert detour_percentage(100, 0) == float("inf")


class TestPlanRoutes:

    def test_no_incidents_returns_only_fastest(self, store):
        provider = FakeDirectionsProvider(detour=_safe_detour())
        routes = _planner(store, provider).plan_routes(START, END)
        assert len(routes) == 1
        assert routes[0].route_type == ROUTE_TYPE_FASTEST
        assert routes[0].safety_score == 10.0
        assert provider.detour_calls == []

    def test_safer_alternative_returned(self, store):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=_safe_detour())
        routes = _planner(store, provider).plan_routes(START, END)
        assert [r.route_type for r in routes] == [ROUTE_TYPE_FASTEST, ROUTE_TYPE_SAFEST]
        assert routes[0].safety_score == 8.5
        assert routes[1].safety_score == 10.0
        assert routes[1].incident_count == 0
        assert routes[1].geometry == EAST_DETOUR_GEOMETRY

    def test_alternative_at_detour_limit_accepted(self, store):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=_safe_detour(distance=3800.0))
        routes = _planner(store, provider).plan_routes(START, END)
        assert len(routes) == 2

    def test_detour_over_limit_rejected(self, store):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=_safe_detour(distance=3900.0))
        routes = _planner(store, provider).plan_routes(START, END)
        assert len(routes) == 1

    def test_equally_safe_alternative_rejected(self, store):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=_same_as_primary)
        routes = _planner(store, provider).plan_routes(START, END)
        assert len(routes) == 1

    def test_no_route_raises(self, store):
        provider = FakeDirectionsProvider(primary_routes=[])
        with pytest.raises(NoRouteFoundError):
            _planner(store, provider).plan_routes(START, END)

    def test_invalid_start_rejected(self, store):
        provider = FakeDirectionsProvider()
        with pytest.raises(RouteValidationError):
            _planner(store, provider).plan_routes((200.0, 48.85), END)
        assert provider.calls == []

    def test_provider_failure_on_primary_propagates(self, store):
        provider = MagicMock()
        provider.compute_routes.side_effect = DirectionsError("Mapbox down", status_code=503)
        with pytest.raises(DirectionsError):
            _planner(store, provider).plan_routes(START, END)

    def test_primary_scoring_failure_returns_unscored_route(self):
        scorer = MagicMock()
        scorer.score_route.side_effect = RuntimeError("incident db down")
        provider = FakeDirectionsProvider(detour=_safe_detour())
        routes = SaferRoutePlanner(provider, scorer, SafetyConfig()).plan_routes(START, END)
        assert len(routes) == 1
        assert routes[0].safety_score is None
        assert provider.detour_calls == []

    def test_small_improvement_still_shown(self, store, caplog):
        # animal: 0.1 x 1.5 recency, primary scores 9.9
        store._incidents.append(make_incident("animal", MIDPOINT))
        provider = FakeDirectionsProvider(detour=_safe_detour())
        with caplog.at_level(logging.INFO, logger=PLANNER_LOGGER):
            routes = _planner(store, provider).plan_routes(START, END)
        assert [r.safety_score for r in routes] == [9.9, 10.0]
        assert "Slightly safer alternative" in caplog.text
        assert "Safer alternative found" not in caplog.text

    def test_significant_improvement_logged(self, store, caplog):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=_safe_detour())
        with caplog.at_level(logging.INFO, logger=PLANNER_LOGGER):
            routes = _planner(store, provider).plan_routes(START, END)
        assert len(routes) == 2
        assert "Safer alternative found" in caplog.text
        assert "Slightly safer alternative" not in caplog.text


class TestAlternativeSearch:

    def _search(self, store, provider):
        planner = _planner(store, provider)
        primary_route = provider.primary_routes[0]
        assessment = planner.score_route(primary_route.geometry)
        primary = RouteCandidate.from_directions(primary_route, assessment)
        return planner.search_alternatives(START, END, primary, assessment)

    def test_single_cluster_spends_seven_attempts(self, store):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=_same_as_primary)
        search = self._search(store, provider)
        # three offsets, then four compass directions
        assert search.attempts == 7
        assert len(provider.detour_calls) == 7
        assert search.best() is None

    def test_attempt_budget_never_exceeded(self, store):
        _two_clusters(store)
        provider = FakeDirectionsProvider(detour=_same_as_primary)
        search = self._search(store, provider)
        assert search.attempts == 8
        assert len(provider.detour_calls) == 8

    def test_three_cluster_avoidance(self, store):
        for i, category in enumerate(("harassment", "aggressive", "suspicious")):
            store._incidents.append(make_incident(category, offset_coordinate(START, 0, 500 * (i + 1))))
        provider = FakeDirectionsProvider(detour=_same_as_primary)
        config = SafetyConfig(max_danger_clusters_to_avoid=3, max_alternative_route_attempts=12)
        planner = SaferRoutePlanner(provider, SafetyScorer(store), config)
        assessment = planner.score_route(PRIMARY_GEOMETRY)
        primary = RouteCandidate.from_directions(provider.primary_routes[0], assessment)

        search = planner.search_alternatives(START, END, primary, assessment)

        # nine single-cluster probes, clusters 1-2, clusters 1-3, then one direction probe
        assert [len(call) for call in provider.detour_calls] == [3] * 9 + [4, 5, 3]
        assert search.attempts == 12

    def test_budget_follows_config(self, store):
        _two_clusters(store)
        provider = FakeDirectionsProvider(detour=_same_as_primary)
        planner = SaferRoutePlanner(provider, SafetyScorer(store),
                                    SafetyConfig(max_alternative_route_attempts=4))
        assessment = planner.score_route(PRIMARY_GEOMETRY)
        primary = RouteCandidate.from_directions(provider.primary_routes[0], assessment)
        search = planner.search_alternatives(START, END, primary, assessment)
        assert search.attempts == 4

    def test_multi_cluster_probe_uses_one_waypoint_per_cluster(self, store):
        _two_clusters(store)
        provider = FakeDirectionsProvider(detour=_same_as_primary)
        self._search(store, provider)
        # start, two cluster waypoints, end
        assert len(provider.detour_calls[6]) == 4

    def test_enough_alternatives_skip_direction_phase(self, store):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=_safe_detour())
        search = self._search(store, provider)
        assert search.attempts == 3
        assert len(search.alternatives) == 3

    def test_best_keeps_first_on_ties(self, store):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=_safe_detour())
        best = self._search(store, provider).best()
        assert best.waypoints == [generate_waypoint(MIDPOINT, CompassDirection.NORTH, 50.0)]

    def test_failed_probes_count_against_budget(self, store):
        _one_cluster(store)

        def failing(waypoints):
            raise DirectionsError("timeout")

        provider = FakeDirectionsProvider(detour=failing)
        search = self._search(store, provider)
        assert search.attempts == 7
        assert search.alternatives == []

    def test_probe_without_route_skipped(self, store):
        _one_cluster(store)
        provider = FakeDirectionsProvider(detour=lambda waypoints: None)
        search = self._search(store, provider)
        assert search.attempts == 7
        assert search.best() is None

    def test_scoring_failure_skips_probe(self, store):
        _one_cluster(store)
        real_scorer = SafetyScorer(store)
        primary_assessment = real_scorer.score_route(PRIMARY_GEOMETRY)
        scorer = MagicMock(wraps=real_scorer)
        scorer.config = real_scorer.config
        scorer.score_route.side_effect = RuntimeError("scoring failed")

        provider = FakeDirectionsProvider(detour=_safe_detour())
        planner = SaferRoutePlanner(provider, scorer)
        primary = RouteCandidate.from_directions(provider.primary_routes[0], primary_assessment)
        search = planner.search_alternatives(START, END, primary, primary_assessment)
        assert search.attempts == 7
        assert search.alternatives == []
