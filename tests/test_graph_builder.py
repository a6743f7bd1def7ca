"""Tests for graph construction: stage chains, stitching, stop area links."""

import pytest

from trailhop.config import GraphConfig
from trailhop.domain.models import StopArea
from trailhop.graph.builder import GraphBuilder
from trailhop.graph.geometry import distance


@pytest.fixture
def builder():
    return GraphBuilder(GraphConfig())


def _trail_nodes(graph, stage):
    return [n for n in graph.trail_points() if n.stage == stage]


def test_stage_points_are_chained_with_euclidean_weights(builder):
    stages = {"1_1": [(0, 0), (0, 30), (40, 60)]}

    graph, report = builder.build(stages, {})

    assert report.trail_points == 3
    assert graph.edge_count == 2
    for edge in graph.edges():
        a, b = graph.node(edge.a), graph.node(edge.b)
        assert edge.weight == pytest.approx(distance(a.position, b.position))


def test_cumulative_distance_along_stage(builder):
    graph, _ = builder.build({"1_1": [(0, 0), (0, 30), (40, 60)]}, {})

    along = [n.kind.along for n in _trail_nodes(graph, "1_1")]
    assert along == pytest.approx([0.0, 30.0, 80.0])


def test_endpoints_within_radius_are_stitched(builder):
    stages = {
        "1_1": [(0, 0), (0, 1000)],
        "1_2": [(100, 1000), (100, 2000)],
    }

    graph, report = builder.build(stages, {})

    stitch_edges = [
        e for e in graph.edges() if graph.node(e.a).stage != graph.node(e.b).stage
    ]
    assert stitch_edges
    assert all(e.weight <= 250 for e in stitch_edges)
    assert report.stitched == len(stitch_edges)


def test_far_endpoints_are_reported_not_stitched(builder):
    stages = {
        "1_1": [(0, 0), (0, 1000)],
        "2_1": [(5000, 0), (5000, 1000)],
    }

    graph, report = builder.build(stages, {})

    assert graph.edge_count == 2
    assert report.stitched == 0
    assert len(report.unstitched) == 4
    assert all(u.nearest_distance > 250 for u in report.unstitched)


def test_stop_area_links_to_single_closest_point(builder):
    stages = {"1_1": [(0, 0), (0, 100), (0, 200)]}
    stop_areas = {7: StopArea(7, "Höör station", 30, 110)}

    graph, report = builder.build(stages, stop_areas)

    stop = graph.stop_area_nodes()[0]
    edges = graph.edges_of(stop.index)
    assert len(edges) == 1
    target = graph.node(edges[0].other(stop.index))
    assert target.position == (0.0, 100.0)
    assert edges[0].weight == pytest.approx(distance((30, 110), (0, 100)))
    assert report.linked_stop_areas == 1


def test_stop_area_beyond_link_radius_stays_isolated(builder):
    stages = {"1_1": [(0, 0), (0, 100)]}
    stop_areas = {9: StopArea(9, "Far away", 10000, 0)}

    graph, report = builder.build(stages, stop_areas)

    stop = graph.stop_area_nodes()[0]
    assert graph.degree(stop.index) == 0
    assert report.unlinked_stop_areas == [9]


def test_point_registers_only_with_its_nearest_stop_area(builder):
    # Both trail points are closer to stop 1, so stop 2 gets no link even
    # though it is within range.
    stages = {"1_1": [(0, 0), (0, 100)]}
    stop_areas = {
        1: StopArea(1, "Near", 0, 50),
        2: StopArea(2, "Further", 0, 400),
    }

    graph, report = builder.build(stages, stop_areas)

    linked = {
        n.kind.stop_area_id for n in graph.stop_area_nodes() if graph.degree(n.index)
    }
    assert linked == {1}
    assert report.unlinked_stop_areas == [2]


def test_local_service_stop_areas_are_excluded(builder):
    stages = {"1_1": [(0, 0), (0, 100)]}
    stop_areas = {
        1: StopArea(1, "Röstånga Närtrafik", 0, 50),
        2: StopArea(2, "Röstånga", 0, 60),
    }

    graph, report = builder.build(stages, stop_areas)

    ids = {n.kind.stop_area_id for n in graph.stop_area_nodes()}
    assert ids == {2}
    assert report.excluded_stop_areas == [1]


def test_empty_inputs_give_empty_graph(builder):
    graph, report = builder.build({}, {})
    assert graph.node_count == 0
    assert report.trail_points == 0


def test_endpoint_at_exactly_stitch_radius_is_stitched(builder):
    stages = {
        "1_1": [(0, 0), (0, 1000)],
        "1_2": [(250, 1000), (250, 2000)],
    }

    graph, report = builder.build(stages, {})

    assert report.stitched == 1
    stitch = [e for e in graph.edges() if graph.node(e.a).stage != graph.node(e.b).stage]
    assert [e.weight for e in stitch] == [250.0]


@pytest.mark.parametrize("offset, linked", [(4999, True), (5000, False)])
def test_link_radius_is_exclusive(builder, offset, linked):
    stages = {"1_1": [(0, 0), (0, 100)]}
    stop_areas = {9: StopArea(9, "Edge", 0, -offset)}

    graph, report = builder.build(stages, stop_areas)

    stop = graph.stop_area_nodes()[0]
    assert (graph.degree(stop.index) == 1) is linked
    assert report.unlinked_stop_areas == ([] if linked else [9])
