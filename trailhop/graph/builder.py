"""Trail graph construction.

Turns per-stage point sequences and a stop area catalogue into the
initial graph:

1. One trail point per GPS position, consecutive points linked.
2. Loose stage endpoints stitched to the closest point of another stage.
3. Stop areas linked to the trail, at most one link per stop area.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Tuple

from ..config import GraphConfig, get_config
from ..domain.models import BuildReport, Position, StopArea, UnstitchedEndpoint
from .geometry import distance, nearest
from .model import Graph


@dataclass
class GraphBuilder:
    """Builds the trail graph from stage polylines and stop areas.

    Attributes:
        config: Stitching and linking thresholds
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def build(
        self,
        stages: Mapping[str, Sequence[Position]],
        stop_areas: Mapping[int, StopArea],
    ) -> Tuple[Graph, BuildReport]:
        """Build the initial, unsimplified graph.

        Args:
            stages: Stage label -> ordered planar positions.
            stop_areas: Stop area id -> StopArea record.

        Returns:
            The graph and a report of everything that could not be
            connected.
        """
        graph = Graph()
        report = BuildReport()

        for label, points in stages.items():
            report.trail_points += self._add_stage(graph, label, points)

        self._logger.info(
            "Trail points added",
            extra={"stages": len(stages), "nodes": graph.node_count},
        )

        self._stitch_endpoints(graph, report)
        self._link_stop_areas(graph, stop_areas, report)
        return graph, report

    def _add_stage(self, graph: Graph, label: str, points: Sequence[Position]) -> int:
        previous = None
        along = 0.0
        for point in points:
            step = 0.0
            if previous is not None:
                step = distance(graph.node(previous).position, point)
                along += step
            current = graph.add_trail_point(point, label, along)
            if previous is not None:
                graph.add_edge(previous, current, step)
            previous = current
        return len(points)

    def _stitch_endpoints(self, graph: Graph, report: BuildReport) -> None:
        trail_points = graph.trail_points()
        endpoints = [n.index for n in trail_points if graph.degree(n.index) < 2]

        for index in endpoints:
            # An earlier stitch may already have connected this endpoint.
            if graph.degree(index) >= 2:
                continue

            node = graph.node(index)
            others = [n for n in trail_points if n.stage != node.stage]
            found = nearest(node.position, [n.position for n in others])
            if found is None or found[1] > self.config.stitch_radius_m:
                nearest_distance = found[1] if found else None
                self._logger.warning(
                    "Stage endpoint is not close to any other stage",
                    extra={"stage": node.stage, "distance_m": nearest_distance},
                )
                report.unstitched.append(
                    UnstitchedEndpoint(node.stage, index, nearest_distance)
                )
                continue

            target = others[found[0]]
            graph.add_edge(index, target.index, found[1])
            report.stitched += 1
            self._logger.debug(
                "Stitched stages",
                extra={
                    "from_stage": node.stage,
                    "to_stage": target.stage,
                    "distance_m": found[1],
                },
            )

    def is_local_service(self, stop_area: StopArea) -> bool:
        """True if the stop area name marks a local, short-range service."""
        return any(marker in stop_area.name for marker in self.config.local_service_markers)

    def _link_stop_areas(
        self,
        graph: Graph,
        stop_areas: Mapping[int, StopArea],
        report: BuildReport,
    ) -> None:
        trail_points = graph.trail_points()

        sa_nodes: List[int] = []
        for stop_area in stop_areas.values():
            if self.is_local_service(stop_area):
                report.excluded_stop_areas.append(stop_area.id)
                continue
            sa_nodes.append(graph.add_stop_area(stop_area.position, stop_area.id))

        self._logger.info("Stop areas added", extra={"stop_areas": len(sa_nodes)})

        sa_positions = [graph.node(i).position for i in sa_nodes]
        registrations: Dict[int, List[Tuple[int, float]]] = {}
        for point in trail_points:
            found = nearest(point.position, sa_positions)
            if found is None or found[1] >= self.config.link_radius_m:
                continue
            registrations.setdefault(sa_nodes[found[0]], []).append(
                (point.index, found[1])
            )

        for sa_index in sa_nodes:
            links = registrations.get(sa_index)
            stop_area_id = graph.node(sa_index).kind.stop_area_id  # type: ignore[union-attr]
            if not links:
                report.unlinked_stop_areas.append(stop_area_id)
                continue
            trail_index, dist = min(links, key=lambda link: link[1])
            graph.add_edge(sa_index, trail_index, dist)
            report.linked_stop_areas += 1
            self._logger.debug(
                "Linked stop area",
                extra={
                    "stop_area": stop_area_id,
                    "stage": graph.node(trail_index).stage,
                    "distance_m": dist,
                },
            )

        self._logger.info(
            "Stop areas linked",
            extra={
                "linked": report.linked_stop_areas,
                "unlinked": len(report.unlinked_stop_areas),
                "excluded": len(report.excluded_stop_areas),
            },
        )
