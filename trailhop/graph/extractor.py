"""Walk candidate extraction.

Runs a shortest-path search from every stop area in the simplified
graph and keeps the stop area pairs that make a worthwhile hike.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from ..config import PathConfig, get_config
from ..domain.errors import GraphError
from ..domain.models import Path
from .dijkstra import ShortestPaths, shortest_paths
from .model import Graph, Node


@dataclass
class PathExtractor:
    """Extracts Path records from a simplified trail graph.

    Attributes:
        config: Distance bounds for candidates
    """

    config: PathConfig = field(default_factory=lambda: get_config().paths)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def extract(self, graph: Graph) -> List[Path]:
        """Return every accepted candidate, over all source stop areas."""
        stop_areas = graph.stop_area_nodes()
        connectors = {n.index: self.connector_distance(graph, n) for n in stop_areas}

        paths: List[Path] = []
        rejected: Dict[str, int] = {"too_short": 0, "too_long": 0, "no_detour": 0}

        for src in stop_areas:
            search = shortest_paths(graph, src.index)
            for dest in stop_areas:
                if dest.index == src.index or dest.index not in search.distances:
                    continue
                reason = self._rejection(
                    search.distances[dest.index],
                    connectors[src.index],
                    connectors[dest.index],
                )
                if reason:
                    rejected[reason] += 1
                    continue
                paths.append(
                    self._make_path(graph, search, src, dest, connectors)
                )

        self._logger.info(
            "Walk candidates extracted",
            extra={"stop_areas": len(stop_areas), "paths": len(paths), **rejected},
        )
        return paths

    def _rejection(self, dist: float, src_dist: float, dest_dist: float) -> str:
        if dist < self.config.min_distance_m:
            return "too_short"
        if dist > self.config.max_distance_m:
            return "too_long"
        # Walking straight between the stops would cost about as much as
        # the connectors alone.
        if 2 * (src_dist + dest_dist) > dist:
            return "no_detour"
        return ""

    @staticmethod
    def connector_distance(graph: Graph, stop_area: Node) -> float:
        """Weight of the edge linking a stop area to the trail."""
        edges = graph.edges_of(stop_area.index)
        if not edges:
            raise GraphError(f"Stop area node {stop_area.index} is not linked")
        return min(edge.weight for edge in edges)

    @staticmethod
    def stages_along(graph: Graph, route: List[int]) -> Tuple[str, ...]:
        """Stage labels of the trail points on ``route``, first-seen order."""
        stages: List[str] = []
        for index in route:
            stage = graph.node(index).stage
            if stage and stage not in stages:
                stages.append(stage)
        return tuple(stages)

    def _make_path(
        self,
        graph: Graph,
        search: ShortestPaths,
        src: Node,
        dest: Node,
        connectors: Dict[int, float],
    ) -> Path:
        return Path(
            dist=search.distances[dest.index],
            src_dist=connectors[src.index],
            dest_dist=connectors[dest.index],
            src=src.kind.stop_area_id,  # type: ignore[union-attr]
            dest=dest.kind.stop_area_id,  # type: ignore[union-attr]
            stages=self.stages_along(graph, search.path_to(dest.index)),
        )
