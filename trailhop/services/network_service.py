"""Trail network service - Build, simplify and extract in one go.

Orchestrates the offline part of the planner: load the stage and stop
area catalogues, build and simplify the graph, extract walk candidates
and persist them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Sequence

from ..domain.models import BuildReport, Path, Position, SimplifyReport, StopArea
from ..graph.builder import GraphBuilder
from ..graph.extractor import PathExtractor
from ..graph.model import Graph
from ..graph.simplifier import simplify
from ..ports.catalogue import CatalogueRepositoryPort


@dataclass
class NetworkSummary:
    """Outcome of a network build."""

    build: BuildReport
    simplify: SimplifyReport
    paths: List[Path]
    graph: Graph


@dataclass
class TrailNetworkService:
    """Produces the walk candidate catalogue.

    Attributes:
        repository: Catalogue storage
        builder: Graph builder
        extractor: Walk candidate extractor
    """

    repository: CatalogueRepositoryPort
    builder: GraphBuilder = field(default_factory=GraphBuilder)
    extractor: PathExtractor = field(default_factory=PathExtractor)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def compute(
        self,
        stages: Mapping[str, Sequence[Position]],
        stop_areas: Mapping[int, StopArea],
    ) -> NetworkSummary:
        """Build, simplify and extract without touching storage."""
        graph, build_report = self.builder.build(stages, stop_areas)
        self._logger.info(
            "Graph built",
            extra={"nodes": graph.node_count, "edges": graph.edge_count},
        )
        simplify_report = simplify(graph)
        paths = self.extractor.extract(graph)
        return NetworkSummary(build_report, simplify_report, paths, graph)

    def rebuild(self) -> NetworkSummary:
        """Load catalogues, compute walk candidates and save them.

        Raises:
            CatalogueError: If an input catalogue is missing or unreadable.
        """
        stages = self.repository.load_stages()
        stop_areas = self.repository.load_stop_areas()
        summary = self.compute(stages, stop_areas)
        self.repository.save_paths(summary.paths)
        return summary
