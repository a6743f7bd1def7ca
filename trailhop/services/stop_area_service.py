"""Stop area harvesting and resolution.

Builds the stop area catalogue by asking the transit provider for the
nearest stop area along every stage, and resolves user-supplied names
to stop areas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from ..config import TransitConfig, get_config
from ..domain.errors import StopAreaNotFoundError
from ..domain.models import Position, StopArea
from ..graph.geometry import distance
from ..ports.transit import TransitProviderPort


def sample_points(points: Sequence[Position], spacing: float) -> List[Position]:
    """Positions worth querying along a stage.

    Both endpoints, plus every point at least ``spacing`` meters from the
    previously sampled one.
    """
    if not points:
        return []

    samples = [points[-1], points[0]]
    last = points[0]
    for point in points:
        if distance(last, point) < spacing:
            continue
        samples.append(point)
        last = point
    return samples


@dataclass
class StopAreaService:
    """Collects and resolves stop areas through the transit provider.

    Attributes:
        transit: Transit provider
        config: Search radius and sampling spacing
    """

    transit: TransitProviderPort
    config: TransitConfig = field(default_factory=lambda: get_config().transit)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def harvest(self, stages: Mapping[str, Sequence[Position]]) -> Dict[int, StopArea]:
        """Query stop areas near every stage; results keyed by id."""
        found: Dict[int, StopArea] = {}
        for label, points in stages.items():
            samples = sample_points(points, self.config.harvest_spacing_m)
            self._logger.debug(
                "Harvesting stage", extra={"stage": label, "samples": len(samples)}
            )
            for x, y in samples:
                stop_area = self.transit.nearest_stop_area(x, y, self.config.nearest_radius_m)
                if stop_area is not None:
                    found[stop_area.id] = stop_area

        self._logger.info(
            "Stop areas harvested", extra={"stages": len(stages), "stop_areas": len(found)}
        )
        return found

    def resolve(self, name: str) -> StopArea:
        """Look a stop area up by name.

        Raises:
            StopAreaNotFoundError: If the provider knows no such stop area.
        """
        stop_area = self.transit.lookup_stop_area(name)
        if stop_area is None:
            raise StopAreaNotFoundError(f"No stop area named {name!r}", query=name)
        return stop_area
