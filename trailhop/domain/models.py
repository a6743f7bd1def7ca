"""Immutable domain models for the trail itinerary planner.

All models are frozen dataclasses with slots. They carry no behaviour
beyond validation and a few derived properties, and have no external
dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

Position = tuple[float, float]


@dataclass(frozen=True, slots=True)
class StopArea:
    """A transit boarding location.

    Attributes:
        id: Provider identifier of the stop area
        name: Human-readable name
        x: Planar northing in meters
        y: Planar easting in meters
    """

    id: int
    name: str
    x: float
    y: float

    @property
    def position(self) -> Position:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Path:
    """A walk-only candidate between two stop areas via the trail.

    Attributes:
        dist: Total walking distance in meters, connectors included
        src_dist: Distance from the source stop area to the trail
        dest_dist: Distance from the trail to the destination stop area
        src: Source stop area id
        dest: Destination stop area id
        stages: Stage labels traversed, in walking order
    """

    dist: float
    src_dist: float
    dest_dist: float
    src: int
    dest: int
    stages: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if min(self.dist, self.src_dist, self.dest_dist) < 0:
            raise ValueError(f"Path distances must be non-negative: {self}")
        if self.dist < self.src_dist + self.dest_dist:
            raise ValueError(
                f"Path distance {self.dist} is shorter than its connectors "
                f"({self.src_dist} + {self.dest_dist})"
            )

    @property
    def trail_dist(self) -> float:
        """Distance walked on the trail itself."""
        return self.dist - self.src_dist - self.dest_dist

    def reversed(self) -> Path:
        """Return the same walk in the opposite direction."""
        return Path(
            dist=self.dist,
            src_dist=self.dest_dist,
            dest_dist=self.src_dist,
            src=self.dest,
            dest=self.src,
            stages=tuple(reversed(self.stages)),
        )


@dataclass(frozen=True, slots=True)
class Journey:
    """A single transit journey offered by the provider.

    Attributes:
        departure: Departure time from the origin stop
        arrival: Arrival time at the destination stop
        changes: Number of vehicle changes
    """

    departure: datetime
    arrival: datetime
    changes: int = 0

    def __post_init__(self) -> None:
        if self.arrival < self.departure:
            raise ValueError(
                f"Journey arrives ({self.arrival}) before it departs ({self.departure})"
            )

    @property
    def travel_seconds(self) -> float:
        return (self.arrival - self.departure).total_seconds()


@dataclass(frozen=True, slots=True)
class ScoredJourney:
    """A journey together with its fitness score."""

    journey: Journey
    score: float


@dataclass(frozen=True, slots=True)
class Itinerary:
    """A full trip: transit to a trailhead, the walk, transit home.

    Attributes:
        path: The walk between the two trailhead stop areas
        origin_leg: Best transit journey to the walk's source stop area
        dest_leg: Best transit journey from the walk's destination, if required
        score: Combined ranking score (higher is better)
    """

    path: Path
    origin_leg: ScoredJourney
    dest_leg: Optional[ScoredJourney]
    score: float

    @property
    def src(self) -> int:
        return self.path.src

    @property
    def dest(self) -> int:
        return self.path.dest


@dataclass(frozen=True, slots=True)
class UnstitchedEndpoint:
    """A stage endpoint that found no other stage within stitching range."""

    stage: str
    node: int
    nearest_distance: Optional[float]


@dataclass
class BuildReport:
    """Diagnostics collected while building the trail graph."""

    trail_points: int = 0
    stitched: int = 0
    unstitched: list[UnstitchedEndpoint] = field(default_factory=list)
    excluded_stop_areas: list[int] = field(default_factory=list)
    linked_stop_areas: int = 0
    unlinked_stop_areas: list[int] = field(default_factory=list)


@dataclass
class SimplifyReport:
    """Diagnostics from a simplification pass."""

    collapsed: int = 0
    removed_nodes: int = 0
    nodes_before: int = 0
    nodes_after: int = 0
