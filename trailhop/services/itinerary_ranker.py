"""Itinerary ranking service.

Combines persisted walk candidates with live transit journeys:

1. Keep the walks whose length fits the requested distance.
2. Round 1: look up journeys from the origin to every walk start, one
   concurrent task per stop area, and wait for all of them.
3. Round 2 (only when a final destination is given): look up journeys
   from every walk end to the destination, departing once the walk is
   done, and wait for all of them.
4. Score, sort, and pick itineraries that share no stop area.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict, Hashable, List, Mapping, Optional, Sequence, Tuple

from ..config import RankingConfig, get_config
from ..domain.models import Itinerary, Journey, Path, ScoredJourney, StopArea
from ..ports.transit import TransitProviderPort

JourneyTask = Callable[[], Sequence[Journey]]


def score_journey(journey: Journey, target: datetime, max_score: float) -> Optional[float]:
    """Fitness of a journey for a desired departure time.

    Travel time counts double against the budget, waiting once. A
    journey leaving before ``target`` cannot be taken and has no score.
    """
    wait = (journey.departure - target).total_seconds()
    if wait < 0:
        return None
    return max_score - (2 * journey.travel_seconds + wait)


def best_journey(
    journeys: Sequence[Journey], target: datetime, max_score: float
) -> Optional[ScoredJourney]:
    """Best viable (positive score) journey, or None."""
    best: Optional[ScoredJourney] = None
    for journey in journeys:
        score = score_journey(journey, target, max_score)
        if score is None or score <= 0:
            continue
        if best is None or score > best.score:
            best = ScoredJourney(journey, score)
    return best


def select_non_overlapping(itineraries: Sequence[Itinerary]) -> List[Itinerary]:
    """Greedily accept the highest scores, one itinerary per stop area."""
    used: set[int] = set()
    accepted: List[Itinerary] = []
    for itinerary in sorted(itineraries, key=lambda i: i.score, reverse=True):
        if itinerary.src in used or itinerary.dest in used:
            continue
        accepted.append(itinerary)
        used.update((itinerary.src, itinerary.dest))
    return accepted


@dataclass(frozen=True)
class RankingRequest:
    """What the user wants to do.

    Attributes:
        distance: Desired walking distance in meters
        paths: Walk candidate catalogue
        stop_areas: Stop area catalogue, by id
        origin: Where the trip starts
        depart_after: Earliest acceptable departure from the origin
        destination: Where the trip ends; None skips the return leg
        tolerance: Accepted deviation from ``distance``; config default if None
        walking_speed: Meters per hour; config default if None
    """

    distance: float
    paths: Sequence[Path]
    stop_areas: Mapping[int, StopArea]
    origin: StopArea
    depart_after: datetime
    destination: Optional[StopArea] = None
    tolerance: Optional[float] = None
    walking_speed: Optional[float] = None

    def __post_init__(self) -> None:
        if self.walking_speed is not None and self.walking_speed <= 0:
            raise ValueError(f"Walking speed must be positive, got {self.walking_speed}")
        if self.depart_after.tzinfo is not None:
            # Provider journey times are naive local time.
            local = self.depart_after.astimezone().replace(tzinfo=None)
            object.__setattr__(self, "depart_after", local)

    @property
    def directional(self) -> bool:
        return self.destination is not None and self.destination.id != self.origin.id


@dataclass
class ItineraryRanker:
    """Ranks full itineraries (transit, walk, transit).

    Attributes:
        transit: Journey lookup provider
        config: Scoring constants and fan-out width
    """

    transit: TransitProviderPort
    config: RankingConfig = field(default_factory=lambda: get_config().ranking)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def candidates(self, request: RankingRequest) -> List[Path]:
        """Walks within the distance band, reversed too when directional."""
        tolerance = self.config.tolerance_m if request.tolerance is None else request.tolerance
        low, high = request.distance - tolerance, request.distance + tolerance

        selected: Dict[Tuple[int, int], Path] = {}
        for path in request.paths:
            if not low <= path.dist <= high:
                continue
            variants = [path, path.reversed()] if request.directional else [path]
            for variant in variants:
                selected.setdefault((variant.src, variant.dest), variant)
        return list(selected.values())

    def rank(self, request: RankingRequest) -> List[Itinerary]:
        """Return the ordered, non-overlapping itineraries for a request."""
        candidates = [
            p for p in self.candidates(request)
            if self._known(request, p.src) and self._known(request, p.dest)
        ]
        self._logger.info(
            "Ranking itineraries",
            extra={"distance_m": request.distance, "candidates": len(candidates)},
        )
        if not candidates:
            return []

        origin_legs = self._origin_legs(request, candidates)
        with_origin = [p for p in candidates if p.src in origin_legs]

        dest_legs: Dict[Tuple[int, int], Optional[ScoredJourney]] = {}
        if request.destination is not None:
            dest_legs = self._destination_legs(request, with_origin, origin_legs)

        itineraries = []
        for path in with_origin:
            origin_leg = origin_legs[path.src]
            dest_leg = None
            score = origin_leg.score
            if request.destination is not None:
                dest_leg = dest_legs.get((path.src, path.dest))
                if dest_leg is None:
                    continue
                score += dest_leg.score
            score -= path.src_dist + path.dest_dist
            itineraries.append(Itinerary(path, origin_leg, dest_leg, score))

        accepted = select_non_overlapping(itineraries)
        self._logger.info(
            "Itineraries ranked",
            extra={"scored": len(itineraries), "accepted": len(accepted)},
        )
        return accepted

    def _known(self, request: RankingRequest, stop_area_id: int) -> bool:
        if stop_area_id in request.stop_areas:
            return True
        self._logger.warning(
            "Walk references unknown stop area", extra={"stop_area": stop_area_id}
        )
        return False

    def _origin_legs(
        self, request: RankingRequest, candidates: Sequence[Path]
    ) -> Dict[int, ScoredJourney]:
        tasks: Dict[int, JourneyTask] = {}
        for path in candidates:
            if path.src not in tasks:
                tasks[path.src] = self._lookup(
                    request.origin, request.stop_areas[path.src], request.depart_after
                )

        legs: Dict[int, ScoredJourney] = {}
        for src, journeys in self.fan_out(tasks).items():
            best = best_journey(journeys, request.depart_after, self.config.max_score)
            if best is not None:
                legs[src] = best
        self._logger.info(
            "Origin legs resolved", extra={"queried": len(tasks), "viable": len(legs)}
        )
        return legs

    def _destination_legs(
        self,
        request: RankingRequest,
        candidates: Sequence[Path],
        origin_legs: Mapping[int, ScoredJourney],
    ) -> Dict[Tuple[int, int], Optional[ScoredJourney]]:
        assert request.destination is not None
        speed = request.walking_speed
        if speed is None:
            speed = self.config.walking_speed_m_per_h

        tasks: Dict[Tuple[int, datetime], JourneyTask] = {}
        required: Dict[Tuple[int, int], Tuple[int, datetime]] = {}
        for path in candidates:
            walk_done = origin_legs[path.src].journey.arrival + timedelta(
                hours=path.dist / speed
            )
            key = (path.dest, walk_done)
            required[(path.src, path.dest)] = key
            if key not in tasks:
                tasks[key] = self._lookup(
                    request.stop_areas[path.dest], request.destination, walk_done
                )

        results = self.fan_out(tasks)
        legs = {
            pair: best_journey(results.get(key, ()), key[1], self.config.max_score)
            for pair, key in required.items()
        }
        self._logger.info(
            "Destination legs resolved",
            extra={
                "queried": len(tasks),
                "viable": sum(1 for leg in legs.values() if leg is not None),
            },
        )
        return legs

    def _lookup(self, origin: StopArea, destination: StopArea, after: datetime) -> JourneyTask:
        if origin.id == destination.id:
            # Already there: an instantaneous "journey" at the target time.
            return lambda: [Journey(departure=after, arrival=after)]
        return lambda: self.transit.query_journeys(origin, destination, after)

    def fan_out(self, tasks: Mapping[Hashable, JourneyTask]) -> Dict[Hashable, Sequence[Journey]]:
        """Run lookups concurrently and wait for all of them.

        A task that raises is logged and yields no journeys.
        """
        results: Dict[Hashable, Sequence[Journey]] = {}
        if not tasks:
            return results

        workers = min(self.config.max_workers, len(tasks))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_key = {executor.submit(task): key for key, task in tasks.items()}
            for future in as_completed(future_to_key):
                key = future_to_key[future]
                try:
                    journeys = list(future.result())
                    if not all(isinstance(j, Journey) for j in journeys):
                        raise TypeError("provider returned non-journey records")
                    results[key] = journeys
                except Exception as e:
                    self._logger.warning(
                        "Journey lookup failed", extra={"key": str(key), "error": str(e)}
                    )
                    results[key] = []
        return results
