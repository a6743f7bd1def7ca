"""Human-readable summaries of walks and itineraries."""

from __future__ import annotations

from typing import List, Mapping

from ..domain.models import Itinerary, Path, ScoredJourney, StopArea
from ..domain.stages import describe_stages

TRAIL_NAME = "Skåneleden"


def _km(meters: float) -> str:
    return f"{meters / 1000:.1f} km"


def _name(stop_areas: Mapping[int, StopArea], stop_area_id: int) -> str:
    stop_area = stop_areas.get(stop_area_id)
    return stop_area.name if stop_area else str(stop_area_id)


def format_walk(path: Path, stop_areas: Mapping[int, StopArea]) -> str:
    """Describe a walk as a few indented lines.

    Raises:
        UnknownStageError: If the walk carries a corrupt stage label.
    """
    src, dest = _name(stop_areas, path.src), _name(stop_areas, path.dest)
    return "\n".join(
        [
            f"From {src} to {dest}: at least {_km(path.dist)}",
            f"  Walk at least {_km(path.src_dist)} from {src} to {TRAIL_NAME}",
            f"  Walk {_km(path.trail_dist)} on {describe_stages(path.stages)}",
            f"  Walk at least {_km(path.dest_dist)} from {TRAIL_NAME} to {dest}",
        ]
    )


def _leg(label: str, leg: ScoredJourney) -> str:
    journey = leg.journey
    return (
        f"  {label}: depart {journey.departure:%Y-%m-%d %H:%M}, "
        f"arrive {journey.arrival:%H:%M}, {journey.changes} change(s) "
        f"(score {leg.score:.0f})"
    )


def format_itinerary(itinerary: Itinerary, stop_areas: Mapping[int, StopArea]) -> str:
    """Describe an itinerary: both transit legs around the walk."""
    lines: List[str] = [f"Score {itinerary.score:.0f}"]
    lines.append(_leg(f"Travel to {_name(stop_areas, itinerary.src)}", itinerary.origin_leg))
    lines.extend("  " + line for line in format_walk(itinerary.path, stop_areas).splitlines())
    if itinerary.dest_leg is not None:
        lines.append(
            _leg(f"Travel home from {_name(stop_areas, itinerary.dest)}", itinerary.dest_leg)
        )
    return "\n".join(lines)
