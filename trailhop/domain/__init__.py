"""Domain layer - Core records, stage coding and errors.

No external dependencies.
"""

from .errors import (
    CatalogueError,
    ConfigurationError,
    GraphError,
    NodeNotFoundError,
    StopAreaNotFoundError,
    TrailhopError,
    TransitError,
    UnknownStageError,
)
from .models import (
    BuildReport,
    Itinerary,
    Journey,
    Path,
    ScoredJourney,
    SimplifyReport,
    StopArea,
    UnstitchedEndpoint,
)
from .stages import Trail, describe_stages, parse_stage_label

__all__ = [
    # Models
    "StopArea",
    "Path",
    "Journey",
    "ScoredJourney",
    "Itinerary",
    "BuildReport",
    "SimplifyReport",
    "UnstitchedEndpoint",
    # Stages
    "Trail",
    "parse_stage_label",
    "describe_stages",
    # Errors
    "TrailhopError",
    "GraphError",
    "NodeNotFoundError",
    "CatalogueError",
    "UnknownStageError",
    "TransitError",
    "StopAreaNotFoundError",
    "ConfigurationError",
]
