"""Catalogue port - Persistence of the planner's inputs and outputs.

The planner consumes two catalogues produced upstream (stage polylines
and stop areas) and produces a third (walk candidates) that the ranker
reads back later.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Mapping, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Path, Position, StopArea


class CatalogueRepositoryPort(Protocol):
    """Port for loading and saving catalogues.

    Implementation: adapters/catalogue/json_repository.py

    Missing or unreadable inputs are fatal and raise CatalogueError.
    """

    def load_stages(self) -> Dict[str, List[Position]]:
        """Load stage label -> ordered planar positions.

        Raises:
            CatalogueError: If the catalogue is missing or malformed.
            UnknownStageError: If a label names no known trail.
        """
        ...

    def load_stop_areas(self) -> Dict[int, StopArea]:
        """Load stop area id -> StopArea."""
        ...

    def save_stop_areas(self, stop_areas: Mapping[int, StopArea]) -> None:
        ...

    def load_paths(self) -> List[Path]:
        """Load the persisted walk candidates."""
        ...

    def save_paths(self, paths: Sequence[Path]) -> None:
        ...
