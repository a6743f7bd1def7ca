"""Transit port - Abstraction over the public transport data provider.

The planner needs three things from the provider: resolving a stop area
by name, finding the stop area nearest to a planar position, and listing
journeys between two stop areas.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Journey, StopArea


class TransitProviderPort(Protocol):
    """Port for transit lookups.

    Implementation: adapters/transit/skanetrafiken_adapter.py

    Implementations downgrade provider failures to None or an empty
    sequence rather than raising.
    """

    def lookup_stop_area(self, query: str) -> Optional[StopArea]:
        """Resolve a stop area by (partial) name.

        Args:
            query: Name to search for, e.g. "Lund C".

        Returns:
            The best matching stop area, or None if nothing matched.
        """
        ...

    def nearest_stop_area(self, x: float, y: float, radius: float) -> Optional[StopArea]:
        """Find the stop area closest to a planar position.

        Args:
            x: Planar northing in meters.
            y: Planar easting in meters.
            radius: Search radius in meters.

        Returns:
            The nearest stop area within ``radius``, or None.
        """
        ...

    def query_journeys(
        self,
        origin: StopArea,
        destination: StopArea,
        depart_after: datetime,
    ) -> Sequence[Journey]:
        """List journeys departing at or after ``depart_after``.

        Returns:
            Journeys ordered as the provider returned them; empty if the
            provider has none or failed.
        """
        ...
