"""Walk-only search over the path catalogue.

Picks walks whose length is closest to a desired distance, never
reusing a stop area, without consulting the transit provider.
"""

from __future__ import annotations

from typing import List, Sequence

from ..domain.models import Path


def search_walks(paths: Sequence[Path], distance: float, tolerance: float) -> List[Path]:
    """Walks within ``distance ± tolerance``, best fit first, disjoint stop areas."""
    in_band = [p for p in paths if distance - tolerance <= p.dist <= distance + tolerance]
    in_band.sort(key=lambda p: abs(p.dist - distance))

    used: set[int] = set()
    selected = []
    for path in in_band:
        if path.src in used or path.dest in used:
            continue
        selected.append(path)
        used.update((path.src, path.dest))
    return selected
