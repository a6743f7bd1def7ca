"""Planar geometry helpers.

Positions are ``(x, y)`` tuples in meters of an already projected
coordinate system.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from ..domain.models import Position


def distance(a: Position, b: Position) -> float:
    """Euclidean distance between two planar positions."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def nearest(
    position: Position, candidates: Sequence[Position]
) -> Optional[Tuple[int, float]]:
    """Find the candidate closest to ``position`` by linear scan.

    Returns the index of the first closest candidate together with its
    distance, or None if there are no candidates.
    """
    if len(candidates) == 0:
        return None
    points = np.asarray(candidates, dtype=float).reshape(-1, 2)
    dists = np.hypot(points[:, 0] - position[0], points[:, 1] - position[1])
    idx = int(np.argmin(dists))
    return idx, float(dists[idx])
