"""
Nearest-slot snapping for a dragged point.

Distances are measured on the ground (X/Z) plane of the y-up scene: the drag
point comes from a floor raycast, so its height says nothing about which slot
the user is aiming at.
"""
from typing import Optional, Sequence

import numpy as np

from conveyor import Slot

DEFAULT_SNAP_RADIUS = 0.04  # scene units
PLANAR_AXES = (0, 2)  # X and Z


def planar_distances(point: Sequence[float], slots: Sequence[Slot]) -> np.ndarray:
    """Ground-plane distance from point to every slot, in slot order."""
    if not slots:
        return np.zeros(0, dtype=float)
    positions = np.asarray([s.position for s in slots], dtype=float)[:, PLANAR_AXES]
    p = np.asarray(point, dtype=float)[list(PLANAR_AXES)]
    return np.linalg.norm(positions - p, axis=1)


def nearest_free_slot(
    point: Sequence[float],
    slots: Sequence[Slot],
    snap_radius: float = DEFAULT_SNAP_RADIUS,
) -> Optional[Slot]:
    """Find the closest unoccupied slot strictly within snap_radius.

    Ties go to the slot that comes first in slots.

    Returns:
        The matching slot, or None when no free slot is close enough.
    """
    free = [s for s in slots if s.is_free]
    if not free:
        return None

    distances = planar_distances(point, free)
    best = int(np.argmin(distances))
    if distances[best] < snap_radius:
        return free[best]
    return None
