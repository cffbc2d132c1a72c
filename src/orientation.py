"""
Placement orientation from a slot's normal/up pair.
"""
import numpy as np
from scipy.spatial.transform import Rotation

from conveyor import Euler, Slot

_EPS = 1e-9


def _normalize(v: np.ndarray) -> np.ndarray:
    n = np.linalg.norm(v)
    if n < _EPS:
        return np.zeros(3)
    return v / n


def _fallback_reference(normal: np.ndarray) -> np.ndarray:
    """Any axis not parallel to normal."""
    if abs(normal[1]) < 0.9:
        return np.array([0.0, 1.0, 0.0])
    return np.array([1.0, 0.0, 0.0])


def orientation_basis(slot: Slot) -> np.ndarray:
    """Orthonormal basis with columns (right, corrected up, normal).

    The stored up vector need not be perpendicular to the normal; it is
    re-derived as normal x right. If up is parallel to the normal another
    reference axis is used. A zero normal gives the identity.
    """
    normal = _normalize(np.asarray(slot.normal, dtype=float))
    if not normal.any():
        return np.eye(3)

    up = _normalize(np.asarray(slot.up, dtype=float))
    right = _normalize(np.cross(up, normal))
    if not right.any():
        right = _normalize(np.cross(_fallback_reference(normal), normal))
    corrected_up = _normalize(np.cross(normal, right))
    return np.column_stack([right, corrected_up, normal])


def calculate_orientation(slot: Slot) -> Euler:
    """Euler angles (intrinsic XYZ) that rotate a part onto the slot."""
    basis = orientation_basis(slot)
    x, y, z = Rotation.from_matrix(basis).as_euler("XYZ")
    return Euler(x=float(x), y=float(y), z=float(z), order="XYZ")
