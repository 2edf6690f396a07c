"""Vector, matrix and quaternion helpers shared by the physics code.

Vectors are numpy arrays of three floats. Quaternions are arrays laid out
as ``[w, x, y, z]``. A 3x3 matrix stores its basis vectors as columns, so
``m[:, i]`` is the i-th basis vector.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0])


def _vec(v) -> np.ndarray:
    return np.asarray(v, dtype=float)


def multiply_transpose(m, v) -> np.ndarray:
    """Multiply ``v`` by the transpose of ``m``."""
    return np.asarray(m, dtype=float).T @ _vec(v)


def solve33(a, b) -> np.ndarray:
    """Solve ``a @ x = b`` by Cramer's rule; a singular ``a`` gives zeros."""
    a = np.asarray(a, dtype=float)
    b = _vec(b)
    c0, c1, c2 = a[:, 0], a[:, 1], a[:, 2]
    cross12 = np.cross(c1, c2)
    det = float(np.dot(c0, cross12))
    if det == 0.0:
        return np.zeros(3)
    inv_det = 1.0 / det
    return np.array(
        [
            inv_det * np.dot(b, cross12),
            inv_det * np.dot(c0, np.cross(b, c2)),
            inv_det * np.dot(c0, np.cross(c1, b)),
        ]
    )


def quat_multiply(q0, q1) -> np.ndarray:
    """Hamilton product ``q0 * q1``."""
    w0, x0, y0, z0 = _vec(q0)
    w1, x1, y1, z1 = _vec(q1)
    return np.array(
        [
            w0 * w1 - x0 * x1 - y0 * y1 - z0 * z1,
            w0 * x1 + x0 * w1 + y0 * z1 - z0 * y1,
            w0 * y1 - x0 * z1 + y0 * w1 + z0 * x1,
            w0 * z1 + x0 * y1 - y0 * x1 + z0 * w1,
        ]
    )


def quat_rotate(q, v) -> np.ndarray:
    """Rotate vector ``v`` by unit quaternion ``q``."""
    q = _vec(q)
    v = _vec(v)
    w = q[0]
    u = q[1:]
    uv = np.cross(u, v)
    uuv = np.cross(u, uv)
    return v + 2.0 * (w * uv + uuv)


def quat_to_mat3(q) -> np.ndarray:
    """Rotation matrix of unit quaternion ``q``."""
    w, x, y, z = _vec(q)
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
        ]
    )


def quat_normalize(q) -> np.ndarray:
    """Unit-length copy of ``q``; a zero quaternion becomes the identity."""
    q = _vec(q)
    length = float(np.linalg.norm(q))
    if length <= 0.0:
        return IDENTITY_QUAT.copy()
    return q / length


def quat_conjugate(q) -> np.ndarray:
    """Conjugate of ``q``, the inverse rotation for a unit quaternion."""
    w, x, y, z = _vec(q)
    return np.array([w, -x, -y, -z])


@dataclass
class Transform:
    """Position, orientation and scale of a body."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    orientation: np.ndarray = field(default_factory=lambda: IDENTITY_QUAT.copy())
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.position = np.array(self.position, dtype=float)
        self.orientation = np.array(self.orientation, dtype=float)
        self.scale = np.array(self.scale, dtype=float)