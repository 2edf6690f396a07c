"""Narrow-phase contact generation between collision shapes."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from physecs.mathutil import quat_to_mat3

_UP = np.array([0.0, 1.0, 0.0])


def _vec(v) -> np.ndarray:
    return np.asarray(v, dtype=float)


@dataclass
class ContactPoint:
    """A pair of touching points, one on each body, in world space."""

    position0: np.ndarray
    position1: np.ndarray

    def __post_init__(self) -> None:
        self.position0 = np.array(self.position0, dtype=float)
        self.position1 = np.array(self.position1, dtype=float)


@dataclass
class ContactManifold:
    """Contact normal (pointing from body 0 to body 1) and its contact points."""

    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    points: list[ContactPoint] = field(default_factory=list)
    triangle_index: int = -1

    def __post_init__(self) -> None:
        self.normal = np.array(self.normal, dtype=float)


def collision_sphere_sphere(pos0, radius0: float, pos1, radius1: float) -> ContactManifold | None:
    """Contact between two spheres, or None when they are apart."""
    pos0 = _vec(pos0)
    pos1 = _vec(pos1)
    d = pos1 - pos0
    radius_sum = radius0 + radius1
    if float(np.dot(d, d)) > radius_sum * radius_sum:
        return None
    length = float(np.linalg.norm(d))
    normal = d / length if length else _UP.copy()
    point = ContactPoint(pos0 + normal * radius0, pos1 - normal * radius1)
    return ContactManifold(normal, [point])


def collision_sphere_box(pos0, radius0: float, pos1, or1, half_extents1) -> ContactManifold | None:
    """Contact between a sphere and an oriented box, or None when they are apart."""
    pos0 = _vec(pos0)
    pos1 = _vec(pos1)
    half_extents = _vec(half_extents1)
    basis = quat_to_mat3(or1)

    local = basis.T @ (pos0 - pos1)
    closest = pos1 + basis @ np.clip(local, -half_extents, half_extents)
    v = closest - pos0
    if float(np.dot(v, v)) > radius0 * radius0:
        return None

    length = float(np.linalg.norm(v))
    if length:
        normal = v / length
        return ContactManifold(normal, [ContactPoint(pos0 + normal * radius0, closest)])

    # Centre inside the box: push out through the nearest face.
    depths = half_extents - np.abs(local)
    axis = int(np.argmin(depths))
    sign = float(np.sign(local[axis])) if local[axis] else 1.0
    box_param = local.copy()
    box_param[axis] = sign * half_extents[axis]
    normal = -sign * basis[:, axis]
    return ContactManifold(normal, [ContactPoint(pos0, pos1 + basis @ box_param)])


def flip_contacts(manifold: ContactManifold) -> ContactManifold:
    """The same contact seen from the other body: normal negated, points swapped."""
    return ContactManifold(
        -manifold.normal,
        [ContactPoint(p.position1, p.position0) for p in manifold.points],
        manifold.triangle_index,
    )