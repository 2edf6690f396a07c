"""Bounding boxes of collision shapes and box-on-box tests."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field

import numpy as np

from physecs.bounds import Bounds
from physecs.mathutil import quat_rotate, quat_to_mat3


class GeometryType(enum.Enum):
    SPHERE = enum.auto()
    CAPSULE = enum.auto()
    BOX = enum.auto()
    CONVEX_MESH = enum.auto()
    TRIANGLE_MESH = enum.auto()


@dataclass
class Geometry:
    """A collision shape; only the fields its type uses are read."""

    type: GeometryType
    radius: float = 0.0
    half_height: float = 0.0
    half_extents: np.ndarray = field(default_factory=lambda: np.zeros(3))
    vertices: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.half_extents = np.array(self.half_extents, dtype=float)
        self.vertices = np.array(self.vertices, dtype=float).reshape(-1, 3)
        self.scale = np.array(self.scale, dtype=float)


def _vec(v) -> np.ndarray:
    return np.asarray(v, dtype=float)


def _points_bounds(points: np.ndarray) -> Bounds:
    if len(points) == 0:
        return Bounds(np.full(3, sys.float_info.max), np.full(3, -sys.float_info.max))
    return Bounds(points.min(axis=0), points.max(axis=0))


def geometry_bounds(pos, ori, geometry: Geometry) -> Bounds:
    """Bounds of ``geometry`` placed at ``pos`` with orientation ``ori``."""
    match geometry.type:
        case GeometryType.SPHERE:
            return bounds_sphere(pos, geometry.radius)
        case GeometryType.CAPSULE:
            return bounds_capsule(pos, ori, geometry.half_height, geometry.radius)
        case GeometryType.BOX:
            return bounds_box(pos, ori, geometry.half_extents)
        case GeometryType.CONVEX_MESH:
            return bounds_convex_mesh(pos, ori, geometry.vertices, geometry.scale)
        case GeometryType.TRIANGLE_MESH:
            return bounds_triangle_mesh(pos, ori, geometry.vertices)
    return Bounds()


def bounds_sphere(pos, radius: float) -> Bounds:
    pos = _vec(pos)
    return Bounds(pos - radius, pos + radius)


def bounds_capsule(pos, ori, half_height: float, radius: float) -> Bounds:
    """Bounds of a capsule whose axis is the local y axis."""
    pos = _vec(pos)
    p0 = pos + quat_rotate(ori, [0.0, half_height, 0.0])
    p1 = pos + quat_rotate(ori, [0.0, -half_height, 0.0])
    return Bounds(np.minimum(p0, p1) - radius, np.maximum(p0, p1) + radius)


def bounds_box(pos, ori, half_extents) -> Bounds:
    pos = _vec(pos)
    world_half_extents = np.abs(quat_to_mat3(ori)) @ _vec(half_extents)
    return Bounds(pos - world_half_extents, pos + world_half_extents)


def bounds_convex_mesh(pos, ori, vertices, scale) -> Bounds:
    """Bounds of scaled mesh vertices after rotation and translation."""
    local = np.asarray(vertices, dtype=float).reshape(-1, 3) * _vec(scale)
    world = _vec(pos) + local @ quat_to_mat3(ori).T
    return _points_bounds(world)


def bounds_triangle(a, b, c) -> Bounds:
    return _points_bounds(np.array([_vec(a), _vec(b), _vec(c)]))


def bounds_triangle_mesh(pos, ori, vertices) -> Bounds:
    local = np.asarray(vertices, dtype=float).reshape(-1, 3)
    world = _vec(pos) + local @ quat_to_mat3(ori).T
    return _points_bounds(world)


def intersects(a: Bounds, b: Bounds) -> bool:
    """Whether two boxes overlap; touching faces count as overlap."""
    return not (np.any(a.max < b.min) or np.any(a.min > b.max))


def get_union(a: Bounds, b: Bounds) -> Bounds:
    return Bounds(np.minimum(a.min, b.min), np.maximum(a.max, b.max))