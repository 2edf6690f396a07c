"""Separating-axis test between two oriented boxes.

The fifteen candidate axes are tried in a fixed order: the three face normals
of the first box, the three of the second, then the nine cross products of
their edges. Edge axes are only picked when they beat the best face axis by a
small margin, which keeps resting contacts on faces.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np

from physecs.mathutil import quat_to_mat3

_EDGE_LIMIT = 0.999
_EDGE_OFFSET = 0.1


class BoxContactType(enum.Enum):
    FACE = enum.auto()
    EDGE = enum.auto()


@dataclass(frozen=True)
class BoxAxisResult:
    """The axis of least penetration between two overlapping boxes.

    ``depth`` is the signed separation along that axis (negative when the
    boxes overlap). For a face contact ``box`` (0 or 1) and ``axis`` name the
    reference face; for an edge contact ``edge0`` and ``edge1`` name the
    crossing edge directions. ``normal`` is unit length and points from the
    first box towards the second.
    """

    contact_type: BoxContactType
    depth: float
    normal: np.ndarray = field(compare=False)
    box: int = 0
    axis: int = 0
    edge0: int = 0
    edge1: int = 0


def _vec(v) -> np.ndarray:
    return np.asarray(v, dtype=float)


def box_box_axis(pos0, or0, half_extents0, pos1, or1, half_extents1) -> BoxAxisResult | None:
    """Find the contact axis of two oriented boxes, or None when they are apart."""
    pos0 = _vec(pos0)
    pos1 = _vec(pos1)
    a = _vec(half_extents0)
    b = _vec(half_extents1)

    u0 = quat_to_mat3(or0)
    u1 = quat_to_mat3(or1)
    r = u0.T @ u1
    abs_r = np.abs(r)
    t = u0.T @ (pos1 - pos0)

    best = -np.inf
    contact_type = BoxContactType.FACE
    face_box = 0
    face_axis = 0
    edges = (0, 0)

    for i in range(3):
        d = abs(t[i]) - a[i] - float(np.dot(b, abs_r[i, :]))
        if d > 0:
            return None
        if d > best:
            best, contact_type, face_box, face_axis = d, BoxContactType.FACE, 0, i

    for i in range(3):
        d = abs(float(np.dot(t, r[:, i]))) - float(np.dot(a, abs_r[:, i])) - b[i]
        if d > 0:
            return None
        if d > best:
            best, contact_type, face_box, face_axis = d, BoxContactType.FACE, 1, i

    edge_offset = _EDGE_OFFSET
    for i in range(3):
        i1, i2 = (i + 1) % 3, (i + 2) % 3
        for j in range(3):
            j1, j2 = (j + 1) % 3, (j + 2) % 3
            ra = a[i1] * abs_r[i2, j] + a[i2] * abs_r[i1, j]
            rb = b[j1] * abs_r[i, j2] + b[j2] * abs_r[i, j1]
            length = abs(t[i2] * r[i1, j] - t[i1] * r[i2, j])
            d = length - ra - rb
            if d > 0:
                return None
            if abs_r[i, j] < _EDGE_LIMIT and d > best + edge_offset:
                best, contact_type, edges = d, BoxContactType.EDGE, (i, j)
                edge_offset = 0.0

    offset = pos1 - pos0
    if contact_type is BoxContactType.FACE:
        axis = (u1 if face_box else u0)[:, face_axis]
        normal = -axis if np.dot(axis, offset) < 0 else axis.copy()
        return BoxAxisResult(
            BoxContactType.FACE, float(best), normal, box=face_box, axis=face_axis
        )

    axis = np.cross(u0[:, edges[0]], u1[:, edges[1]])
    if np.dot(axis, offset) < 0:
        axis = -axis
    normal = axis / np.linalg.norm(axis)
    return BoxAxisResult(
        BoxContactType.EDGE, float(best), normal, edge0=edges[0], edge1=edges[1]
    )