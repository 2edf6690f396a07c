"""Polygon and segment clipping against convex polygons in the plane.

Clip polygons are ordered so that the interior lies to the right of each
directed edge; points exactly on an edge count as outside.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

Point = tuple[float, float]


def _point(p) -> Point:
    return float(p[0]), float(p[1])


def _is_inside(point: Point, a: Point, b: Point) -> bool:
    return (b[1] - a[1]) * (point[0] - a[0]) - (b[0] - a[0]) * (point[1] - a[1]) > 0


def _intersection(a1: Point, b1: Point, a2: Point, b2: Point) -> Point:
    r1 = (b1[0] - a1[0], b1[1] - a1[1])
    r2 = (b2[0] - a2[0], b2[1] - a2[1])
    d = (a1[0] - a2[0], a1[1] - a2[1])
    numerator = d[0] * r2[1] - r2[0] * d[1]
    denominator = -r1[0] * r2[1] + r2[0] * r1[1]
    t = numerator / denominator
    return a1[0] + t * r1[0], a1[1] + t * r1[1]


def _edges(points: Sequence[Point]):
    return zip(points, [*points[1:], *points[:1]])


def _clip_edge(polygon: list[Point], a: Point, b: Point) -> list[Point]:
    result: list[Point] = []
    for p, q in _edges(polygon):
        p_inside = _is_inside(p, a, b)
        q_inside = _is_inside(q, a, b)
        if p_inside and q_inside:
            result.append(q)
        elif p_inside:
            result.append(_intersection(p, q, a, b))
        elif q_inside:
            result.append(_intersection(p, q, a, b))
            result.append(q)
    return result


def suth_hodg_clip(polygon: Iterable, clip: Iterable) -> list[Point]:
    """Clip ``polygon`` by the convex polygon ``clip`` and return the result."""
    result = [_point(p) for p in polygon]
    clip_points = [_point(p) for p in clip]
    for a, b in _edges(clip_points):
        result = _clip_edge(result, a, b)
    return result


def clip_line(p0, p1, clip: Iterable) -> tuple[Point, Point] | None:
    """Clip the segment ``p0``-``p1`` by ``clip``; None when nothing is left."""
    p0 = _point(p0)
    p1 = _point(p1)
    clip_points = [_point(p) for p in clip]
    for a, b in _edges(clip_points):
        inside0 = _is_inside(p0, a, b)
        inside1 = _is_inside(p1, a, b)
        if inside0 and inside1:
            continue
        if inside0:
            p1 = _intersection(p0, p1, a, b)
        elif inside1:
            p0 = _intersection(p0, p1, a, b)
        else:
            return None
    return p0, p1