import math

import numpy as np
import pytest

from physecs.bounds import Bounds
from physecs.bounds_util import (
    Geometry,
    GeometryType,
    bounds_box,
    bounds_capsule,
    bounds_convex_mesh,
    bounds_sphere,
    bounds_triangle,
    bounds_triangle_mesh,
    geometry_bounds,
    get_union,
    intersects,
)

IDENTITY = [1.0, 0.0, 0.0, 0.0]
Z90 = [math.sqrt(0.5), 0.0, 0.0, math.sqrt(0.5)]


def test_sphere_bounds():
    b = bounds_sphere([1.0, 2.0, 3.0], 0.5)
    assert np.allclose(b.center(), [1.0, 2.0, 3.0])
    assert np.allclose(b.half_extents(), [0.5, 0.5, 0.5])


def test_box_bounds_identity():
    b = bounds_box([1.0, 0.0, -1.0], IDENTITY, [2.0, 3.0, 4.0])
    assert np.allclose(b.center(), [1.0, 0.0, -1.0])
    assert np.allclose(b.half_extents(), [2.0, 3.0, 4.0])


def test_box_bounds_quarter_turn_swaps_x_and_y():
    b = bounds_box([0.0, 0.0, 0.0], Z90, [2.0, 3.0, 4.0])
    assert np.allclose(b.half_extents(), [3.0, 2.0, 4.0])


def test_capsule_bounds_along_y():
    b = bounds_capsule([0.0, 0.0, 0.0], IDENTITY, 1.0, 0.5)
    assert np.allclose(b.half_extents(), [0.5, 1.5, 0.5])


def test_capsule_bounds_rotated_along_x():
    b = bounds_capsule([0.0, 0.0, 0.0], Z90, 1.0, 0.5)
    assert np.allclose(b.half_extents(), [1.5, 0.5, 0.5])


def test_convex_mesh_bounds_scaled_and_translated():
    vertices = [[-1.0, -1.0, -1.0], [1.0, 1.0, 1.0]]
    b = bounds_convex_mesh([5.0, 0.0, 0.0], IDENTITY, vertices, [2.0, 1.0, 3.0])
    assert np.allclose(b.center(), [5.0, 0.0, 0.0])
    assert np.allclose(b.half_extents(), [2.0, 1.0, 3.0])


def test_convex_mesh_matches_box_of_its_corners():
    corners = [[x, y, z] for x in (-1, 1) for y in (-2, 2) for z in (-3, 3)]
    mesh = bounds_convex_mesh([0.0, 1.0, 0.0], Z90, corners, [1.0, 1.0, 1.0])
    box = bounds_box([0.0, 1.0, 0.0], Z90, [1.0, 2.0, 3.0])
    assert np.allclose(mesh.min, box.min)
    assert np.allclose(mesh.max, box.max)


def test_triangle_bounds_contains_vertices():
    a, b, c = [0.0, 1.0, 2.0], [-1.0, 3.0, 0.0], [2.0, -1.0, 1.0]
    bounds = bounds_triangle(a, b, c)
    for v in (a, b, c):
        assert np.all(bounds.min <= v) and np.all(v <= bounds.max)
    assert np.array_equal(bounds.min, np.minimum(np.minimum(a, b), c))


def test_triangle_mesh_bounds_translation():
    vertices = [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]
    b = bounds_triangle_mesh([1.0, 1.0, 1.0], IDENTITY, vertices)
    assert np.allclose(b.min, [1.0, 1.0, 1.0])
    assert np.allclose(b.max, [2.0, 2.0, 1.0])


def test_intersects():
    a = Bounds([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])
    assert intersects(a, Bounds([1.0, 0.5, 0.5], [2.0, 2.0, 2.0]))
    assert not intersects(a, Bounds([1.5, 0.0, 0.0], [2.0, 1.0, 1.0]))
    assert not intersects(a, Bounds([0.0, 0.0, -3.0], [1.0, 1.0, -2.0]))


def test_union_contains_both():
    a = Bounds([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])
    b = Bounds([-1.0, 0.5, 2.0], [0.5, 3.0, 4.0])
    u = get_union(a, b)
    for box in (a, b):
        assert np.all(u.min <= box.min) and np.all(box.max <= u.max)
    assert np.array_equal(u.min, np.minimum(a.min, b.min))


@pytest.mark.parametrize(
    "geometry, direct",
    [
        (Geometry(GeometryType.SPHERE, radius=2.0), lambda p, q: bounds_sphere(p, 2.0)),
        (
            Geometry(GeometryType.CAPSULE, radius=0.5, half_height=1.0),
            lambda p, q: bounds_capsule(p, q, 1.0, 0.5),
        ),
        (
            Geometry(GeometryType.BOX, half_extents=[1.0, 2.0, 3.0]),
            lambda p, q: bounds_box(p, q, [1.0, 2.0, 3.0]),
        ),
        (
            Geometry(GeometryType.CONVEX_MESH, vertices=[[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]], scale=[2.0, 2.0, 2.0]),
            lambda p, q: bounds_convex_mesh(p, q, [[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]], [2.0, 2.0, 2.0]),
        ),
        (
            Geometry(GeometryType.TRIANGLE_MESH, vertices=[[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]]),
            lambda p, q: bounds_triangle_mesh(p, q, [[1.0, 0.0, 0.0], [0.0, 2.0, 0.0]]),
        ),
    ],
)
def test_geometry_bounds_dispatch(geometry, direct):
    pos = [1.0, -2.0, 0.5]
    got = geometry_bounds(pos, Z90, geometry)
    expected = direct(pos, Z90)
    assert np.allclose(got.min, expected.min)
    assert np.allclose(got.max, expected.max)