import numpy as np

from physecs.bounds import Bounds


def test_center_and_half_extents_reconstruct_corners():
    b = Bounds([-1.0, 2.0, 0.5], [3.0, 4.0, 2.5])
    assert np.allclose(b.center() + b.half_extents(), b.max)
    assert np.allclose(b.center() - b.half_extents(), b.min)


def test_area_of_box():
    assert Bounds([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]).area() == 22.0


def test_area_of_flat_box_is_zero():
    assert Bounds([0.0, 0.0, 0.0], [0.0, 5.0, 5.0]).area() == 0.0


def test_expand_negative_moves_min_positive_moves_max():
    b = Bounds([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])
    b.expand([-2.0, 3.0, 0.0])
    assert np.array_equal(b.min, [-2.0, 0.0, 0.0])
    assert np.array_equal(b.max, [1.0, 4.0, 1.0])


def test_add_margin_grows_both_sides():
    b = Bounds([0.0, 0.0, 0.0], [1.0, 1.0, 1.0])
    center = b.center()
    b.add_margin([0.5, 0.5, 0.5])
    assert np.array_equal(b.min, [-0.5, -0.5, -0.5])
    assert np.array_equal(b.max, [1.5, 1.5, 1.5])
    assert np.allclose(b.center(), center)


def test_constructor_copies_input():
    corner = np.array([1.0, 1.0, 1.0])
    b = Bounds(np.zeros(3), corner)
    corner[0] = 9.0
    assert b.max[0] == 1.0