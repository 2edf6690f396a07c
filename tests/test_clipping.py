import pytest

from physecs.clipping import clip_line, suth_hodg_clip

SQUARE = [(1.0, 1.0), (1.0, -1.0), (-1.0, -1.0), (-1.0, 1.0)]


def test_polygon_inside_is_unchanged():
    inner = [(0.5, 0.5), (0.5, -0.5), (-0.5, -0.5), (-0.5, 0.5)]
    assert sorted(suth_hodg_clip(inner, SQUARE)) == sorted(inner)


def test_polygon_outside_is_removed():
    outer = [(3.0, 3.0), (3.0, 2.0), (2.0, 2.0), (2.0, 3.0)]
    assert suth_hodg_clip(outer, SQUARE) == []


def test_clipped_polygon_lies_within_clip():
    big = [(2.0, 0.0), (0.0, -2.0), (-2.0, 0.0), (0.0, 2.0)]
    result = suth_hodg_clip(big, SQUARE)
    assert len(result) >= 4
    for x, y in result:
        assert -1.0 - 1e-9 <= x <= 1.0 + 1e-9
        assert -1.0 - 1e-9 <= y <= 1.0 + 1e-9


def test_clipping_is_idempotent():
    big = [(2.0, 0.5), (0.5, -2.0), (-2.0, 0.0), (0.0, 2.0)]
    once = suth_hodg_clip(big, SQUARE)
    twice = suth_hodg_clip(once, SQUARE)
    assert sorted(twice) == pytest.approx(sorted(once))


def test_line_inside_is_unchanged():
    assert clip_line((-0.5, 0.2), (0.5, 0.3), SQUARE) == ((-0.5, 0.2), (0.5, 0.3))


def test_line_outside_is_rejected():
    assert clip_line((2.0, 2.0), (3.0, 2.5), SQUARE) is None


def test_line_crossing_one_edge_is_cut_on_that_edge():
    p0, p1 = clip_line((-2.0, 0.0), (0.5, 0.0), SQUARE)
    assert p0 == pytest.approx((-1.0, 0.0))
    assert p1 == (0.5, 0.0)


def test_line_crossing_both_edges():
    p0, p1 = clip_line((-3.0, 0.0), (3.0, 0.0), SQUARE)
    assert sorted([p0[0], p1[0]]) == pytest.approx([-1.0, 1.0])
    assert p0[1] == pytest.approx(0.0) and p1[1] == pytest.approx(0.0)