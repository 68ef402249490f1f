import pytest

from nesed.utils import Point, circles_collide, line, round_half_away


@pytest.mark.parametrize("value", [0.5, 1.5, 2.5, 3.49, 7.51, 100.0])
def test_round_is_symmetric(value):
    assert round_half_away(-value) == -round_half_away(value)


def test_round_halves_go_away_from_zero():
    assert round_half_away(2.5) == 3
    assert round_half_away(-2.5) == -3


@pytest.mark.parametrize("value", [4.0, -4.0, 0.0, 12.0])
def test_round_keeps_integers(value):
    assert round_half_away(value) == int(value)


def test_circles_overlapping():
    assert circles_collide(0, 0, 2, 1, 1, 2) is True


def test_circles_touching_do_not_collide():
    assert circles_collide(0, 0, 1, 2, 0, 1) is False


def test_circles_apart():
    assert circles_collide(0, 0, 1, 10, 10, 1) is False


def test_circles_symmetric():
    assert circles_collide(3, 4, 1, 0, 0, 5) == circles_collide(0, 0, 5, 3, 4, 1)


def test_horizontal_line_excludes_end():
    points = line(0, 0, 5, 0, 1)
    assert [p.x for p in points] == list(range(0, 5))
    assert all(p.y == 0 for p in points)


def test_diagonal_line():
    points = line(0, 0, 4, 4, 1)
    assert len(points) == 4
    assert all(p.x == p.y for p in points)


def test_reversed_endpoints_give_same_points():
    assert line(4, 4, 0, 0, 1) == line(0, 0, 4, 4, 1)


def test_steep_line_swaps_axes():
    points = line(0, 0, 1, 5, 1)
    assert [p.y for p in points] == list(range(0, 5))
    xs = [p.x for p in points]
    assert xs == sorted(xs)
    assert set(xs) <= {0, 1}


def test_line_in_grid_units():
    points = line(0, 0, 64, 0, 32)
    assert points == [Point(0, 0), Point(1, 0)]


def test_degenerate_line_is_empty():
    assert line(3, 3, 3, 3, 1) == []


def test_descending_line_steps_down():
    points = line(0, 6, 6, 0, 1)
    ys = [p.y for p in points]
    assert ys == sorted(ys, reverse=True)
    assert ys[0] == 6


@pytest.mark.parametrize("grid", [0, -1])
def test_grid_width_must_be_positive(grid):
    with pytest.raises(ValueError):
        line(0, 0, 10, 0, grid)