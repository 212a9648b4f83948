import math

import numpy as np
import pytest

from fractalinator.errors import (
    DegenerateGradientError,
    EmptyColorTableError,
    GradientError,
    UnsortedControlPointsError,
    ValidationError,
)
from fractalinator.gradient import DEFAULT_TABLE_SIZE, GradientTable, MonotoneCubic, build_gradient

RED = (255, 0, 0)
BLUE = (0, 0, 255)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


def test_black_to_white_ramp_is_non_decreasing():
    table = build_gradient([0.0, 1.0], [BLACK, WHITE])
    assert len(table) == DEFAULT_TABLE_SIZE
    diffs = np.diff(table.colors.astype(np.int64), axis=0)
    assert np.all(diffs >= 0)
    assert table[0] == BLACK
    assert table[len(table) - 1] == (254, 254, 254)


def test_two_points_interpolate_linearly():
    curve = MonotoneCubic.fit([0.0, 1.0], [0.0, 255.0])
    assert curve.c1 == (255.0, 255.0)
    assert curve.c2 == (0.0,)
    assert curve.c3 == (0.0,)
    assert curve.evaluate(0.5) == pytest.approx(127.5)


@pytest.mark.parametrize(
    "xs, ys",
    [
        ([0.0, 0.3, 1.7], [12.0, 200.0, 31.0]),
        ([0.0, 0.1, 0.25, 3.0], [0.0, 7.0, 250.0, 99.0]),
        ([-1.0, 0.7, 2.9, 3.1, 8.0], [255.0, 0.0, 17.0, 17.0, 128.0]),
        ([0.0, 1.0 / 3.0, 2.0 / 3.0, 1.0, 4.0 / 3.0, 5.0 / 3.0], [1.0, 2.0, 3.0, 5.0, 8.0, 13.0]),
    ],
)
def test_control_positions_return_stored_values(xs, ys):
    curve = MonotoneCubic.fit(xs, ys)
    for x, y in zip(xs, ys):
        assert curve.evaluate(x) == y


def test_interior_tangent_is_zero_at_local_extremum():
    curve = MonotoneCubic.fit([0.0, 1.0, 2.0], [0.0, 100.0, 0.0])
    assert curve.c1[1] == 0.0
    samples = [curve.evaluate(x) for x in np.linspace(0.0, 2.0, 101)]
    assert max(samples) == pytest.approx(100.0)


def test_interior_tangent_blends_neighbouring_slopes():
    curve = MonotoneCubic.fit([0.0, 1.0, 3.0], [0.0, 2.0, 4.0])
    # m = [2, 1], dx = [1, 2]
    expected = 3.0 * 3.0 / ((2.0 * 2.0 + 1.0) / 2.0 + (2.0 + 2.0 * 1.0) / 1.0)
    assert curve.c1[1] == pytest.approx(expected)


def test_sharp_jump_does_not_overshoot():
    positions = [0.0, 10.0, 11.0, 50.0]
    colors = [(0, 255, 10), (5, 250, 12), (250, 5, 240), (255, 0, 250)]
    table = build_gradient(positions, colors)
    values = table.colors.astype(np.int64)

    red, green, blue = values[:, 0], values[:, 1], values[:, 2]
    assert np.all(np.diff(red) >= 0)
    assert np.all(np.diff(green) <= 0)
    assert np.all(np.diff(blue) >= 0)
    assert red.min() >= 0 and red.max() <= 255
    assert green.min() >= 0 and green.max() <= 255
    assert blue.min() >= 10 and blue.max() <= 250


def test_non_decreasing_channels_stay_non_decreasing():
    rng = np.random.default_rng(7)
    for _ in range(20):
        count = int(rng.integers(2, 9))
        positions = np.cumsum(np.concatenate(([0.0], rng.uniform(0.05, 20.0, size=count - 1))))
        channel = np.sort(rng.integers(0, 256, size=count))
        colors = [(int(v), int(v), int(v)) for v in channel]

        table = build_gradient(list(positions), colors, table_size=512)
        values = table.colors[:, 0].astype(np.int64)
        assert np.all(np.diff(values) >= 0)
        assert values.min() >= channel.min()
        assert values.max() <= channel.max()


def test_negative_undershoot_is_clamped():
    curve = MonotoneCubic.fit([0.0, 1.0], [10.0, 0.0])
    assert curve.evaluate(2.0) == 0.0


def test_queries_outside_range_extend_end_segments():
    curve = MonotoneCubic.fit([1.0, 2.0, 3.0], [10.0, 20.0, 30.0])
    assert curve.evaluate(0.5) == pytest.approx(5.0)
    assert curve.evaluate(3.5) == pytest.approx(35.0)


def test_table_samples_from_zero_to_last_position():
    table = build_gradient([0.0, 2048.0], [BLACK, WHITE], table_size=2048)
    # position i maps to 255 * i / 2048
    assert table[1024] == (127, 127, 127)
    assert table[2047] == (254, 254, 254)


def test_equal_positions_raise_degenerate():
    with pytest.raises(DegenerateGradientError):
        build_gradient([0.0, 0.0], [RED, BLUE])


def test_equal_interior_positions_raise_degenerate():
    with pytest.raises(DegenerateGradientError, match="share position"):
        build_gradient([0.0, 1.0, 1.0, 2.0], [RED, BLUE, RED, BLUE])


def test_single_point_raises_degenerate():
    with pytest.raises(DegenerateGradientError, match="at least 2"):
        build_gradient([0.0], [RED])


def test_mismatched_lengths_raise_degenerate():
    with pytest.raises(DegenerateGradientError):
        build_gradient([0.0, 1.0, 2.0], [RED, BLUE])


def test_non_finite_position_raises_degenerate():
    with pytest.raises(DegenerateGradientError):
        build_gradient([0.0, math.inf], [RED, BLUE])
    with pytest.raises(DegenerateGradientError):
        MonotoneCubic.fit([0.0, math.nan], [1.0, 2.0])


def test_descending_positions_raise_unsorted():
    with pytest.raises(UnsortedControlPointsError):
        build_gradient([0.0, 2.0, 1.0], [RED, BLUE, RED])


def test_zero_table_size_raises_empty():
    with pytest.raises(EmptyColorTableError):
        build_gradient([0.0, 1.0], [RED, BLUE], table_size=0)


def test_gradient_errors_are_value_errors():
    assert issubclass(DegenerateGradientError, GradientError)
    assert issubclass(UnsortedControlPointsError, ValueError)


def test_channel_out_of_range_is_rejected():
    with pytest.raises(ValidationError):
        build_gradient([0.0, 1.0], [(0, 0, 256), BLUE])


@pytest.mark.parametrize("color", [(0.9, 0, 0), (0, 254.5, 0), (0, 0, True)])
def test_non_integer_channel_is_rejected(color):
    with pytest.raises(ValidationError, match="not an integer"):
        build_gradient([0.0, 1.0], [color, WHITE])
    with pytest.raises(ValidationError):
        GradientTable.single(color)


def test_numpy_integer_channels_are_accepted():
    table = build_gradient([0.0, 1.0], [tuple(np.array([0, 0, 0])), WHITE], table_size=4)
    assert table[0] == BLACK


def test_huge_positions_raise_degenerate():
    with pytest.raises(DegenerateGradientError, match="too far apart"):
        build_gradient([0.0, 1e308, 1.7e308], [BLACK, WHITE, BLACK])
    with pytest.raises(DegenerateGradientError):
        MonotoneCubic.fit([0.0, 1e308, 1.7e308], [0.0, 255.0, 0.0])


def test_single_entry_table_defaults_to_white():
    table = GradientTable.single()
    assert len(table) == 1
    assert list(table) == [WHITE]
    assert table.lookup(12345) == WHITE


def test_table_is_read_only():
    table = build_gradient([0.0, 1.0], [BLACK, WHITE], table_size=8)
    with pytest.raises(ValueError):
        table.colors[0] = (1, 2, 3)


def test_empty_table_is_rejected():
    with pytest.raises(EmptyColorTableError):
        GradientTable(np.zeros((0, 3), dtype=np.uint8))


def test_lookup_wraps_index():
    table = build_gradient([0.0, 4.0], [BLACK, WHITE], table_size=4)
    assert table.lookup(5) == table[1]
    assert table.lookup(-1) == table[3]
