"""Monotone cubic color gradients sampled into lookup tables."""

from __future__ import annotations

import math
import numbers
from bisect import bisect_left
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .errors import DegenerateGradientError, EmptyColorTableError, UnsortedControlPointsError, ValidationError

DEFAULT_TABLE_SIZE = 2048
WHITE = (255, 255, 255)

RGB = tuple[int, int, int]


def check_positions(positions: Sequence[float]) -> None:
    """Reject control point positions that would break interpolation."""

    if len(positions) < 2:
        raise DegenerateGradientError(
            f"a gradient needs at least 2 control points, got {len(positions)}"
        )
    for i, position in enumerate(positions):
        if not math.isfinite(position):
            raise DegenerateGradientError(f"control point {i} has non-finite position {position!r}")
    for i in range(len(positions) - 1):
        if positions[i + 1] == positions[i]:
            raise DegenerateGradientError(
                f"control points {i} and {i + 1} share position {positions[i]!r}"
            )
        if positions[i + 1] < positions[i]:
            raise UnsortedControlPointsError(
                f"control point positions must ascend: {positions[i]!r} is followed by {positions[i + 1]!r}"
            )


def check_color(color: Sequence[int]) -> RGB:
    if len(color) != 3:
        raise ValidationError(f"expected an R,G,B triple, got {tuple(color)!r}")
    for channel in color:
        if isinstance(channel, bool) or not isinstance(channel, numbers.Integral):
            raise ValidationError(f"color channel {channel!r} is not an integer")
        if not 0 <= channel <= 255:
            raise ValidationError(f"color channel {channel!r} is outside 0..255")
    return (int(color[0]), int(color[1]), int(color[2]))


@dataclass(frozen=True)
class MonotoneCubic:
    """Piecewise cubic interpolant that preserves the monotonicity of its data.

    Segment ``i`` evaluates ``y[i] + c1[i]*t + c2[i]*t**2 + c3[i]*t**3`` with
    ``t = x - x[i]``. Tangents follow the Fritsch-Carlson scheme, so the curve
    never overshoots between control points.
    """

    x: tuple[float, ...]
    y: tuple[float, ...]
    c1: tuple[float, ...]
    c2: tuple[float, ...]
    c3: tuple[float, ...]

    @classmethod
    def fit(cls, xs: Sequence[float], ys: Sequence[float]) -> "MonotoneCubic":
        if len(xs) != len(ys):
            raise DegenerateGradientError(
                f"got {len(xs)} positions but {len(ys)} values"
            )
        check_positions(xs)
        xs = [float(x) for x in xs]
        ys = [float(y) for y in ys]

        dxs = [xs[i + 1] - xs[i] for i in range(len(xs) - 1)]
        ms = [(ys[i + 1] - ys[i]) / dxs[i] for i in range(len(dxs))]

        c1s = [ms[0]]
        for i in range(len(dxs) - 1):
            m, m_next = ms[i], ms[i + 1]
            if m * m_next <= 0.0:
                c1s.append(0.0)
            else:
                dx, dx_next = dxs[i], dxs[i + 1]
                common = dx + dx_next
                c1s.append(3.0 * common / ((common + dx_next) / m + (common + dx) / m_next))
        c1s.append(ms[-1])

        c2s = []
        c3s = []
        for i in range(len(c1s) - 1):
            c1 = c1s[i]
            m = ms[i]
            inv_dx = 1.0 / dxs[i]
            common = c1 + c1s[i + 1] - m - m
            c2s.append((m - c1 - common) * inv_dx)
            c3s.append(common * inv_dx * inv_dx)

        span = xs[-1] - xs[0]
        if not math.isfinite(span * span * span) or not all(math.isfinite(c) for c in (*ms, *c1s, *c2s, *c3s)):
            raise DegenerateGradientError(
                f"control points {xs!r} are too far apart to interpolate in double precision"
            )

        return cls(x=tuple(xs), y=tuple(ys), c1=tuple(c1s), c2=tuple(c2s), c3=tuple(c3s))

    def evaluate(self, x: float) -> float:
        """Value of the curve at ``x``, never below 0.

        Control positions return their stored value exactly. Queries outside
        the control range extend the first or last segment.
        """

        i = bisect_left(self.x, x)
        if i < len(self.x) and self.x[i] == x:
            return self.y[i]

        i = min(max(i - 1, 0), len(self.c3) - 1)
        diff = x - self.x[i]
        diff_sq = diff * diff
        value = self.y[i] + self.c1[i] * diff + self.c2[i] * diff_sq + self.c3[i] * diff * diff_sq
        return max(value, 0.0)

    def __call__(self, x: float) -> float:
        return self.evaluate(x)


@dataclass(frozen=True, eq=False)
class GradientTable:
    """Immutable dense lookup table of RGB entries."""

    colors: np.ndarray

    def __post_init__(self) -> None:
        colors = np.array(self.colors, dtype=np.uint8)
        if colors.size == 0:
            raise EmptyColorTableError("gradient table has no entries")
        if colors.ndim != 2 or colors.shape[1] != 3:
            raise ValidationError(f"gradient table must have shape (size, 3), got {colors.shape}")
        colors.setflags(write=False)
        object.__setattr__(self, "colors", colors)

    @classmethod
    def single(cls, color: Sequence[int] = WHITE) -> "GradientTable":
        return cls(np.array([check_color(color)], dtype=np.uint8))

    def __len__(self) -> int:
        return int(self.colors.shape[0])

    def __getitem__(self, index: int) -> RGB:
        r, g, b = self.colors[index]
        return (int(r), int(g), int(b))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def lookup(self, index: int) -> RGB:
        """Return the entry at ``index`` wrapped into the table."""

        return self[index % len(self)]


def sample_positions(max_position: float, table_size: int) -> list[float]:
    step = max_position / table_size
    return [i * step for i in range(table_size)]


def build_gradient(
    positions: Sequence[float],
    colors: Sequence[Sequence[int]],
    table_size: int = DEFAULT_TABLE_SIZE,
) -> GradientTable:
    """Build a ``table_size`` entry gradient from ``(position, color)`` control points.

    Each channel gets its own ``MonotoneCubic`` which is sampled at evenly
    spaced positions from 0 up to (excluding) the last control position.
    """

    if table_size <= 0:
        raise EmptyColorTableError(f"gradient table size must be positive, got {table_size}")
    if len(positions) != len(colors):
        raise DegenerateGradientError(
            f"got {len(positions)} positions but {len(colors)} colors"
        )
    check_positions(positions)
    rgb = [check_color(color) for color in colors]

    curves = [MonotoneCubic.fit(positions, [color[channel] for color in rgb]) for channel in range(3)]

    samples = sample_positions(float(positions[-1]), table_size)
    values = np.array([[curve.evaluate(v) for curve in curves] for v in samples], dtype=np.float64)
    if not np.all(np.isfinite(values)):
        raise DegenerateGradientError("gradient evaluates to non-finite channel values")
    table = np.clip(np.floor(values), 0, 255).astype(np.uint8)
    return GradientTable(table)
