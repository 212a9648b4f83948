"""Escape-time iteration of the quadratic map ``z -> z**2 + c``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

DEFAULT_LIMIT = 255
ESCAPE_RADIUS_SQ = 4.0
BOUNDED_COUNT = -1


@dataclass(frozen=True)
class Escaped:
    """The orbit left the escape radius at 0-indexed step ``count``."""

    count: int


@dataclass(frozen=True)
class Bounded:
    """The orbit stayed inside the escape radius for every step."""


BOUNDED = Bounded()

IterationResult = Union[Escaped, Bounded]


def iterate(z0: complex, c: complex, limit: int = DEFAULT_LIMIT) -> IterationResult:
    """Iterate ``z <- z*z + c`` from ``z0`` for at most ``limit`` steps.

    The escape test ``|z|**2 > 4`` runs after every update. Orbits that turn
    into NaN never pass the test, so they are reported as ``BOUNDED``.
    """

    zr, zi = float(z0.real), float(z0.imag)
    cr, ci = float(c.real), float(c.imag)
    for i in range(limit):
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
        if zr * zr + zi * zi > ESCAPE_RADIUS_SQ:
            return Escaped(i)
    return BOUNDED


def mandelbrot(c: complex, limit: int = DEFAULT_LIMIT) -> IterationResult:
    return iterate(0j, c, limit)


def julia(z: complex, c: complex, limit: int = DEFAULT_LIMIT) -> IterationResult:
    return iterate(z, c, limit)


def escape_counts(z0: np.ndarray, c: np.ndarray, limit: int = DEFAULT_LIMIT) -> np.ndarray:
    """Vectorized ``iterate`` over broadcastable complex arrays.

    Returns the escape step for every point, or ``BOUNDED_COUNT`` for points
    that never escaped. Only points that are still active get updated, so the
    result matches ``iterate`` point by point.
    """

    z0 = np.asarray(z0, dtype=np.complex128)
    c = np.asarray(c, dtype=np.complex128)
    shape = np.broadcast_shapes(z0.shape, c.shape)

    zr = np.array(np.broadcast_to(z0.real, shape), dtype=np.float64)
    zi = np.array(np.broadcast_to(z0.imag, shape), dtype=np.float64)
    cr = np.broadcast_to(c.real, shape)
    ci = np.broadcast_to(c.imag, shape)

    counts = np.full(shape, BOUNDED_COUNT, dtype=np.int64)
    active = np.ones(shape, dtype=bool)

    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(limit):
            if not active.any():
                break
            zr_new = zr * zr - zi * zi + cr
            zi_new = 2.0 * zr * zi + ci
            zr = np.where(active, zr_new, zr)
            zi = np.where(active, zi_new, zi)
            escaped = np.logical_and(active, zr * zr + zi * zi > ESCAPE_RADIUS_SQ)
            counts[escaped] = i
            active = np.logical_and(active, np.logical_not(escaped))

    return counts
