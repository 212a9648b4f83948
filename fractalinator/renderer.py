"""Rendering primitives for escape-time fractal frames."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .coordinates import effective_zoom, pixel_grid, pixel_to_point
from .errors import EmptyColorTableError, ValidationError
from .escape import BOUNDED_COUNT, DEFAULT_LIMIT, Escaped, IterationResult, escape_counts, iterate
from .gradient import RGB, GradientTable, check_color

SMOOTHING_BIAS = math.log(math.log(2.0)) / math.log(2.0)
INDEX_SCALE = 256
BACKGROUND_INDEX = -1


@dataclass(frozen=True)
class RenderConfig:
    """Parameters that describe a single fractal render."""

    width: int
    height: int
    center: complex = 0j
    zoom: int = 1
    limit: int = DEFAULT_LIMIT
    julia: Optional[complex] = None
    background: Optional[RGB] = None

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def effective_zoom(self) -> int:
        return effective_zoom(self.zoom)

    def validate(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValidationError(f"image dimensions must not be negative, got {self.width}x{self.height}")
        if self.zoom < 0:
            raise ValidationError(f"zoom must not be negative, got {self.zoom}")
        if self.limit < 0:
            raise ValidationError(f"iteration limit must not be negative, got {self.limit}")
        if self.background is not None:
            check_color(self.background)


@dataclass(frozen=True)
class RenderResult:
    """Per-pixel results of a render, all shaped ``(height, width)`` first."""

    iterations: np.ndarray
    indices: np.ndarray
    pixels: np.ndarray


def smooth_index(count: int, table_size: int) -> int:
    """Map an escape step to a gradient table index."""

    return int(math.floor(math.sqrt(count + 1 - SMOOTHING_BIAS) * INDEX_SCALE)) % table_size


def color_index(result: IterationResult, table_size: int) -> Optional[int]:
    """Gradient index for ``result``, or ``None`` when the background applies."""

    if isinstance(result, Escaped):
        return smooth_index(result.count, table_size)
    return None


def background_color(config: RenderConfig, table: GradientTable) -> RGB:
    if config.background is not None:
        return check_color(config.background)
    return table[0]


def check_table(table: GradientTable) -> None:
    if len(table) <= 0:
        raise EmptyColorTableError("cannot render with an empty gradient table")


def escape_result(config: RenderConfig, point: complex) -> IterationResult:
    if config.julia is None:
        return iterate(0j, point, config.limit)
    return iterate(point, config.julia, config.limit)


def pixel_color(config: RenderConfig, table: GradientTable, pixel: tuple[int, int]) -> RGB:
    """Color of a single pixel of the frame described by ``config``."""

    config.validate()
    check_table(table)
    point = pixel_to_point(config.dimensions, pixel, config.zoom, config.center)
    index = color_index(escape_result(config, point), len(table))
    if index is None:
        return background_color(config, table)
    return table[index]


def render_frame(config: RenderConfig, table: GradientTable) -> RenderResult:
    """Render every pixel of the frame described by ``config``."""

    config.validate()
    check_table(table)
    table_size = len(table)

    points = pixel_grid(config.dimensions, config.zoom, config.center)
    if config.julia is None:
        iterations = escape_counts(np.zeros_like(points), points, config.limit)
    else:
        iterations = escape_counts(points, np.complex128(config.julia), config.limit)

    escaped = iterations != BOUNDED_COUNT
    smooth = np.floor(np.sqrt(iterations.astype(np.float64) + 1.0 - SMOOTHING_BIAS) * INDEX_SCALE)
    indices = np.where(escaped, smooth.astype(np.int64) % table_size, BACKGROUND_INDEX)

    pixels = table.colors[np.where(escaped, indices, 0)]
    pixels[~escaped] = background_color(config, table)

    return RenderResult(
        iterations=iterations,
        indices=indices,
        pixels=pixels,
    )
