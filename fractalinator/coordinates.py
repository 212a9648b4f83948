"""Mapping between pixel positions and points of the complex plane."""

from __future__ import annotations

import numpy as np


def effective_zoom(zoom: int) -> int:
    return 1 if zoom == 0 else zoom


def pixel_to_point(
    dimensions: tuple[int, int],
    pixel: tuple[int, int],
    zoom: int,
    center: complex,
) -> complex:
    """Return the complex coordinate under ``pixel``.

    The image is centred on ``center`` and one plane unit spans ``zoom``
    pixels. Columns map to the real axis, rows to the imaginary axis.
    """

    zoom = effective_zoom(zoom)
    half_width = (dimensions[0] / zoom) / 2.0
    half_height = (dimensions[1] / zoom) / 2.0
    return complex(
        center.real - half_width + (pixel[0] / zoom),
        center.imag - half_height + (pixel[1] / zoom),
    )


def pixel_grid(dimensions: tuple[int, int], zoom: int, center: complex) -> np.ndarray:
    """Complex coordinates of every pixel, shaped ``(height, width)``."""

    width, height = dimensions
    zoom = effective_zoom(zoom)
    half_width = (width / zoom) / 2.0
    half_height = (height / zoom) / 2.0

    cols = np.arange(width, dtype=np.float64)
    rows = np.arange(height, dtype=np.float64)
    re = center.real - half_width + (cols / zoom)
    im = center.imag - half_height + (rows / zoom)
    RE, IM = np.meshgrid(re, im)

    grid = np.empty((height, width), dtype=np.complex128)
    grid.real = RE
    grid.imag = IM
    return grid
