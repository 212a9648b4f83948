"""Preview bitmaps for gradient tables."""

from __future__ import annotations

import numpy as np

from .errors import ValidationError
from .gradient import GradientTable

SWATCH_HEIGHT = 100


def swatch_pixels(table: GradientTable, height: int = SWATCH_HEIGHT) -> np.ndarray:
    """One column per table entry, ``height`` rows tall."""

    if height <= 0:
        raise ValidationError(f"swatch height must be positive, got {height}")
    return np.repeat(table.colors[np.newaxis, :, :], height, axis=0)
