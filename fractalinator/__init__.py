"""Public API for escape-time fractal rendering."""

from .coordinates import pixel_grid, pixel_to_point
from .errors import (
    DegenerateGradientError,
    EmptyColorTableError,
    FractalError,
    GradientError,
    ParseError,
    UnsortedControlPointsError,
    ValidationError,
)
from .escape import (
    BOUNDED,
    DEFAULT_LIMIT,
    Bounded,
    Escaped,
    IterationResult,
    escape_counts,
    iterate,
    julia,
    mandelbrot,
)
from .gradient import DEFAULT_TABLE_SIZE, WHITE, GradientTable, MonotoneCubic, build_gradient
from .renderer import (
    SMOOTHING_BIAS,
    RenderConfig,
    RenderResult,
    color_index,
    pixel_color,
    render_frame,
    smooth_index,
)
from .swatch import swatch_pixels

__all__ = [
    "BOUNDED",
    "DEFAULT_LIMIT",
    "DEFAULT_TABLE_SIZE",
    "SMOOTHING_BIAS",
    "WHITE",
    "Bounded",
    "DegenerateGradientError",
    "EmptyColorTableError",
    "Escaped",
    "FractalError",
    "GradientError",
    "GradientTable",
    "IterationResult",
    "MonotoneCubic",
    "ParseError",
    "RenderConfig",
    "RenderResult",
    "UnsortedControlPointsError",
    "ValidationError",
    "build_gradient",
    "color_index",
    "escape_counts",
    "iterate",
    "julia",
    "mandelbrot",
    "pixel_color",
    "pixel_grid",
    "pixel_to_point",
    "render_frame",
    "smooth_index",
    "swatch_pixels",
]
