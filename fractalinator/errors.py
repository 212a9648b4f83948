"""Exception types raised by the fractal rendering core and its command line."""


class FractalError(Exception):
    """Base class for every error reported by fractalinator."""


class GradientError(FractalError, ValueError):
    """A gradient cannot be built from the supplied control points."""


class DegenerateGradientError(GradientError):
    """Too few control points, or two control points share a position."""


class UnsortedControlPointsError(GradientError):
    """Control point positions are not in ascending order."""


class EmptyColorTableError(GradientError):
    """A gradient table with no entries was requested or supplied."""


class ValidationError(FractalError, ValueError):
    """A well-typed value is outside the range the renderer accepts."""


class ParseError(FractalError, ValueError):
    """A command-line string could not be converted to the expected type."""
