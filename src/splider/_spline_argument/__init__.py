from ._spline_argument import SplineArgument, spline_argument

__all__ = [
    "SplineArgument",
    "spline_argument",
]
