from ._caching import Caching, check_caching
from ._spline import Spline, as_knot_values, spline

__all__ = [
    "Caching",
    "Spline",
    "as_knot_values",
    "check_caching",
    "spline",
]
