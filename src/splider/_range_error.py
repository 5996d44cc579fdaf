from ._spline_error import SplineError


class RangeError(SplineError):
    """Raised when a query abscissa is outside the knot domain."""

    pass
