from ._spline_error import SplineError


class StaleCacheError(SplineError):
    """Raised when a manually cached spline is evaluated before ``solve()``."""

    pass
