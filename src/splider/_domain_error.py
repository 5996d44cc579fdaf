from ._spline_error import SplineError


class DomainError(SplineError):
    """Raised for invalid knot domains (non-increasing, insufficient knots)."""

    pass
