class SplineError(Exception):
    """Base exception for spline operations."""

    pass
