from typing import Literal

from .._spline_method import SplineMethod

Caching = Literal["eager", "lazy", "manual"]

_CACHING = ("eager", "lazy", "manual")


def check_caching(method: SplineMethod, caching: str) -> None:
    """
    Validate a caching policy against a spline method.

    Parameters
    ----------
    method : SplineMethod
        Spline method.
    caching : str
        One of:

        - ``"eager"``: Coefficients are derived on every knot value change.
        - ``"lazy"``: Coefficients are invalidated per index and derived
          on evaluation, only where needed. Local methods only.
        - ``"manual"``: Coefficients are derived by calling ``solve()``;
          evaluating stale coefficients raises StaleCacheError.

    Raises
    ------
    ValueError
        If the policy is unknown, or if lazy caching is requested for a
        method whose coefficients require a global solve.
    """
    if caching not in _CACHING:
        raise ValueError(
            f"Unknown caching policy: {caching!r}, expected one of {_CACHING}"
        )
    if caching == "lazy" and not method.is_local:
        raise ValueError(
            f"Method '{method.name}' requires a global solve and cannot be "
            "cached lazily; use caching='eager' or caching='manual'"
        )
