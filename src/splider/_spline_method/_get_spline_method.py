from typing import Literal, Union

from ._catmull_rom_uniform import CatmullRomUniform
from ._finite_difference_cubic import FiniteDifferenceCubic
from ._hermite_finite_difference import HermiteFiniteDifference
from ._lagrange_local import LagrangeLocal
from ._natural_cubic import NaturalCubic
from ._spline_method import SplineMethod

MethodName = Literal[
    "natural",
    "finite_difference",
    "hermite",
    "catmull_rom",
    "lagrange",
]

_METHODS = {
    method.name: method
    for method in (
        NaturalCubic(),
        FiniteDifferenceCubic(),
        HermiteFiniteDifference(),
        CatmullRomUniform(),
        LagrangeLocal(),
    )
}


def get_spline_method(method: Union[MethodName, SplineMethod]) -> SplineMethod:
    """
    Resolve a spline method from its name.

    Parameters
    ----------
    method : str or SplineMethod
        One of:

        - ``"natural"``: Natural cubic spline, exact tridiagonal solve (C2).
        - ``"finite_difference"``: Cubic spline with finite difference
          second derivatives (local).
        - ``"hermite"``: Cubic Hermite spline with finite difference
          tangents (C1, local).
        - ``"catmull_rom"``: Catmull-Rom spline with uniform
          parametrization (C1, local).
        - ``"lagrange"``: Piecewise cubic Lagrange polynomials (C0, local).

        A SplineMethod instance is returned as is.

    Raises
    ------
    ValueError
        If the method name is unknown.
    """
    if isinstance(method, SplineMethod):
        return method
    try:
        return _METHODS[method]
    except (KeyError, TypeError):
        raise ValueError(
            f"Unknown spline method: {method!r}, "
            f"expected one of {sorted(_METHODS)}"
        ) from None
