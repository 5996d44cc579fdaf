from ._catmull_rom_uniform import (
    CatmullRomUniform,
    UniformParametrizationWarning,
)
from ._finite_difference_cubic import FiniteDifferenceCubic
from ._get_spline_method import MethodName, get_spline_method
from ._hermite_finite_difference import HermiteFiniteDifference
from ._lagrange_local import LagrangeLocal
from ._natural_cubic import NaturalCubic
from ._spline_method import SplineMethod

__all__ = [
    "CatmullRomUniform",
    "FiniteDifferenceCubic",
    "HermiteFiniteDifference",
    "LagrangeLocal",
    "MethodName",
    "NaturalCubic",
    "SplineMethod",
    "UniformParametrizationWarning",
    "get_spline_method",
]
