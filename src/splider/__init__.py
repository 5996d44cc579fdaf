"""splider: cached spline interpolation and resampling for PyTorch tensors.

Knot values are interpolated over a shared knot domain, with several
methods and caching policies for the derived coefficients.

Convenience Functions
---------------------
spline
    Create a spline interpolator from data (domain + values + callable).
cospline
    Create a resampler evaluating many knot value sets at fixed abscissae.
bivariate_spline
    Create a resampler of gridded values at scattered 2D points.

Knot Domains
------------
knot_domain
    Validate strictly increasing knot abscissae.
knot_domain_linspace
    Evenly spaced knot domain, with constant time interval lookup.
knot_domain_index
    Locate query abscissae in a knot domain.

Arguments
---------
spline_argument
    Precompute the basis weights of query abscissae.

Methods
-------
get_spline_method
    Resolve a method name: ``"natural"``, ``"finite_difference"``,
    ``"hermite"``, ``"catmull_rom"`` or ``"lagrange"``.

Data Types
----------
KnotDomain
    Knot abscissae and interval lengths.
SplineArgument
    Query abscissae with precomputed weights.
Spline
    Interpolant with cached coefficients.
Cospline
    Spline evaluator with fixed query abscissae.
BivariateSpline
    Separable tensor product resampler with sparse updates.

Exceptions
----------
SplineError
    Base exception for spline operations.
DomainError
    Invalid knot domain.
RangeError
    Query point outside the knot domain.
StaleCacheError
    Evaluation of manually cached, outdated coefficients.

Warnings
--------
UniformParametrizationWarning
    Catmull-Rom spline over non-uniformly spaced knots.
"""

from ._bivariate_spline import BivariateSpline, bivariate_spline
from ._cospline import Cospline, cospline
from ._domain_error import DomainError
from ._knot_domain import (
    KnotDomain,
    knot_domain,
    knot_domain_index,
    knot_domain_linspace,
)
from ._range_error import RangeError
from ._solve_tridiagonal import solve_tridiagonal
from ._spline import Caching, Spline, spline
from ._spline_argument import SplineArgument, spline_argument
from ._spline_error import SplineError
from ._spline_method import (
    CatmullRomUniform,
    FiniteDifferenceCubic,
    HermiteFiniteDifference,
    LagrangeLocal,
    MethodName,
    NaturalCubic,
    SplineMethod,
    UniformParametrizationWarning,
    get_spline_method,
)
from ._stale_cache_error import StaleCacheError

__all__ = [
    "BivariateSpline",
    "Caching",
    "CatmullRomUniform",
    "Cospline",
    "DomainError",
    "FiniteDifferenceCubic",
    "HermiteFiniteDifference",
    "KnotDomain",
    "LagrangeLocal",
    "MethodName",
    "NaturalCubic",
    "RangeError",
    "Spline",
    "SplineArgument",
    "SplineError",
    "SplineMethod",
    "StaleCacheError",
    "UniformParametrizationWarning",
    "bivariate_spline",
    "cospline",
    "get_spline_method",
    "knot_domain",
    "knot_domain_index",
    "knot_domain_linspace",
    "solve_tridiagonal",
    "spline",
    "spline_argument",
]

__version__ = "0.1.0"
