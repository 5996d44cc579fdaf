"""Catmull-Rom spline with uniform parametrization."""

from __future__ import annotations

import warnings

from .._knot_domain import KnotDomain
from ._hermite_finite_difference import HermiteFiniteDifference


class UniformParametrizationWarning(UserWarning):
    """Warning when a uniform parametrization is used over uneven knots."""

    pass


class CatmullRomUniform(HermiteFiniteDifference):
    """Catmull-Rom spline with uniform parametrization.

    Tangents are the chords joining the two neighboring knots:

        d[i] = (v[i+1] - v[i-1]) / (h[i-1] + h[i])

    which is the Catmull-Rom tangent when the knots are evenly spaced.
    End knots take the slope of their only adjacent interval.
    Uneven domains are accepted with a UniformParametrizationWarning.
    """

    name = "catmull_rom"
    family = "hermite"
    minimum_knots = 3
    is_local = True

    def check_domain(self, domain: KnotDomain) -> None:
        super().check_domain(domain)
        if not domain.is_uniform():
            warnings.warn(
                "Catmull-Rom tangents assume evenly spaced knots; "
                "the knot domain is not uniform. "
                "Consider method='hermite' for uneven knots.",
                UniformParametrizationWarning,
            )
