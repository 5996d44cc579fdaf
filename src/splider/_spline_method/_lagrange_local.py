"""Piecewise cubic Lagrange interpolation."""

from __future__ import annotations

from typing import Optional

from torch import Tensor

from .._knot_domain import KnotDomain
from .._spline_argument import SplineArgument
from ._spline_method import SplineMethod, expand_to_values


class LagrangeLocal(SplineMethod):
    """Piecewise cubic Lagrange polynomials.

    Each interval is interpolated by the cubic Lagrange polynomial through
    the 4-knot window around it. In the first and last intervals, the
    polynomial of the next and previous windows is used, respectively.
    The interpolant is only guaranteed to be C0.

    No coefficient is derived: the arguments carry the whole basis, and
    caching policies are no-ops.
    """

    name = "lagrange"
    family = "lagrange"
    minimum_knots = 4
    is_local = True
    has_coefficients = False

    def coefficients(self, values: Tensor, domain: KnotDomain) -> None:
        return None

    def local_coefficients(
        self,
        values: Tensor,
        domain: KnotDomain,
        indices: Tensor,
    ) -> Tensor:
        return values.new_zeros((0, *values.shape[1:]))

    def dependents(self, domain: KnotDomain, indices: Tensor) -> Tensor:
        return indices.new_zeros((0,))

    def blend(
        self,
        values: Tensor,
        coefficients: Optional[Tensor],
        argument: SplineArgument,
    ) -> Tensor:
        i = argument.index
        w = argument.weights.movedim(-1, 0)

        out = values[i - 1] * expand_to_values(w[0], values)
        for k in range(1, 4):
            out = out + values[i - 1 + k] * expand_to_values(w[k], values)
        return out
