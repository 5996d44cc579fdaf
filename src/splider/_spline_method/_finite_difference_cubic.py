"""Cubic spline with finite difference second derivatives."""

from __future__ import annotations

import torch
from torch import Tensor

from .._knot_domain import KnotDomain
from ._spline_method import SplineMethod, expand_to_values


class FiniteDifferenceCubic(SplineMethod):
    """Cubic spline with locally approximated second derivatives.

    This is an approximation of the natural cubic spline which replaces the
    global tridiagonal solve with an independent estimate at each knot:

        s[i] = 2*((v[i+1]-v[i])/h[i] - (v[i]-v[i-1])/h[i-1]) / (h[i-1]+h[i])

    with ``s[0] = s[n-1] = 0``. Each coefficient depends on three
    neighboring knot values only, so that coefficients can be computed and
    invalidated per index.
    """

    name = "finite_difference"
    family = "cubic"
    minimum_knots = 3
    is_local = True

    def local_coefficients(
        self,
        values: Tensor,
        domain: KnotDomain,
        indices: Tensor,
    ) -> Tensor:
        n = values.shape[0]
        h = domain.lengths

        k = indices
        k_prev = torch.clamp(k - 1, 0, n - 1)
        k_next = torch.clamp(k + 1, 0, n - 1)
        h0 = expand_to_values(h[torch.clamp(k - 1, 0, n - 2)], values)
        h1 = expand_to_values(h[torch.clamp(k, 0, n - 2)], values)

        d0 = (values[k] - values[k_prev]) / h0
        d1 = (values[k_next] - values[k]) / h1
        s = (d1 - d0) * 2 / (h0 + h1)

        interior = expand_to_values((k > 0) & (k < n - 1), values)
        return torch.where(interior, s, torch.zeros_like(s))
