"""Cubic Hermite spline with finite difference tangents."""

from __future__ import annotations

import torch
from torch import Tensor

from .._knot_domain import KnotDomain
from ._spline_method import SplineMethod, expand_to_values


def boundary_tangents(
    values: Tensor,
    domain: KnotDomain,
    indices: Tensor,
    interior: Tensor,
) -> Tensor:
    """Replace the tangents of the end knots by one-sided differences."""
    n = values.shape[0]
    h = domain.lengths

    first = (values[1] - values[0]) / h[0]
    last = (values[n - 1] - values[n - 2]) / h[n - 2]

    is_first = expand_to_values(indices == 0, interior)
    is_last = expand_to_values(indices == n - 1, interior)

    tangents = torch.where(is_last, last.expand_as(interior), interior)
    return torch.where(is_first, first.expand_as(interior), tangents)


class HermiteFiniteDifference(SplineMethod):
    """Cubic Hermite spline whose tangents are finite differences.

    Interior tangents are the slopes of the chords joining the two
    neighboring knots:

        d[i] = (v[i+1] - v[i-1]) / (h[i-1] + h[i])

    and the end tangents are one-sided differences. The spline is C1.
    """

    name = "hermite"
    family = "hermite"
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
        h0 = h[torch.clamp(k - 1, 0, n - 2)]
        h1 = h[torch.clamp(k, 0, n - 2)]

        d = (values[k_next] - values[k_prev]) / expand_to_values(h0 + h1, values)

        return boundary_tangents(values, domain, k, d)
