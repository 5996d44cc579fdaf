"""Natural cubic spline: exact tridiagonal solve."""

from __future__ import annotations

import torch
from torch import Tensor

from .._knot_domain import KnotDomain
from .._solve_tridiagonal import solve_tridiagonal
from ._spline_method import SplineMethod


class NaturalCubic(SplineMethod):
    """Natural cubic C2 spline.

    The second derivatives ``s`` solve, for interior knots ``i``:

        h[i-1]*s[i-1] + 2*(h[i-1]+h[i])*s[i] + h[i]*s[i+1]
            = 6*((v[i+1]-v[i])/h[i] - (v[i]-v[i-1])/h[i-1])

    with the natural boundary condition ``s[0] = s[n-1] = 0``. This is the
    only C2 cubic spline, which comes at the cost of a global solve: every
    coefficient depends on every knot value.
    """

    name = "natural"
    family = "cubic"
    minimum_knots = 3
    is_local = False

    def coefficients(self, values: Tensor, domain: KnotDomain) -> Tensor:
        n = values.shape[0]
        h = domain.lengths

        value_shape = values.shape[1:]
        y_flat = values.reshape(n, -1)  # (n, n_values)

        if domain.is_even:
            # Constant step: tridiag(1, 4, 1) s = 6 * (second difference) / h^2
            step = h[0]
            second = y_flat[2:] - 2 * y_flat[1:-1] + y_flat[:-2]
            rhs = 6 * second / (step * step)  # (n-2, n_values)
            diag = torch.full((n - 2,), 4.0, dtype=h.dtype, device=h.device)
            off = torch.ones(n - 3, dtype=h.dtype, device=h.device)
            s_interior = solve_tridiagonal(diag, off, off, rhs.T).T
        else:
            delta = (y_flat[1:] - y_flat[:-1]) / h.unsqueeze(-1)  # (n-1, n_values)
            diag = 2 * (h[:-1] + h[1:])  # (n-2,)
            off = h[1:-1]  # (n-3,)
            rhs = 6 * (delta[1:] - delta[:-1])  # (n-2, n_values)
            s_interior = solve_tridiagonal(diag, off, off, rhs.T).T

        zero = torch.zeros(
            1, y_flat.shape[1], dtype=s_interior.dtype, device=values.device
        )
        s = torch.cat([zero, s_interior, zero], dim=0)

        return s.reshape(n, *value_shape)
