from typing import Tuple, Union

import torch
from torch import Tensor

from .._domain_error import DomainError
from .._knot_domain import KnotDomain, knot_domain_index
from .._knot_domain._knot_domain_index import as_abscissae


def lagrange_weights(
    domain: KnotDomain,
    x: Union[float, Tensor],
) -> Tuple[Tensor, Tensor]:
    """
    Compute the cubic Lagrange basis weights over a sliding 4-knot window.

    The window of interval ``i`` is ``u[i-1], u[i], u[i+1], u[i+2]``, with
    ``i`` clamped to ``[1, n_knots - 3]``: the first and last intervals
    borrow the polynomial of their neighbor.

    Returns
    -------
    index : Tensor
        Clamped interval indices, shape (*query_shape).
    weights : Tensor
        ``[l0, l1, l2, l3]``, shape (*query_shape, 4).
    """
    x = as_abscissae(domain, x)
    knots = domain.knots
    n = knots.shape[0]

    if n < 4:
        raise DomainError(f"Lagrange weights need at least 4 knots, got {n}")

    index = torch.clamp(knot_domain_index(domain, x), 1, n - 3)

    u = [knots[index + k - 1] for k in range(4)]

    weights = []
    for j in range(4):
        l_j = torch.ones_like(x)
        for k in range(4):
            if k != j:
                l_j = l_j * (x - u[k]) / (u[j] - u[k])
        weights.append(l_j)

    return index, torch.stack(weights, dim=-1)
