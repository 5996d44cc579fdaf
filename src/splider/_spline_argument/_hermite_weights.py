from typing import Tuple, Union

import torch
from torch import Tensor

from .._knot_domain import KnotDomain, knot_domain_index
from .._knot_domain._knot_domain_index import as_abscissae


def hermite_weights(
    domain: KnotDomain,
    x: Union[float, Tensor],
) -> Tuple[Tensor, Tensor]:
    """
    Compute the cubic Hermite basis weights of query abscissae.

    The cubic Hermite basis functions for u in [0, 1] are:
    - H_00(u) = (1 + 2u)(1-u)^2  -- value at left endpoint
    - H_10(u) = u(1-u)^2         -- derivative at left endpoint
    - H_01(u) = u^2(3-2u)        -- value at right endpoint
    - H_11(u) = u^2(u-1)         -- derivative at right endpoint

    where u = (x - u_i) / h. Derivative weights are scaled by h.

    Returns
    -------
    index : Tensor
        Interval indices, shape (*query_shape).
    weights : Tensor
        ``[cv0, cv1, cd0, cd1]``, shape (*query_shape, 4).
    """
    x = as_abscissae(domain, x)
    index = knot_domain_index(domain, x)

    h = domain.lengths[index]
    u = (x - domain.knots[index]) / h

    u2 = u * u
    u3 = u2 * u

    h_00 = 2 * u3 - 3 * u2 + 1
    h_10 = u3 - 2 * u2 + u
    h_01 = -2 * u3 + 3 * u2
    h_11 = u3 - u2

    return index, torch.stack([h_00, h_01, h_10 * h, h_11 * h], dim=-1)
