from typing import Tuple, Union

import torch
from torch import Tensor

from .._knot_domain import KnotDomain, knot_domain_index
from .._knot_domain._knot_domain_index import as_abscissae


def cubic_weights(
    domain: KnotDomain,
    x: Union[float, Tensor],
) -> Tuple[Tensor, Tensor]:
    """
    Compute the C2 cubic basis weights of query abscissae.

    On interval ``i`` with ``left = x - u[i]`` and ``right = h - left``:

    - ``cv0 = right / h``, ``cv1 = left / h`` (linear blend of the values)
    - ``cs0 = right^3 / (6h) - h * right / 6``
    - ``cs1 = left^3 / (6h) - h * left / 6``

    The second derivative weights vanish at the knots.

    Returns
    -------
    index : Tensor
        Interval indices, shape (*query_shape).
    weights : Tensor
        ``[cv0, cv1, cs0, cs1]``, shape (*query_shape, 4).
    """
    x = as_abscissae(domain, x)
    index = knot_domain_index(domain, x)

    h = domain.lengths[index]
    left = x - domain.knots[index]
    right = h - left

    cv0 = right / h
    cv1 = left / h
    cs0 = right / 6 * (right * cv0 - h)
    cs1 = left / 6 * (left * cv1 - h)

    return index, torch.stack([cv0, cv1, cs0, cs1], dim=-1)
