from __future__ import annotations

from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

from .._range_error import RangeError

if TYPE_CHECKING:
    from ._knot_domain import KnotDomain


def as_abscissae(domain: KnotDomain, x: Union[float, Tensor]) -> Tensor:
    """Convert query abscissae to the dtype and device of the domain."""
    knots = domain.knots
    if isinstance(x, Tensor):
        return x.to(dtype=knots.dtype, device=knots.device)
    return torch.as_tensor(x, dtype=knots.dtype, device=knots.device)


def knot_domain_index(
    domain: KnotDomain,
    x: Union[float, Tensor],
) -> Tensor:
    """
    Find the subinterval which contains each query abscissa.

    Parameters
    ----------
    domain : KnotDomain
        Knot domain.
    x : float or Tensor
        Query abscissae, shape (*query_shape) or scalar.

    Returns
    -------
    index : Tensor
        Interval indices ``i`` such that ``u[i] <= x <= u[i+1]``,
        int64, shape (*query_shape). The last knot maps to the last
        interval, ``n_knots - 2``.

    Raises
    ------
    RangeError
        If any query is outside ``[u[0], u[n_knots - 1]]`` (or is NaN).
    """
    knots = domain.knots
    x = as_abscissae(domain, x)

    t_min = knots[0]
    t_max = knots[-1]

    # NaN compares False on both sides
    inside = (x >= t_min) & (x <= t_max)
    if not torch.all(inside):
        raise RangeError(
            f"Query points outside knot domain [{t_min.item()}, {t_max.item()}]"
        )

    n_segments = knots.shape[0] - 1

    if domain.is_even:
        step = domain.lengths[0]
        index = torch.floor((x - t_min) / step).long()
        index = torch.clamp(index, 0, n_segments - 1)
        # Rounding may land one interval off near the knots
        index = torch.where(
            x < knots[index], torch.clamp(index - 1, min=0), index
        )
        index = torch.where(
            x > knots[index + 1],
            torch.clamp(index + 1, max=n_segments - 1),
            index,
        )
        return index

    index = torch.searchsorted(knots, x.reshape(-1), right=True) - 1
    index = torch.clamp(index, 0, n_segments - 1)
    return index.reshape(x.shape)
