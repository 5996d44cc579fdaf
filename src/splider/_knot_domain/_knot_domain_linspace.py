from typing import Optional

import torch

from .._domain_error import DomainError
from ._knot_domain import KnotDomain


def knot_domain_linspace(
    front: float,
    step: float,
    size: int,
    dtype: Optional[torch.dtype] = None,
    device: Optional[torch.device] = None,
) -> KnotDomain:
    """
    Build an evenly spaced knot domain.

    Parameters
    ----------
    front : float
        First abscissa.
    step : float
        Constant spacing between consecutive knots. Must be positive.
    size : int
        Number of knots, at least 3.
    dtype : torch.dtype, optional
        Floating point type of the abscissae. Default is float64.
    device : torch.device, optional
        Device of the abscissae.

    Returns
    -------
    KnotDomain
        Domain with ``knots[i] = front + i * step`` and ``is_even=True``.

    Raises
    ------
    DomainError
        If ``step`` is not positive or ``size`` is less than 3.
    """
    if size < 3:
        raise DomainError(f"Need at least 3 knots, got {size}")
    if not step > 0:
        raise DomainError(f"Knot step must be positive, got {step}")

    if dtype is None:
        dtype = torch.float64

    knots = front + step * torch.arange(size, dtype=dtype, device=device)
    lengths = torch.full((size - 1,), step, dtype=dtype, device=device)

    return KnotDomain(
        knots=knots,
        lengths=lengths,
        is_even=True,
        batch_size=[],
    )
