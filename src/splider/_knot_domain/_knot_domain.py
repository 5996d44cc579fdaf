"""Knot domain representation and construction."""

from typing import Sequence, Union

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._domain_error import DomainError


@tensorclass
class KnotDomain:
    """Strictly increasing knot abscissae shared by splines.

    A domain is built once and then only read: splines, arguments,
    cosplines and bivariate splines keep a reference to it.

    Attributes
    ----------
    knots : Tensor
        Knot abscissae ``u``, shape (n_knots,). Strictly increasing.
    lengths : Tensor
        Subinterval lengths ``h[i] = u[i+1] - u[i]``, shape (n_knots - 1,).
    is_even : bool
        Whether the domain was built as evenly spaced, which enables the
        constant-step index lookup and solvers.
    """

    knots: Tensor
    lengths: Tensor
    is_even: bool

    @property
    def size(self) -> int:
        """Number of knots."""
        return self.knots.shape[0]

    def length(self, i: Union[int, Tensor]) -> Tensor:
        """Length of the ``i``-th subinterval."""
        return self.lengths[i]

    def is_uniform(self) -> bool:
        """Whether all subintervals have the same length, within tolerance."""
        if self.is_even:
            return True
        return bool(
            torch.allclose(
                self.lengths,
                self.lengths.mean().expand_as(self.lengths),
                rtol=1e-9,
                atol=0.0,
            )
        )


def _as_knots(u: Union[Tensor, Sequence[float]]) -> Tensor:
    if isinstance(u, Tensor):
        if not u.is_floating_point():
            return u.to(torch.float64)
        return u
    return torch.as_tensor(u, dtype=torch.float64)


def knot_domain(u: Union[Tensor, Sequence[float]]) -> KnotDomain:
    """
    Build a knot domain from abscissae.

    Parameters
    ----------
    u : Tensor or sequence of float
        Knot abscissae, shape (n_knots,). Must be strictly increasing.
        Non-floating input is converted to float64.

    Returns
    -------
    KnotDomain
        The validated domain.

    Raises
    ------
    DomainError
        If fewer than 3 knots are given or if the abscissae are not
        strictly increasing.

    Examples
    --------
    >>> domain = knot_domain([1.0, 2.0, 3.0, 4.0])
    >>> domain.size
    4
    """
    knots = _as_knots(u)

    if knots.dim() != 1:
        raise DomainError(
            f"Knots must be one-dimensional, got shape {tuple(knots.shape)}"
        )

    n = knots.shape[0]

    if n < 3:
        raise DomainError(f"Need at least 3 knots, got {n}")

    lengths = knots[1:] - knots[:-1]

    if not torch.all(lengths > 0):
        raise DomainError("Knots must be strictly increasing")

    return KnotDomain(
        knots=knots,
        lengths=lengths,
        is_even=False,
        batch_size=[],
    )
