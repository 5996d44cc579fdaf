"""Spline method capability interface."""

from __future__ import annotations

from typing import Optional, Union

import torch
from torch import Tensor

from .._domain_error import DomainError
from .._knot_domain import KnotDomain
from .._spline_argument import SplineArgument, spline_argument


def expand_to_values(weight: Tensor, values: Tensor) -> Tensor:
    """Append singleton dimensions to ``weight`` to broadcast with values."""
    return weight.reshape(tuple(weight.shape) + (1,) * (values.dim() - 1))


class SplineMethod:
    """Interpolation method: argument weights and coefficient derivation.

    A method is stateless. It knows how to turn abscissae into a
    :class:`SplineArgument`, how to derive the auxiliary per-knot
    coefficients (second derivatives or tangents) from knot values, and how
    to blend values and coefficients into interpolated values.

    Attributes
    ----------
    name : str
        Method name, as accepted by the ``method=`` option of the splines.
    family : str
        Argument weight layout: ``"cubic"``, ``"hermite"`` or ``"lagrange"``.
    minimum_knots : int
        Minimum number of knots of the domain.
    is_local : bool
        Whether each coefficient depends only on neighboring knot values,
        which is required for lazy caching and sparse resampling.
    has_coefficients : bool
        Whether the method uses a coefficient array at all.
    """

    name: str = ""
    family: str = "cubic"
    minimum_knots: int = 3
    is_local: bool = True
    has_coefficients: bool = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def check_domain(self, domain: KnotDomain) -> None:
        """Raise a DomainError if the domain cannot support the method."""
        if domain.size < self.minimum_knots:
            raise DomainError(
                f"Method '{self.name}' needs at least {self.minimum_knots} "
                f"knots, got {domain.size}"
            )

    def argument(
        self,
        domain: KnotDomain,
        x: Union[float, Tensor],
    ) -> SplineArgument:
        """Precompute the basis weights of abscissae ``x``."""
        return spline_argument(domain, x, self.family)

    def coefficients(
        self,
        values: Tensor,
        domain: KnotDomain,
    ) -> Optional[Tensor]:
        """
        Derive all coefficients from the knot values.

        Parameters
        ----------
        values : Tensor
            Knot values, shape (n_knots, *value_shape).
        domain : KnotDomain
            Knot domain.

        Returns
        -------
        Tensor or None
            Coefficients, shape (n_knots, *value_shape), or None for
            coefficient-free methods.
        """
        indices = torch.arange(values.shape[0], device=values.device)
        return self.local_coefficients(values, domain, indices)

    def local_coefficients(
        self,
        values: Tensor,
        domain: KnotDomain,
        indices: Tensor,
    ) -> Tensor:
        """Derive the coefficients at the given knot indices only."""
        raise NotImplementedError(
            f"Method '{self.name}' cannot compute coefficients locally"
        )

    def dependents(self, domain: KnotDomain, indices: Tensor) -> Tensor:
        """Indices of the coefficients which depend on the given knot values."""
        n = domain.size
        if not self.is_local:
            return torch.arange(n, device=indices.device)
        offsets = torch.arange(-1, 2, device=indices.device)
        neighbors = torch.clamp(indices.reshape(-1, 1) + offsets, 0, n - 1)
        return torch.unique(neighbors)

    def window(self, argument: SplineArgument, domain: KnotDomain) -> Tensor:
        """
        Knot indices read when evaluating an argument.

        Returns
        -------
        Tensor
            Indices ``i-1 .. i+2`` clamped to the domain, int64,
            shape (*query_shape, 4).
        """
        offsets = torch.arange(-1, 3, device=argument.index.device)
        return torch.clamp(
            argument.index.unsqueeze(-1) + offsets, 0, domain.size - 1
        )

    def blend(
        self,
        values: Tensor,
        coefficients: Optional[Tensor],
        argument: SplineArgument,
    ) -> Tensor:
        """
        Combine knot values and coefficients with the argument weights.

        Returns
        -------
        Tensor
            Interpolated values, shape (*query_shape, *value_shape).
        """
        i = argument.index
        w = argument.weights.movedim(-1, 0)

        return (
            values[i] * expand_to_values(w[0], values)
            + values[i + 1] * expand_to_values(w[1], values)
            + coefficients[i] * expand_to_values(w[2], values)
            + coefficients[i + 1] * expand_to_values(w[3], values)
        )
