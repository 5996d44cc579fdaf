"""Resampling of many knot value sets at fixed abscissae."""

from typing import Sequence, Union

from torch import Tensor

from .._knot_domain import KnotDomain, knot_domain
from .._spline import Caching, Spline
from .._spline_argument import SplineArgument
from .._spline_method import MethodName, SplineMethod


class Cospline:
    """
    Spline evaluator with fixed query abscissae.

    The arguments are computed once, at construction or on ``assign``.
    Each call then assigns new knot values, derives the coefficients once
    and evaluates all the queries in a single batched pass. This is the
    resampling use case, where the same abscissae are evaluated against
    many knot value sets.

    Parameters
    ----------
    domain : KnotDomain
        Knot domain.
    x : float or Tensor
        Query abscissae, shape (*query_shape) or scalar.
    method : str or SplineMethod
        Interpolation method. Default is ``"natural"``.
    caching : str
        Caching policy. Manually cached cosplines are solved by each call.

    Raises
    ------
    RangeError
        If any query is outside the knot domain.

    Examples
    --------
    >>> resample = Cospline(knot_domain([1.0, 2.0, 3.0, 4.0]), [1.1, 2.5, 3.9])
    >>> resample([10.0, 20.0, 30.0, 40.0])
    tensor([11.0000, 25.0000, 39.0000], dtype=torch.float64)
    """

    def __init__(
        self,
        domain: KnotDomain,
        x: Union[float, Tensor, Sequence[float]],
        method: Union[MethodName, SplineMethod] = "natural",
        caching: Caching = "eager",
    ):
        self._spline = Spline(domain, method=method, caching=caching)
        self.assign(x)

    @property
    def domain(self) -> KnotDomain:
        return self._spline.domain

    @property
    def spline(self) -> Spline:
        """The underlying spline, holding the last knot values."""
        return self._spline

    @property
    def argument(self) -> SplineArgument:
        return self._argument

    def assign(self, x: Union[float, Tensor, Sequence[float]]) -> None:
        """Replace the query abscissae."""
        self._argument = self._spline.argument(x)

    def __call__(self, values: Union[Tensor, Sequence]) -> Tensor:
        """
        Resample knot values at the query abscissae.

        Parameters
        ----------
        values : Tensor or sequence
            Knot values, shape (n_knots, *value_shape).

        Returns
        -------
        Tensor
            Interpolated values, shape (*query_shape, *value_shape).
        """
        self._spline.assign(values)
        if self._spline.caching == "manual":
            self._spline.solve()
        return self._spline.evaluate(self._argument)


def cospline(
    u: Union[KnotDomain, Tensor, Sequence[float]],
    x: Union[float, Tensor, Sequence[float]],
    method: Union[MethodName, SplineMethod] = "natural",
    caching: Caching = "eager",
) -> Cospline:
    """Create a resampler from knot abscissae and query abscissae.

    Examples
    --------
    >>> resample = cospline(torch.arange(5.0), torch.tensor([0.5, 3.5]))
    >>> resample(torch.randn(5, 100)).shape
    torch.Size([2, 100])
    """
    domain = u if isinstance(u, KnotDomain) else knot_domain(u)
    return Cospline(domain, x, method=method, caching=caching)
