"""Separable bivariate resampling on a rectilinear grid."""

from typing import List, Sequence, Tuple, Union

import torch
from torch import Tensor

from .._knot_domain import KnotDomain, knot_domain
from .._spline import Caching, Spline, as_knot_values
from .._spline_argument import SplineArgument
from .._spline_method import MethodName, SplineMethod


def _select(argument: SplineArgument, queries: Union[int, Tensor]) -> SplineArgument:
    index = argument.index[queries]
    return SplineArgument(
        index=index,
        weights=argument.weights[queries],
        family=argument.family,
        batch_size=list(index.shape),
    )


class BivariateSpline:
    """
    Tensor product interpolation of gridded data at scattered points.

    The grid values ``v[i0, i1]`` are interpolated in two separable passes:

    1. For each column ``i1`` of the grid, a row spline over ``domain0``
       interpolates ``v[:, i1]`` at the first coordinate of the queries.
    2. For each query, a column spline over ``domain1`` interpolates these
       intermediate samples at the second coordinate.

    With a local method, a query only reads the 4x4 window of grid cells
    around it. The union of these windows is the active mask: only masked
    cells are written to the row splines, and each row is evaluated only at
    the queries whose window includes it. With a global method, the mask
    covers the whole grid.

    Parameters
    ----------
    domain0 : KnotDomain
        Knot domain along the first axis, of size n0.
    domain1 : KnotDomain
        Knot domain along the second axis, of size n1.
    x : Tensor or sequence
        Query points, shape (m, 2).
    method : str or SplineMethod
        Interpolation method along both axes. Default is ``"natural"``.
    caching : str
        Caching policy of the row and column splines. Default is ``"eager"``.

    Raises
    ------
    RangeError
        If any query is outside the grid.
    ValueError
        If ``x`` is not of shape (m, 2).

    Examples
    --------
    >>> u0 = knot_domain([1.0, 2.0, 3.0, 4.0])
    >>> u1 = knot_domain([1.0, 10.0, 100.0, 1000.0])
    >>> values = u0.knots[:, None] * u1.knots[None, :]
    >>> resample = BivariateSpline(u0, u1, [[2.5, 20.0]])
    >>> resample(values)
    tensor([50.0000], dtype=torch.float64)
    """

    def __init__(
        self,
        domain0: KnotDomain,
        domain1: KnotDomain,
        x: Union[Tensor, Sequence[Sequence[float]]],
        method: Union[MethodName, SplineMethod] = "natural",
        caching: Caching = "eager",
    ):
        self._rows: List[Spline] = [
            Spline(domain0, method=method, caching=caching)
            for _ in range(domain1.size)
        ]
        self._column = Spline(domain1, method=method, caching=caching)
        self._domains = (domain0, domain1)
        self.assign(x)

    @property
    def method(self) -> SplineMethod:
        return self._column.method

    @property
    def domains(self) -> Tuple[KnotDomain, KnotDomain]:
        """The knot domains along both axes."""
        return self._domains

    @property
    def arguments(self) -> Tuple[SplineArgument, SplineArgument]:
        """The arguments of the queries along both axes, each of batch (m,)."""
        return self._arguments

    @property
    def mask(self) -> Tensor:
        """Grid cells read by the queries, bool, shape (n0, n1)."""
        return self._mask

    def assign(self, x: Union[Tensor, Sequence[Sequence[float]]]) -> None:
        """
        Replace the query points and rebuild the active mask.

        Parameters
        ----------
        x : Tensor or sequence
            Query points, shape (m, 2).
        """
        domain0, domain1 = self._domains
        method = self.method

        if not isinstance(x, Tensor):
            x = torch.as_tensor(x, dtype=domain0.knots.dtype)
        if x.dim() != 2 or x.shape[1] != 2:
            raise ValueError(
                f"Expected query points of shape (m, 2), got {tuple(x.shape)}"
            )

        argument0 = method.argument(domain0, x[:, 0])
        argument1 = method.argument(domain1, x[:, 1])
        window1 = method.window(argument1, domain1)  # (m, 4)

        m = x.shape[0]
        n0 = domain0.size
        n1 = domain1.size
        device = domain0.knots.device

        if method.is_local:
            window0 = method.window(argument0, domain0)  # (m, 4)
            mask = torch.zeros(n0, n1, dtype=torch.bool, device=device)
            mask[window0[:, :, None], window1[:, None, :]] = True

            # Rows sampled by each query
            needs = torch.zeros(m, n1, dtype=torch.bool, device=device)
            needs[torch.arange(m, device=device)[:, None], window1] = True
        else:
            mask = torch.ones(n0, n1, dtype=torch.bool, device=device)
            needs = torch.ones(m, n1, dtype=torch.bool, device=device)

        self._arguments = (argument0, argument1)
        self._window1 = window1
        self._needs = needs
        self._mask = mask

    def __call__(self, values: Union[Tensor, Sequence]) -> Tensor:
        """
        Interpolate grid values at the query points.

        Parameters
        ----------
        values : Tensor or sequence
            Grid values, shape (n0, n1, *value_shape).

        Returns
        -------
        Tensor
            Interpolated values, shape (m, *value_shape).
        """
        domain0, domain1 = self._domains
        argument0, argument1 = self._arguments
        n0 = domain0.size
        n1 = domain1.size

        values = as_knot_values(values, domain0)
        if values.dim() < 2 or values.shape[0] != n0 or values.shape[1] != n1:
            raise ValueError(
                f"Expected grid values of shape ({n0}, {n1}, ...), "
                f"got {tuple(values.shape)}"
            )

        value_shape = values.shape[2:]
        m = argument0.index.shape[0]

        samples = values.new_zeros((m, n1, *value_shape))

        for i1, row in enumerate(self._rows):
            queries = torch.nonzero(self._needs[:, i1]).reshape(-1)
            if queries.numel() == 0:
                continue

            column_values = values[:, i1]
            cells = torch.nonzero(self._mask[:, i1]).reshape(-1)
            if (
                row.values.shape != column_values.shape
                or row.values.dtype != column_values.dtype
                or cells.numel() == n0
            ):
                row.assign(column_values)
            else:
                row.set(cells, column_values[cells])
            if row.caching == "manual":
                row.solve()

            samples[queries, i1] = row.evaluate(_select(argument0, queries))

        column = self._column
        if column.values.shape[1:] != value_shape or (
            column.values.dtype != samples.dtype
        ):
            column.assign(samples.new_zeros((n1, *value_shape)))

        out = []
        for q in range(m):
            if self.method.is_local:
                rows = self._window1[q]
                column.set(rows, samples[q, rows])
            else:
                column.assign(samples[q])
            if column.caching == "manual":
                column.solve()
            out.append(column.evaluate(_select(argument1, q)))

        if not out:
            return samples.new_zeros((0, *value_shape))
        return torch.stack(out)


def bivariate_spline(
    u0: Union[KnotDomain, Tensor, Sequence[float]],
    u1: Union[KnotDomain, Tensor, Sequence[float]],
    x: Union[Tensor, Sequence[Sequence[float]]],
    method: Union[MethodName, SplineMethod] = "natural",
    caching: Caching = "eager",
) -> BivariateSpline:
    """Create a bivariate resampler from grid abscissae and query points."""
    domain0 = u0 if isinstance(u0, KnotDomain) else knot_domain(u0)
    domain1 = u1 if isinstance(u1, KnotDomain) else knot_domain(u1)
    return BivariateSpline(domain0, domain1, x, method=method, caching=caching)
