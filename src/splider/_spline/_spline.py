"""Spline evaluator with coefficient caching."""

from typing import Callable, Optional, Sequence, Union

import torch
from torch import Tensor

from .._knot_domain import KnotDomain, knot_domain
from .._spline_argument import SplineArgument
from .._spline_method import MethodName, SplineMethod, get_spline_method
from .._stale_cache_error import StaleCacheError
from ._caching import Caching, check_caching


def _promoted(values, dtype: torch.dtype, device: torch.device) -> Tensor:
    if isinstance(values, Tensor):
        dtype = torch.promote_types(values.dtype, dtype)
        return values.to(dtype=dtype, device=device).clone()
    try:
        return torch.tensor(values, dtype=dtype, device=device)
    except (TypeError, RuntimeError):
        dtype = torch.promote_types(dtype, torch.complex64)
        return torch.tensor(values, dtype=dtype, device=device)


def as_knot_values(values, domain: KnotDomain) -> Tensor:
    """Copy knot values into a tensor on the device of the domain.

    Real and integer values are promoted to the dtype of the knots,
    complex values to the matching complex dtype.
    """
    return _promoted(values, domain.knots.dtype, domain.knots.device)


class Spline:
    """
    Interpolant over a knot domain, with cached coefficients.

    The spline owns its knot values and the coefficients derived from them
    (second derivatives or tangents, depending on the method). The caching
    policy decides when the coefficients are derived:

    - ``"eager"``: on every change of the knot values. A batched evaluation
      never triggers a solve. Changing one value re-solves everything.
    - ``"lazy"``: on evaluation, only at the indices which are needed and
      invalid. Changing one value invalidates its neighbors only.
      Restricted to local methods.
    - ``"manual"``: when ``solve()`` is called. Evaluating after a change
      and before ``solve()`` raises StaleCacheError.

    Parameters
    ----------
    domain : KnotDomain
        Knot domain, shared with other splines.
    values : Tensor or sequence, optional
        Knot values, shape (n_knots, *value_shape). Real, complex and
        vector values are supported. Default is zeros.
    method : str or SplineMethod
        Interpolation method, see ``get_spline_method``.
        Default is ``"natural"``.
    caching : str
        Caching policy: ``"eager"`` (default), ``"lazy"`` or ``"manual"``.

    Raises
    ------
    DomainError
        If the domain has fewer knots than the method requires.
    ValueError
        If the method or caching policy is unknown or invalid, or if the
        number of values does not match the number of knots.

    Attributes
    ----------
    n_solves : int
        Number of full coefficient derivations performed (for diagnostics).
    n_updates : int
        Number of lazy partial derivations performed (for diagnostics).

    Examples
    --------
    >>> domain = knot_domain([1.0, 2.0, 3.0, 4.0])
    >>> s = Spline(domain, [10.0, 20.0, 30.0, 40.0])
    >>> s(torch.tensor([1.1, 2.5, 3.9]))
    tensor([11.0000, 25.0000, 39.0000], dtype=torch.float64)
    """

    def __init__(
        self,
        domain: KnotDomain,
        values: Optional[Union[Tensor, Sequence]] = None,
        method: Union[MethodName, SplineMethod] = "natural",
        caching: Caching = "eager",
    ):
        self._method = get_spline_method(method)
        check_caching(self._method, caching)
        self._method.check_domain(domain)

        self._domain = domain
        self._caching = caching
        self.n_solves = 0
        self.n_updates = 0

        knots = domain.knots
        self._values = torch.zeros(
            domain.size, dtype=knots.dtype, device=knots.device
        )
        self._coefficients = self._new_coefficients(self._values)
        self._valid_mask = torch.ones(
            domain.size, dtype=torch.bool, device=knots.device
        )
        self._stale = False

        if values is not None:
            self.assign(values)

    @property
    def domain(self) -> KnotDomain:
        """The knot domain."""
        return self._domain

    @property
    def method(self) -> SplineMethod:
        """The interpolation method."""
        return self._method

    @property
    def caching(self) -> str:
        """The caching policy."""
        return self._caching

    @property
    def values(self) -> Tensor:
        """The knot values, shape (n_knots, *value_shape).

        Use ``assign`` or ``set`` to modify them, so that the coefficients
        are invalidated.
        """
        return self._values

    @property
    def coefficients(self) -> Optional[Tensor]:
        """The cached coefficients, which may be stale (see ``is_valid``)."""
        return self._coefficients

    @property
    def is_valid(self) -> bool:
        """Whether all coefficients are consistent with the knot values."""
        if not self._method.has_coefficients:
            return True
        if self._caching == "lazy":
            return bool(self._valid_mask.all())
        return not self._stale

    def _new_coefficients(self, values: Tensor) -> Optional[Tensor]:
        if not self._method.has_coefficients:
            return None
        return torch.zeros_like(values)

    def _invalidate(self, indices: Optional[Tensor] = None) -> None:
        if self._caching == "lazy":
            if indices is None:
                self._valid_mask.fill_(False)
            else:
                dependents = self._method.dependents(self._domain, indices)
                self._valid_mask[dependents] = False
        else:
            self._stale = True

        if self._caching == "eager":
            self.solve()

    def assign(self, values: Union[Tensor, Sequence]) -> None:
        """
        Replace all the knot values.

        Parameters
        ----------
        values : Tensor or sequence
            Knot values, shape (n_knots, *value_shape).

        Raises
        ------
        ValueError
            If the number of values does not match the number of knots.
        """
        values = as_knot_values(values, self._domain)

        if values.dim() == 0 or values.shape[0] != self._domain.size:
            raise ValueError(
                f"Expected {self._domain.size} knot values, "
                f"got shape {tuple(values.shape)}"
            )

        previous = self._coefficients
        self._values = values
        if (
            previous is None
            or previous.shape != values.shape
            or previous.dtype != values.dtype
        ):
            self._coefficients = self._new_coefficients(values)

        self._invalidate()

    def set(
        self,
        index: Union[int, Tensor],
        value: Union[float, complex, Tensor],
    ) -> None:
        """
        Set one or several knot values.

        Parameters
        ----------
        index : int or Tensor
            Knot index, or int64 tensor of knot indices.
        value : float, complex or Tensor
            New value(s), broadcastable to the indexed knot values.
        """
        n = self._domain.size
        index = torch.as_tensor(index, dtype=torch.long, device=self._values.device)
        index = torch.where(index < 0, index + n, index)

        value = _promoted(value, self._values.dtype, self._values.device)
        dtype = value.dtype
        if dtype != self._values.dtype:
            self._values = self._values.to(dtype)
            if self._coefficients is not None:
                self._coefficients = self._coefficients.to(dtype)

        self._values[index] = value

        self._invalidate(index.reshape(-1))

    def solve(self) -> None:
        """Derive all the coefficients from the current knot values."""
        if not self._method.has_coefficients:
            return
        self._coefficients = self._method.coefficients(self._values, self._domain)
        self._valid_mask.fill_(True)
        self._stale = False
        self.n_solves += 1

    def argument(self, x: Union[float, Tensor]) -> SplineArgument:
        """
        Precompute an argument for repeated evaluations.

        Parameters
        ----------
        x : float or Tensor
            Query abscissae, shape (*query_shape) or scalar.

        Raises
        ------
        RangeError
            If any query is outside the knot domain.
        """
        return self._method.argument(self._domain, x)

    def _update(self, argument: SplineArgument) -> None:
        if not self._method.has_coefficients:
            return

        if self._caching == "lazy":
            index = argument.index.reshape(-1)
            needed = torch.unique(torch.cat([index, index + 1]))
            missing = needed[~self._valid_mask[needed]]
            if missing.numel() > 0:
                self._coefficients[missing] = self._method.local_coefficients(
                    self._values, self._domain, missing
                )
                self._valid_mask[missing] = True
                self.n_updates += 1
        elif self._stale:
            raise StaleCacheError(
                "Knot values changed since the last solve(); "
                "call solve() before evaluating a manually cached spline"
            )

    def evaluate(self, x: Union[float, Tensor, SplineArgument]) -> Tensor:
        """
        Evaluate the spline.

        Parameters
        ----------
        x : float, Tensor or SplineArgument
            Query abscissae, shape (*query_shape) or scalar, or a
            precomputed argument.

        Returns
        -------
        y : Tensor
            Interpolated values, shape (*query_shape, *value_shape).

        Raises
        ------
        RangeError
            If any query is outside the knot domain.
        StaleCacheError
            If the caching is manual and ``solve()`` was not called since
            the last change of the knot values.
        ValueError
            If the argument was built for another family of methods.
        """
        if isinstance(x, SplineArgument):
            argument = x
            if argument.family != self._method.family:
                raise ValueError(
                    f"Argument of family '{argument.family}' cannot be "
                    f"evaluated by method '{self._method.name}'"
                )
        else:
            argument = self.argument(x)

        self._update(argument)

        return self._method.blend(self._values, self._coefficients, argument)

    def __call__(self, x: Union[float, Tensor, SplineArgument]) -> Tensor:
        return self.evaluate(x)

    def __repr__(self) -> str:
        return (
            f"Spline(n_knots={self._domain.size}, "
            f"method={self._method.name!r}, caching={self._caching!r})"
        )


def spline(
    u: Union[KnotDomain, Tensor, Sequence[float]],
    v: Union[Tensor, Sequence],
    method: Union[MethodName, SplineMethod] = "natural",
    caching: Caching = "eager",
) -> Callable[[Union[float, Tensor]], Tensor]:
    """Create a spline interpolator from data.

    This is a convenience function that builds the domain and the spline,
    derives the coefficients and returns a callable that evaluates it.

    Parameters
    ----------
    u : KnotDomain, Tensor or sequence of float
        Knot abscissae. Must be strictly increasing.
    v : Tensor or sequence
        Knot values, shape (n_knots, *value_shape).
    method : str or SplineMethod, optional
        Interpolation method. Default is ``"natural"``.
    caching : str, optional
        Caching policy. Default is ``"eager"``.

    Returns
    -------
    spline : Callable[[Tensor], Tensor]
        Function that evaluates the spline at given points.

    Examples
    --------
    >>> import torch
    >>> x = torch.linspace(0, 1, 10, dtype=torch.float64)
    >>> f = spline(x, torch.sin(x * 2 * torch.pi))
    >>> f(torch.tensor([0.5]))  # Evaluate at x=0.5
    """
    domain = u if isinstance(u, KnotDomain) else knot_domain(u)
    fitted = Spline(domain, v, method=method, caching=caching)
    if caching == "manual":
        fitted.solve()
    return lambda x: fitted.evaluate(x)
