"""Spline argument representation."""

from typing import Literal, Union

from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._knot_domain import KnotDomain
from ._cubic_weights import cubic_weights
from ._hermite_weights import hermite_weights
from ._lagrange_weights import lagrange_weights

Family = Literal["cubic", "hermite", "lagrange"]


@tensorclass
class SplineArgument:
    """Abscissae bound to a knot domain, with precomputed basis weights.

    Building an argument locates the query in the domain and computes the
    weights which multiply knot values and coefficients. It depends on the
    domain and the abscissae only, so that the same argument can be
    evaluated against any number of knot value assignments.

    Attributes
    ----------
    index : Tensor
        Interval index of each query, int64, shape (*query_shape). For the
        ``"lagrange"`` family, index of the second knot of the 4-knot window.
    weights : Tensor
        Basis weights, shape (*query_shape, 4):

        - ``"cubic"``: ``[cv0, cv1, cs0, cs1]`` for ``v[i], v[i+1], s[i], s[i+1]``.
        - ``"hermite"``: ``[cv0, cv1, cd0, cd1]`` for ``v[i], v[i+1], d[i], d[i+1]``.
        - ``"lagrange"``: ``[l0, l1, l2, l3]`` for ``v[i-1] .. v[i+2]``.
    family : str
        Weight layout, one of ``"cubic"``, ``"hermite"``, ``"lagrange"``.
    """

    index: Tensor
    weights: Tensor
    family: str


def spline_argument(
    domain: KnotDomain,
    x: Union[float, Tensor],
    family: Family = "cubic",
) -> SplineArgument:
    """
    Precompute the basis weights of query abscissae.

    Parameters
    ----------
    domain : KnotDomain
        Knot domain.
    x : float or Tensor
        Query abscissae, shape (*query_shape) or scalar.
    family : str
        Weight layout: ``"cubic"``, ``"hermite"`` or ``"lagrange"``.

    Returns
    -------
    SplineArgument
        Argument with ``batch_size`` equal to the query shape.

    Raises
    ------
    RangeError
        If any query is outside the knot domain.
    ValueError
        If ``family`` is unknown.
    """
    if family == "cubic":
        index, weights = cubic_weights(domain, x)
    elif family == "hermite":
        index, weights = hermite_weights(domain, x)
    elif family == "lagrange":
        index, weights = lagrange_weights(domain, x)
    else:
        raise ValueError(f"Unknown argument family: {family}")

    return SplineArgument(
        index=index,
        weights=weights,
        family=family,
        batch_size=list(index.shape),
    )
