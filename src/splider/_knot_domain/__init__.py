from ._knot_domain import KnotDomain, knot_domain
from ._knot_domain_index import knot_domain_index
from ._knot_domain_linspace import knot_domain_linspace

__all__ = [
    "KnotDomain",
    "knot_domain",
    "knot_domain_index",
    "knot_domain_linspace",
]
