from ._cospline import Cospline, cospline

__all__ = [
    "Cospline",
    "cospline",
]
