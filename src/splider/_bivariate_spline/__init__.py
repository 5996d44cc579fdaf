from ._bivariate_spline import BivariateSpline, bivariate_spline

__all__ = [
    "BivariateSpline",
    "bivariate_spline",
]
