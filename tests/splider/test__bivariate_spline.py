"""Tests for bivariate tensor product resampling."""

import pytest
import torch

LOCAL_METHODS = ["finite_difference", "hermite", "catmull_rom", "lagrange"]
ALL_METHODS = ["natural"] + LOCAL_METHODS


def full_grid_reference(domain0, domain1, values, x, method):
    """Separable interpolation with every grid cell written."""
    from splider import Spline

    out = []
    for q in range(x.shape[0]):
        samples = torch.stack(
            [
                Spline(domain0, values[:, i1], method=method)(x[q, 0])
                for i1 in range(domain1.size)
            ]
        )
        out.append(Spline(domain1, samples, method=method)(x[q, 1]))
    return torch.stack(out)


@pytest.fixture
def grid():
    from splider import knot_domain_linspace

    return knot_domain_linspace(0.0, 1.0, 10), knot_domain_linspace(-2.0, 0.5, 12)


class TestBivariateSpline:
    @pytest.mark.filterwarnings("ignore::UserWarning")
    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_between_corners(self, method):
        """Test a query between four grid corners of bilinear data."""
        from splider import BivariateSpline, knot_domain

        u0 = knot_domain([1.0, 2.0, 3.0, 4.0])
        u1 = knot_domain([1.0, 10.0, 100.0, 1000.0])
        exponents = torch.arange(4, dtype=torch.float64)
        values = u0.knots[:, None] * 10.0 ** exponents[None, :]

        resample = BivariateSpline(u0, u1, [[2.5, 20.0]], method=method)
        y = resample(values)

        corners = values[1:3, 1:3]
        assert y.shape == (1,)
        assert corners.min() < y.item() < corners.max()
        torch.testing.assert_close(
            y, torch.tensor([50.0], dtype=torch.float64), rtol=0, atol=1e-6
        )

    def test_scipy_comparison(self):
        """Compare with separable scipy.interpolate.CubicSpline passes."""
        pytest.importorskip("scipy")
        import numpy as np
        from scipy.interpolate import CubicSpline as ScipyCubicSpline

        from splider import BivariateSpline, knot_domain

        u0 = torch.tensor([0.0, 0.5, 1.3, 2.0, 3.0], dtype=torch.float64)
        u1 = torch.tensor([0.0, 1.0, 1.5, 3.0, 4.0, 5.0], dtype=torch.float64)
        values = torch.sin(u0)[:, None] + torch.cos(u1)[None, :] * u0[:, None]

        torch.manual_seed(0)
        x = torch.stack(
            [
                torch.rand(15, dtype=torch.float64) * 3.0,
                torch.rand(15, dtype=torch.float64) * 5.0,
            ],
            dim=-1,
        )

        y = BivariateSpline(knot_domain(u0), knot_domain(u1), x)(values)

        rows = ScipyCubicSpline(
            u0.numpy(), values.numpy(), axis=0, bc_type="natural"
        )
        expected = np.array(
            [
                ScipyCubicSpline(u1.numpy(), rows(x0), bc_type="natural")(x1)
                for x0, x1 in x.numpy()
            ]
        )

        torch.testing.assert_close(
            y, torch.tensor(expected, dtype=torch.float64), rtol=1e-6, atol=1e-6
        )

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_matches_full_grid(self, grid, method):
        """Test against separable interpolation of the full grid."""
        from splider import BivariateSpline

        domain0, domain1 = grid
        values = torch.randn(10, 12, dtype=torch.float64)
        x = torch.tensor(
            [[0.5, -1.0], [4.2, 1.3], [9.0, 3.5], [0.0, -2.0]],
            dtype=torch.float64,
        )

        y = BivariateSpline(domain0, domain1, x, method=method)(values)

        torch.testing.assert_close(
            y, full_grid_reference(domain0, domain1, values, x, method)
        )

    def test_mask_of_local_method(self, grid):
        """Test that the mask is the 4x4 window around a query."""
        from splider import BivariateSpline

        domain0, domain1 = grid

        resample = BivariateSpline(
            domain0, domain1, [[4.5, 0.7]], method="hermite"
        )

        expected = torch.zeros(10, 12, dtype=torch.bool)
        expected[3:7, 4:8] = True
        assert torch.equal(resample.mask, expected)

    def test_mask_of_global_method(self, grid):
        """Test that a global method masks the whole grid."""
        from splider import BivariateSpline

        domain0, domain1 = grid

        resample = BivariateSpline(domain0, domain1, [[4.5, 0.7]])

        assert resample.mask.all()

    @pytest.mark.parametrize("method", LOCAL_METHODS)
    def test_sparse_update_matches_full_update(self, grid, method):
        """Test that writing masked cells only gives the full grid output."""
        from splider import BivariateSpline

        domain0, domain1 = grid
        x = torch.tensor([[2.2, -0.3], [2.9, 0.1], [7.5, 2.8]], dtype=torch.float64)
        first = torch.randn(10, 12, dtype=torch.float64)
        second = torch.randn(10, 12, dtype=torch.float64)

        resample = BivariateSpline(domain0, domain1, x, method=method)
        resample(first)
        y = resample(second)

        torch.testing.assert_close(
            y, BivariateSpline(domain0, domain1, x, method=method)(second)
        )
        torch.testing.assert_close(
            y, full_grid_reference(domain0, domain1, second, x, method)
        )

    @pytest.mark.parametrize("method", LOCAL_METHODS)
    def test_cells_outside_mask_are_not_read(self, grid, method):
        """Test that values outside the mask do not reach the output."""
        from splider import BivariateSpline

        domain0, domain1 = grid
        x = torch.tensor([[2.2, -0.3], [7.5, 2.8]], dtype=torch.float64)
        values = torch.randn(10, 12, dtype=torch.float64)

        resample = BivariateSpline(domain0, domain1, x, method=method)
        expected = resample(values)

        poisoned = values.masked_fill(~resample.mask, float("nan"))

        torch.testing.assert_close(resample(poisoned), expected)

    @pytest.mark.parametrize("caching", ["eager", "lazy", "manual"])
    def test_caching_policies_agree(self, grid, caching):
        """Test that every caching policy gives the same output."""
        from splider import BivariateSpline

        domain0, domain1 = grid
        x = torch.tensor([[1.5, 0.0], [8.2, 3.1]], dtype=torch.float64)
        values = torch.randn(10, 12, dtype=torch.float64)

        expected = BivariateSpline(
            domain0, domain1, x, method="finite_difference"
        )(values)
        y = BivariateSpline(
            domain0, domain1, x, method="finite_difference", caching=caching
        )(values)

        torch.testing.assert_close(y, expected)

    def test_vector_values(self, grid):
        """Test that trailing value dimensions are interpolated."""
        from splider import BivariateSpline

        domain0, domain1 = grid
        x = torch.tensor([[1.5, 0.0], [8.2, 3.1], [3.3, 1.0]], dtype=torch.float64)
        values = torch.randn(10, 12, 2, dtype=torch.float64)

        resample = BivariateSpline(domain0, domain1, x, method="hermite")
        y = resample(values)

        assert y.shape == (3, 2)
        torch.testing.assert_close(
            y[:, 1],
            BivariateSpline(domain0, domain1, x, method="hermite")(values[..., 1]),
        )

    def test_properties(self, grid):
        """Test the domains and arguments of the queries."""
        from splider import BivariateSpline

        domain0, domain1 = grid
        resample = BivariateSpline(domain0, domain1, [[1.5, 0.0], [8.2, 3.1]])

        assert resample.domains == (domain0, domain1)
        argument0, argument1 = resample.arguments
        assert argument0.index.tolist() == [1, 8]
        assert argument1.index.tolist() == [4, 10]

    def test_query_shape(self, grid):
        """Test that query points must be of shape (m, 2)."""
        from splider import BivariateSpline

        domain0, domain1 = grid

        with pytest.raises(ValueError, match=r"\(m, 2\)"):
            BivariateSpline(domain0, domain1, [1.0, 2.0])

    def test_grid_shape(self, grid):
        """Test that grid values must match both domains."""
        from splider import BivariateSpline

        domain0, domain1 = grid
        resample = BivariateSpline(domain0, domain1, [[1.5, 0.0]])

        with pytest.raises(ValueError, match="grid values"):
            resample(torch.zeros(12, 10))

    def test_out_of_range(self, grid):
        """Test that queries outside the grid raise RangeError."""
        from splider import BivariateSpline, RangeError

        domain0, domain1 = grid

        with pytest.raises(RangeError):
            BivariateSpline(domain0, domain1, [[1.5, 4.0]])

    def test_convenience_function(self):
        """Test that bivariate_spline builds the domains from abscissae."""
        from splider import bivariate_spline

        resample = bivariate_spline(
            [0.0, 1.0, 2.0, 3.0], [0.0, 2.0, 4.0], [[1.5, 3.0]]
        )
        u0 = torch.tensor([0.0, 1.0, 2.0, 3.0], dtype=torch.float64)
        u1 = torch.tensor([0.0, 2.0, 4.0], dtype=torch.float64)

        torch.testing.assert_close(
            resample(u0[:, None] + u1[None, :]),
            torch.tensor([4.5], dtype=torch.float64),
        )
