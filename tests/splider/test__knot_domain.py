"""Tests for knot domains and interval lookup."""

import pytest
import torch


class TestKnotDomain:
    def test_returns_knot_domain(self):
        """Test that knot_domain returns a KnotDomain tensorclass."""
        from splider import KnotDomain, knot_domain

        domain = knot_domain(torch.tensor([1.0, 2.0, 4.0], dtype=torch.float64))

        assert isinstance(domain, KnotDomain)
        assert domain.size == 3
        assert not domain.is_even
        torch.testing.assert_close(
            domain.lengths, torch.tensor([1.0, 2.0], dtype=torch.float64)
        )
        torch.testing.assert_close(
            domain.length(1), torch.tensor(2.0, dtype=torch.float64)
        )

    def test_sequence_input_is_float64(self):
        """Test that Python sequences and integer tensors become float64."""
        from splider import knot_domain

        assert knot_domain([1, 2, 3]).knots.dtype == torch.float64
        assert knot_domain(torch.arange(4)).knots.dtype == torch.float64

    def test_float32_is_preserved(self):
        """Test that floating point knots keep their dtype."""
        from splider import knot_domain

        domain = knot_domain(torch.tensor([0.0, 1.0, 2.0]))

        assert domain.knots.dtype == torch.float32

    def test_too_few_knots(self):
        """Test that fewer than 3 knots raise DomainError."""
        from splider import DomainError, knot_domain

        with pytest.raises(DomainError):
            knot_domain([1.0, 2.0])

    @pytest.mark.parametrize(
        "knots",
        [
            [1.0, 3.0, 2.0, 4.0],
            [1.0, 2.0, 2.0, 4.0],
            [4.0, 3.0, 2.0, 1.0],
        ],
    )
    def test_not_strictly_increasing(self, knots):
        """Test that non-increasing knots raise DomainError."""
        from splider import DomainError, knot_domain

        with pytest.raises(DomainError, match="strictly increasing"):
            knot_domain(knots)

    def test_not_one_dimensional(self):
        """Test that 2D knots raise DomainError."""
        from splider import DomainError, knot_domain

        with pytest.raises(DomainError):
            knot_domain(torch.zeros(3, 3))

    def test_domain_error_is_spline_error(self):
        """Test the exception hierarchy."""
        from splider import DomainError, RangeError, SplineError, StaleCacheError

        assert issubclass(DomainError, SplineError)
        assert issubclass(RangeError, SplineError)
        assert issubclass(StaleCacheError, SplineError)

    def test_is_uniform(self):
        """Test uniformity detection of general domains."""
        from splider import knot_domain

        assert knot_domain(torch.linspace(0, 1, 11, dtype=torch.float64)).is_uniform()
        assert not knot_domain([1.0, 10.0, 100.0, 1000.0]).is_uniform()


class TestKnotDomainLinspace:
    def test_even_domain(self):
        """Test evenly spaced construction."""
        from splider import knot_domain_linspace

        domain = knot_domain_linspace(1.0, 0.5, 5)

        assert domain.is_even
        assert domain.is_uniform()
        torch.testing.assert_close(
            domain.knots,
            torch.tensor([1.0, 1.5, 2.0, 2.5, 3.0], dtype=torch.float64),
        )

    def test_dtype(self):
        """Test the dtype option."""
        from splider import knot_domain_linspace

        domain = knot_domain_linspace(0.0, 1.0, 4, dtype=torch.float32)

        assert domain.knots.dtype == torch.float32
        assert domain.lengths.dtype == torch.float32

    @pytest.mark.parametrize("step,size", [(0.0, 5), (-1.0, 5), (1.0, 2)])
    def test_invalid(self, step, size):
        """Test that a non-positive step or too few knots raise DomainError."""
        from splider import DomainError, knot_domain_linspace

        with pytest.raises(DomainError):
            knot_domain_linspace(0.0, step, size)


class TestKnotDomainIndex:
    @pytest.mark.parametrize("even", [False, True])
    def test_knot_queries(self, even):
        """Test lookup at the knots, the last knot belonging to the last interval."""
        from splider import knot_domain, knot_domain_index, knot_domain_linspace

        if even:
            domain = knot_domain_linspace(1.0, 1.0, 4)
        else:
            domain = knot_domain([1.0, 2.0, 3.0, 4.0])

        x = torch.tensor([1.0, 2.0, 3.0, 4.0], dtype=torch.float64)

        index = knot_domain_index(domain, x)

        assert index.tolist() == [0, 1, 2, 2]

    @pytest.mark.parametrize("even", [False, True])
    @pytest.mark.parametrize("x", [0.9, 4.1, float("nan")])
    def test_out_of_range(self, even, x):
        """Test that queries outside the domain raise RangeError."""
        from splider import (
            RangeError,
            knot_domain,
            knot_domain_index,
            knot_domain_linspace,
        )

        if even:
            domain = knot_domain_linspace(1.0, 1.0, 4)
        else:
            domain = knot_domain([1.0, 2.0, 3.0, 4.0])

        with pytest.raises(RangeError):
            knot_domain_index(domain, x)

    def test_scalar_query(self):
        """Test that a scalar query gives a 0-d index."""
        from splider import knot_domain, knot_domain_index

        index = knot_domain_index(knot_domain([1.0, 2.0, 3.0, 4.0]), 2.5)

        assert index.shape == ()
        assert index.item() == 1

    def test_query_shape_is_preserved(self):
        """Test lookup over a batch of queries."""
        from splider import knot_domain, knot_domain_index

        domain = knot_domain([0.0, 1.0, 3.0, 6.0])
        x = torch.tensor([[0.5, 2.0], [5.0, 6.0]], dtype=torch.float64)

        index = knot_domain_index(domain, x)

        assert index.shape == (2, 2)
        assert index.tolist() == [[0, 1], [2, 2]]

    @pytest.mark.parametrize("even", [False, True])
    def test_bracketing(self, even):
        """Test that u[i] <= x <= u[i+1] for random queries."""
        from splider import knot_domain, knot_domain_index, knot_domain_linspace

        torch.manual_seed(0)
        if even:
            domain = knot_domain_linspace(-1.0, 0.1, 21)
        else:
            knots = torch.cumsum(torch.rand(20, dtype=torch.float64) + 0.01, 0)
            domain = knot_domain(knots)

        u = domain.knots
        x = u[0] + (u[-1] - u[0]) * torch.rand(1000, dtype=torch.float64)
        x = torch.cat([x, u])

        index = knot_domain_index(domain, x)

        assert torch.all(index >= 0)
        assert torch.all(index <= domain.size - 2)
        assert torch.all(u[index] <= x)
        assert torch.all(x <= u[index + 1])

    def test_even_matches_general(self):
        """Test that the constant time lookup agrees with the search."""
        from splider import knot_domain, knot_domain_index, knot_domain_linspace

        even = knot_domain_linspace(0.0, 0.1, 11)
        general = knot_domain(even.knots)
        u = even.knots
        x = torch.cat([u[:-1] + 0.25 * even.lengths, u[:-1] + 0.75 * even.lengths])

        torch.testing.assert_close(
            knot_domain_index(even, x), knot_domain_index(general, x)
        )
