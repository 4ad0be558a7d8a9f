"""
Tests for Newton-form interpolation and the explicit polynomials.

Run with:  python -m pytest tests/ -v
Or:        python tests/test_interpolation.py
"""

import numpy as np
import pytest
import sys
import os

# Allow running from repo root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from chronofit import NewtonPolynomial, QuadraticFunction, CubicFunction


def test_rejects_bad_samples():
    """Unequal lengths, empty input and repeated x are invalid."""
    with pytest.raises(ValueError):
        NewtonPolynomial([0.3], [0.4, 1.1])
    with pytest.raises(ValueError):
        NewtonPolynomial([], [])
    with pytest.raises(ValueError):
        NewtonPolynomial([1.0, 2.0, 1.0], [3.0, 4.0, 5.0])
    with pytest.raises(ValueError):
        NewtonPolynomial(None, [1.0])
    print("  PASS: Invalid samples rejected")


def test_single_point_coefficient_is_value():
    np_ = NewtonPolynomial([2.0], [4.0])
    assert np_.get_coefficient(0) == 4.0
    assert np_.evaluate_at(100.0) == 4.0
    print("  PASS: One point gives a constant")


def test_two_points_give_slope():
    """The first-order divided difference is the secant slope."""
    poly = NewtonPolynomial([2.0, 3.0], [4.0, 9.0])
    assert poly.get_coefficient(0) == 4.0
    assert poly.get_coefficient(1) == 5.0
    print("  PASS: Two-point slope")


def test_quadratic_divided_differences():
    poly = NewtonPolynomial([2.0, 4.0, 7.0], [4.0, 16.0, 49.0])
    assert poly.coefficients().tolist() == [4.0, 6.0, 1.0]
    assert poly.evaluate_at(3.0) == 9.0
    assert poly(3.0) == 9.0
    assert poly.degree == 2
    print("  PASS: y = x^2 divided differences")


def test_cubic_divided_differences():
    poly = NewtonPolynomial([1.0, 2.0, 3.0, 4.0], [1.0, 8.0, 27.0, 64.0])
    assert [poly.get_coefficient(k) for k in range(4)] == [1.0, 7.0, 6.0, 1.0]
    print("  PASS: y = x^3 divided differences")


def test_coefficient_index_out_of_range():
    poly = NewtonPolynomial([1.0, 2.0, 3.0], [1.0, 4.0, 9.0])
    with pytest.raises(IndexError):
        poly.get_coefficient(3)
    with pytest.raises(IndexError):
        poly.get_coefficient(-1)
    print("  PASS: Coefficient index bounds")


def test_passes_through_sample_points():
    rng = np.random.RandomState(7)
    x = np.sort(rng.uniform(-3, 3, 6))
    y = rng.randn(6)
    poly = NewtonPolynomial(x, y)

    for xi, yi in zip(x, y):
        assert abs(poly.evaluate_at(xi) - yi) < 1e-9
    np.testing.assert_allclose(poly.evaluate_at(x), y, atol=1e-9)
    print("  PASS: Interpolant reproduces its samples")


def test_to_quadratic():
    poly = NewtonPolynomial([2.0, 4.0, 7.0], [4.0, 16.0, 49.0])
    quad = poly.to_quadratic()
    assert quad.coefficients().tolist() == [1.0, 0.0, 0.0]
    assert quad == QuadraticFunction(1.0, 0.0, 0.0)
    print("  PASS: Conversion to quadratic")


def test_to_cubic_with_unsorted_points():
    poly = NewtonPolynomial([4.0, 2.0, 5.0, 7.0], [64.0, 8.0, 125.0, 343.0])
    cubic = poly.to_cubic()
    assert cubic.coefficients().tolist() == [1.0, 0.0, 0.0, 0.0]
    print("  PASS: Conversion to cubic")


def test_degree_mismatch_is_illegal_state():
    linear = NewtonPolynomial([0.4, 1.1], [0.8, 2.2])
    with pytest.raises(RuntimeError):
        linear.to_quadratic()

    quadratic = NewtonPolynomial([1.0, 3.0, 5.0], [1.0, 9.0, 25.0])
    with pytest.raises(RuntimeError):
        quadratic.to_cubic()

    cubic = NewtonPolynomial([1.0, 2.0, 3.0, 4.0], [1.0, 8.0, 27.0, 64.0])
    with pytest.raises(RuntimeError):
        cubic.to_quadratic()
    print("  PASS: Degree-mismatched conversions refused")


def test_lower_degree_samples_are_illegal_state():
    """Samples on a lower-degree curve have no leading coefficient."""
    collinear = NewtonPolynomial([1.0, 2.0, 3.0], [2.0, 4.0, 6.0])
    assert collinear.get_coefficient(2) == 0.0
    with pytest.raises(RuntimeError):
        collinear.to_quadratic()

    on_parabola = NewtonPolynomial([1.0, 2.0, 3.0, 4.0], [1.0, 4.0, 9.0, 16.0])
    assert on_parabola.get_coefficient(3) == 0.0
    with pytest.raises(RuntimeError):
        on_parabola.to_cubic()
    print("  PASS: Lower-degree samples refused")


def test_equality_and_hash():
    np1 = NewtonPolynomial([2.0, 4.0, 7.0], [4.0, 16.0, 49.0])
    np2 = NewtonPolynomial([1.0, 2.0, 3.0, 4.0], [1.0, 8.0, 27.0, 64.0])
    np1_again = NewtonPolynomial([2.0, 4.0, 7.0], [4.0, 16.0, 49.0])

    assert np1 == np1
    assert np1 == np1_again
    assert hash(np1) == hash(np1_again)
    assert np1 != np2
    assert np2 != np1
    assert hash(np1) != hash(np2)
    assert not np1 == None  # noqa: E711
    assert len({np1, np1_again, np2}) == 2
    print("  PASS: Equality and hashing")


def test_quadratic_function_helpers():
    f = QuadraticFunction(1.0, -4.0, 3.0)
    assert f.extremum_point() == 2.0
    assert f.extremum_value() == -1.0
    assert f.has_minimum() and not f.has_maximum()
    assert f.real_roots().tolist() == [1.0, 3.0]
    assert f.slope_at(2.0) == 0.0
    assert QuadraticFunction(1.0, 0.0, 1.0).real_roots().size == 0
    with pytest.raises(ValueError):
        QuadraticFunction(0.0, 1.0, 1.0)
    print("  PASS: Quadratic helpers")


def test_cubic_function_helpers():
    f = CubicFunction(1.0, 0.0, -3.0, 0.0)
    assert f.critical_points().tolist() == [-1.0, 1.0]
    assert f.local_extrema() == [(-1.0, 2.0), (1.0, -2.0)]
    assert f.derivative() == QuadraticFunction(3.0, 0.0, -3.0)
    # x^3 has an inflection point, not an extremum
    assert CubicFunction(1.0, 0.0, 0.0, 0.0).local_extrema() == []
    with pytest.raises(ValueError):
        CubicFunction(0.0, 1.0, 1.0, 1.0)
    print("  PASS: Cubic helpers")


if __name__ == '__main__':
    print("=" * 60)
    print("Interpolation: Test Suite")
    print("=" * 60)
    print()

    tests = [
        test_rejects_bad_samples,
        test_single_point_coefficient_is_value,
        test_two_points_give_slope,
        test_quadratic_divided_differences,
        test_cubic_divided_differences,
        test_coefficient_index_out_of_range,
        test_passes_through_sample_points,
        test_to_quadratic,
        test_to_cubic_with_unsorted_points,
        test_degree_mismatch_is_illegal_state,
        test_lower_degree_samples_are_illegal_state,
        test_equality_and_hash,
        test_quadratic_function_helpers,
        test_cubic_function_helpers,
    ]

    passed = 0
    failed = 0
    for test in tests:
        try:
            test()
            passed += 1
        except AssertionError as e:
            print(f"  FAIL: {test.__name__}: {e}")
            failed += 1
        except Exception as e:
            print(f"  ERROR: {test.__name__}: {type(e).__name__}: {e}")
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed "
          f"out of {len(tests)} tests")
    print("=" * 60)
