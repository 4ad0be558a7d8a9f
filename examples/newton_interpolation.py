"""
Example: Newton divided-difference interpolation
=================================================
Builds the interpolating polynomial through a handful of samples,
evaluates it between them, and converts a 4-point fit to explicit cubic
form to locate its turning points.
"""

import numpy as np

# If running from the repo root (not pip-installed), uncomment:
# import sys; sys.path.insert(0, '..')

from chronofit import NewtonPolynomial

# ------------------------------------------------------------------
# 1.  Samples of f(x) = x^3 - 6x^2 + 9x + 1
# ------------------------------------------------------------------
x = np.array([0.0, 1.0, 2.5, 4.0])
y = x ** 3 - 6 * x ** 2 + 9 * x + 1

poly = NewtonPolynomial(x, y)
print("Newton coefficients:", poly.coefficients())

# ------------------------------------------------------------------
# 2.  Evaluate between the samples
# ------------------------------------------------------------------
grid = np.linspace(0, 4, 9)
for xi, yi in zip(grid, poly(grid)):
    print(f"  p({xi:4.1f}) = {yi:8.4f}")

# ------------------------------------------------------------------
# 3.  Explicit cubic form and its extrema
# ------------------------------------------------------------------
cubic = poly.to_cubic()
print("\nMonomial coefficients (a, b, c, d):", cubic.coefficients())
for xc, value in cubic.local_extrema():
    print(f"  extremum at x={xc:.4f}, f(x)={value:.4f}")
