"""
Newton-form polynomial interpolation by divided differences, and the
explicit quadratic / cubic functions a Newton polynomial converts to.
"""

import math

import numpy as np


# ---------------------------------------------------------------------------
# Newton polynomial
# ---------------------------------------------------------------------------

class NewtonPolynomial:
    """
    The unique polynomial of degree <= n-1 through n points, held in
    Newton form.

    Parameters
    ----------
    points : array-like of shape (n,)
        Distinct x-coordinates, in any order.  The order fixes the Newton
        basis (x - x0)(x - x1)...
    values : array-like of shape (n,)
        Function values at ``points``.

    Notes
    -----
    The divided differences are stored in one flat block of n(n+1)/2
    entries.  Order k occupies n-k consecutive slots starting at
    ``k*n - k*(k-1)/2``; slot ``i`` of that run is f[x_i, ..., x_{i+k}].
    The Newton coefficients are the first slot of each order.
    """

    def __init__(self, points, values):
        if points is None or values is None:
            raise ValueError("points and values must not be None")
        x = np.array(points, dtype=np.float64)
        y = np.array(values, dtype=np.float64)
        if x.ndim != 1 or y.ndim != 1:
            raise ValueError("points and values must be one-dimensional")
        if x.size != y.size:
            raise ValueError(
                f"points and values must have the same length, "
                f"got {x.size} and {y.size}"
            )
        if x.size == 0:
            raise ValueError("At least one point is required")
        if np.unique(x).size != x.size:
            raise ValueError("points must be pairwise distinct")

        x.setflags(write=False)
        y.setflags(write=False)
        self._points = x
        self._values = y
        self._table = self._divided_differences(x, y)

    @staticmethod
    def _offset(order, n):
        return order * n - order * (order - 1) // 2

    @classmethod
    def _divided_differences(cls, x, y):
        n = x.size
        table = np.empty(n * (n + 1) // 2, dtype=np.float64)
        table[:n] = y
        for k in range(1, n):
            prev = cls._offset(k - 1, n)
            cur = cls._offset(k, n)
            for i in range(n - k):
                table[cur + i] = ((table[prev + i + 1] - table[prev + i])
                                  / (x[i + k] - x[i]))
        return table

    # ---- accessors -------------------------------------------------------

    @property
    def points(self):
        return self._points

    @property
    def values(self):
        return self._values

    @property
    def degree(self):
        """Upper bound on the degree: one less than the number of points."""
        return self._points.size - 1

    def __len__(self):
        return self._points.size

    def get_coefficient(self, k):
        """
        Return the k-th Newton coefficient f[x0, ..., xk].

        Raises
        ------
        IndexError
            If ``k`` is outside ``[0, n)``.
        """
        n = self._points.size
        if k < 0 or k >= n:
            raise IndexError(
                f"Coefficient index {k} out of range for {n} point(s)"
            )
        return float(self._table[self._offset(k, n)])

    def coefficients(self):
        """All Newton coefficients, lowest order first."""
        return np.array([self.get_coefficient(k) for k in range(len(self))])

    # ---- evaluation ------------------------------------------------------

    def evaluate_at(self, x):
        """
        Evaluate the polynomial at ``x`` by nested multiplication.

        ``x`` may be a scalar or an array; arrays are evaluated
        elementwise.
        """
        c = self.coefficients()
        pts = self._points
        scalar = np.ndim(x) == 0
        xv = np.asarray(x, dtype=np.float64)

        result = c[-1] + np.zeros_like(xv)
        for k in range(len(c) - 2, -1, -1):
            result = result * (xv - pts[k]) + c[k]
        return float(result) if scalar else result

    def __call__(self, x):
        return self.evaluate_at(x)

    # ---- conversion ------------------------------------------------------

    def to_quadratic(self):
        """
        Expand into ``a*x**2 + b*x + c``.

        Raises
        ------
        RuntimeError
            Unless the polynomial was built from exactly three points,
            or when the points lie on a polynomial of lower degree.
        """
        if len(self) != 3:
            raise RuntimeError(
                f"A quadratic needs exactly 3 points; this polynomial "
                f"has {len(self)}"
            )
        x0, x1 = self._points[0], self._points[1]
        c0, c1, c2 = self.coefficients()
        if c2 == 0:
            raise RuntimeError(
                "A quadratic needs a non-zero leading coefficient; these "
                "points lie on a line"
            )
        a = c2
        b = c1 - c2 * (x0 + x1)
        c = c0 - c1 * x0 + c2 * x0 * x1
        return QuadraticFunction(a, b, c)

    def to_cubic(self):
        """
        Expand into ``a*x**3 + b*x**2 + c*x + d``.

        Raises
        ------
        RuntimeError
            Unless the polynomial was built from exactly four points,
            or when the points lie on a polynomial of lower degree.
        """
        if len(self) != 4:
            raise RuntimeError(
                f"A cubic needs exactly 4 points; this polynomial "
                f"has {len(self)}"
            )
        x0, x1, x2 = self._points[0], self._points[1], self._points[2]
        c0, c1, c2, c3 = self.coefficients()
        if c3 == 0:
            raise RuntimeError(
                "A cubic needs a non-zero leading coefficient; these "
                "points lie on a polynomial of degree 2 or less"
            )
        a = c3
        b = c2 - c3 * (x0 + x1 + x2)
        c = c1 - c2 * (x0 + x1) + c3 * (x0 * x1 + x0 * x2 + x1 * x2)
        d = c0 - c1 * x0 + c2 * x0 * x1 - c3 * x0 * x1 * x2
        return CubicFunction(a, b, c, d)

    # ---- identity --------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, NewtonPolynomial):
            return NotImplemented
        return (np.array_equal(self._points, other._points)
                and np.array_equal(self._values, other._values))

    def __hash__(self):
        return hash((tuple(self._points.tolist()),
                     tuple(self._values.tolist())))

    def __repr__(self):
        return (f"NewtonPolynomial(points={self._points.tolist()}, "
                f"values={self._values.tolist()})")


# ---------------------------------------------------------------------------
# Explicit polynomials
# ---------------------------------------------------------------------------

class QuadraticFunction:
    """f(x) = a*x**2 + b*x + c with a != 0."""

    __slots__ = ('_a', '_b', '_c')

    def __init__(self, a, b, c):
        if a == 0:
            raise ValueError("The leading coefficient of a quadratic "
                             "must be non-zero")
        self._a = float(a)
        self._b = float(b)
        self._c = float(c)

    @property
    def a(self):
        return self._a

    @property
    def b(self):
        return self._b

    @property
    def c(self):
        return self._c

    def coefficients(self):
        """Coefficients, leading term first."""
        return np.array([self._a, self._b, self._c])

    def evaluate_at(self, x):
        return (self._a * x + self._b) * x + self._c

    def __call__(self, x):
        return self.evaluate_at(x)

    def slope_at(self, x):
        return 2.0 * self._a * x + self._b

    def extremum_point(self):
        """x-coordinate of the vertex."""
        return -self._b / (2.0 * self._a)

    def extremum_value(self):
        return self.evaluate_at(self.extremum_point())

    def has_minimum(self):
        return self._a > 0

    def has_maximum(self):
        return self._a < 0

    def real_roots(self):
        """Real zeros, ascending; empty when the discriminant is negative."""
        disc = self._b * self._b - 4.0 * self._a * self._c
        if disc < 0:
            return np.array([])
        if disc == 0:
            return np.array([self.extremum_point()])
        root = math.sqrt(disc)
        # avoid cancellation between -b and the square root
        q = -0.5 * (self._b + math.copysign(root, self._b))
        r1 = q / self._a
        r2 = self._c / q if q != 0 else -r1
        return np.sort(np.array([r1, r2]))

    def __eq__(self, other):
        if not isinstance(other, QuadraticFunction):
            return NotImplemented
        return (self._a, self._b, self._c) == (other._a, other._b, other._c)

    def __hash__(self):
        return hash((self._a, self._b, self._c))

    def __repr__(self):
        return f"QuadraticFunction(a={self._a}, b={self._b}, c={self._c})"


class CubicFunction:
    """f(x) = a*x**3 + b*x**2 + c*x + d with a != 0."""

    __slots__ = ('_a', '_b', '_c', '_d')

    def __init__(self, a, b, c, d):
        if a == 0:
            raise ValueError("The leading coefficient of a cubic "
                             "must be non-zero")
        self._a = float(a)
        self._b = float(b)
        self._c = float(c)
        self._d = float(d)

    @property
    def a(self):
        return self._a

    @property
    def b(self):
        return self._b

    @property
    def c(self):
        return self._c

    @property
    def d(self):
        return self._d

    def coefficients(self):
        """Coefficients, leading term first."""
        return np.array([self._a, self._b, self._c, self._d])

    def evaluate_at(self, x):
        return ((self._a * x + self._b) * x + self._c) * x + self._d

    def __call__(self, x):
        return self.evaluate_at(x)

    def derivative(self):
        return QuadraticFunction(3.0 * self._a, 2.0 * self._b, self._c)

    def slope_at(self, x):
        return self.derivative().evaluate_at(x)

    def critical_points(self):
        """Real zeros of the derivative, ascending."""
        return self.derivative().real_roots()

    def local_extrema(self):
        """
        ``(x, f(x))`` pairs at the local extrema.

        A cubic whose derivative has a double root has an inflection
        point there and no extrema, so only distinct critical points
        count.
        """
        crit = self.critical_points()
        if crit.size < 2:
            return []
        return [(float(x), float(self.evaluate_at(x))) for x in crit]

    def __eq__(self, other):
        if not isinstance(other, CubicFunction):
            return NotImplemented
        return ((self._a, self._b, self._c, self._d)
                == (other._a, other._b, other._c, other._d))

    def __hash__(self):
        return hash((self._a, self._b, self._c, self._d))

    def __repr__(self):
        return (f"CubicFunction(a={self._a}, b={self._b}, c={self._c}, "
                f"d={self._d})")
