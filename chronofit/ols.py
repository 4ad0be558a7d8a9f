"""
Ordinary least squares by QR decomposition.

This is the solver behind the time series regression: it takes a
response, a block of predictor columns and an intercept flag, and
exposes the usual estimates and diagnostics.  A design matrix without
full column rank is an error, not something to be worked around.
"""

import logging
import warnings

import numpy as np
from scipy import linalg


logger = logging.getLogger(__name__)


def _as_predictor_matrix(predictors, n):
    """Coerce predictors (None, (n, p) array, or list of columns) to (n, p)."""
    if predictors is None:
        return np.empty((n, 0), dtype=np.float64)
    if isinstance(predictors, np.ndarray) and predictors.ndim == 2:
        X = np.array(predictors, dtype=np.float64)
    else:
        cols = [np.asarray(c, dtype=np.float64) for c in predictors]
        if not cols:
            return np.empty((n, 0), dtype=np.float64)
        if any(c.ndim != 1 for c in cols):
            raise ValueError("Each predictor column must be one-dimensional")
        lengths = {c.size for c in cols}
        if len(lengths) > 1:
            raise ValueError(
                f"Predictor columns have differing lengths: {sorted(lengths)}"
            )
        X = np.column_stack(cols)
    if X.shape[0] != n:
        raise ValueError(
            f"Predictors have {X.shape[0]} rows but the response has {n}"
        )
    return X


def _read_only(arr):
    arr.setflags(write=False)
    return arr


class MultipleLinearRegression:
    """
    Least-squares fit of ``response`` on ``predictors``.

    Parameters
    ----------
    response : array-like of shape (n,)
    predictors : array-like of shape (n, p), sequence of p columns, or None
        ``p`` may be zero.
    has_intercept : bool, default=True
        Prepend a column of ones to the design matrix.

    Raises
    ------
    ValueError
        On missing or mis-shaped inputs.
    numpy.linalg.LinAlgError
        If the design matrix is not of full column rank.
    """

    def __init__(self, response, predictors=None, has_intercept=True):
        if response is None:
            raise ValueError("response must not be None")
        y = np.array(response, dtype=np.float64)
        if y.ndim != 1:
            raise ValueError("response must be one-dimensional")
        n = y.size
        X = _as_predictor_matrix(predictors, n)

        if has_intercept:
            design = np.column_stack([np.ones(n), X])
        else:
            design = X.copy()
        k = design.shape[1]
        logger.debug("OLS fit: n=%d, k=%d, intercept=%s", n, k, has_intercept)

        self._has_intercept = bool(has_intercept)
        self._response = _read_only(y)
        self._predictors = _read_only(X)
        self._design = _read_only(design)
        self._fit(y, design, n, k)

    def _fit(self, y, design, n, k):
        if k > n:
            raise np.linalg.LinAlgError(
                f"Design matrix has {k} columns but only {n} observations"
            )
        if k == 0:
            beta = np.empty(0)
            r_inv = np.empty((0, 0))
        else:
            q, r = np.linalg.qr(design)
            rank = np.linalg.matrix_rank(design)
            if rank < k:
                raise np.linalg.LinAlgError(
                    f"Design matrix is rank deficient (rank {rank} < {k} "
                    f"columns)"
                )
            beta = linalg.solve_triangular(r, q.T @ y)
            r_inv = linalg.solve_triangular(r, np.eye(k))

        fitted = design @ beta if k else np.zeros(n)
        residuals = y - fitted
        df = n - k
        rss = float(residuals @ residuals)
        if df > 0:
            sigma2 = rss / df
        else:
            warnings.warn(
                "No residual degrees of freedom; sigma2 and standard "
                "errors are undefined",
                RuntimeWarning,
                stacklevel=3,
            )
            sigma2 = float('nan')

        # (X'X)^-1 = R^-1 R^-T
        self._xtx_inv = _read_only(r_inv @ r_inv.T)
        self._beta = _read_only(beta)
        self._standard_errors = _read_only(
            np.sqrt(sigma2 * np.diag(self._xtx_inv))
        )
        self._fitted = _read_only(fitted)
        self._residuals = _read_only(residuals)
        self._sigma2 = sigma2
        self._df_residual = df
        self._rss = rss

    # ---- results -----------------------------------------------------------

    @property
    def predictors(self):
        return self._predictors

    @property
    def design_matrix(self):
        return self._design

    @property
    def response(self):
        return self._response

    @property
    def beta(self):
        return self._beta

    @property
    def standard_errors(self):
        return self._standard_errors

    @property
    def fitted(self):
        return self._fitted

    @property
    def residuals(self):
        return self._residuals

    @property
    def sigma2(self):
        return self._sigma2

    @property
    def has_intercept(self):
        return self._has_intercept

    @property
    def df_residual(self):
        return self._df_residual

    @property
    def r_squared(self):
        """
        Coefficient of determination.  Centred when the model has an
        intercept, uncentred otherwise.
        """
        y = self._response
        ss_tot = (float(np.sum((y - y.mean()) ** 2)) if self._has_intercept
                  else float(y @ y))
        return 1.0 - self._rss / ss_tot if ss_tot > 0 else float('nan')

    def covariance(self):
        """Estimated covariance matrix of ``beta``: sigma2 (X'X)^-1."""
        return self._sigma2 * self._xtx_inv

    def unscaled_covariance(self):
        """(X'X)^-1, used for prediction variances."""
        return self._xtx_inv
