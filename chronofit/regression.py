"""
Linear regression for time series.

The response is regressed on any external predictors the caller
supplies, optionally followed by a linear time trend (1, 2, ..., n) and
a block of seasonal dummy variables.  Coefficients come back in exactly
that column order, after the intercept when one is included.

Usage
-----
>>> model = (TimeSeriesLinearRegression.builder()
...          .response(series)
...          .external_regressors(price, promo)
...          .seasonal(Seasonal.INCLUDE)
...          .build())
>>> model.beta
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
import pandas as pd
from scipy import stats

from .ols import MultipleLinearRegression
from .timeseries import TimePeriod, TimeSeries


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Model options
# ---------------------------------------------------------------------------

class _Indicator(Enum):

    def include(self):
        return self is type(self).INCLUDE

    @classmethod
    def coerce(cls, flag):
        """Accept a member of this enum or a plain bool."""
        if isinstance(flag, cls):
            return flag
        if isinstance(flag, (bool, np.bool_)):
            return cls.INCLUDE if flag else cls.EXCLUDE
        raise ValueError(
            f"Expected {cls.__name__} or bool, got {flag!r}"
        )


class Intercept(_Indicator):
    """Whether the model has an intercept."""
    INCLUDE = 'include'
    EXCLUDE = 'exclude'


class TimeTrend(_Indicator):
    """Whether the model has a linear time trend."""
    INCLUDE = 'include'
    EXCLUDE = 'exclude'


class Seasonal(_Indicator):
    """Whether the model has seasonal dummy variables."""
    INCLUDE = 'include'
    EXCLUDE = 'exclude'


@dataclass(frozen=True, eq=False)
class RegressionConfig:
    """
    Everything needed to fit a :class:`TimeSeriesLinearRegression`.

    Compared and hashed by identity, since the columns are arrays.

    ``predictors`` and ``predictor_names`` are parallel tuples of
    external regressor columns and their labels, in the order supplied.
    """
    response: TimeSeries = None
    predictors: tuple = ()
    predictor_names: tuple = ()
    intercept: Intercept = Intercept.INCLUDE
    time_trend: TimeTrend = TimeTrend.INCLUDE
    seasonal: Seasonal = Seasonal.EXCLUDE
    seasonal_cycle: TimePeriod = field(default_factory=TimePeriod.one_year)


# ---------------------------------------------------------------------------
# Design columns
# ---------------------------------------------------------------------------

def trend_column(n, start=1):
    """The linear trend basis start, start+1, ..., start+n-1 as floats."""
    return np.arange(start, start + n, dtype=np.float64)


def seasonal_dummies(n, frequency, offset=0):
    """
    Dummy-encode the position within a seasonal cycle.

    Column ``i - 1`` (for i = 1 .. frequency-1) is 1.0 at every row whose
    index (plus ``offset``) is congruent to i modulo ``frequency``.  Rows
    congruent to 0 are the reference level and have no column.  A
    trailing partial cycle just has fewer ones.

    Returns
    -------
    np.ndarray of shape (n, frequency - 1)
    """
    if frequency < 1:
        raise ValueError(f"Seasonal frequency must be >= 1, got {frequency}")
    position = (np.arange(n) + offset) % frequency
    block = np.zeros((n, frequency - 1), dtype=np.float64)
    for i in range(1, frequency):
        block[position == i, i - 1] = 1.0
    return block


def _seasonal_frequency(response, seasonal_cycle):
    return int(response.time_period.frequency_per(seasonal_cycle))


def _split_columns(columns):
    """
    Flatten the arguments of ``external_regressors`` into (columns, names).

    Names are ``None`` where the input carried none.
    """
    cols, names = [], []
    for item in columns:
        if item is None:
            raise ValueError("Regressor columns must not be None")
        if isinstance(item, pd.DataFrame):
            for name in item.columns:
                cols.append(item[name].to_numpy(dtype=np.float64))
                names.append(str(name))
        elif isinstance(item, pd.Series):
            cols.append(item.to_numpy(dtype=np.float64))
            names.append(None if item.name is None else str(item.name))
        elif isinstance(item, TimeSeries):
            cols.append(np.array(item.as_array()))
            names.append(item.name)
        else:
            arr = np.array(item, dtype=np.float64)
            if arr.ndim == 1:
                cols.append(arr)
                names.append(None)
            elif arr.ndim == 2:
                # (n, p): each column is one regressor
                for j in range(arr.shape[1]):
                    cols.append(arr[:, j].copy())
                    names.append(None)
            else:
                raise ValueError(
                    f"Regressors must be 1-D or 2-D, got shape {arr.shape}"
                )
    return cols, names


# ---------------------------------------------------------------------------
# Fitting
# ---------------------------------------------------------------------------

def fit_time_series_regression(config):
    """
    Assemble the design matrix described by ``config`` and solve it.

    Raises
    ------
    ValueError
        If no response is set, if external regressors do not match the
        response length, or if the seasonal cycle is shorter than the
        sampling period.
    numpy.linalg.LinAlgError
        Propagated from the solver for a rank-deficient design.
    """
    response = config.response
    if response is None:
        raise ValueError("A response series is required: call "
                         "response(...) before build()")
    n = len(response)

    columns = [np.asarray(col, dtype=np.float64) for col in config.predictors]
    labels = list(config.predictor_names)
    labels += [None] * (len(columns) - len(labels))
    names = [name if name is not None else f"X{j}"
             for j, name in enumerate(labels)]
    for j, col in enumerate(columns):
        if col.size != n:
            raise ValueError(
                f"Regressor {names[j]!r} has {col.size} rows but the "
                f"response has {n}"
            )
    n_external = len(columns)

    if config.time_trend.include():
        columns.append(trend_column(n))
        names.append('time_trend')

    frequency = None
    if config.seasonal.include():
        frequency = _seasonal_frequency(response, config.seasonal_cycle)
        if frequency < 1:
            raise ValueError(
                f"Seasonal cycle {config.seasonal_cycle!r} is shorter than "
                f"the series period {response.time_period!r}"
            )
        if frequency == 1:
            logger.warning("Seasonal frequency is 1; no seasonal dummies "
                           "will be added")
        block = seasonal_dummies(n, frequency)
        for i in range(block.shape[1]):
            columns.append(block[:, i])
            names.append(f"season_{i + 2}")

    logger.debug("Design: n=%d, external=%d, trend=%s, seasonal "
                 "frequency=%s", n, n_external,
                 config.time_trend.include(), frequency)

    solver = MultipleLinearRegression(
        response.as_array(), columns, config.intercept.include()
    )
    return TimeSeriesLinearRegression(
        solver, response, names, n_external,
        config.time_trend.include(), frequency,
    )


class TimeSeriesRegressionBuilder:
    """
    Collects the pieces of a time series regression before fitting.

    All setters return the builder so calls can be chained.  Calling
    :meth:`build` does not change the builder.
    """

    def __init__(self):
        self._columns = []
        self._names = []
        self._response = None
        self._intercept = Intercept.INCLUDE
        self._time_trend = TimeTrend.INCLUDE
        self._seasonal = Seasonal.EXCLUDE
        self._seasonal_cycle = TimePeriod.one_year()

    def external_regressors(self, *columns):
        """
        Append predictor columns.  Earlier columns are kept.

        Each argument may be a 1-D array-like (one column), a 2-D array
        of shape (n, p) (p columns), a ``pandas.Series`` or a
        ``pandas.DataFrame``; pandas labels become coefficient names.
        The first column added fixes the row count.
        """
        new_cols, new_names = _split_columns(columns)
        if not new_cols:
            return self

        rows = self._columns[0].size if self._columns else new_cols[0].size
        for col in new_cols:
            if col.size != rows:
                raise ValueError(
                    f"Regressor column has {col.size} rows, expected {rows}"
                )
        self._columns.extend(new_cols)
        self._names.extend(new_names)
        return self

    def response(self, series):
        """Set the dependent variable (``TimeSeries`` or ``pandas.Series``)."""
        if series is None:
            raise ValueError("response must not be None")
        if isinstance(series, pd.Series):
            series = TimeSeries.from_pandas(series)
        if not isinstance(series, TimeSeries):
            raise ValueError(
                f"response must be a TimeSeries or pandas Series, "
                f"got {type(series).__name__}"
            )
        self._response = series
        return self

    def has_intercept(self, intercept):
        self._intercept = Intercept.coerce(intercept)
        return self

    def time_trend(self, time_trend):
        self._time_trend = TimeTrend.coerce(time_trend)
        return self

    def seasonal(self, seasonal):
        self._seasonal = Seasonal.coerce(seasonal)
        return self

    def seasonal_cycle(self, seasonal_cycle):
        """Length of one full seasonal pattern; one year by default."""
        if not isinstance(seasonal_cycle, TimePeriod):
            raise ValueError(
                f"seasonal_cycle must be a TimePeriod, got {seasonal_cycle!r}"
            )
        self._seasonal_cycle = seasonal_cycle
        return self

    def config(self):
        """Snapshot the current settings."""
        return RegressionConfig(
            response=self._response,
            predictors=tuple(c.copy() for c in self._columns),
            predictor_names=tuple(self._names),
            intercept=self._intercept,
            time_trend=self._time_trend,
            seasonal=self._seasonal,
            seasonal_cycle=self._seasonal_cycle,
        )

    def build(self):
        return fit_time_series_regression(self.config())


# ---------------------------------------------------------------------------
# Fitted model
# ---------------------------------------------------------------------------

class TimeSeriesLinearRegression:
    """
    A fitted time series regression.

    Instances come from :meth:`builder` or
    :func:`fit_time_series_regression`; the estimates are those of the
    underlying :class:`~chronofit.ols.MultipleLinearRegression`.
    """

    def __init__(self, solver, response, predictor_names, n_external,
                 has_trend, seasonal_frequency):
        self._solver = solver
        self._series = response
        self._predictor_names = tuple(predictor_names)
        self._n_external = n_external
        self._has_trend = has_trend
        self._seasonal_frequency = seasonal_frequency

    @staticmethod
    def builder():
        return TimeSeriesRegressionBuilder()

    # ---- solver pass-through ---------------------------------------------

    @property
    def predictors(self):
        return self._solver.predictors

    @property
    def design_matrix(self):
        return self._solver.design_matrix

    @property
    def response(self):
        return self._solver.response

    @property
    def beta(self):
        return self._solver.beta

    @property
    def standard_errors(self):
        return self._solver.standard_errors

    @property
    def fitted(self):
        return self._solver.fitted

    @property
    def residuals(self):
        return self._solver.residuals

    @property
    def sigma2(self):
        return self._solver.sigma2

    @property
    def has_intercept(self):
        return self._solver.has_intercept

    # ---- model description -----------------------------------------------

    @property
    def time_series(self):
        return self._series

    @property
    def seasonal_frequency(self):
        """Observations per seasonal cycle, or None without seasonality."""
        return self._seasonal_frequency

    @property
    def coefficient_names(self):
        """Labels for ``beta``, in the same order."""
        names = list(self._predictor_names)
        if self.has_intercept:
            names.insert(0, 'intercept')
        return names

    def fitted_series(self):
        return TimeSeries(self.fitted, self._series.time_period,
                          name='fitted')

    def residual_series(self):
        return TimeSeries(self.residuals, self._series.time_period,
                          name='residuals')

    # ---- forecasting -----------------------------------------------------

    def _future_design(self, steps, external_regressors):
        if int(steps) != steps or steps < 1:
            raise ValueError(f"steps must be a positive integer, got {steps}")
        steps = int(steps)
        n = len(self._series)
        cols = []

        if self._n_external:
            if not external_regressors:
                raise ValueError(
                    f"The model has {self._n_external} external "
                    f"regressor(s); their future values are required"
                )
            future, _ = _split_columns(external_regressors)
            if len(future) != self._n_external:
                raise ValueError(
                    f"Expected {self._n_external} future regressor "
                    f"column(s), got {len(future)}"
                )
            for col in future:
                if col.size != steps:
                    raise ValueError(
                        f"Future regressor has {col.size} rows, expected "
                        f"{steps}"
                    )
            cols.extend(future)
        elif external_regressors:
            raise ValueError("The model has no external regressors")

        if self._has_trend:
            cols.append(trend_column(steps, start=n + 1))
        if self._seasonal_frequency is not None:
            block = seasonal_dummies(steps, self._seasonal_frequency,
                                     offset=n)
            cols.extend(block[:, i] for i in range(block.shape[1]))

        if self.has_intercept:
            cols.insert(0, np.ones(steps))
        if not cols:
            return np.empty((steps, 0))
        return np.column_stack(cols)

    def forecast(self, steps, *external_regressors):
        """
        Point forecasts for the ``steps`` periods after the sample.

        The trend and seasonal position carry on from the end of the
        response.  Future values of external regressors must be given,
        with ``steps`` rows, in any of the forms ``external_regressors``
        accepts on the builder: separate columns, a (steps, p) matrix
        or a DataFrame, in training order.

        Returns
        -------
        np.ndarray of shape (steps,)
        """
        X = self._future_design(steps, external_regressors)
        return X @ self.beta

    def forecast_interval(self, steps, *external_regressors, alpha=0.05):
        """
        Point forecasts with ``1 - alpha`` prediction intervals.

        Future regressor values are passed as for :meth:`forecast`.

        Returns
        -------
        pd.DataFrame
            Columns ``forecast``, ``lower``, ``upper``; index 1..steps.
        """
        if not 0 < alpha < 1:
            raise ValueError(f"alpha must lie in (0, 1), got {alpha}")
        X = self._future_design(steps, external_regressors)
        point = X @ self.beta
        xtx_inv = self._solver.unscaled_covariance()
        leverage = np.einsum('ij,jk,ik->i', X, xtx_inv, X)
        se = np.sqrt(self.sigma2 * (1.0 + leverage))
        q = stats.t.ppf(1.0 - alpha / 2.0, self._solver.df_residual)
        return pd.DataFrame(
            {'forecast': point, 'lower': point - q * se,
             'upper': point + q * se},
            index=pd.RangeIndex(1, len(point) + 1, name='step'),
        )

    # ---- reporting -------------------------------------------------------

    def summary(self):
        """Coefficient table with t statistics and two-sided p-values."""
        beta = np.asarray(self.beta)
        se = np.asarray(self.standard_errors)
        with np.errstate(divide='ignore', invalid='ignore'):
            t_values = beta / se
        p_values = 2.0 * stats.t.sf(np.abs(t_values),
                                    self._solver.df_residual)
        return pd.DataFrame(
            {'estimate': beta, 'std_error': se, 't_value': t_values,
             'p_value': p_values},
            index=pd.Index(self.coefficient_names, name='term'),
        )

    def print_summary(self):
        table = self.summary()
        name = self._series.name or 'response'
        print()
        print("=" * 70)
        print(f"TIME SERIES REGRESSION: {name}")
        print("=" * 70)
        print(f"  Observations      : {len(self._series)}")
        print(f"  Period            : {self._series.time_period!r}")
        print(f"  External terms    : {self._n_external}")
        print(f"  Time trend        : {'yes' if self._has_trend else 'no'}")
        freq = self._seasonal_frequency
        print(f"  Seasonal frequency: {freq if freq is not None else '-'}")
        print()
        print(f"  {'Term':20s}  {'Estimate':>12s}  {'Std. Error':>12s}  "
              f"{'t value':>9s}  {'Pr(>|t|)':>9s}")
        print("-" * 70)
        for term, row in table.iterrows():
            print(f"  {term:20s}  {row['estimate']:>12.6f}  "
                  f"{row['std_error']:>12.6f}  {row['t_value']:>9.3f}  "
                  f"{row['p_value']:>9.4f}")
        print("-" * 70)
        print(f"  Residual variance : {self.sigma2:.6f} on "
              f"{self._solver.df_residual} degrees of freedom")
        print(f"  R-squared         : {self._solver.r_squared:.4f}")
        print("=" * 70)
