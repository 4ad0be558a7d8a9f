"""
chronofit: small numerical models for time-indexed data

Time series linear regression with trend and seasonal dummies, and
Newton-form polynomial interpolation by divided differences.
"""

from .interpolation import NewtonPolynomial, QuadraticFunction, CubicFunction
from .ols import MultipleLinearRegression
from .regression import (
    Intercept,
    TimeTrend,
    Seasonal,
    RegressionConfig,
    TimeSeriesRegressionBuilder,
    TimeSeriesLinearRegression,
    fit_time_series_regression,
    seasonal_dummies,
)
from .timeseries import TimeUnit, TimePeriod, TimeSeries

__version__ = "0.1.0"

__all__ = [
    "NewtonPolynomial", "QuadraticFunction", "CubicFunction",
    "MultipleLinearRegression",
    "Intercept", "TimeTrend", "Seasonal", "RegressionConfig",
    "TimeSeriesRegressionBuilder", "TimeSeriesLinearRegression",
    "fit_time_series_regression", "seasonal_dummies",
    "TimeUnit", "TimePeriod", "TimeSeries",
]
