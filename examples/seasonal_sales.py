"""
Example: trend + seasonal regression on monthly sales
======================================================
Fits a time series regression with a linear trend, monthly seasonal
dummies and one external driver (advertising spend), then forecasts the
next six months with 90% prediction intervals.
"""

import numpy as np
import pandas as pd

# If running from the repo root (not pip-installed), uncomment:
# import sys; sys.path.insert(0, '..')

from chronofit import Seasonal, TimeSeriesLinearRegression

# ------------------------------------------------------------------
# 1.  Simulate four years of monthly sales
# ------------------------------------------------------------------
rng = np.random.RandomState(42)
n = 48
index = pd.date_range('2020-01-01', periods=n, freq='MS')
month_effect = np.array([0, -3, 2, 5, 8, 12, 15, 14, 9, 4, 1, 20], float)
advertising = pd.Series(rng.uniform(5, 15, n), index=index,
                        name='advertising')

t = np.arange(1, n + 1)
sales = pd.Series(
    100.0 + 0.8 * t + month_effect[(t - 1) % 12]
    + 1.5 * advertising.to_numpy() + rng.randn(n) * 2.0,
    index=index, name='sales',
)

# ------------------------------------------------------------------
# 2.  Fit: advertising, then trend, then 11 seasonal dummies
# ------------------------------------------------------------------
model = (TimeSeriesLinearRegression.builder()
         .response(sales)
         .external_regressors(advertising)
         .seasonal(Seasonal.INCLUDE)
         .build())
model.print_summary()

# ------------------------------------------------------------------
# 3.  Forecast six months ahead with planned advertising
# ------------------------------------------------------------------
planned = np.array([10.0, 12.0, 12.0, 8.0, 15.0, 10.0])
print("\nForecast (90% intervals):")
print(model.forecast_interval(6, planned, alpha=0.10).round(2))
