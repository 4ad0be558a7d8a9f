"""
Time series primitives: sampling periods and an immutable value series.

Only enough calendar arithmetic to size a seasonal cycle is provided.  A
period's duration is a fixed number of seconds, with the year taken as
365.2425 days and the month as one twelfth of that, so that monthly and
quarterly data divide a year exactly.
"""

from enum import Enum

import numpy as np
import pandas as pd
from pandas.tseries.frequencies import to_offset


# ---------------------------------------------------------------------------
# Units and periods
# ---------------------------------------------------------------------------

_SECONDS_PER_DAY = 86400
_SECONDS_PER_YEAR = 31556952          # 365.2425 days


class TimeUnit(Enum):
    """Fixed-length units of time, valued in seconds."""

    SECOND = 1
    MINUTE = 60
    HOUR = 3600
    DAY = _SECONDS_PER_DAY
    WEEK = 7 * _SECONDS_PER_DAY
    MONTH = _SECONDS_PER_YEAR // 12
    QUARTER = _SECONDS_PER_YEAR // 4
    YEAR = _SECONDS_PER_YEAR
    DECADE = 10 * _SECONDS_PER_YEAR
    CENTURY = 100 * _SECONDS_PER_YEAR

    @property
    def seconds(self):
        return self.value


class TimePeriod:
    """
    A span of time made of ``length`` consecutive ``unit``s.

    Parameters
    ----------
    unit : TimeUnit
    length : int, default=1
        Number of units in the period.  Must be a positive integer.
    """

    __slots__ = ('_unit', '_length')

    def __init__(self, unit, length=1):
        if not isinstance(unit, TimeUnit):
            raise ValueError(f"unit must be a TimeUnit, got {unit!r}")
        if isinstance(length, bool) or int(length) != length or length < 1:
            raise ValueError(
                f"Period length must be a positive integer, got {length!r}"
            )
        self._unit = unit
        self._length = int(length)

    # ---- factories -------------------------------------------------------

    @classmethod
    def one_year(cls):
        return cls(TimeUnit.YEAR)

    @classmethod
    def one_quarter(cls):
        return cls(TimeUnit.QUARTER)

    @classmethod
    def one_month(cls):
        return cls(TimeUnit.MONTH)

    @classmethod
    def one_week(cls):
        return cls(TimeUnit.WEEK)

    @classmethod
    def one_day(cls):
        return cls(TimeUnit.DAY)

    @classmethod
    def one_hour(cls):
        return cls(TimeUnit.HOUR)

    # ---- accessors -------------------------------------------------------

    @property
    def unit(self):
        return self._unit

    @property
    def length(self):
        return self._length

    def total_seconds(self):
        return self._unit.seconds * self._length

    def frequency_per(self, other):
        """
        Number of these periods that fit in ``other``.

        Monthly data against a one-year cycle gives 12.0, weekly data
        gives roughly 52.18.  Callers truncate when they need a whole
        number of observations per cycle.
        """
        if not isinstance(other, TimePeriod):
            raise ValueError(f"Expected a TimePeriod, got {other!r}")
        return other.total_seconds() / self.total_seconds()

    def __eq__(self, other):
        if not isinstance(other, TimePeriod):
            return NotImplemented
        return self._unit is other._unit and self._length == other._length

    def __hash__(self):
        return hash((self._unit, self._length))

    def __repr__(self):
        return f"TimePeriod({self._unit.name}, {self._length})"


# pandas offset class name -> unit; multiples come from ``offset.n``
_OFFSET_UNITS = {
    'Second': TimeUnit.SECOND,
    'Minute': TimeUnit.MINUTE,
    'Hour': TimeUnit.HOUR,
    'Day': TimeUnit.DAY,
    'Week': TimeUnit.WEEK,
    'MonthEnd': TimeUnit.MONTH,
    'MonthBegin': TimeUnit.MONTH,
    'QuarterEnd': TimeUnit.QUARTER,
    'QuarterBegin': TimeUnit.QUARTER,
    'YearEnd': TimeUnit.YEAR,
    'YearBegin': TimeUnit.YEAR,
}


def period_from_offset(offset):
    """
    Translate a pandas frequency (offset object or alias string) into a
    :class:`TimePeriod`.

    Raises
    ------
    ValueError
        For frequencies without a fixed-length equivalent, such as
        business days.
    """
    offset = to_offset(offset)
    unit = _OFFSET_UNITS.get(type(offset).__name__)
    if unit is None:
        raise ValueError(f"Unsupported series frequency: {offset!r}")
    return TimePeriod(unit, abs(offset.n))


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------

class TimeSeries:
    """
    An immutable sequence of observations taken once per ``time_period``.

    Parameters
    ----------
    values : array-like of shape (n,)
        Observations; converted to float64.  Must be non-empty.
    time_period : TimePeriod or None
        Sampling period.  Defaults to one month.
    name : str or None
        Optional label, used for reporting.
    """

    def __init__(self, values, time_period=None, name=None):
        if values is None:
            raise ValueError("values must not be None")
        arr = np.array(values, dtype=np.float64)
        if arr.ndim != 1:
            raise ValueError(
                f"A time series must be one-dimensional, got shape {arr.shape}"
            )
        if arr.size == 0:
            raise ValueError("A time series needs at least one observation")
        arr.setflags(write=False)
        self._values = arr
        self._time_period = (time_period if time_period is not None
                             else TimePeriod.one_month())
        self._name = name

    @classmethod
    def from_pandas(cls, series, time_period=None):
        """
        Build a series from a ``pandas.Series``.

        When ``time_period`` is not given it is read from the index
        frequency (explicit or inferred) of a ``DatetimeIndex`` or
        ``PeriodIndex``; any other index falls back to monthly.
        """
        if series is None:
            raise ValueError("series must not be None")
        if time_period is None:
            index = series.index
            freq = getattr(index, 'freq', None)
            if freq is None and isinstance(index, pd.DatetimeIndex) \
                    and len(index) >= 3:
                freq = index.inferred_freq
            if freq is not None:
                time_period = period_from_offset(freq)
        return cls(pd.to_numeric(series).to_numpy(dtype=np.float64),
                   time_period=time_period, name=series.name)

    def __len__(self):
        return self._values.size

    @property
    def time_period(self):
        return self._time_period

    @property
    def name(self):
        return self._name

    def as_array(self):
        """Read-only view of the observations."""
        return self._values

    def to_pandas(self):
        return pd.Series(self._values.copy(), name=self._name)

    def __eq__(self, other):
        if not isinstance(other, TimeSeries):
            return NotImplemented
        return (self._time_period == other._time_period
                and np.array_equal(self._values, other._values))

    def __hash__(self):
        return hash((self._time_period, tuple(self._values.tolist())))

    def __repr__(self):
        return (f"TimeSeries(n={len(self)}, period={self._time_period!r}, "
                f"name={self._name!r})")
