"""Calendar and time primitives shared by every other module.

All datetimes are naive local time. Dates are represented as midnight
``datetime`` objects so they can be compared with event timestamps and
used as set members without surprises.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import IntEnum

import pandas as pd

from .errors import InvalidRangeError


# ── Constants ────────────────────────────────────────────────────────────────

ONE_DAY = timedelta(days=1)
DAY_END = timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)
DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y")


class Weekday(IntEnum):
    """Day-of-week index, Monday first (matches ``datetime.weekday()``)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def key(self):
        return self.name.lower()

    @classmethod
    def from_name(cls, name):
        """Look up a weekday by full or three-letter name, case-insensitive."""
        text = str(name).strip().lower()
        for day in cls:
            if text in (day.key, day.key[:3]):
                return day
        raise ValueError(f"Unknown weekday name: {name!r}")


# ── Normalisation & Parsing ──────────────────────────────────────────────────

def norm_date(d):
    """Normalise to midnight datetime for safe set membership checks."""
    if d is pd.NaT:
        raise TypeError("norm_date got NaT (blank date)")
    if isinstance(d, pd.Timestamp):
        d = d.to_pydatetime()
    if isinstance(d, datetime):
        return datetime(d.year, d.month, d.day)
    if isinstance(d, date):
        return datetime(d.year, d.month, d.day)
    raise TypeError(f"norm_date expected datetime, got {type(d).__name__}: {d!r}")


def clean_str(val):
    """Return stripped string or empty string for NaN/None."""
    if val is None or (isinstance(val, float) and math.isnan(val)):
        return ""
    return str(val).strip()


def parse_date(val, context=""):
    """Parse date from an Excel cell or string. Returns a midnight datetime."""
    ctx = f" ({context})" if context else ""
    if val is None or (not isinstance(val, (str, date)) and pd.isna(val)):
        raise ValueError(f"Date is blank{ctx}")
    if isinstance(val, (datetime, date, pd.Timestamp)):
        return norm_date(val)
    if isinstance(val, str):
        val = val.strip()
        if not val:
            raise ValueError(f"Date is blank{ctx}")
        for fmt in DATE_FORMATS:
            try:
                return norm_date(datetime.strptime(val, fmt))
            except ValueError:
                pass
        raise ValueError(f"Cannot parse date{ctx}: {val!r}. Expected YYYY-MM-DD or DD/MM/YYYY")
    raise ValueError(f"Cannot parse date{ctx}: {val!r}")


def parse_datetime(val, context=""):
    """Parse a timestamp cell. Accepts datetimes and 'YYYY-MM-DD HH:MM' strings."""
    ctx = f" ({context})" if context else ""
    if isinstance(val, pd.Timestamp):
        return val.to_pydatetime().replace(tzinfo=None)
    if isinstance(val, datetime):
        return val
    if isinstance(val, str) and val.strip():
        text = val.strip()
        for fmt in ("%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"):
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                pass
        return parse_date(text, context)
    return parse_date(val, context)


def parse_time(val, context=""):
    """Parse a wall-clock cell ('09:00', '9:30', a time or datetime)."""
    ctx = f" ({context})" if context else ""
    if isinstance(val, time):
        return val
    if isinstance(val, datetime):
        return val.time()
    text = clean_str(val)
    if not text:
        raise ValueError(f"Time is blank{ctx}")
    for fmt in ("%H:%M", "%H:%M:%S", "%I:%M %p"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            pass
    raise ValueError(f"Cannot parse time{ctx}: {text!r}. Expected HH:MM")


# ── Calendar Arithmetic ──────────────────────────────────────────────────────

def weekday(d):
    return Weekday(norm_date(d).weekday())


def get_week_start(d):
    """Return the Monday (midnight) of the week containing d."""
    d = norm_date(d)
    return d - timedelta(days=d.weekday())


def add_days(d, days):
    return norm_date(d) + timedelta(days=days)


def add_years(d, years):
    """Shift by whole calendar years. 29 February lands on 28 February."""
    d = norm_date(d)
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        return d.replace(year=d.year + years, day=28)


def days_between(start, end):
    """Signed number of calendar days from start to end."""
    return (norm_date(end) - norm_date(start)).days


def iter_days(start, end):
    """Yield every date from start to end inclusive. Empty when reversed."""
    d, end_d = norm_date(start), norm_date(end)
    while d <= end_d:
        yield d
        d += ONE_DAY


def clock_hours(t):
    """Wall-clock time as fractional hours since midnight."""
    return t.hour + t.minute / 60 + t.second / 3600


def combine(d, t):
    """Attach a wall-clock time to a date."""
    return datetime.combine(norm_date(d).date(), t)


def js_round(x):
    """Round half up (2.5 -> 3, -2.5 -> -2), unlike Python's banker's rounding."""
    return int(math.floor(x + 0.5))


# ── Durations & Overlaps ─────────────────────────────────────────────────────

def duration_hours(start, end):
    return (end - start).total_seconds() / 3600


def overlap_minutes(start_a, end_a, start_b, end_b):
    """Length of the intersection of two intervals in minutes (0 when disjoint)."""
    latest_start = max(start_a, start_b)
    earliest_end = min(end_a, end_b)
    if earliest_end <= latest_start:
        return 0.0
    return (earliest_end - latest_start).total_seconds() / 60


def intervals_overlap(start_a, end_a, start_b, end_b):
    return start_a < end_b and start_b < end_a


def day_bounds(d):
    """Return (00:00, 23:59:59.999) of the given date."""
    day_start = norm_date(d)
    return day_start, day_start + DAY_END


def event_duration_on_date(start, end, d):
    """Hours of [start, end] falling on date d; handles midnight crossings."""
    day_start, day_end = day_bounds(d)
    clipped_start = max(start, day_start)
    clipped_end = min(end, day_end)
    if clipped_end <= clipped_start:
        return 0.0
    return duration_hours(clipped_start, clipped_end)


# ── Ranges ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar dates."""

    start: datetime
    end: datetime

    def __post_init__(self):
        start, end = norm_date(self.start), norm_date(self.end)
        if start > end:
            raise InvalidRangeError(start, end, "date range")
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @property
    def days(self):
        return days_between(self.start, self.end) + 1

    def __contains__(self, d):
        return self.start <= norm_date(d) <= self.end

    def __iter__(self):
        return iter_days(self.start, self.end)

    def overlaps(self, other):
        return self.start <= other.end and other.start <= self.end


def is_blank_date(val):
    """None, NaN or NaT, i.e. what an empty spreadsheet cell becomes."""
    if val is None or val is pd.NaT:
        return True
    return isinstance(val, float) and math.isnan(val)


@dataclass(frozen=True)
class RangeValidation:
    is_valid: bool
    reason: str = ""


def validate_date_range(start, end, max_days=None):
    """Check a manually edited range without raising."""
    if is_blank_date(start) or is_blank_date(end):
        return RangeValidation(False, "Both start and end dates are required")
    try:
        start, end = norm_date(start), norm_date(end)
    except TypeError:
        return RangeValidation(False, "Start and end must be dates")
    if start > end:
        return RangeValidation(False, "Start date must be on or before end date")
    if max_days is not None and days_between(start, end) + 1 > max_days:
        return RangeValidation(False, f"Range cannot exceed {max_days} days")
    return RangeValidation(True)
