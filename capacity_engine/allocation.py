"""Per-date project allocation: planned time, auto-estimate or nothing.

For one (project, date) exactly one answer comes back:

1. planned      events attributed to the project on that date (any day,
                holidays included)
2. none         not a working day, outside the project window, or a
                weekday the project opted out of
3. auto-estimate  the project's budget divided evenly over every
                qualifying working day in its window
"""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime

from .date_math import add_years, event_duration_on_date, iter_days, norm_date, weekday
from .schedule import holiday_fingerprint, is_working_day, schedule_fingerprint, working_days_in_range


# ── Constants ────────────────────────────────────────────────────────────────

CONTINUOUS_WINDOW_YEARS = 2
CONTINUOUS_LOOKAHEAD_YEARS = 1
DEFAULT_CACHE_SIZE = 5000
EXCLUDED_PLANNED_CATEGORIES = ("habit", "task")

PLANNED = "planned"
AUTO_ESTIMATE = "auto-estimate"
NONE = "none"


@dataclass(frozen=True)
class TimeAllocation:
    type: str
    hours: float
    is_working_day: bool

    @property
    def is_planned(self):
        return self.type == PLANNED

    @property
    def is_auto_estimate(self):
        return self.type == AUTO_ESTIMATE


def _none(working):
    return TimeAllocation(NONE, 0.0, working)


# ── Allocation ───────────────────────────────────────────────────────────────

def effective_end(project, today=None):
    """End of the allocation window. Continuous projects roll forward with today."""
    if not project.continuous:
        return project.end_date
    today = norm_date(today or datetime.now())
    return max(add_years(project.start_date, CONTINUOUS_WINDOW_YEARS),
               add_years(today, CONTINUOUS_LOOKAHEAD_YEARS))


def project_events(project, events):
    return [e for e in events or () if e.project_id == project.id]


def planned_hours_for_date(project, d, events):
    """Hours of the project's events on d, ignoring habits and tasks."""
    return sum(
        event_duration_on_date(e.start_time, e.end_time, d)
        for e in project_events(project, events)
        if e.category not in EXCLUDED_PLANNED_CATEGORIES
    )


def auto_estimate_working_days(project, schedule, holidays=None, today=None):
    """Working days in the project window on weekdays the project allows."""
    days = working_days_in_range(project.start_date, effective_end(project, today), schedule, holidays)
    return [d for d in days if project.auto_estimate_enabled(weekday(d))]


def project_time_allocation(project, d, schedule, holidays=None, events=None, today=None,
                            auto_days=None):
    """Allocation for one project on one date.

    ``auto_days`` may carry a precomputed ``auto_estimate_working_days``
    result when the caller evaluates many dates for the same project.
    """
    day = norm_date(d)
    planned = planned_hours_for_date(project, day, events)
    if planned > 0:
        return TimeAllocation(PLANNED, planned, True)

    if not is_working_day(day, schedule, holidays):
        return _none(False)

    end = effective_end(project, today)
    if day < project.start_date or day > end:
        return _none(True)

    if auto_days is None:
        auto_days = auto_estimate_working_days(project, schedule, holidays, today)
    if not auto_days or day not in auto_days:
        return _none(True)
    return TimeAllocation(AUTO_ESTIMATE, project.estimated_hours / len(auto_days), True)


def project_allocations(project, start, end, schedule, holidays=None, events=None, today=None):
    """One allocation per date from start to end inclusive, keyed by date."""
    auto_days = set(auto_estimate_working_days(project, schedule, holidays, today))
    return {
        d: project_time_allocation(project, d, schedule, holidays, events, today, auto_days=auto_days)
        for d in iter_days(start, end)
    }


# ── Memoisation ──────────────────────────────────────────────────────────────

def event_fingerprint(events):
    return tuple(sorted(
        (e.id, e.start_time, e.end_time, e.category, e.type) for e in events
    ))


def allocation_cache_key(project, d, schedule, holidays=None, events=None, today=None):
    """Explicit tuple key covering every input that changes the answer."""
    return (
        project.id,
        norm_date(d),
        project.estimated_hours,
        project.start_date,
        project.end_date,
        project.continuous,
        norm_date(today or datetime.now()) if project.continuous else None,
        project.auto_estimate_days,
        schedule_fingerprint(schedule),
        holiday_fingerprint(holidays),
        event_fingerprint(project_events(project, events)),
    )


class AllocationCache:
    """Bounded LRU cache of allocation results.

    Nothing is invalidated automatically: callers clear or invalidate
    entries whenever schedules, holidays, overrides or events change.
    """

    def __init__(self, maxsize=DEFAULT_CACHE_SIZE):
        if maxsize <= 0:
            raise ValueError("Cache size must be positive")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._entries = OrderedDict()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    def get(self, key):
        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        return None

    def put(self, key, value):
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)

    def invalidate(self, prefix):
        """Drop every entry whose key starts with the given tuple prefix."""
        prefix = tuple(prefix)
        stale = [k for k in self._entries if k[:len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self):
        self._entries.clear()
        self.hits = 0
        self.misses = 0


def memoized_project_time_allocation(cache, project, d, schedule, holidays=None, events=None, today=None):
    key = allocation_cache_key(project, d, schedule, holidays, events, today)
    result = cache.get(key)
    if result is None:
        result = project_time_allocation(project, d, schedule, holidays, events, today)
        cache.put(key, result)
    return result
