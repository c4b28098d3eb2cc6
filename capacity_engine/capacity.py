"""Work-hour capacity for a single date: total, allocated and available hours."""

from dataclasses import dataclass
from typing import Tuple

from .date_math import event_duration_on_date, norm_date, overlap_minutes
from .schedule import is_holiday


# ── Constants ────────────────────────────────────────────────────────────────

OVERBOOK_TOLERANCE = 1.1
OPTIMAL_UTILIZATION_MIN = 70
OPTIMAL_UTILIZATION_MAX = 90
LOW_UTILIZATION_THRESHOLD = 50

RECOMMENDATIONS = {
    "overbooked": "Consider rescheduling some events to avoid overcommitment.",
    "optimal": "Great work-life balance! Current scheduling is optimal.",
    "high": "High utilization detected. Consider scheduling breaks.",
    "low": "Low utilization - opportunity for additional tasks or projects.",
}


@dataclass(frozen=True)
class WorkHourCapacity:
    total_hours: float
    allocated_hours: float
    available_hours: float
    overlapping_events: Tuple = ()
    raw_allocated_hours: float = 0.0

    @classmethod
    def empty(cls):
        return cls(0.0, 0.0, 0.0, (), 0.0)


@dataclass(frozen=True)
class UtilizationMetrics:
    percentage: float
    is_overbooked: bool
    efficiency: str
    recommendation: str


@dataclass(frozen=True)
class DailyTimeBreakdown:
    date: object
    work_hours: float
    planned_in_work_hours: float
    overtime_hours: float
    other_hours: float
    available_hours: float


# ── Capacity ─────────────────────────────────────────────────────────────────

def _on_date(items, day):
    return [item for item in items if norm_date(item.start_time) == day]


def capacity(work_hours, events, d):
    """Capacity of the work hours on d against the events starting on d.

    Overlap is summed per (event, work hour) pair in minutes and rounded to
    two decimals before conversion. The reported allocation is capped at
    ``OVERBOOK_TOLERANCE`` times the total; the uncapped figure is kept in
    ``raw_allocated_hours``.
    """
    day = norm_date(d)
    day_hours = _on_date(work_hours, day)
    day_events = _on_date(events, day)

    total = sum(wh.duration_hours for wh in day_hours)
    minutes = 0.0
    overlapping = []
    for event in day_events:
        event_minutes = sum(
            overlap_minutes(event.start_time, event.end_time, wh.start_time, wh.end_time)
            for wh in day_hours
        )
        if event_minutes > 0:
            overlapping.append(event)
        minutes += event_minutes

    raw_allocated = round(minutes, 2) / 60
    allocated = min(raw_allocated, total * OVERBOOK_TOLERANCE)
    return WorkHourCapacity(
        total_hours=total,
        allocated_hours=allocated,
        available_hours=max(0.0, total - allocated),
        overlapping_events=tuple(overlapping),
        raw_allocated_hours=raw_allocated,
    )


def capacity_with_holidays(work_hours, events, d, holidays=None):
    """Like ``capacity`` but a holiday has zero capacity regardless of slots."""
    if is_holiday(d, holidays):
        return WorkHourCapacity.empty()
    return capacity(work_hours, events, d)


def utilization(cap, before_cap=False):
    """Allocated over total as a percentage (0 when there is no capacity)."""
    if cap.total_hours <= 0:
        return 0.0
    allocated = cap.raw_allocated_hours if before_cap else cap.allocated_hours
    return allocated / cap.total_hours * 100


def classify(cap, before_cap=False):
    """Advisory utilisation band for a day. Never feeds back into calculations.

    By default the capped allocation is classified. ``before_cap=True``
    classifies the raw allocation instead; which of the two a product
    wants is left to the caller.
    """
    pct = utilization(cap, before_cap)
    if pct > 100:
        efficiency = "overbooked"
    elif OPTIMAL_UTILIZATION_MIN <= pct <= OPTIMAL_UTILIZATION_MAX:
        efficiency = "optimal"
    elif pct > OPTIMAL_UTILIZATION_MAX:
        efficiency = "high"
    else:
        efficiency = "low"
    return UtilizationMetrics(
        percentage=pct,
        is_overbooked=efficiency == "overbooked",
        efficiency=efficiency,
        recommendation=RECOMMENDATIONS[efficiency],
    )


def is_day_overbooked(cap, before_cap=False):
    return classify(cap, before_cap).is_overbooked


# ── Time Breakdown ───────────────────────────────────────────────────────────

def _overlap_with_work_hours(event, work_hours):
    return sum(
        overlap_minutes(event.start_time, event.end_time, wh.start_time, wh.end_time)
        for wh in work_hours
    ) / 60


def total_planned_hours(d, events):
    """Hours of project-attributed events on d."""
    return sum(event_duration_on_date(e.start_time, e.end_time, d)
               for e in events if e.project_id)


def overtime_planned_hours(d, events, work_hours):
    """Project time on d that falls outside the day's work hours."""
    day = norm_date(d)
    day_hours = _on_date(work_hours, day)
    total = 0.0
    for event in events:
        if not event.project_id:
            continue
        on_day = event_duration_on_date(event.start_time, event.end_time, day)
        if on_day <= 0:
            continue
        total += max(0.0, on_day - _overlap_with_work_hours(event, day_hours))
    return total


def other_time(d, events, work_hours):
    """Hours of non-project events overlapping the day's work hours."""
    day_hours = _on_date(work_hours, norm_date(d))
    return sum(_overlap_with_work_hours(e, day_hours) for e in events if not e.project_id)


def daily_time_breakdown(d, events, work_hours):
    day = norm_date(d)
    day_hours = _on_date(work_hours, day)
    total = sum(wh.duration_hours for wh in day_hours)
    planned_inside = sum(_overlap_with_work_hours(e, day_hours) for e in events if e.project_id)
    other = other_time(day, events, day_hours)
    return DailyTimeBreakdown(
        date=day,
        work_hours=total,
        planned_in_work_hours=planned_inside,
        overtime_hours=overtime_planned_hours(day, events, day_hours),
        other_hours=other,
        available_hours=max(0.0, total - planned_inside - other),
    )
