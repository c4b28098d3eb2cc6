"""Working-day resolution: weekly schedule + holidays -> concrete work hours."""

from dataclasses import dataclass, field

from .date_math import (
    Weekday,
    clock_hours,
    combine,
    get_week_start,
    iter_days,
    norm_date,
    weekday,
)
from .models import Schedule, WorkHour


# ── Working Days ─────────────────────────────────────────────────────────────

def resolve_schedule(schedule):
    """Coerce caller input to a Schedule. Anything unusable means no capacity."""
    if isinstance(schedule, Schedule):
        return schedule
    return Schedule.from_mapping(schedule)


def is_holiday(d, holidays=None):
    """True if d falls inside any holiday range (inclusive)."""
    if not holidays:
        return False
    return any(h.contains(d) for h in holidays)


def is_working_day(d, schedule, holidays=None):
    """Check if a date is a working day (scheduled hours, not a holiday).

    A missing or malformed schedule means no capacity on any day.
    """
    if is_holiday(d, holidays):
        return False
    return resolve_schedule(schedule).hours_for(weekday(d)) > 0


def work_hours_for_date(d, schedule, holidays=None, overrides=None):
    """Concrete work hours for one date. Ids are '<weekday>-<index>', stable across calls."""
    if is_holiday(d, holidays):
        return []
    schedule = resolve_schedule(schedule)
    day = weekday(d)
    hours = [
        WorkHour(
            id=f"{day.key}-{idx}",
            start_time=combine(d, slot.start_time),
            end_time=combine(d, slot.end_time),
            duration_hours=slot.duration_hours,
        )
        for idx, slot in enumerate(schedule.slots_for(day))
    ]
    if overrides is not None:
        hours = overrides.apply(d, hours)
    return hours


def working_days_in_range(start, end, schedule, holidays=None):
    """Working dates between start and end inclusive ([] when reversed)."""
    schedule = resolve_schedule(schedule)
    return [d for d in iter_days(start, end) if is_working_day(d, schedule, holidays)]


def count_working_days(start, end, schedule, holidays=None):
    """Count working days between start and end (inclusive)."""
    schedule = resolve_schedule(schedule)
    return sum(1 for d in iter_days(start, end) if is_working_day(d, schedule, holidays))


# ── Fingerprints ─────────────────────────────────────────────────────────────

def schedule_fingerprint(schedule):
    """Structural, hashable summary of a schedule for use in cache keys."""
    if schedule is None:
        return ()
    schedule = resolve_schedule(schedule)
    return tuple(
        tuple((slot.start_time.isoformat(), slot.end_time.isoformat(), round(slot.duration_hours, 6))
              for slot in slots)
        for slots in schedule.days
    )


def holiday_fingerprint(holidays):
    return tuple(sorted((h.id, h.start_date, h.end_date) for h in holidays or ()))


# ── Week Overrides ───────────────────────────────────────────────────────────

@dataclass
class WeekOverride:
    """Edits to the generated work hours of one week."""

    replaced: dict = field(default_factory=dict)  # generated id -> WorkHour
    deleted: set = field(default_factory=set)     # (date, generated id)
    added: list = field(default_factory=list)     # custom WorkHours

    def is_empty(self):
        return not (self.replaced or self.deleted or self.added)


class WeekOverrideStore:
    """Per-week replacements, deletions and additions on top of the weekly schedule.

    Keyed by the Monday of each week. Only explicit calls mutate the store;
    callers holding an ``AllocationCache`` should invalidate it afterwards.
    """

    def __init__(self):
        self._weeks = {}

    def __len__(self):
        return len(self._weeks)

    def __contains__(self, d):
        return get_week_start(d) in self._weeks

    def weeks(self):
        return sorted(self._weeks)

    def get(self, d):
        """The override for the week containing d, or None."""
        return self._weeks.get(get_week_start(d))

    def _week(self, d):
        return self._weeks.setdefault(get_week_start(d), WeekOverride())

    def replace_hour(self, generated_id, work_hour):
        """Swap the generated hour with this id (on work_hour's date) for work_hour."""
        week = self._week(work_hour.start_time)
        week.replaced[(work_hour.date, generated_id)] = work_hour
        week.deleted.discard((work_hour.date, generated_id))

    def delete_hour(self, d, generated_id):
        week = self._week(d)
        week.deleted.add((norm_date(d), generated_id))
        week.replaced.pop((norm_date(d), generated_id), None)

    def add_hour(self, work_hour):
        self._week(work_hour.start_time).added.append(work_hour)

    def update_hour(self, hour_id, work_hour):
        """Replace a previously added custom hour. Returns False if none matched."""
        week = self.get(work_hour.start_time)
        if week is None:
            return False
        for idx, existing in enumerate(week.added):
            if existing.id == hour_id:
                week.added[idx] = work_hour
                return True
        return False

    def remove_hour(self, d, hour_id):
        """Drop any override (replacement, deletion or custom hour) with this id on d."""
        week = self.get(d)
        if week is None:
            return False
        key = (norm_date(d), hour_id)
        found = key in week.replaced or key in week.deleted
        week.replaced.pop(key, None)
        week.deleted.discard(key)
        before = len(week.added)
        week.added = [h for h in week.added if not (h.id == hour_id and h.date == norm_date(d))]
        found = found or len(week.added) != before
        if week.is_empty():
            del self._weeks[get_week_start(d)]
        return found

    def clear_week(self, d):
        self._weeks.pop(get_week_start(d), None)

    def clear(self):
        self._weeks.clear()

    def apply(self, d, work_hours):
        """Merge this week's overrides into the generated hours of date d."""
        week = self.get(d)
        if week is None:
            return list(work_hours)
        day = norm_date(d)
        merged = []
        for hour in work_hours:
            key = (day, hour.id)
            if key in week.deleted:
                continue
            merged.append(week.replaced.get(key, hour))
        merged.extend(h for h in week.added if h.date == day)
        return sorted(merged, key=lambda h: h.start_time)

    def fingerprint(self, d):
        """Hashable summary of the overrides affecting d's week."""
        week = self.get(d)
        if week is None:
            return ()
        return (
            tuple(sorted((k, v.start_time, v.end_time) for k, v in week.replaced.items())),
            tuple(sorted(week.deleted)),
            tuple(sorted((h.id, h.start_time, h.end_time) for h in week.added)),
        )


# ── Validation ───────────────────────────────────────────────────────────────

def validate_schedule(schedule, holidays=None):
    """Validate schedule and holiday configuration. Returns (errors, warnings) lists."""
    errors = []
    warnings = []

    if schedule is None:
        errors.append("No schedule configured. Add at least one working slot.")
        return errors, warnings
    schedule = resolve_schedule(schedule)
    warnings.extend(f"Schedule entry skipped: {p}" for p in schedule.problems)
    if schedule.weekly_hours <= 0:
        errors.append("Schedule has no working hours on any weekday.")

    for day in Weekday:
        slots = sorted(schedule.slots_for(day), key=lambda s: s.start_time)
        for prev, cur in zip(slots, slots[1:]):
            if cur.start_time < prev.end_time:
                warnings.append(f"{day.key.title()}: slots {prev.start_time:%H:%M}-{prev.end_time:%H:%M} and "
                                f"{cur.start_time:%H:%M}-{cur.end_time:%H:%M} overlap.")
        for slot in slots:
            clock = clock_hours(slot.end_time) - clock_hours(slot.start_time)
            if abs(clock - slot.duration_hours) > 1e-6:
                warnings.append(f"{day.key.title()}: slot {slot.start_time:%H:%M}-{slot.end_time:%H:%M} "
                                f"declares {slot.duration_hours:g}h but spans {clock:g}h.")

    seen = set()
    ordered = sorted(holidays or (), key=lambda h: h.start_date)
    for h in ordered:
        if h.id in seen:
            errors.append(f"Holiday id '{h.id}' is used more than once.")
        seen.add(h.id)
        if not any(schedule.hours_for(weekday(d)) > 0 for d in iter_days(h.start_date, h.end_date)):
            warnings.append(f"Holiday '{h.name or h.id}' ({h.start_date:%Y-%m-%d}) falls only on "
                            f"non-working days (has no effect).")
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.start_date <= prev.end_date:
            warnings.append(f"Holidays '{prev.name or prev.id}' and '{cur.name or cur.id}' overlap.")

    return errors, warnings
