"""Immutable records consumed by the engine.

Everything here is supplied by the caller and only read by the engine;
mutations are returned as proposals (see ``overlap``) rather than applied.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, time
from typing import Optional, Tuple

from .date_math import (
    Weekday,
    clock_hours,
    duration_hours,
    norm_date,
    parse_time,
)
from .errors import InvalidRangeError, MissingConfigurationError


CATEGORIES = ("habit", "task", "event")
EVENT_TYPES = ("planned", "tracked", "completed")
ALL_DAYS_ENABLED = (True,) * 7


# ── Schedule ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class WorkSlot:
    """A recurring block of availability on one weekday."""

    start_time: time
    end_time: time
    duration_hours: Optional[float] = None

    def __post_init__(self):
        if self.end_time < self.start_time:
            raise InvalidRangeError(self.start_time, self.end_time, "work slot")
        if self.duration_hours is None:
            object.__setattr__(self, "duration_hours", clock_hours(self.end_time) - clock_hours(self.start_time))


@dataclass(frozen=True)
class Schedule:
    """Weekly availability: exactly seven slot tuples indexed by ``Weekday``.

    ``problems`` lists the entries a lenient ``from_mapping`` skipped.
    """

    days: Tuple[Tuple[WorkSlot, ...], ...] = ((),) * 7
    problems: Tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self):
        days = tuple(tuple(slots) for slots in self.days)
        if len(days) != 7:
            raise MissingConfigurationError(f"Schedule needs 7 weekdays, got {len(days)}")
        object.__setattr__(self, "days", days)
        object.__setattr__(self, "problems", tuple(self.problems))

    def slots_for(self, day):
        return self.days[Weekday(day)]

    def hours_for(self, day):
        return sum(slot.duration_hours for slot in self.slots_for(day))

    @property
    def weekly_hours(self):
        return sum(self.hours_for(day) for day in Weekday)

    @classmethod
    def from_mapping(cls, mapping, strict=False):
        """Build from {weekday name: [slot, ...]}.

        A slot is a ``WorkSlot``, a (start, end) pair or a dict with
        ``start``/``end`` and optional ``duration`` keys. Missing weekdays
        have no slots. Unknown weekdays and malformed slots are skipped and
        recorded in ``problems``; with ``strict=True`` they raise
        ``MissingConfigurationError`` instead.
        """
        problems = []

        def skip(message):
            if strict:
                raise MissingConfigurationError(message)
            problems.append(message)

        days = [[] for _ in Weekday]
        if mapping is None:
            skip("No schedule supplied")
            mapping = {}
        elif not isinstance(mapping, Mapping):
            skip(f"Schedule must map weekday names to slots, got {type(mapping).__name__}")
            mapping = {}
        for name, slots in mapping.items():
            try:
                day = name if isinstance(name, Weekday) else Weekday.from_name(name)
            except ValueError as e:
                skip(str(e))
                continue
            for slot in slots or ():
                try:
                    days[day].append(_coerce_slot(slot, day))
                except ValueError as e:
                    skip(str(e))
        return cls(tuple(tuple(d) for d in days), tuple(problems))

    @classmethod
    def uniform(cls, start="09:00", end="17:00", weekdays=tuple(Weekday)[:5]):
        """One identical slot on each of the given weekdays (Mon-Fri by default)."""
        return cls.from_mapping({day: [(start, end)] for day in weekdays}, strict=True)


def _coerce_slot(slot, day):
    if isinstance(slot, WorkSlot):
        return slot
    context = f"schedule {Weekday(day).key}"
    try:
        if isinstance(slot, dict):
            start = parse_time(slot["start"], context)
            end = parse_time(slot["end"], context)
            duration = slot.get("duration")
        else:
            start, end = (parse_time(v, context) for v in slot)
            duration = None
        return WorkSlot(start, end, None if duration is None else float(duration))
    except (KeyError, TypeError, ValueError) as e:
        raise MissingConfigurationError(f"Malformed work slot for {Weekday(day).key}: {slot!r}") from e


@dataclass(frozen=True)
class Holiday:
    """Inclusive date range on which nobody works."""

    id: str
    start_date: datetime
    end_date: datetime
    name: str = ""

    def __post_init__(self):
        start, end = norm_date(self.start_date), norm_date(self.end_date)
        if start > end:
            raise InvalidRangeError(start, end, f"holiday {self.name or self.id}")
        object.__setattr__(self, "start_date", start)
        object.__setattr__(self, "end_date", end)

    def contains(self, d):
        return self.start_date <= norm_date(d) <= self.end_date

    @property
    def days(self):
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class WorkHour:
    """A work slot concretised onto a specific date."""

    id: str
    start_time: datetime
    end_time: datetime
    duration_hours: Optional[float] = None

    def __post_init__(self):
        if self.end_time < self.start_time:
            raise InvalidRangeError(self.start_time, self.end_time, f"work hour {self.id}")
        if self.duration_hours is None:
            object.__setattr__(self, "duration_hours", duration_hours(self.start_time, self.end_time))

    @property
    def date(self):
        return norm_date(self.start_time)


# ── Events & Projects ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CalendarEvent:
    id: str
    start_time: datetime
    end_time: datetime
    project_id: Optional[str] = None
    category: str = "event"
    type: str = "planned"
    completed: bool = False
    title: str = ""

    def __post_init__(self):
        if self.end_time < self.start_time:
            raise InvalidRangeError(self.start_time, self.end_time, f"event {self.id}")
        if self.category not in CATEGORIES:
            raise ValueError(f"Event {self.id}: category {self.category!r} not one of {', '.join(CATEGORIES)}")
        if self.type not in EVENT_TYPES:
            raise ValueError(f"Event {self.id}: type {self.type!r} not one of {', '.join(EVENT_TYPES)}")

    @property
    def duration_hours(self):
        return duration_hours(self.start_time, self.end_time)

    def with_times(self, start_time, end_time):
        return replace(self, start_time=start_time, end_time=end_time)


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    start_date: datetime
    end_date: Optional[datetime]
    estimated_hours: float = 0.0
    continuous: bool = False
    auto_estimate_days: Tuple[bool, ...] = ALL_DAYS_ENABLED

    def __post_init__(self):
        start = norm_date(self.start_date)
        end = norm_date(self.end_date) if self.end_date is not None else None
        if end is None and not self.continuous:
            raise InvalidRangeError(start, end, f"project {self.name or self.id} has no end date")
        if end is not None and start > end and not self.continuous:
            raise InvalidRangeError(start, end, f"project {self.name or self.id}")
        if self.estimated_hours < 0:
            raise ValueError(f"Project {self.name or self.id}: estimated hours cannot be negative")
        flags = tuple(bool(f) for f in self.auto_estimate_days)
        if len(flags) != 7:
            raise ValueError(f"Project {self.name or self.id}: auto_estimate_days needs 7 flags")
        object.__setattr__(self, "start_date", start)
        object.__setattr__(self, "end_date", end)
        object.__setattr__(self, "auto_estimate_days", flags)

    def auto_estimate_enabled(self, day):
        return self.auto_estimate_days[Weekday(day)]


def auto_estimate_flags(disabled=()):
    """Seven flags with the named weekdays switched off."""
    off = {d if isinstance(d, Weekday) else Weekday.from_name(d) for d in disabled}
    return tuple(day not in off for day in Weekday)


@dataclass(frozen=True)
class Milestone:
    id: str
    project_id: str
    due_date: datetime
    time_allocation_hours: float
    name: str = ""

    def __post_init__(self):
        object.__setattr__(self, "due_date", norm_date(self.due_date))
        if self.time_allocation_hours < 0:
            raise ValueError(f"Milestone {self.name or self.id}: allocation cannot be negative")
