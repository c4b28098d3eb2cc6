"""Pointer drags on the timeline: pixel deltas -> validated date ranges.

A drag lives from pointer-down to pointer-up (or cancel). While it is in
flight the item's dates are recomputed from the total pointer travel, never
accumulated, so a stream of coalesced or dropped moves always lands on the
same answer.
"""

import math
import time
from dataclasses import dataclass
from typing import Optional

from .date_math import add_days, days_between, js_round, norm_date
from .timeline import DAYS_MODE, WEEKS_MODE, day_width


# ── Constants ────────────────────────────────────────────────────────────────

DRAG_CONSTANTS = {
    "min_duration_days": 1,
    "max_duration_days": 365,
    "drag_threshold_px": 3,
    "snap_hysteresis": 0.3,           # fraction of a day beyond the rounding midpoint
    "throttle_days_s": 1 / 60,
    "throttle_weeks_s": 1 / 20,
    "debounce_s": 0.016,
}

MOVE = "move"
RESIZE_START = "resize-start"
RESIZE_END = "resize-end"
OPERATIONS = (MOVE, RESIZE_START, RESIZE_END)


@dataclass(frozen=True)
class DragValidation:
    is_valid: bool
    adjusted_start: object
    adjusted_end: object
    reason: str = ""


def drag_threshold_exceeded(start_x, start_y, x, y):
    """True once the pointer has travelled far enough to count as a drag."""
    return math.hypot(x - start_x, y - start_y) >= DRAG_CONSTANTS["drag_threshold_px"]


def apply_days_delta(start, end, days_delta, operation):
    """New (start, end) for a drag. Resizing past the opposite edge drags it along."""
    if operation not in OPERATIONS:
        raise ValueError(f"Unknown drag operation: {operation!r}")
    start, end = norm_date(start), norm_date(end)
    if operation == MOVE:
        return add_days(start, days_delta), add_days(end, days_delta)
    if operation == RESIZE_START:
        new_start = add_days(start, days_delta)
        return new_start, max(end, new_start)
    new_end = add_days(end, days_delta)
    return min(start, new_end), new_end


def validate_drag_range(original_start, original_end, days_delta, operation,
                        min_date=None, max_date=None, is_point=False):
    """Validate the range a drag would produce.

    On failure ``adjusted_start``/``adjusted_end`` hold the original dates
    so the caller can snap the item back.
    """
    orig_start, orig_end = norm_date(original_start), norm_date(original_end)
    start, end = apply_days_delta(orig_start, orig_end, days_delta, operation)

    def reject(reason):
        return DragValidation(False, orig_start, orig_end, reason)

    if is_point and start != end:
        return reject("A milestone occupies a single day and cannot be resized")
    duration = days_between(start, end) + 1
    if duration < DRAG_CONSTANTS["min_duration_days"]:
        return reject(f"Duration cannot be less than {DRAG_CONSTANTS['min_duration_days']} day(s)")
    if duration > DRAG_CONSTANTS["max_duration_days"]:
        return reject(f"Duration cannot exceed {DRAG_CONSTANTS['max_duration_days']} days")
    if min_date is not None and start < norm_date(min_date):
        return reject(f"Start cannot be before {norm_date(min_date):%Y-%m-%d}")
    if max_date is not None and end > norm_date(max_date):
        return reject(f"End cannot be after {norm_date(max_date):%Y-%m-%d}")
    return DragValidation(True, start, end)


# ── Bounds ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MilestoneBounds:
    is_valid: bool
    constrained_date: object
    min_allowed: object
    max_allowed: object
    reason: str = ""


def validate_milestone_bounds(new_date, project_start, project_end, other_dates=(), original_date=None):
    """Keep a milestone strictly inside its project and between its neighbours."""
    candidate = norm_date(new_date)
    min_allowed = add_days(project_start, 1)
    max_allowed = add_days(project_end, -1)
    original = norm_date(original_date) if original_date is not None else None

    if original is not None:
        for other in map(norm_date, other_dates):
            if other == original:
                continue
            if other < original and other >= min_allowed:
                min_allowed = max(min_allowed, add_days(other, 1))
            elif other > original and other <= max_allowed:
                max_allowed = min(max_allowed, add_days(other, -1))

    if candidate < min_allowed:
        return MilestoneBounds(False, min_allowed, min_allowed, max_allowed,
                               "Milestone must be at least 1 day after project start and other milestones")
    if candidate > max_allowed:
        return MilestoneBounds(False, max_allowed, min_allowed, max_allowed,
                               "Milestone must be at least 1 day before project end and other milestones")
    return MilestoneBounds(True, candidate, min_allowed, max_allowed)


def validate_resize_bounds(new_start, new_end, events, project_id):
    """A project cannot be shrunk past days that already hold its planned or completed time."""
    start, end = norm_date(new_start), norm_date(new_end)
    committed = [
        norm_date(e.start_time) for e in events
        if e.project_id == project_id and (e.type in ("planned", "completed") or e.completed)
    ]
    if not committed:
        return DragValidation(True, start, end)
    first, last = min(committed), max(committed)
    if start > first:
        return DragValidation(False, first, end,
                              f"Start cannot move past planned time on {first:%Y-%m-%d}")
    if end < last:
        return DragValidation(False, start, last,
                              f"End cannot move before planned time on {last:%Y-%m-%d}")
    return DragValidation(True, start, end)


def validate_holiday_bounds(new_start, new_end, operation):
    """Holidays may be a single day but never reversed."""
    start, end = norm_date(new_start), norm_date(new_end)
    if start <= end:
        return DragValidation(True, start, end)
    if operation == RESIZE_START:
        start = end
    elif operation == RESIZE_END:
        end = start
    return DragValidation(False, start, end, "Holiday start date cannot be after end date")


# ── Interaction ──────────────────────────────────────────────────────────────

@dataclass
class DragState:
    item_id: str
    operation: str
    original_start: object
    original_end: object
    origin_x: float
    origin_y: float = 0.0
    is_point: bool = False
    last_days_delta: int = 0
    snapped_delta: int = 0
    visual_delta: float = 0.0


@dataclass(frozen=True)
class DragUpdate:
    days_delta: int
    visual_delta: float
    start: object
    end: object
    is_valid: bool
    should_update: bool
    reason: str = ""


@dataclass(frozen=True)
class DragResult:
    item_id: str
    operation: str
    days_delta: int
    start: object
    end: object
    is_valid: bool
    reason: str = ""


def snap_with_hysteresis(smooth_delta, current_snap):
    """Move the visual snap only once the pointer is well past the rounding midpoint."""
    if abs(smooth_delta - current_snap) > 0.5 + DRAG_CONSTANTS["snap_hysteresis"]:
        return js_round(smooth_delta)
    return current_snap


class DragInteraction:
    """Single-pointer drag state machine: idle -> dragging -> idle."""

    def __init__(self, mode=DAYS_MODE, min_date=None, max_date=None):
        self.mode = mode
        self.day_width = day_width(mode)
        self.min_date = min_date
        self.max_date = max_date
        self.state = None

    @property
    def is_dragging(self):
        return self.state is not None

    def pointer_down(self, item_id, operation, start, end, x, y=0.0, is_point=False):
        """Start a drag. Any drag already in flight is replaced."""
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown drag operation: {operation!r}")
        self.state = DragState(
            item_id=item_id,
            operation=operation,
            original_start=norm_date(start),
            original_end=norm_date(end),
            origin_x=x,
            origin_y=y,
            is_point=is_point,
        )
        return self.state

    def _validate(self, days_delta):
        s = self.state
        return validate_drag_range(s.original_start, s.original_end, days_delta, s.operation,
                                   self.min_date, self.max_date, s.is_point)

    def pointer_move(self, x):
        """Recompute the drag from the total pointer travel."""
        s = self.state
        if s is None:
            return None
        smooth = (x - s.origin_x) / self.day_width
        days_delta = js_round(smooth)
        if self.mode == WEEKS_MODE:
            s.visual_delta = smooth
        else:
            s.snapped_delta = snap_with_hysteresis(smooth, s.snapped_delta)
            s.visual_delta = float(s.snapped_delta)

        should_update = abs(days_delta - s.last_days_delta) >= 1
        if should_update:
            s.last_days_delta = days_delta
        validation = self._validate(days_delta)
        return DragUpdate(
            days_delta=days_delta,
            visual_delta=s.visual_delta,
            start=validation.adjusted_start,
            end=validation.adjusted_end,
            is_valid=validation.is_valid,
            should_update=should_update,
            reason=validation.reason,
        )

    def pointer_up(self, x=None):
        """Commit the drag and return to idle. Invalid drags snap back."""
        s = self.state
        if s is None:
            return None
        days_delta = js_round((x - s.origin_x) / self.day_width) if x is not None else s.last_days_delta
        validation = self._validate(days_delta)
        self.state = None
        return DragResult(
            item_id=s.item_id,
            operation=s.operation,
            days_delta=days_delta if validation.is_valid else 0,
            start=validation.adjusted_start,
            end=validation.adjusted_end,
            is_valid=validation.is_valid,
            reason=validation.reason,
        )

    def cancel(self):
        """Abandon the drag. Returns the untouched original range, or None when idle."""
        s = self.state
        self.state = None
        if s is None:
            return None
        return s.original_start, s.original_end


# ── Pointer-move throttling ──────────────────────────────────────────────────

class PointerMoveThrottle:
    """Coalesce pointer moves to roughly one per frame.

    ``submit`` returns a position to process now, or None when it was
    buffered; only the latest buffered position survives. ``flush`` emits
    the buffered position once moves have been quiet for the debounce
    interval, so the final pointer position is never lost.
    """

    def __init__(self, mode=DAYS_MODE, clock=time.monotonic):
        self.interval = DRAG_CONSTANTS["throttle_weeks_s" if mode == WEEKS_MODE else "throttle_days_s"]
        self.debounce = DRAG_CONSTANTS["debounce_s"]
        self.clock = clock
        self.pending: Optional[tuple] = None
        self._last_emit = None
        self._last_submit = None

    def submit(self, x, y=0.0, now=None):
        now = self.clock() if now is None else now
        self._last_submit = now
        if self._last_emit is None or now - self._last_emit >= self.interval:
            self.pending = None
            self._last_emit = now
            return (x, y)
        self.pending = (x, y)
        return None

    def flush(self, now=None, force=False):
        if self.pending is None:
            return None
        now = self.clock() if now is None else now
        if not force and now - self._last_submit < self.debounce:
            return None
        position, self.pending = self.pending, None
        self._last_emit = now
        return position

    def reset(self):
        self.pending = None
        self._last_emit = None
        self._last_submit = None
