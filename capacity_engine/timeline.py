"""Date <-> pixel mapping for the zoomable timeline.

Days mode draws one 40px column per day. Weeks mode draws one 77px column
per week, i.e. 11px per day, so everything below works in day widths and
only the column layout differs between modes. Weeks-mode viewports start on
the Monday of the week containing the requested start date.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .date_math import add_days, days_between, get_week_start, js_round, norm_date


DAYS_MODE = "days"
WEEKS_MODE = "weeks"
DAYS_COLUMN_WIDTH = 40
WEEKS_COLUMN_WIDTH = 77
WEEKS_DAY_WIDTH = 11
DAYS_PER_COLUMN = {DAYS_MODE: 1, WEEKS_MODE: 7}

MIN_RECTANGLE_HEIGHT = 3
PIXELS_PER_HOUR = 4
DAY_RECTANGLE_MAX_HEIGHT = 28
PROJECT_RECTANGLE_MAX_HEIGHT = 40


def day_width(mode):
    if mode == DAYS_MODE:
        return DAYS_COLUMN_WIDTH
    if mode == WEEKS_MODE:
        return WEEKS_DAY_WIDTH
    raise ValueError(f"Unknown timeline mode: {mode!r}")


@dataclass(frozen=True)
class TimelineViewport:
    start_date: datetime
    total_width_px: float
    mode: str = DAYS_MODE
    column_width_px: Optional[float] = None

    def __post_init__(self):
        day_width(self.mode)
        start = norm_date(self.start_date)
        if self.mode == WEEKS_MODE:
            start = get_week_start(start)
        object.__setattr__(self, "start_date", start)
        if self.column_width_px is None:
            default = DAYS_COLUMN_WIDTH if self.mode == DAYS_MODE else WEEKS_COLUMN_WIDTH
            object.__setattr__(self, "column_width_px", default)

    @property
    def day_width(self):
        return self.column_width_px / DAYS_PER_COLUMN[self.mode]

    @property
    def column_count(self):
        return max(0, math.ceil(self.total_width_px / self.column_width_px))

    @property
    def end_date(self):
        """Last date covered by the final column."""
        return add_days(self.start_date, self.column_count * DAYS_PER_COLUMN[self.mode] - 1)


def viewport_end(viewport):
    return viewport.end_date


def viewport_dates(viewport):
    """Date at the left edge of every column."""
    step = DAYS_PER_COLUMN[viewport.mode]
    return [add_days(viewport.start_date, i * step) for i in range(viewport.column_count)]


# ── Mapping ──────────────────────────────────────────────────────────────────

def day_offset(d, viewport):
    return days_between(viewport.start_date, d)


def date_to_pixel(d, viewport):
    return day_offset(d, viewport) * viewport.day_width


def pixel_to_date(x, viewport):
    """Nearest whole day to pixel x."""
    return add_days(viewport.start_date, js_round(x / viewport.day_width))


@dataclass(frozen=True)
class BarGeometry:
    left_px: float
    width_px: float
    start_handle_px: float
    end_handle_px: float
    visible: bool


def bar_geometry(start, end, viewport):
    """Bar for an inclusive date range, clipped to the viewport.

    Handles keep their true offsets, which may be negative or past the
    right edge when the range extends beyond the viewport.
    """
    dw = viewport.day_width
    start_handle = day_offset(start, viewport) * dw
    end_handle = (day_offset(end, viewport) + 1) * dw
    left = max(0.0, start_handle)
    right = min(float(viewport.total_width_px), end_handle)
    visible = end_handle > 0 and start_handle < viewport.total_width_px
    return BarGeometry(
        left_px=left,
        width_px=max(0.0, right - left) if visible else 0.0,
        start_handle_px=start_handle,
        end_handle_px=end_handle,
        visible=visible,
    )


@dataclass(frozen=True)
class MilestonePosition:
    left_px: float
    center_px: float
    visible: bool


def milestone_position(due_date, viewport, project_start=None, project_end=None):
    """Marker position for a milestone. Hidden outside the project or the viewport."""
    dw = viewport.day_width
    left = day_offset(due_date, viewport) * dw
    due = norm_date(due_date)
    in_project = ((project_start is None or due >= norm_date(project_start))
                  and (project_end is None or due <= norm_date(project_end)))
    in_view = 0 <= left < viewport.total_width_px
    return MilestonePosition(left_px=left, center_px=left + dw / 2, visible=in_project and in_view)


def rectangle_height(hours, max_height=DAY_RECTANGLE_MAX_HEIGHT):
    """Height of an allocation rectangle: 4px per hour, at least 3px, capped."""
    if hours <= 0:
        return 0
    return min(max(MIN_RECTANGLE_HEIGHT, js_round(hours * PIXELS_PER_HOUR)), max_height)
