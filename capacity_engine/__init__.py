"""
Capacity Engine
Temporal capacity and allocation calculations for a project/time-tracking planner.

Features:
  - Working-day resolution from a weekly schedule, holidays and week overrides
  - Daily capacity with a 110% overbook ceiling and utilisation bands
  - Auto-estimate distribution of project budgets, planned time taking precedence
  - Milestone time distribution and budget validation
  - Overlap resolution between tracked time and planned events
  - Timeline date/pixel mapping and drag interaction with snapping
  - Excel loading, console summary and PNG charts (see cli.py)
"""

from .allocation import (
    AllocationCache,
    TimeAllocation,
    allocation_cache_key,
    auto_estimate_working_days,
    effective_end,
    memoized_project_time_allocation,
    planned_hours_for_date,
    project_allocations,
    project_time_allocation,
)
from .capacity import (
    WorkHourCapacity,
    UtilizationMetrics,
    capacity,
    capacity_with_holidays,
    classify,
    daily_time_breakdown,
    is_day_overbooked,
    other_time,
    overtime_planned_hours,
    total_planned_hours,
    utilization,
)
from .date_math import (
    DateRange,
    Weekday,
    event_duration_on_date,
    get_week_start,
    norm_date,
    overlap_minutes,
    validate_date_range,
)
from .drag import (
    DragInteraction,
    PointerMoveThrottle,
    drag_threshold_exceeded,
    validate_drag_range,
    validate_holiday_bounds,
    validate_milestone_bounds,
    validate_resize_bounds,
)
from .errors import CapacityEngineError, InvalidRangeError, MissingConfigurationError
from .milestones import distribute_milestone_time, estimated_hours_for_date, validate_budget_allocation
from .models import CalendarEvent, Holiday, Milestone, Project, Schedule, WorkHour, WorkSlot
from .overlap import find_multiple_overlaps, find_overlapping_events, resolve_overlap, resolve_overlaps
from .planner import analyze_holiday_overlap, capacity_recommendations, plan_capacity
from .schedule import (
    WeekOverrideStore,
    count_working_days,
    is_working_day,
    resolve_schedule,
    work_hours_for_date,
    working_days_in_range,
)
from .timeline import TimelineViewport, bar_geometry, date_to_pixel, milestone_position, pixel_to_date

__version__ = "0.1.0"
