"""Spread each milestone's hours over the working days leading up to it."""

from dataclasses import dataclass
from typing import Optional

from .date_math import add_days, iter_days, norm_date, weekday
from .models import ALL_DAYS_ENABLED
from .schedule import working_days_in_range


HIGH_BUDGET_UTILIZATION = 90
LOW_BUDGET_UTILIZATION = 50
SMALL_MILESTONE_HOURS = 1
LARGE_MILESTONE_SHARE = 0.5


@dataclass(frozen=True)
class MilestoneDayEntry:
    date: object
    estimated_hours: float
    day_index: int
    is_deadline_day: bool
    milestone: Optional[object] = None


@dataclass(frozen=True)
class BudgetValidation:
    is_valid: bool
    total_allocated: float
    utilization: float
    remaining: float
    overage: Optional[float]
    recommendations: list


def milestone_span_days(start, due, schedule=None, holidays=None, auto_estimate_days=ALL_DAYS_ENABLED):
    """Days of one span. Every calendar day when no schedule is supplied."""
    if schedule is None:
        return list(iter_days(start, due))
    return [d for d in working_days_in_range(start, due, schedule, holidays)
            if auto_estimate_days[weekday(d)]]


def distribute_milestone_time(milestones, project_start, schedule=None, holidays=None,
                              auto_estimate_days=ALL_DAYS_ENABLED):
    """Per-day entries for every milestone, in due-date order.

    Each milestone's span starts the day after the previous due date (the
    project start for the first) and ends on its own due date. Its hours are
    split evenly over the span's working days; the last of those days is the
    deadline day and carries the milestone.
    """
    entries = []
    span_start = norm_date(project_start)
    for milestone in sorted(milestones, key=lambda m: m.due_date):
        days = milestone_span_days(span_start, milestone.due_date, schedule, holidays, auto_estimate_days)
        per_day = milestone.time_allocation_hours / len(days) if days else 0.0
        last = len(days) - 1
        for idx, d in enumerate(days):
            entries.append(MilestoneDayEntry(
                date=d,
                estimated_hours=per_day,
                day_index=idx,
                is_deadline_day=idx == last,
                milestone=milestone if idx == last else None,
            ))
        span_start = add_days(milestone.due_date, 1)
    return entries


def estimated_hours_for_date(d, entries):
    """Total distributed milestone hours falling on d."""
    day = norm_date(d)
    return sum(e.estimated_hours for e in entries if e.date == day)


def validate_budget_allocation(milestones, project_budget, exclude_id=None):
    """Check milestone allocations against the project budget."""
    relevant = [m for m in milestones if m.id != exclude_id] if exclude_id else list(milestones)
    total = sum(m.time_allocation_hours for m in relevant)
    utilization = total / project_budget * 100 if project_budget > 0 else 0.0
    overage = max(0.0, total - project_budget)
    is_valid = total <= project_budget

    recommendations = []
    if not is_valid:
        recommendations.append(f"Budget exceeded by {overage:g}h. Consider reducing milestone allocations.")
    elif utilization > HIGH_BUDGET_UTILIZATION:
        recommendations.append("Budget utilization high (>90%). Consider adding buffer time.")
    elif utilization < LOW_BUDGET_UTILIZATION:
        recommendations.append("Budget utilization low (<50%). Consider adding more milestones or detail.")

    if milestones:
        average = sum(m.time_allocation_hours for m in milestones) / len(milestones)
        if average < SMALL_MILESTONE_HOURS:
            recommendations.append("Very small milestone allocations detected. Consider consolidating.")
        elif average > project_budget * LARGE_MILESTONE_SHARE:
            recommendations.append("Large milestone allocations detected. Consider breaking down.")

    return BudgetValidation(
        is_valid=is_valid,
        total_allocated=total,
        utilization=utilization,
        remaining=max(0.0, project_budget - total),
        overage=None if is_valid else overage,
        recommendations=recommendations,
    )


def milestone_metrics(milestones, project_budget):
    hours = [m.time_allocation_hours for m in milestones]
    return {
        "count": len(hours),
        "total_allocated": sum(hours),
        "min": min(hours) if hours else 0.0,
        "max": max(hours) if hours else 0.0,
        "average": sum(hours) / len(hours) if hours else 0.0,
        "budget": validate_budget_allocation(milestones, project_budget),
    }
