"""Multi-day capacity planning, holiday impact and the console summary."""

from dataclasses import dataclass, field

import pandas as pd

from .capacity import LOW_UTILIZATION_THRESHOLD, OVERBOOK_TOLERANCE, capacity_with_holidays, classify, utilization
from .date_math import iter_days, norm_date
from .schedule import is_holiday, work_hours_for_date

HIGH_AVERAGE_UTILIZATION = 90
SIGNIFICANT_HOLIDAY_DAYS = 3


@dataclass
class CapacityPlan:
    start: object
    end: object
    capacity_by_date: dict = field(default_factory=dict)
    total_capacity: float = 0.0
    total_allocated: float = 0.0
    total_raw_allocated: float = 0.0
    before_cap: bool = False
    overbooked_days: list = field(default_factory=list)
    underutilized_days: list = field(default_factory=list)

    @property
    def average_utilization(self):
        if self.total_capacity <= 0:
            return 0.0
        return self.total_allocated / self.total_capacity * 100


def plan_capacity(schedule, holidays, events, start, end, overrides=None, before_cap=False):
    """Capacity for every day from start to end inclusive, with running totals."""
    plan = CapacityPlan(start=norm_date(start), end=norm_date(end), before_cap=before_cap)
    for d in iter_days(start, end):
        hours = work_hours_for_date(d, schedule, holidays, overrides)
        cap = capacity_with_holidays(hours, events, d, holidays)
        plan.capacity_by_date[d] = cap
        plan.total_capacity += cap.total_hours
        plan.total_allocated += cap.allocated_hours
        plan.total_raw_allocated += cap.raw_allocated_hours
        if classify(cap, before_cap).is_overbooked:
            plan.overbooked_days.append(d)
        elif cap.total_hours > 0 and utilization(cap, before_cap) < LOW_UTILIZATION_THRESHOLD:
            plan.underutilized_days.append(d)
    return plan


def capacity_recommendations(plan):
    recommendations = []
    if plan.overbooked_days:
        recommendations.append(f"{len(plan.overbooked_days)} day(s) are overbooked. "
                               f"Consider redistributing workload.")
    if plan.underutilized_days:
        recommendations.append(f"{len(plan.underutilized_days)} day(s) are underutilized. "
                               f"Opportunity to schedule additional tasks.")
    avg = plan.average_utilization
    if avg > HIGH_AVERAGE_UTILIZATION:
        recommendations.append("Overall utilization is high. Consider adding buffer time or reducing commitments.")
    elif avg < LOW_UTILIZATION_THRESHOLD:
        recommendations.append("Overall utilization is low. Consider increasing productivity or reducing scheduled hours.")
    else:
        recommendations.append("Capacity utilization is within optimal range.")
    allocated = plan.total_raw_allocated if plan.before_cap else plan.total_allocated
    if plan.total_capacity > 0 and allocated / plan.total_capacity > OVERBOOK_TOLERANCE:
        recommendations.append("Severe overbooking detected. Immediate schedule adjustment required.")
    return recommendations


# ── Holidays ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HolidayOverlapAnalysis:
    has_overlap: bool
    overlapping_holidays: list
    affected_days: int
    recommendations: list


def overlapping_holidays(start, end, holidays):
    start, end = norm_date(start), norm_date(end)
    return [h for h in holidays or () if h.start_date <= end and h.end_date >= start]


def would_overlap_holidays(start, end, holidays):
    return any(is_holiday(d, holidays) for d in iter_days(start, end))


def analyze_holiday_overlap(start, end, holidays):
    """How much of [start, end] is lost to holidays, with advice."""
    hits = overlapping_holidays(start, end, holidays)
    affected = sum(1 for d in iter_days(start, end) if is_holiday(d, holidays))
    recommendations = []
    if hits:
        recommendations.append("Consider adjusting project timeline to account for holidays.")
        if affected > SIGNIFICANT_HOLIDAY_DAYS:
            recommendations.append("Significant holiday impact detected - plan for reduced capacity.")
        recommendations.append("Review team availability during holiday periods.")
    return HolidayOverlapAnalysis(
        has_overlap=bool(hits),
        overlapping_holidays=hits,
        affected_days=affected,
        recommendations=recommendations,
    )


# ── Roll-ups ─────────────────────────────────────────────────────────────────

CAPACITY_COLUMNS = ["date", "total_hours", "allocated_hours", "available_hours", "utilization", "efficiency"]


def capacity_frame(plan):
    """One row per day of the plan, classified the same way the plan was."""
    rows = []
    for d, cap in sorted(plan.capacity_by_date.items()):
        metrics = classify(cap, plan.before_cap)
        rows.append({
            "date": d,
            "total_hours": cap.total_hours,
            "allocated_hours": cap.allocated_hours,
            "available_hours": cap.available_hours,
            "utilization": metrics.percentage,
            "efficiency": metrics.efficiency,
        })
    return pd.DataFrame(rows, columns=CAPACITY_COLUMNS)


def _rollup(plan, freq):
    df = capacity_frame(plan)
    if df.empty:
        return pd.DataFrame(columns=["period", "total_hours", "allocated_hours", "available_hours", "utilization"])
    df["period"] = pd.to_datetime(df["date"]).dt.to_period(freq).dt.start_time
    grouped = df.groupby("period", as_index=False)[["total_hours", "allocated_hours", "available_hours"]].sum()
    grouped["utilization"] = [
        a / t * 100 if t > 0 else 0.0
        for a, t in zip(grouped["allocated_hours"], grouped["total_hours"])
    ]
    return grouped


def weekly_capacity(plan):
    """Totals per week, labelled by the Monday that starts it."""
    return _rollup(plan, "W-SUN")


def monthly_capacity(plan):
    return _rollup(plan, "M")


# ── Executive Summary ────────────────────────────────────────────────────────

def print_summary(plan, projects=(), allocations=None, holidays=None):
    """Print executive summary statistics to console."""
    days = len(plan.capacity_by_date)
    working = sum(1 for cap in plan.capacity_by_date.values() if cap.total_hours > 0)

    print()
    print("=" * 60)
    print("  EXECUTIVE SUMMARY")
    print("=" * 60)
    print(f"  Period:        {plan.start:%d %b %Y} to {plan.end:%d %b %Y} "
          f"({days} days, {working} working)")
    print(f"  Capacity:      {plan.total_capacity:.1f}h")
    print(f"  Allocated:     {plan.total_allocated:.1f}h")
    print(f"  Utilisation:   {plan.average_utilization:.0f}%")
    if holidays:
        analysis = analyze_holiday_overlap(plan.start, plan.end, holidays)
        if analysis.has_overlap:
            print(f"  Holidays:      {len(analysis.overlapping_holidays)} "
                  f"({analysis.affected_days} day(s) affected)")

    if projects and allocations:
        print()
        print("  Project allocation:")
        for project in projects:
            per_day = allocations.get(project.id, {})
            planned = sum(a.hours for a in per_day.values() if a.is_planned)
            estimated = sum(a.hours for a in per_day.values() if a.is_auto_estimate)
            print(f"    {project.name:<28} {planned:6.1f}h planned  {estimated:6.1f}h auto-estimated")

    if plan.overbooked_days:
        print()
        print("  Overbooked days:")
        for d in plan.overbooked_days:
            cap = plan.capacity_by_date[d]
            print(f"    {d:%a %d %b}: {cap.allocated_hours:.1f}h of {cap.total_hours:.1f}h")

    print()
    print("  Recommendations:")
    for rec in capacity_recommendations(plan):
        print(f"    - {rec}")
    print("=" * 60)
