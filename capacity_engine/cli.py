"""Command line entry point: Excel workbook in, summary and charts out."""

import argparse
import io
import os
import sys
from datetime import datetime, timedelta

from .allocation import effective_end, project_allocations
from .date_math import iter_days, norm_date
from .loaders import generate_template, load_data, validate_data
from .milestones import distribute_milestone_time, estimated_hours_for_date
from .planner import plan_capacity, print_summary
from .render import render_allocation, render_capacity, render_weekly

DEFAULT_INPUT = "capacity_data.xlsx"
DEFAULT_OUTDIR = "output"
DEFAULT_WINDOW_DAYS = 84
CHARTS = ["all", "capacity", "weekly", "allocation"]


class _TeeWriter:
    """Write to two streams simultaneously (for summary.txt capture)."""

    def __init__(self, a, b):
        self.a, self.b = a, b

    def write(self, data):
        self.a.write(data)
        self.b.write(data)

    def flush(self):
        self.a.flush()
        self.b.flush()


def parse_window_date(value, flag):
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        print(f"  ERROR: Invalid {flag} date '{value}'. Use YYYY-MM-DD format.")
        sys.exit(1)


def default_window(projects, today=None):
    """Earliest project start to the latest fixed end (or 12 weeks on)."""
    today = norm_date(today or datetime.now())
    if not projects:
        return today, today + timedelta(days=DEFAULT_WINDOW_DAYS - 1)
    start = min(p.start_date for p in projects)
    ends = [p.end_date for p in projects if not p.continuous]
    end = max(ends) if ends else start + timedelta(days=DEFAULT_WINDOW_DAYS - 1)
    return start, end


def print_milestones(projects, milestones, schedule, holidays, date_from, date_to):
    if not milestones:
        return
    print()
    print("  Milestones:")
    for project in projects:
        own = [m for m in milestones if m.project_id == project.id]
        if not own:
            continue
        entries = distribute_milestone_time(own, project.start_date, schedule, holidays,
                                            project.auto_estimate_days)
        in_window = sum(estimated_hours_for_date(d, entries) for d in iter_days(date_from, date_to))
        print(f"    {project.name}: {len(own)} milestone(s), {in_window:.1f}h due in window")
        for e in entries:
            if e.is_deadline_day:
                print(f"      {e.date:%d %b %Y}  {e.milestone.name or e.milestone.id:<24} "
                      f"{e.estimated_hours:.2f}h/day over {e.day_index + 1} day(s)")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Capacity Engine: daily capacity, project allocation and milestone plans from Excel data"
    )
    parser.add_argument(
        "--template", action="store_true",
        help="Generate an Excel template with example data"
    )
    parser.add_argument(
        "--input", default=DEFAULT_INPUT,
        help=f"Path to Excel input file (default: {DEFAULT_INPUT})"
    )
    parser.add_argument(
        "--outdir", default=DEFAULT_OUTDIR,
        help=f"Output directory for charts and summary.txt (default: {DEFAULT_OUTDIR}/)"
    )
    parser.add_argument(
        "--charts", default=["all"], nargs="+", choices=CHARTS,
        help="Which charts to generate (default: all). Can specify multiple: --charts capacity weekly"
    )
    parser.add_argument(
        "--from", dest="date_from", default=None,
        help="First day of the planning window (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--to", dest="date_to", default=None,
        help="Last day of the planning window (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--before-cap", action="store_true",
        help="Classify utilisation on raw allocation instead of the 110%% capped figure"
    )
    args = parser.parse_args(argv)

    if args.template:
        generate_template(args.input)
        return

    if not os.path.exists(args.input):
        print(f"Error: Input file not found: {args.input}")
        print("Run with --template first to create a template.")
        sys.exit(1)

    date_from = parse_window_date(args.date_from, "--from") if args.date_from else None
    date_to = parse_window_date(args.date_to, "--to") if args.date_to else None

    # Load
    print(f"Loading data from: {args.input}")
    schedule, holidays, projects, milestones, events = load_data(args.input)
    print(f"  Projects: {len(projects)}")
    print(f"  Milestones: {len(milestones)}")

    # Validate
    errors, warnings = validate_data(schedule, holidays, projects, milestones, events)
    for w in warnings:
        print(f"  WARNING: {w}")
    if errors:
        for e in errors:
            print(f"  ERROR: {e}")
        sys.exit(1)

    default_from, default_to = default_window(projects)
    date_from = date_from or default_from
    date_to = date_to or default_to
    if date_from > date_to:
        print(f"  ERROR: --from ({date_from:%Y-%m-%d}) is after --to ({date_to:%Y-%m-%d}).")
        sys.exit(1)
    print(f"  Window: {date_from:%d %b %Y} to {date_to:%d %b %Y}")

    # Calculate
    plan = plan_capacity(schedule, holidays, events, date_from, date_to, before_cap=args.before_cap)
    allocations = {
        project.id: project_allocations(project, max(date_from, project.start_date),
                                        min(date_to, effective_end(project)), schedule, holidays, events)
        for project in projects
    }

    # Summary (captured for summary.txt)
    os.makedirs(args.outdir, exist_ok=True)
    summary_capture = io.StringIO()
    _orig_stdout = sys.stdout
    sys.stdout = _TeeWriter(_orig_stdout, summary_capture)
    try:
        print_summary(plan, projects, allocations, holidays)
        print_milestones(projects, milestones, schedule, holidays, date_from, date_to)
    finally:
        sys.stdout = _orig_stdout
    summary_text = summary_capture.getvalue()

    # Render
    charts = args.charts
    gen_all = "all" in charts
    output_files = []
    if gen_all or "capacity" in charts:
        path = os.path.join(args.outdir, "capacity_daily.png")
        render_capacity(plan, path, holidays)
        output_files.append(path)
    if gen_all or "weekly" in charts:
        path = os.path.join(args.outdir, "capacity_weekly.png")
        render_weekly(plan, path)
        output_files.append(path)
    if gen_all or "allocation" in charts:
        path = os.path.join(args.outdir, "allocation.png")
        render_allocation(projects, allocations, path)
        output_files.append(path)

    summary_path = os.path.join(args.outdir, "summary.txt")
    with open(summary_path, "w", encoding="utf-8") as sf:
        sf.write(summary_text)
    output_files.append(summary_path)

    print()
    print("  Output:")
    for f in output_files:
        if os.path.exists(f):
            print(f"    {os.path.abspath(f)}")
    print("\nDone.")


if __name__ == "__main__":
    main()
