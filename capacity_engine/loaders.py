"""Excel workbook I/O: load planning data, validate it, generate a template.

Sheets: Schedule, Holidays, Projects, Milestones, Events. Every loader
degrades gracefully: a missing sheet yields an empty result and a bad row
is reported with a WARNING line and skipped.
"""

import difflib

import pandas as pd
from openpyxl import Workbook
from openpyxl.formatting.rule import CellIsRule
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.datavalidation import DataValidation

from .date_math import Weekday, clean_str, parse_date, parse_datetime, parse_time
from .errors import CapacityEngineError
from .milestones import validate_budget_allocation
from .models import (
    CATEGORIES,
    EVENT_TYPES,
    CalendarEvent,
    Holiday,
    Milestone,
    Project,
    Schedule,
    WorkSlot,
    auto_estimate_flags,
)
from .schedule import validate_schedule

TRUE_VALUES = {"yes", "y", "true", "1", "x"}
WEEKDAY_NAMES = [d.key.title() for d in Weekday]


# ── Helpers ──────────────────────────────────────────────────────────────────

def _read_sheet(filepath, sheet_name, required, optional=False):
    """Read one sheet with stripped column names, or None if unusable."""
    try:
        df = pd.read_excel(filepath, sheet_name=sheet_name)
    except ValueError:
        if not optional:
            print(f"  WARNING: Could not read {sheet_name} sheet: not found")
        return None
    except Exception as e:
        print(f"  WARNING: Could not read {sheet_name} sheet: {e}")
        return None
    if df.empty:
        return None
    df.columns = df.columns.astype(str).str.strip()
    missing = set(required) - set(df.columns)
    if missing:
        print(f"  ERROR: {sheet_name} sheet is missing column(s): {', '.join(sorted(missing))}. "
              f"Found: {', '.join(df.columns)}")
        return None
    return df


def parse_bool(val):
    if isinstance(val, bool):
        return val
    return clean_str(val).lower() in TRUE_VALUES


def parse_hours(val, context=""):
    ctx = f" ({context})" if context else ""
    try:
        hours = float(val)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid hours{ctx}: {val!r}") from None
    if pd.isna(hours):
        raise ValueError(f"Hours are blank{ctx}")
    if hours < 0:
        raise ValueError(f"Hours cannot be negative{ctx}: {hours:g}")
    return hours


def _optional(row, column):
    val = row.get(column)
    return None if val is None or (not isinstance(val, str) and pd.isna(val)) else val


# ── Data Loading ─────────────────────────────────────────────────────────────

def load_schedule(filepath):
    """Load the weekly schedule from the 'Schedule' sheet. None if absent."""
    df = _read_sheet(filepath, "Schedule", {"Day", "Start", "End"})
    if df is None:
        return None
    days = [[] for _ in Weekday]
    for idx, row in df.iterrows():
        row_num = idx + 2
        name = clean_str(row["Day"])
        if not name:
            continue
        try:
            day = Weekday.from_name(name)
            ctx = f"Schedule row {row_num}"
            start = parse_time(row["Start"], ctx)
            end = parse_time(row["End"], ctx)
            duration = _optional(row, "Duration")
            days[day].append(WorkSlot(start, end, None if duration is None else parse_hours(duration, ctx)))
        except (ValueError, CapacityEngineError) as e:
            print(f"  WARNING: Could not parse schedule row {row_num}: {e}")
    return Schedule(tuple(tuple(d) for d in days))


def load_holidays(filepath):
    """Load holiday ranges. End Date defaults to Start Date for single days."""
    df = _read_sheet(filepath, "Holidays", {"Start Date"}, optional=True)
    if df is None:
        return []
    holidays = []
    for idx, row in df.iterrows():
        row_num = idx + 2
        if pd.isna(row["Start Date"]):
            continue
        try:
            start = parse_date(row["Start Date"], context=f"Holidays row {row_num}, 'Start Date'")
            end_val = _optional(row, "End Date")
            end = parse_date(end_val, context=f"Holidays row {row_num}, 'End Date'") if end_val is not None else start
            hol_id = clean_str(_optional(row, "ID")) or f"holiday-{row_num}"
            holidays.append(Holiday(hol_id, start, end, clean_str(_optional(row, "Name"))))
        except (ValueError, CapacityEngineError) as e:
            print(f"  WARNING: Could not parse holiday row {row_num}: {e}")
    return holidays


def load_projects(filepath):
    df = _read_sheet(filepath, "Projects", {"ID", "Name", "Start Date", "Estimated Hours"})
    if df is None:
        return []
    projects = []
    for idx, row in df.iterrows():
        row_num = idx + 2
        project_id = clean_str(row["ID"])
        if not project_id:
            continue
        try:
            ctx = f"Projects row {row_num}"
            continuous = parse_bool(_optional(row, "Continuous"))
            end_val = _optional(row, "End Date")
            skip = clean_str(_optional(row, "Skip Days"))
            projects.append(Project(
                id=project_id,
                name=clean_str(row["Name"]) or project_id,
                start_date=parse_date(row["Start Date"], context=f"{ctx}, 'Start Date'"),
                end_date=parse_date(end_val, context=f"{ctx}, 'End Date'") if end_val is not None else None,
                estimated_hours=parse_hours(row["Estimated Hours"], ctx),
                continuous=continuous,
                auto_estimate_days=auto_estimate_flags([s for s in skip.split(",") if s.strip()]),
            ))
        except (ValueError, CapacityEngineError) as e:
            print(f"  WARNING: Could not parse project row {row_num}: {e}")
    return projects


def load_milestones(filepath):
    df = _read_sheet(filepath, "Milestones", {"Project", "Due Date", "Hours"}, optional=True)
    if df is None:
        return []
    milestones = []
    for idx, row in df.iterrows():
        row_num = idx + 2
        project_id = clean_str(row["Project"])
        if not project_id:
            continue
        try:
            ctx = f"Milestones row {row_num}"
            milestones.append(Milestone(
                id=clean_str(_optional(row, "ID")) or f"milestone-{row_num}",
                project_id=project_id,
                due_date=parse_date(row["Due Date"], context=f"{ctx}, 'Due Date'"),
                time_allocation_hours=parse_hours(row["Hours"], ctx),
                name=clean_str(_optional(row, "Name")),
            ))
        except (ValueError, CapacityEngineError) as e:
            print(f"  WARNING: Could not parse milestone row {row_num}: {e}")
    return milestones


def load_events(filepath):
    df = _read_sheet(filepath, "Events", {"Start", "End"}, optional=True)
    if df is None:
        return []
    events = []
    for idx, row in df.iterrows():
        row_num = idx + 2
        if pd.isna(row["Start"]):
            continue
        try:
            ctx = f"Events row {row_num}"
            events.append(CalendarEvent(
                id=clean_str(_optional(row, "ID")) or f"event-{row_num}",
                start_time=parse_datetime(row["Start"], f"{ctx}, 'Start'"),
                end_time=parse_datetime(row["End"], f"{ctx}, 'End'"),
                project_id=clean_str(_optional(row, "Project")) or None,
                category=clean_str(_optional(row, "Category")).lower() or "event",
                type=clean_str(_optional(row, "Type")).lower() or "planned",
                completed=parse_bool(_optional(row, "Completed")),
                title=clean_str(_optional(row, "Title")),
            ))
        except (ValueError, CapacityEngineError) as e:
            print(f"  WARNING: Could not parse event row {row_num}: {e}")
    return events


def load_data(filepath):
    """Load all planning data from the Excel file."""
    schedule = load_schedule(filepath)
    holidays = load_holidays(filepath)
    projects = load_projects(filepath)
    milestones = load_milestones(filepath)
    events = load_events(filepath)

    if holidays:
        print(f"  Holidays: {len(holidays)} ({sum(h.days for h in holidays)} day(s))")
    if events:
        print(f"  Events: {len(events)}")
    return schedule, holidays, projects, milestones, events


# ── Data Validation ──────────────────────────────────────────────────────────

def _hint(name, known):
    close = difflib.get_close_matches(name, list(known), n=1, cutoff=0.4)
    return f" Did you mean: '{close[0]}'?" if close else ""


def validate_data(schedule, holidays, projects, milestones=(), events=()):
    """Validate loaded data. Returns (errors, warnings) lists."""
    errors, warnings = validate_schedule(schedule, holidays)

    if not projects:
        errors.append("Projects sheet is empty. Add at least one project.")
    by_id = {}
    for project in projects:
        if project.id in by_id:
            errors.append(f"Project id '{project.id}' is used more than once.")
        by_id[project.id] = project
        if project.estimated_hours == 0:
            warnings.append(f"Project '{project.name}' has no estimated hours (nothing to auto-estimate).")

    for m in milestones:
        project = by_id.get(m.project_id)
        if project is None:
            errors.append(f"Milestone '{m.name or m.id}': project '{m.project_id}' not found in Projects sheet."
                          f"{_hint(m.project_id, by_id)}")
            continue
        if m.due_date < project.start_date or (project.end_date and m.due_date > project.end_date):
            warnings.append(f"Milestone '{m.name or m.id}' ({m.due_date:%Y-%m-%d}) is outside "
                            f"project '{project.name}'.")

    for project in projects:
        own = [m for m in milestones if m.project_id == project.id]
        if own:
            budget = validate_budget_allocation(own, project.estimated_hours)
            if not budget.is_valid:
                warnings.append(f"Project '{project.name}': milestones allocate {budget.total_allocated:g}h "
                                f"of {project.estimated_hours:g}h (over by {budget.overage:g}h).")

    for event in events:
        if event.project_id and event.project_id not in by_id:
            warnings.append(f"Event '{event.title or event.id}': project '{event.project_id}' not found."
                            f"{_hint(event.project_id, by_id)}")

    return errors, warnings


# ── Template Generation ─────────────────────────────────────────────────────

def generate_template(output_path):
    """Create an Excel template with example data, dropdowns, and conditional formatting."""
    wb = Workbook()

    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(start_color="2E3B4E", end_color="2E3B4E", fill_type="solid")
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    def add_sheet(ws, headers, rows, widths):
        ws.append(headers)
        for row in rows:
            ws.append(row)
        for cell in ws[1]:
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = border
        for row in ws.iter_rows(min_row=2, max_row=ws.max_row):
            for cell in row:
                cell.border = border
        for col, width in zip("ABCDEFGHIJ", widths):
            ws.column_dimensions[col].width = width
        ws.freeze_panes = "A2"

    def add_dropdown(ws, values, cell_range, title):
        dv = DataValidation(type="list", formula1=f'"{",".join(values)}"', allow_blank=True)
        dv.error = f"Please select one of: {', '.join(values)}"
        dv.errorTitle = f"Invalid {title}"
        ws.add_data_validation(dv)
        dv.add(cell_range)

    max_row = 200

    # ── Sheet 1: Schedule ──
    ws_schedule = wb.active
    ws_schedule.title = "Schedule"
    add_sheet(ws_schedule, ["Day", "Start", "End", "Duration"],
              [[day, "09:00", "12:30", None] for day in WEEKDAY_NAMES[:5]]
              + [[day, "13:30", "17:00", None] for day in WEEKDAY_NAMES[:5]],
              [14, 10, 10, 12])
    add_dropdown(ws_schedule, WEEKDAY_NAMES, f"A2:A{max_row}", "Day")

    # ── Sheet 2: Holidays ──
    ws_holidays = wb.create_sheet("Holidays")
    add_sheet(ws_holidays, ["ID", "Name", "Start Date", "End Date"], [
        ["h-newyear", "New Year's Day", "2026-01-01", "2026-01-01"],
        ["h-easter", "Easter", "2026-04-03", "2026-04-06"],
        ["h-xmas", "Christmas break", "2026-12-24", "2026-12-31"],
    ], [14, 24, 14, 14])

    # ── Sheet 3: Projects ──
    ws_projects = wb.create_sheet("Projects")
    add_sheet(ws_projects, ["ID", "Name", "Start Date", "End Date", "Estimated Hours", "Continuous", "Skip Days"], [
        ["website", "Website Relaunch", "2026-03-02", "2026-04-24", 120, "No", ""],
        ["support", "Client Support", "2026-01-05", None, 400, "Yes", "Friday"],
    ], [14, 28, 14, 14, 16, 12, 20])
    add_dropdown(ws_projects, ["Yes", "No"], f"F2:F{max_row}", "Continuous")

    # ── Sheet 4: Milestones ──
    ws_milestones = wb.create_sheet("Milestones")
    add_sheet(ws_milestones, ["ID", "Project", "Name", "Due Date", "Hours"], [
        ["m-design", "website", "Design sign-off", "2026-03-20", 40],
        ["m-build", "website", "Build complete", "2026-04-17", 60],
        ["m-launch", "website", "Launch", "2026-04-24", 20],
    ], [14, 14, 24, 14, 10])
    dv_project = DataValidation(type="list", formula1=f"=Projects!$A$2:$A${max_row}", allow_blank=False)
    dv_project.error = "Please select a project ID from the Projects sheet"
    dv_project.errorTitle = "Invalid Project"
    ws_milestones.add_data_validation(dv_project)
    dv_project.add(f"B2:B{max_row}")

    # ── Sheet 5: Events ──
    ws_events = wb.create_sheet("Events")
    add_sheet(ws_events, ["ID", "Title", "Project", "Start", "End", "Category", "Type", "Completed"], [
        ["e-1", "Wireframes", "website", "2026-03-03 09:00", "2026-03-03 12:00", "event", "planned", "No"],
        ["e-2", "Wireframes", "website", "2026-03-03 09:00", "2026-03-03 11:15", "event", "tracked", "No"],
        ["e-3", "Standup", None, "2026-03-04 09:00", "2026-03-04 09:15", "habit", "planned", "No"],
    ], [10, 24, 14, 18, 18, 12, 12, 12])
    add_dropdown(ws_events, CATEGORIES, f"F2:F{max_row}", "Category")
    add_dropdown(ws_events, EVENT_TYPES, f"G2:G{max_row}", "Type")
    add_dropdown(ws_events, ["Yes", "No"], f"H2:H{max_row}", "Completed")
    type_range = f"G2:G{max_row}"
    ws_events.conditional_formatting.add(
        type_range,
        CellIsRule(operator="equal", formula=['"tracked"'],
                   font=Font(color="1B5E20"), fill=PatternFill(bgColor="C8E6C9")))
    ws_events.conditional_formatting.add(
        type_range,
        CellIsRule(operator="equal", formula=['"completed"'],
                   font=Font(color="9E9E9E"), fill=PatternFill(bgColor="F5F5F5")))

    wb.save(output_path)
    print(f"Template created: {output_path}")
    print("  - Sheet 'Schedule': weekly work slots (one row per slot)")
    print("  - Sheet 'Holidays': inclusive date ranges with no capacity")
    print("  - Sheet 'Projects': budgets, windows, continuous flag, weekdays to skip")
    print("  - Sheet 'Milestones': hours due by each milestone date")
    print("  - Sheet 'Events': planned, tracked and completed calendar time")
    print("\nEdit the file, then run again without --template to generate the report.")
