"""Test suite for the reporting shell: Excel I/O, planning roll-ups, charts, CLI.

Covers: function tests on planning and holiday analysis, integration tests
(Excel I/O, template round-trip), render smoke tests, end-to-end CLI runs.
"""

import os
import tempfile
from datetime import datetime, timedelta

import pandas as pd
import pytest
from openpyxl import Workbook

from capacity_engine import allocation
from capacity_engine.allocation import project_allocations
from capacity_engine.cli import default_window, main, parse_window_date
from capacity_engine.loaders import (
    generate_template,
    load_data,
    load_events,
    load_holidays,
    load_milestones,
    load_projects,
    load_schedule,
    parse_bool,
    parse_hours,
    validate_data,
)
from capacity_engine.models import CalendarEvent, Holiday, Milestone, Project, Schedule
from capacity_engine.planner import (
    CAPACITY_COLUMNS,
    analyze_holiday_overlap,
    capacity_frame,
    capacity_recommendations,
    monthly_capacity,
    overlapping_holidays,
    plan_capacity,
    print_summary,
    weekly_capacity,
    would_overlap_holidays,
)
from capacity_engine.render import render_allocation, render_capacity, render_weekly
from capacity_engine.schedule import WeekOverrideStore


MON = datetime(2026, 3, 2)
TUE = datetime(2026, 3, 3)
WED = datetime(2026, 3, 4)
THU = datetime(2026, 3, 5)
FRI = datetime(2026, 3, 6)
SUN = datetime(2026, 3, 8)

WEEKDAY_ROWS = [[day, "09:00", "17:00", None] for day in ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]]


# ── Fixtures ────────────────────────────────────────────────────────────────


def create_test_excel(project_rows, schedule_rows=None, holiday_rows=None,
                      milestone_rows=None, event_rows=None):
    """Create a temp Excel file with test data. Returns filepath."""
    wb = Workbook()

    ws_projects = wb.active
    ws_projects.title = "Projects"
    ws_projects.append(["ID", "Name", "Start Date", "End Date", "Estimated Hours", "Continuous", "Skip Days"])
    for row in project_rows:
        ws_projects.append(row)

    if schedule_rows is not None:
        ws_schedule = wb.create_sheet("Schedule")
        ws_schedule.append(["Day", "Start", "End", "Duration"])
        for row in schedule_rows:
            ws_schedule.append(row)

    if holiday_rows is not None:
        ws_hol = wb.create_sheet("Holidays")
        ws_hol.append(["ID", "Name", "Start Date", "End Date"])
        for row in holiday_rows:
            ws_hol.append(row)

    if milestone_rows is not None:
        ws_ms = wb.create_sheet("Milestones")
        ws_ms.append(["ID", "Project", "Name", "Due Date", "Hours"])
        for row in milestone_rows:
            ws_ms.append(row)

    if event_rows is not None:
        ws_events = wb.create_sheet("Events")
        ws_events.append(["ID", "Title", "Project", "Start", "End", "Category", "Type", "Completed"])
        for row in event_rows:
            ws_events.append(row)

    tmpdir = tempfile.mkdtemp()
    filepath = os.path.join(tmpdir, "test_data.xlsx")
    wb.save(filepath)
    return filepath


def at(d, hh, mm=0):
    return d + timedelta(hours=hh, minutes=mm)


@pytest.fixture
def basic_excel():
    """Minimal valid Excel file for testing."""
    return create_test_excel(
        project_rows=[["p1", "Website", "2026-03-02", "2026-03-13", 40, "No", None]],
        schedule_rows=WEEKDAY_ROWS,
        holiday_rows=[["h1", "Day off", "2026-03-06", None]],
        milestone_rows=[["m1", "p1", "Design", "2026-03-06", 20]],
        event_rows=[["e1", "Kickoff", "p1", "2026-03-02 09:00", "2026-03-02 11:00", "event", "planned", "No"]],
    )


@pytest.fixture
def week_plan_inputs():
    """One week: Monday overbooked, Tuesday optimal, Friday a holiday."""
    schedule = Schedule.uniform("09:00", "17:00")
    holidays = [Holiday("h1", FRI, FRI, "Day off")]
    events = [
        CalendarEvent("e1", at(MON, 9), at(MON, 17), project_id="p1"),
        CalendarEvent("e2", at(MON, 9), at(MON, 13), project_id="p1"),
        CalendarEvent("e3", at(TUE, 9), at(TUE, 15), project_id="p1"),
    ]
    return schedule, holidays, events


@pytest.fixture
def week_plan(week_plan_inputs):
    schedule, holidays, events = week_plan_inputs
    return plan_capacity(schedule, holidays, events, MON, SUN)


# ── Tier 1: Pure Unit Tests ─────────────────────────────────────────────────


class TestCellParsing:
    def test_parse_bool(self):
        assert parse_bool("Yes") is True
        assert parse_bool(" y ") is True
        assert parse_bool("No") is False
        assert parse_bool(None) is False
        assert parse_bool(float("nan")) is False
        assert parse_bool(True) is True

    def test_parse_hours(self):
        assert parse_hours(12) == 12.0
        assert parse_hours("7.5") == 7.5

    def test_parse_hours_rejects(self):
        with pytest.raises(ValueError, match="Invalid hours"):
            parse_hours("abc")
        with pytest.raises(ValueError, match="negative"):
            parse_hours(-1)
        with pytest.raises(ValueError, match="blank"):
            parse_hours(float("nan"))

    def test_parse_window_date(self):
        assert parse_window_date("2026-03-02", "--from") == MON

    def test_parse_window_date_invalid_exits(self, capsys):
        with pytest.raises(SystemExit):
            parse_window_date("02/03/2026", "--from")
        assert "Invalid --from date" in capsys.readouterr().out


class TestDefaultWindow:
    def test_spans_fixed_projects(self):
        projects = [Project("a", "A", MON, FRI, 10), Project("b", "B", TUE, datetime(2026, 4, 30), 10)]
        assert default_window(projects) == (MON, datetime(2026, 4, 30))

    def test_continuous_only(self):
        projects = [Project("c", "C", MON, None, 10, continuous=True)]
        assert default_window(projects) == (MON, MON + timedelta(days=83))

    def test_no_projects_starts_today(self):
        start, end = default_window([], today=datetime(2026, 5, 1, 15, 0))
        assert start == datetime(2026, 5, 1)
        assert (end - start).days == 83


# ── Tier 2: Function Tests ─────────────────────────────────────────────────


class TestPlanCapacity:
    def test_totals(self, week_plan):
        assert len(week_plan.capacity_by_date) == 7
        assert week_plan.total_capacity == 32
        assert week_plan.total_allocated == pytest.approx(14.8)
        assert week_plan.average_utilization == pytest.approx(46.25)

    def test_day_classification(self, week_plan):
        assert week_plan.overbooked_days == [MON]
        assert week_plan.underutilized_days == [WED, THU]

    def test_holiday_has_no_capacity(self, week_plan):
        assert week_plan.capacity_by_date[FRI].total_hours == 0

    def test_before_cap_keeps_raw_total(self, week_plan_inputs):
        schedule, holidays, events = week_plan_inputs
        plan = plan_capacity(schedule, holidays, events, MON, SUN, before_cap=True)
        assert plan.total_raw_allocated == pytest.approx(18)
        assert plan.total_allocated == pytest.approx(14.8)

    def test_overrides_are_applied(self, week_plan_inputs):
        schedule, holidays, events = week_plan_inputs
        store = WeekOverrideStore()
        store.delete_hour(WED, "wednesday-0")
        plan = plan_capacity(schedule, holidays, events, MON, SUN, overrides=store)
        assert plan.total_capacity == 24
        assert plan.underutilized_days == [THU]

    def test_empty_window(self, week_plan_inputs):
        schedule, holidays, events = week_plan_inputs
        plan = plan_capacity(schedule, holidays, events, SUN, MON)
        assert plan.capacity_by_date == {}
        assert plan.average_utilization == 0


class TestCapacityRecommendations:
    def test_week(self, week_plan):
        recs = capacity_recommendations(week_plan)
        assert recs[0].startswith("1 day(s) are overbooked")
        assert recs[1].startswith("2 day(s) are underutilized")
        assert "Overall utilization is low" in recs[2]
        assert not any("Severe" in r for r in recs)

    def test_severe_overbooking_on_raw_allocation(self):
        schedule = Schedule.uniform("09:00", "10:00")
        events = [CalendarEvent(f"e{i}", at(MON, 9), at(MON, 10)) for i in range(3)]
        raw = plan_capacity(schedule, [], events, MON, MON, before_cap=True)
        assert any("Severe" in r for r in capacity_recommendations(raw))
        capped = plan_capacity(schedule, [], events, MON, MON)
        assert not any("Severe" in r for r in capacity_recommendations(capped))

    def test_optimal(self):
        schedule = Schedule.uniform("09:00", "17:00")
        events = [CalendarEvent("e1", at(MON, 9), at(MON, 15))]
        recs = capacity_recommendations(plan_capacity(schedule, [], events, MON, MON))
        assert recs == ["Capacity utilization is within optimal range."]


class TestHolidayAnalysis:
    @pytest.fixture
    def holidays(self):
        return [Holiday("h1", WED, SUN, "Break")]

    def test_few_days(self, holidays):
        analysis = analyze_holiday_overlap(MON, FRI, holidays)
        assert analysis.has_overlap
        assert analysis.affected_days == 3
        assert len(analysis.recommendations) == 2

    def test_significant(self, holidays):
        analysis = analyze_holiday_overlap(MON, datetime(2026, 3, 10), holidays)
        assert analysis.affected_days == 5
        assert any("Significant" in r for r in analysis.recommendations)

    def test_none(self):
        analysis = analyze_holiday_overlap(MON, FRI, [])
        assert not analysis.has_overlap
        assert analysis.recommendations == []

    def test_overlap_helpers(self, holidays):
        assert overlapping_holidays(MON, TUE, holidays) == []
        assert [h.id for h in overlapping_holidays(MON, WED, holidays)] == ["h1"]
        assert would_overlap_holidays(MON, TUE, holidays) is False
        assert would_overlap_holidays(MON, WED, holidays) is True


class TestRollups:
    def test_capacity_frame(self, week_plan):
        df = capacity_frame(week_plan)
        assert list(df.columns) == CAPACITY_COLUMNS
        assert len(df) == 7
        assert df.iloc[0]["efficiency"] == "overbooked"
        assert df.iloc[1]["efficiency"] == "optimal"
        assert df.iloc[0]["utilization"] == pytest.approx(110)

    def test_capacity_frame_follows_before_cap(self, week_plan_inputs):
        schedule, holidays, events = week_plan_inputs
        plan = plan_capacity(schedule, holidays, events, MON, SUN, before_cap=True)
        df = capacity_frame(plan)
        assert df.iloc[0]["utilization"] == pytest.approx(150)
        overbooked = [d for d, eff in zip(df["date"], df["efficiency"]) if eff == "overbooked"]
        assert overbooked == plan.overbooked_days

    def test_weekly(self):
        plan = plan_capacity(Schedule.uniform(), [], [], MON, datetime(2026, 3, 15))
        weekly = weekly_capacity(plan)
        assert len(weekly) == 2
        assert list(weekly["total_hours"]) == [40.0, 40.0]
        assert weekly.iloc[0]["period"] == pd.Timestamp(MON)
        assert weekly.iloc[1]["period"] == pd.Timestamp(datetime(2026, 3, 9))

    def test_weekly_utilization(self, week_plan):
        weekly = weekly_capacity(week_plan)
        assert weekly.iloc[0]["utilization"] == pytest.approx(46.25)

    def test_monthly(self):
        plan = plan_capacity(Schedule.uniform(), [], [], MON, datetime(2026, 4, 5))
        monthly = monthly_capacity(plan)
        assert len(monthly) == 2
        assert monthly.iloc[1]["period"] == pd.Timestamp(datetime(2026, 4, 1))

    def test_empty_plan(self):
        plan = plan_capacity(Schedule.uniform(), [], [], SUN, MON)
        assert weekly_capacity(plan).empty


class TestPrintSummary:
    def test_sections(self, week_plan, capsys):
        project = Project("p1", "Website", MON, FRI, 40)
        allocations = {"p1": project_allocations(project, MON, SUN, Schedule.uniform(), [Holiday("h1", FRI, FRI)])}
        print_summary(week_plan, [project], allocations, [Holiday("h1", FRI, FRI)])
        out = capsys.readouterr().out
        assert "EXECUTIVE SUMMARY" in out
        assert "Capacity:      32.0h" in out
        assert "Website" in out
        assert "Overbooked days:" in out
        assert "Mon 02 Mar" in out
        assert "Holidays:      1 (1 day(s) affected)" in out


class TestValidateData:
    @pytest.fixture
    def schedule(self):
        return Schedule.uniform()

    def test_valid(self, schedule):
        projects = [Project("website", "Website", MON, datetime(2026, 3, 31), 40)]
        milestones = [Milestone("m1", "website", FRI, 20)]
        errors, warnings = validate_data(schedule, [], projects, milestones)
        assert errors == []
        assert warnings == []

    def test_no_projects(self, schedule):
        errors, _ = validate_data(schedule, [], [])
        assert any("Projects sheet is empty" in e for e in errors)

    def test_missing_schedule(self):
        errors, _ = validate_data(None, [], [Project("p1", "P", MON, FRI, 10)])
        assert any("No schedule" in e for e in errors)

    def test_unknown_milestone_project_with_hint(self, schedule):
        projects = [Project("website", "Website", MON, FRI, 40)]
        errors, _ = validate_data(schedule, [], projects, [Milestone("m1", "websit", WED, 5)])
        assert any("Did you mean: 'website'" in e for e in errors)

    def test_duplicate_project(self, schedule):
        projects = [Project("p1", "A", MON, FRI, 10), Project("p1", "B", MON, FRI, 10)]
        errors, _ = validate_data(schedule, [], projects)
        assert any("more than once" in e for e in errors)

    def test_warnings(self, schedule):
        projects = [Project("p1", "Website", MON, FRI, 40), Project("p2", "Idle", MON, FRI, 0)]
        milestones = [Milestone("m1", "p1", WED, 30), Milestone("m2", "p1", datetime(2026, 3, 20), 20)]
        events = [CalendarEvent("e1", at(MON, 9), at(MON, 10), project_id="p9")]
        errors, warnings = validate_data(schedule, [], projects, milestones, events)
        assert errors == []
        assert any("outside" in w for w in warnings)
        assert any("over by 10h" in w for w in warnings)
        assert any("no estimated hours" in w for w in warnings)
        assert any("'p9' not found" in w for w in warnings)


# ── Tier 3: Integration Tests (Excel I/O) ──────────────────────────────────


class TestLoadSchedule:
    def test_weekdays(self, basic_excel):
        schedule = load_schedule(basic_excel)
        assert schedule.weekly_hours == 40
        assert schedule.hours_for(5) == 0

    def test_bad_rows_skipped(self, capsys):
        path = create_test_excel(
            project_rows=[["p1", "P", "2026-03-02", "2026-03-06", 10, "No", None]],
            schedule_rows=WEEKDAY_ROWS + [["Funday", "09:00", "17:00", None],
                                          ["Monday", "13:00", "12:00", None]],
        )
        schedule = load_schedule(path)
        assert schedule.weekly_hours == 40
        out = capsys.readouterr().out
        assert "Could not parse schedule row 7" in out
        assert "Could not parse schedule row 8" in out

    def test_missing_sheet(self, capsys):
        path = create_test_excel(project_rows=[["p1", "P", "2026-03-02", "2026-03-06", 10, "No", None]])
        assert load_schedule(path) is None
        assert "Could not read Schedule sheet" in capsys.readouterr().out

    def test_explicit_duration(self):
        path = create_test_excel(
            project_rows=[["p1", "P", "2026-03-02", "2026-03-06", 10, "No", None]],
            schedule_rows=[["Mon", "09:00", "17:00", 6]],
        )
        assert load_schedule(path).hours_for(0) == 6


class TestLoadHolidays:
    def test_ranges_and_single_days(self, capsys):
        path = create_test_excel(
            project_rows=[["p1", "P", "2026-03-02", "2026-03-06", 10, "No", None]],
            holiday_rows=[
                ["h1", "Day off", "2026-03-04", None],
                ["h2", "Break", "2026-03-10", "2026-03-12"],
                ["h3", "Backwards", "2026-03-20", "2026-03-18"],
            ],
        )
        holidays = load_holidays(path)
        assert [h.id for h in holidays] == ["h1", "h2"]
        assert holidays[0].start_date == holidays[0].end_date == WED
        assert holidays[1].days == 3
        assert "Could not parse holiday row 4" in capsys.readouterr().out

    def test_missing_sheet_is_empty(self, capsys):
        path = create_test_excel(project_rows=[["p1", "P", "2026-03-02", "2026-03-06", 10, "No", None]])
        assert load_holidays(path) == []
        assert capsys.readouterr().out == ""


class TestLoadProjects:
    def test_projects(self, capsys):
        path = create_test_excel(project_rows=[
            ["p1", "Website", "2026-03-02", "2026-03-06", 40, "No", None],
            ["p2", "Support", "2026-03-02", None, 100, "Yes", "Friday, Saturday"],
            ["p3", "Broken", "2026-03-02", "2026-03-06", "abc", "No", None],
        ])
        projects = load_projects(path)
        assert [p.id for p in projects] == ["p1", "p2"]
        assert projects[0].end_date == FRI
        assert projects[0].estimated_hours == 40
        assert projects[1].continuous is True
        assert projects[1].end_date is None
        assert projects[1].auto_estimate_days == (True, True, True, True, False, False, True)
        assert "Could not parse project row 4" in capsys.readouterr().out

    def test_fixed_project_without_end_warns(self, capsys):
        path = create_test_excel(project_rows=[["p1", "Website", "2026-03-02", None, 40, "No", None]])
        assert load_projects(path) == []
        assert "WARNING" in capsys.readouterr().out


class TestLoadMilestonesAndEvents:
    def test_milestones(self, capsys):
        path = create_test_excel(
            project_rows=[["p1", "P", "2026-03-02", "2026-03-06", 10, "No", None]],
            milestone_rows=[["m1", "p1", "Design", "2026-03-04", 10], ["m2", "p1", "Build", "bad", 5]],
        )
        milestones = load_milestones(path)
        assert len(milestones) == 1
        assert milestones[0].due_date == WED
        assert milestones[0].time_allocation_hours == 10
        assert "Could not parse milestone row 3" in capsys.readouterr().out

    def test_events(self, capsys):
        path = create_test_excel(
            project_rows=[["p1", "P", "2026-03-02", "2026-03-06", 10, "No", None]],
            event_rows=[
                ["e1", "Work", "p1", "2026-03-02 09:00", "2026-03-02 12:00", None, "Planned", "No"],
                ["e2", "Tracked", "p1", "2026-03-02 10:00", "2026-03-02 11:00", "event", "tracked", "Yes"],
                ["e3", "Meeting", None, "2026-03-03 10:00", "2026-03-03 11:00", "meeting", "planned", "No"],
            ],
        )
        events = load_events(path)
        assert [e.id for e in events] == ["e1", "e2"]
        assert events[0].category == "event"
        assert events[0].type == "planned"
        assert events[0].start_time == at(MON, 9)
        assert events[0].duration_hours == 3
        assert events[1].type == "tracked"
        assert events[1].completed is True
        assert "Could not parse event row 4" in capsys.readouterr().out

    def test_load_data(self, basic_excel):
        schedule, holidays, projects, milestones, events = load_data(basic_excel)
        assert schedule.weekly_hours == 40
        assert len(holidays) == 1
        assert len(projects) == 1
        assert len(milestones) == 1
        assert len(events) == 1


class TestTemplateRoundtrip:
    def test_template_loads_cleanly(self, tmp_path, capsys):
        path = str(tmp_path / "template.xlsx")
        generate_template(path)
        assert "Template created" in capsys.readouterr().out

        schedule, holidays, projects, milestones, events = load_data(path)
        assert schedule.weekly_hours == 35
        assert len(holidays) == 3
        assert [p.id for p in projects] == ["website", "support"]
        assert projects[1].continuous
        assert not projects[1].auto_estimate_enabled(4)
        assert len(milestones) == 3
        assert len(events) == 3
        errors, warnings = validate_data(schedule, holidays, projects, milestones, events)
        assert errors == []
        assert warnings == []


# ── Tier 4: End-to-End Tests ────────────────────────────────────────────────


class TestRenderSmoke:
    """Smoke tests for render functions: they run and produce a PNG."""

    def test_render_capacity_smoke(self, week_plan, tmp_path):
        p = str(tmp_path / "capacity.png")
        render_capacity(week_plan, p, [Holiday("h1", FRI, FRI)])
        assert os.path.exists(p)
        assert os.path.getsize(p) > 0

    def test_render_weekly_smoke(self, week_plan, tmp_path):
        p = str(tmp_path / "weekly.png")
        render_weekly(week_plan, p)
        assert os.path.getsize(p) > 0

    def test_render_allocation_smoke(self, tmp_path):
        schedule = Schedule.uniform()
        projects = [Project("p1", "Website", MON, FRI, 40), Project("p2", "Support", MON, SUN, 10)]
        events = [CalendarEvent("e1", at(TUE, 9), at(TUE, 12), project_id="p1")]
        allocations = {p.id: project_allocations(p, MON, SUN, schedule, events=events) for p in projects}
        path = str(tmp_path / "allocation.png")
        render_allocation(projects, allocations, path)
        assert os.path.getsize(path) > 0

    def test_empty_allocation_skips(self, tmp_path, capsys):
        path = str(tmp_path / "allocation.png")
        render_allocation([], {}, path)
        assert not os.path.exists(path)
        assert "No allocation data" in capsys.readouterr().out


class TestCli:
    def test_template_flag(self, tmp_path):
        path = str(tmp_path / "data.xlsx")
        main(["--template", "--input", path])
        assert os.path.exists(path)

    def test_full_run(self, tmp_path, capsys):
        path = str(tmp_path / "data.xlsx")
        outdir = str(tmp_path / "out")
        main(["--template", "--input", path])
        main(["--input", path, "--outdir", outdir, "--from", "2026-03-02", "--to", "2026-03-15"])
        out = capsys.readouterr().out
        assert "Done." in out
        for name in ("capacity_daily.png", "capacity_weekly.png", "allocation.png", "summary.txt"):
            assert os.path.exists(os.path.join(outdir, name))
        with open(os.path.join(outdir, "summary.txt"), encoding="utf-8") as f:
            summary = f.read()
        assert "EXECUTIVE SUMMARY" in summary
        assert "Milestones:" in summary
        assert "Website Relaunch" in summary

    def test_auto_estimate_days_computed_once_per_project(self, tmp_path, monkeypatch):
        """The working-day set is scanned once per project, not once per day of the window."""

        calls = []
        original = allocation.auto_estimate_working_days

        def counting(project, *args, **kwargs):
            calls.append(project.id)
            return original(project, *args, **kwargs)

        monkeypatch.setattr(allocation, "auto_estimate_working_days", counting)
        path = str(tmp_path / "data.xlsx")
        main(["--template", "--input", path])
        main(["--input", path, "--outdir", str(tmp_path / "out"), "--charts", "allocation",
              "--from", "2026-03-02", "--to", "2026-04-26"])
        assert calls
        assert len(calls) == len(set(calls))

    def test_single_chart(self, tmp_path):
        path = str(tmp_path / "data.xlsx")
        outdir = str(tmp_path / "out")
        main(["--template", "--input", path])
        main(["--input", path, "--outdir", outdir, "--charts", "capacity",
              "--from", "2026-03-02", "--to", "2026-03-08", "--before-cap"])
        assert os.path.exists(os.path.join(outdir, "capacity_daily.png"))
        assert not os.path.exists(os.path.join(outdir, "allocation.png"))
        assert os.path.exists(os.path.join(outdir, "summary.txt"))

    def test_missing_input_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--input", str(tmp_path / "nope.xlsx")])
        assert exc.value.code == 1
        assert "Input file not found" in capsys.readouterr().out

    def test_validation_errors_exit(self, tmp_path, capsys):
        path = create_test_excel(
            project_rows=[["website", "Website", "2026-03-02", "2026-03-13", 40, "No", None]],
            schedule_rows=WEEKDAY_ROWS,
            milestone_rows=[["m1", "websit", "Design", "2026-03-06", 20]],
        )
        with pytest.raises(SystemExit) as exc:
            main(["--input", path, "--outdir", str(tmp_path / "out")])
        assert exc.value.code == 1
        assert "ERROR:" in capsys.readouterr().out

    def test_reversed_window_exits(self, basic_excel, tmp_path):
        with pytest.raises(SystemExit):
            main(["--input", basic_excel, "--outdir", str(tmp_path / "out"),
                  "--from", "2026-03-10", "--to", "2026-03-02"])
