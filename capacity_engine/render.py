"""PNG charts for a capacity plan."""

import os
from datetime import datetime

import matplotlib
matplotlib.use("Agg")
import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import numpy as np

from .planner import weekly_capacity


STYLE = {
    "font_family": ["Segoe UI", "DejaVu Sans"],
    "title_size": 18,
    "subtitle_size": 13,
    "label_size": 9.5,
    "tick_size": 8.5,
    "small_size": 7.5,
    "bg_color": "#FAFAFA",
    "panel_bg": "#FFFFFF",
    "text_primary": "#1A1A2E",
    "text_secondary": "#555555",
    "text_muted": "#999999",
    "grid_color": "#E0E0E0",
    "over_capacity_color": "#E53935",
    "allocated_color": "#1E88E5",
    "project_colors": ["#1E88E5", "#43A047", "#8E24AA", "#FB8C00", "#00ACC1", "#6D4C41"],
    "capacity_line_color": "#1A1A2E",
    "holiday_color": "#E1BEE7",
    "holiday_edge_color": "#7B1FA2",
    "auto_estimate_hatch": "//",
    "dpi": 180,
    "fig_width": 20,
}


# ── Style Helpers ────────────────────────────────────────────────────────────

def apply_style():
    """Configure matplotlib rcParams for consistent styling."""
    plt.rcParams.update({
        "font.family": "sans-serif",
        "font.sans-serif": STYLE["font_family"],
        "font.size": STYLE["label_size"],
        "axes.facecolor": STYLE["panel_bg"],
        "figure.facecolor": STYLE["bg_color"],
        "axes.edgecolor": STYLE["grid_color"],
        "axes.linewidth": 0.8,
        "axes.grid": False,
        "xtick.color": STYLE["text_secondary"],
        "ytick.color": STYLE["text_secondary"],
        "text.color": STYLE["text_primary"],
    })


def style_axes(ax, title="", ylabel="", show_grid_y=False):
    """Apply consistent axis styling to any subplot."""
    if title:
        ax.set_title(title, fontsize=STYLE["subtitle_size"], fontweight="bold",
                     color=STYLE["text_primary"], pad=12, loc="left")
    if ylabel:
        ax.set_ylabel(ylabel, fontsize=STYLE["label_size"], color=STYLE["text_secondary"])
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    if show_grid_y:
        ax.grid(axis="y", alpha=0.15, linewidth=0.5, color=STYLE["grid_color"])
    ax.set_axisbelow(True)


def add_header_footer(fig, title, subtitle=""):
    """Add a title block and generation timestamp footer."""
    fig.suptitle(title, fontsize=STYLE["title_size"], fontweight="bold",
                 color=STYLE["text_primary"], y=0.98, x=0.04, ha="left")
    if subtitle:
        fig.text(0.04, 0.935, subtitle, fontsize=STYLE["small_size"] + 1,
                 color=STYLE["text_muted"], ha="left")
    fig.text(0.98, 0.008, f"Generated {datetime.now().strftime('%d %b %Y %H:%M')}",
             ha="right", fontsize=STYLE["small_size"], color=STYLE["text_muted"])
    fig.text(0.04, 0.008, "Capacity Engine",
             ha="left", fontsize=STYLE["small_size"], color=STYLE["text_muted"])


def _save(fig, output_path, label):
    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    fig.savefig(output_path, dpi=STYLE["dpi"], bbox_inches="tight", facecolor=STYLE["bg_color"])
    plt.close(fig)
    print(f"  {label} chart saved: {output_path}")


# ── Chart: Daily Capacity ────────────────────────────────────────────────────

def render_capacity(plan, output_path, holidays=None):
    """Allocated hours per day against the day's capacity."""
    apply_style()
    dates = sorted(plan.capacity_by_date)
    if not dates:
        print("  No capacity data. Check the date window and the Schedule sheet.")
        return

    x = np.arange(len(dates))
    total = np.array([plan.capacity_by_date[d].total_hours for d in dates])
    allocated = np.array([plan.capacity_by_date[d].allocated_hours for d in dates])
    overbooked = set(plan.overbooked_days)
    colors = [STYLE["over_capacity_color"] if d in overbooked else STYLE["allocated_color"] for d in dates]

    fig = plt.figure(figsize=(STYLE["fig_width"], 7), facecolor=STYLE["bg_color"])
    ax = fig.add_axes([0.06, 0.15, 0.9, 0.7])

    if holidays:
        for i, d in enumerate(dates):
            if any(h.contains(d) for h in holidays):
                ax.axvspan(i - 0.45, i + 0.45, color=STYLE["holiday_color"], alpha=0.3, zorder=0)

    ax.bar(x, allocated, 0.7, color=colors, alpha=0.85, edgecolor="white", linewidth=0.5, zorder=3)
    ax.step(x, total, where="mid", color=STYLE["capacity_line_color"],
            linewidth=1.5, linestyle="--", alpha=0.6, zorder=4)

    for i, (a, t) in enumerate(zip(allocated, total)):
        if t > 0 and a > 0.1:
            pct = a / t * 100
            over = pct > 100
            ax.text(i, a + 0.15, f"{pct:.0f}%", ha="center", fontsize=5.5,
                    color=STYLE["over_capacity_color"] if over else STYLE["text_secondary"],
                    fontweight="bold" if over else "normal", zorder=5)

    step = max(1, len(dates) // 40)
    ax.set_xticks(x[::step])
    ax.set_xticklabels([d.strftime("%a %d %b") for d in dates[::step]],
                       rotation=45, ha="right", fontsize=STYLE["tick_size"])
    ax.set_ylim(0, max(float(total.max()), float(allocated.max()), 1.0) * 1.25)

    legend_handles = [
        mpatches.Patch(facecolor=STYLE["allocated_color"], alpha=0.85, label="Allocated"),
        mpatches.Patch(facecolor=STYLE["over_capacity_color"], alpha=0.85, label="Overbooked"),
        plt.Line2D([0], [0], color=STYLE["capacity_line_color"], linestyle="--", label="Capacity"),
    ]
    if holidays:
        legend_handles.append(mpatches.Patch(facecolor=STYLE["holiday_color"],
                                             edgecolor=STYLE["holiday_edge_color"], alpha=0.3, label="Holiday"))
    ax.legend(handles=legend_handles, loc="upper right", fontsize=STYLE["small_size"], framealpha=0.9)

    style_axes(ax, title="Daily Capacity Utilisation", ylabel="Hours", show_grid_y=True)
    add_header_footer(fig, f"Capacity: {dates[0]:%d %b %Y} to {dates[-1]:%d %b %Y}",
                      f"{plan.total_allocated:.1f}h allocated of {plan.total_capacity:.1f}h "
                      f"({plan.average_utilization:.0f}%)")
    _save(fig, output_path, "Capacity")


# ── Chart: Weekly Capacity ───────────────────────────────────────────────────

def render_weekly(plan, output_path):
    """Weekly totals: capacity vs allocated, from the pandas roll-up."""
    apply_style()
    weekly = weekly_capacity(plan)
    if weekly.empty:
        print("  No weekly data. Check the date window and the Schedule sheet.")
        return

    x = np.arange(len(weekly))
    fig = plt.figure(figsize=(STYLE["fig_width"] * 0.6, 6), facecolor=STYLE["bg_color"])
    ax = fig.add_axes([0.08, 0.18, 0.88, 0.66])
    ax.bar(x - 0.2, weekly["total_hours"], 0.4, color=STYLE["grid_color"], label="Capacity", zorder=3)
    colors = [STYLE["over_capacity_color"] if u > 100 else STYLE["allocated_color"] for u in weekly["utilization"]]
    ax.bar(x + 0.2, weekly["allocated_hours"], 0.4, color=colors, label="Allocated", zorder=3)
    ax.set_xticks(x)
    ax.set_xticklabels([p.strftime("%d %b") for p in weekly["period"]], rotation=45, ha="right",
                       fontsize=STYLE["tick_size"])
    ax.legend(loc="upper right", fontsize=STYLE["small_size"], framealpha=0.9)
    style_axes(ax, title="Weekly Capacity", ylabel="Hours", show_grid_y=True)
    add_header_footer(fig, "Weekly Capacity")
    _save(fig, output_path, "Weekly capacity")


# ── Chart: Project Allocation ────────────────────────────────────────────────

def render_allocation(projects, allocations, output_path):
    """Stacked hours per project per day. Auto-estimates are hatched."""
    apply_style()
    dates = sorted({d for per_day in allocations.values() for d in per_day})
    if not dates or not projects:
        print("  No allocation data. Check the Projects sheet and the date window.")
        return

    x = np.arange(len(dates))
    bottom = np.zeros(len(dates))
    fig = plt.figure(figsize=(STYLE["fig_width"], 7), facecolor=STYLE["bg_color"])
    ax = fig.add_axes([0.06, 0.15, 0.9, 0.7])

    for pidx, project in enumerate(projects):
        per_day = allocations.get(project.id, {})
        color = STYLE["project_colors"][pidx % len(STYLE["project_colors"])]
        planned = np.array([per_day[d].hours if d in per_day and per_day[d].is_planned else 0.0 for d in dates])
        estimated = np.array([per_day[d].hours if d in per_day and per_day[d].is_auto_estimate else 0.0
                              for d in dates])
        ax.bar(x, planned, 0.7, bottom=bottom, color=color, alpha=0.9,
               edgecolor="white", linewidth=0.5, label=f"{project.name} (planned)", zorder=3)
        bottom = bottom + planned
        ax.bar(x, estimated, 0.7, bottom=bottom, color=color, alpha=0.45,
               hatch=STYLE["auto_estimate_hatch"], edgecolor="white", linewidth=0.5,
               label=f"{project.name} (auto-estimate)", zorder=3)
        bottom = bottom + estimated

    step = max(1, len(dates) // 40)
    ax.set_xticks(x[::step])
    ax.set_xticklabels([d.strftime("%a %d %b") for d in dates[::step]],
                       rotation=45, ha="right", fontsize=STYLE["tick_size"])
    ax.legend(loc="upper right", fontsize=STYLE["small_size"], framealpha=0.9, ncol=2)
    style_axes(ax, title="Project Time Allocation", ylabel="Hours", show_grid_y=True)
    add_header_footer(fig, f"Allocation: {dates[0]:%d %b %Y} to {dates[-1]:%d %b %Y}")
    _save(fig, output_path, "Allocation")
