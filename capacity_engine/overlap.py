"""Proposals for planned events hit by a tracked time interval.

Nothing here mutates an event. Each ``OverlapAction`` says what the caller
should do: delete the event, shorten it, or shorten it and add a tail.
"""

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Optional

from .date_math import intervals_overlap, overlap_minutes


MIN_VIABLE_MINUTES = 6
MIN_VIABLE = timedelta(minutes=MIN_VIABLE_MINUTES)

DELETE = "delete"
SPLIT = "split"
TRIM_START = "trim_start"
TRIM_END = "trim_end"
NO_OVERLAP = "none"


@dataclass(frozen=True)
class OverlapAction:
    type: str
    event: object
    updated_event: Optional[object] = None
    new_event: Optional[object] = None


@dataclass(frozen=True)
class OverlapDetails:
    event: object
    overlap_start: object
    overlap_end: object
    overlap_minutes: float


def _viable(start, end):
    return end - start > MIN_VIABLE


def resolve_overlap(event, tracking_start, tracking_end, new_id=None):
    """Decide what happens to one planned event when [tracking_start, tracking_end) is tracked.

    Fragments shorter than ``MIN_VIABLE_MINUTES`` are not kept: a trim that
    would leave one deletes the event and a split drops the tail.
    """
    ts, te = tracking_start, tracking_end
    es, ee = event.start_time, event.end_time
    if ts >= te:
        return OverlapAction(NO_OVERLAP, event)
    if ts <= es and te >= ee:
        return OverlapAction(DELETE, event)
    if not intervals_overlap(es, ee, ts, te):
        return OverlapAction(NO_OVERLAP, event)

    if ts > es and te < ee:
        head = event.with_times(es, ts)
        tail = None
        if _viable(te, ee):
            tail = replace(event, id=new_id or f"{event.id}-split", start_time=te, end_time=ee)
        return OverlapAction(SPLIT, event, updated_event=head, new_event=tail)

    if ts <= es:
        if not _viable(te, ee):
            return OverlapAction(DELETE, event)
        return OverlapAction(TRIM_START, event, updated_event=event.with_times(te, ee))

    if not _viable(es, ts):
        return OverlapAction(DELETE, event)
    return OverlapAction(TRIM_END, event, updated_event=event.with_times(es, ts))


def find_overlapping_events(events, tracking_start, tracking_end, current_event_id=None):
    """Planned events (other than the one being tracked) touching the tracking range."""
    if tracking_start >= tracking_end:
        return []
    return [
        e for e in events
        if e.type == "planned"
        and e.id != current_event_id
        and intervals_overlap(e.start_time, e.end_time, tracking_start, tracking_end)
    ]


def resolve_overlaps(events, tracking_start, tracking_end, current_event_id=None):
    actions = (
        resolve_overlap(e, tracking_start, tracking_end)
        for e in find_overlapping_events(events, tracking_start, tracking_end, current_event_id)
    )
    return [a for a in actions if a.type != NO_OVERLAP]


def overlap_details(event, tracking_start, tracking_end):
    """Clipped overlap of one event with the tracking range, or None."""
    minutes = overlap_minutes(event.start_time, event.end_time, tracking_start, tracking_end)
    if minutes <= 0:
        return None
    return OverlapDetails(
        event=event,
        overlap_start=max(event.start_time, tracking_start),
        overlap_end=min(event.end_time, tracking_end),
        overlap_minutes=minutes,
    )


def find_multiple_overlaps(events, tracking_start, tracking_end, current_event_id=None):
    """Overlap details for every affected planned event, largest overlap first."""
    details = [
        overlap_details(e, tracking_start, tracking_end)
        for e in find_overlapping_events(events, tracking_start, tracking_end, current_event_id)
    ]
    return sorted((d for d in details if d is not None), key=lambda d: d.overlap_minutes, reverse=True)
