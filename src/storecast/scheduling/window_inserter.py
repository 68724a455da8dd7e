"""
Fixed-window insertion.

Each fixed clip gets ``frequency`` target instants spread evenly across its
window; one occurrence is spliced in at each target. Clips are processed in
ascending window-start order, so later insertions see the shifts made by
earlier ones.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from storecast.infra.exceptions import WindowUnreachable
from storecast.scheduling.clock import format_slot
from storecast.scheduling.timeline import Timeline
from storecast.scheduling.types import ClipSpec, TimelineEntry

_log = structlog.get_logger(__name__)


def window_targets(window: tuple[int, int], frequency: int) -> list[int]:
    """``ws + floor(i * (we - ws) / f)`` for i in 0..f-1; all inside [ws, we)."""
    start, end = window
    span = end - start
    return [start + (i * span) // frequency for i in range(frequency)]


def place_at_target(timeline: Timeline, clip: ClipSpec, target_seconds: int) -> TimelineEntry:
    """
    Splice one occurrence of ``clip`` in for ``target_seconds``.

    The position is the first entry starting after the target (else the
    end). Past the end of the content, or inside idle time, the occurrence
    starts exactly at the target; otherwise it starts where its predecessor
    ends and later entries shift. When that predecessor runs to or past the
    window end, the occurrence goes in front of it instead.
    """
    window_start, window_end = clip.window
    pos = timeline.position_after(target_seconds)

    if pos == len(timeline) and timeline.end_seconds <= target_seconds:
        return timeline.append_at(clip, target_seconds)

    if pos > 0:
        prev = timeline[pos - 1]
        if prev.is_idle:
            if prev.start_seconds < target_seconds:
                timeline.split_idle(pos - 1, target_seconds)
            else:
                pos -= 1
        elif prev.end_seconds >= window_end and prev.start_seconds >= window_start:
            pos -= 1
    return timeline.insert(pos, clip)


def check_windows(timeline: Timeline) -> None:
    """Raise WindowUnreachable for the first occurrence starting outside its window."""
    for entry in timeline:
        window = entry.clip.window if entry.clip is not None else None
        if window is not None and not window[0] <= entry.start_seconds < window[1]:
            raise WindowUnreachable(
                f"Clip '{entry.name}' starts at {entry.start_seconds}s, "
                f"outside its time slot {format_slot(*window)}"
            )


def insert_fixed(fixed: Sequence[ClipSpec], timeline: Timeline) -> Timeline:
    """Insert every occurrence of every fixed-window clip into ``timeline``.

    Raises:
        WindowUnreachable: an occurrence, new or shifted by a later one,
            ends up starting outside its window.
    """
    for clip in sorted(fixed, key=lambda c: c.window):
        for target in window_targets(clip.window, clip.frequency):
            entry = place_at_target(timeline, clip, target)
            _log.debug(
                "window_occurrence_placed",
                clip=clip.name,
                target_at_seconds=target,
                placed_at_seconds=entry.start_seconds,
            )
            check_windows(timeline)
    return timeline
