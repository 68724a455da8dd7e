"""
Filler interleaving.

Walks the filler pool and splices each occurrence in roughly every
``filler_rate`` entries. Whenever the next position runs off the end of the
timeline the skip counter grows, which widens the spacing for the rest of
the pass; once even the widened position is past the end, the remaining
pool is dropped.

A filler never lands where its shift would push a fixed-window occurrence
out of its window; the slot moves past that occurrence instead.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from storecast.scheduling.timeline import Timeline
from storecast.scheduling.types import ClipSpec

_log = structlog.get_logger(__name__)


def open_slot(timeline: Timeline, pos: int, duration_seconds: int) -> int | None:
    """
    First insertion index at or after ``pos`` that keeps windows intact.

    A slot right after dead air moves to the start of that dead air so the
    idle entry absorbs the filler. Returns None once ``pos`` is past the end.
    """
    if pos < 0:
        return None
    while pos <= len(timeline):
        candidate = pos - 1 if pos > 0 and timeline[pos - 1].is_idle else pos
        blocker = timeline.blocking_entry(candidate, duration_seconds)
        if blocker is None:
            return candidate
        pos = blocker + 1
    return None


def interleave_filler(
    filler_pool: Sequence[ClipSpec], filler_rate: int, timeline: Timeline
) -> Timeline:
    """Insert filler occurrences from ``filler_pool`` into ``timeline`` in place."""
    pos = filler_rate - 1
    skips = 0
    inserted = 0

    for clip in filler_pool:
        slot = open_slot(timeline, pos, clip.duration_seconds)
        if slot is None:
            skips += 1
            pos = filler_rate - 1 + skips
            slot = open_slot(timeline, pos, clip.duration_seconds)
            if slot is None:
                break
        timeline.insert(slot, clip)
        inserted += 1
        pos = slot + filler_rate + 1 + skips

    _log.debug(
        "filler_interleaved",
        inserted=inserted,
        discarded=len(filler_pool) - inserted,
        skips=skips,
        end_at_seconds=timeline.end_seconds,
    )
    return timeline
