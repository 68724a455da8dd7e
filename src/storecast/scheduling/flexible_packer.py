"""
Flexible clip packing.

Builds the initial timeline from clips without a fixed window. Occurrences
are ordered by descending frequency, chunked into fixed-size batches and
drained round-robin, so the repeats of a high-frequency clip land in
different batches and spread across the day instead of clustering.
"""

from __future__ import annotations

from collections import deque
from typing import Sequence

import structlog

from storecast.scheduling.timeline import Timeline
from storecast.scheduling.types import DEFAULT_BATCH_SIZE, ClipSpec

_log = structlog.get_logger(__name__)


def expand_occurrences(flexible: Sequence[ClipSpec]) -> list[ClipSpec]:
    """One entry per required occurrence, highest frequency first (stable)."""
    ordered = sorted(flexible, key=lambda c: -c.frequency)
    occurrences: list[ClipSpec] = []
    for clip in ordered:
        occurrences.extend([clip] * clip.frequency)
    return occurrences


def batch_occurrences(
    occurrences: Sequence[ClipSpec], batch_size: int = DEFAULT_BATCH_SIZE
) -> list[deque[ClipSpec]]:
    """Chunk into consecutive batches of ``batch_size`` (the last may be short)."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    return [
        deque(occurrences[i : i + batch_size])
        for i in range(0, len(occurrences), batch_size)
    ]


def drain_round_robin(batches: Sequence[deque[ClipSpec]]) -> list[ClipSpec]:
    """Take the front of each non-empty batch in turn until all are empty."""
    order: list[ClipSpec] = []
    remaining = sum(len(b) for b in batches)
    while remaining:
        for batch in batches:
            if batch:
                order.append(batch.popleft())
                remaining -= 1
    return order


def pack_flexible(
    flexible: Sequence[ClipSpec], batch_size: int = DEFAULT_BATCH_SIZE
) -> Timeline:
    """Lay the flexible occurrences back to back from midnight."""
    occurrences = expand_occurrences(flexible)
    batches = batch_occurrences(occurrences, batch_size)

    timeline = Timeline()
    for clip in drain_round_robin(batches):
        timeline.append(clip)

    _log.debug(
        "flexible_packed",
        occurrences=len(occurrences),
        batches=len(batches),
        end_at_seconds=timeline.end_seconds,
    )
    return timeline
