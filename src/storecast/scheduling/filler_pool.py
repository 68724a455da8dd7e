"""
Filler pool construction.

Cycles through the filler clips in catalog order, one occurrence per clip
per pass, until the running total (seeded with the committed airtime) would
pass the broadcast duration.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from storecast.infra.exceptions import NoFillerAvailable
from storecast.scheduling.types import ClipSpec

_log = structlog.get_logger(__name__)


def build_filler_pool(
    fillers: Sequence[ClipSpec],
    committed_seconds: int,
    total_duration_seconds: int,
) -> list[ClipSpec]:
    """
    Expand ``fillers`` into the occurrences that pad the rest of the day.

    Within a pass, appending stops at the first clip that would push the
    total past ``total_duration_seconds``; cycling stops once the total is
    no longer below it.

    Raises:
        NoFillerAvailable: time remains to pad but ``fillers`` is empty.
    """
    remaining = total_duration_seconds - committed_seconds
    if remaining <= 0:
        return []
    if not fillers:
        raise NoFillerAvailable(
            f"{remaining}s of broadcast time left to pad but the catalog has no filler clips"
        )

    # Each full pass adds at least the shortest clip.
    max_passes = remaining // min(c.duration_seconds for c in fillers) + 1

    pool: list[ClipSpec] = []
    total = committed_seconds
    passes = 0
    overflowed = False
    while total < total_duration_seconds and not overflowed and passes < max_passes:
        passes += 1
        for clip in fillers:
            if total + clip.duration_seconds > total_duration_seconds:
                overflowed = True
                break
            total += clip.duration_seconds
            pool.append(clip)

    _log.debug(
        "filler_pool_built",
        occurrences=len(pool),
        passes=passes,
        padded_seconds=total - committed_seconds,
        unpadded_seconds=total_duration_seconds - total,
    )
    return pool
