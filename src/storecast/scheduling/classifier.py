"""
Catalog classification.

Splits a catalog into filler, flexible and fixed-window clips, totals the
airtime the non-filler clips commit to, and derives the filler rate: how many
non-filler occurrences sit between two consecutive filler insertions.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Sequence

import structlog

from storecast.infra.exceptions import ScheduleOverbooked
from storecast.scheduling.types import Classification, ClipSpec, SchedulerConfig

_log = structlog.get_logger(__name__)


def _round_half_up(x: Fraction) -> int:
    """ROUND_HALF_UP: floor(x + 1/2) for non-negative x."""
    return int(math.floor(x + Fraction(1, 2)))


def filler_rate(committed_seconds: int, total_duration_seconds: int) -> int:
    """round_half_up(committed / (total - committed)).

    Raises:
        ScheduleOverbooked: committed time already meets or exceeds the total.
    """
    remaining = total_duration_seconds - committed_seconds
    if remaining <= 0:
        raise ScheduleOverbooked(
            f"Committed clip time ({committed_seconds}s) leaves no room in a "
            f"{total_duration_seconds}s broadcast"
        )
    return _round_half_up(Fraction(committed_seconds, remaining))


def classify(clips: Sequence[ClipSpec], config: SchedulerConfig) -> Classification:
    """Partition ``clips`` and compute committed seconds and the filler rate."""
    fillers: list[ClipSpec] = []
    flexible: list[ClipSpec] = []
    fixed: list[ClipSpec] = []
    committed = 0

    for clip in clips:
        if clip.is_filler:
            fillers.append(clip)
            continue
        if clip.window is not None:
            fixed.append(clip)
        else:
            flexible.append(clip)
        committed += clip.committed_seconds

    # Stable: clips sharing a window keep catalog order.
    fixed.sort(key=lambda c: c.window)

    rate = filler_rate(committed, config.total_duration_seconds)
    _log.info(
        "catalog_classified",
        fillers=len(fillers),
        flexible=len(flexible),
        fixed=len(fixed),
        committed_seconds=committed,
        filler_rate=rate,
    )
    return Classification(
        fillers=fillers,
        flexible=flexible,
        fixed=fixed,
        committed_seconds=committed,
        filler_rate=rate,
    )
