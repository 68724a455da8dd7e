"""
Playlist scheduling pipeline.

Runs the stages for one catalog, in order:

    classify -> build filler pool -> pack flexible clips
             -> insert fixed-window clips -> interleave filler

Deterministic and pure: no I/O, no clock access, no randomness, no state
shared between calls. Any failure raises a typed error and no partial
timeline escapes.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from storecast.infra.exceptions import ScheduleOverflow
from storecast.scheduling.classifier import classify
from storecast.scheduling.clock import SECONDS_PER_DAY
from storecast.scheduling.filler_interleaver import interleave_filler
from storecast.scheduling.filler_pool import build_filler_pool
from storecast.scheduling.flexible_packer import pack_flexible
from storecast.scheduling.timeline import Timeline
from storecast.scheduling.types import ClipSpec, SchedulerConfig, SchedulerState
from storecast.scheduling.window_inserter import insert_fixed

_log = structlog.get_logger(__name__)


def run_scheduler(
    clips: Sequence[ClipSpec], config: SchedulerConfig | None = None
) -> SchedulerState:
    """Run every stage and return the full scheduler state."""
    config = config or SchedulerConfig.from_settings()

    classification = classify(clips, config)
    state = SchedulerState(config=config, classification=classification)

    state.filler_pool = build_filler_pool(
        classification.fillers,
        classification.committed_seconds,
        config.total_duration_seconds,
    )
    state.timeline = pack_flexible(classification.flexible, config.batch_size)
    insert_fixed(classification.fixed, state.timeline)
    interleave_filler(state.filler_pool, classification.filler_rate, state.timeline)

    if state.timeline.end_seconds > SECONDS_PER_DAY:
        raise ScheduleOverflow(
            f"Timeline runs to {state.timeline.end_seconds}s, past the end of the "
            f"broadcast day ({SECONDS_PER_DAY}s)"
        )
    assert state.timeline.is_contiguous(), "timeline lost contiguity"

    _log.info(
        "playlist_scheduled",
        entries=len(state.timeline),
        committed_seconds=classification.committed_seconds,
        filler_rate=classification.filler_rate,
        filler_pool=len(state.filler_pool),
        idle_seconds=state.timeline.idle_seconds,
        end_at_seconds=state.timeline.end_seconds,
    )
    return state


def build_timeline(
    clips: Sequence[ClipSpec], config: SchedulerConfig | None = None
) -> Timeline:
    """Schedule ``clips`` into one broadcast-day timeline."""
    state = run_scheduler(clips, config)
    assert state.timeline is not None
    return state.timeline
