"""
Playlist timeline scheduling.

Public entry points: build_timeline() and run_scheduler(), plus the data
types every stage shares.
"""

from storecast.scheduling.playlist_scheduler import build_timeline, run_scheduler
from storecast.scheduling.timeline import Timeline
from storecast.scheduling.types import (
    Classification,
    ClipKind,
    ClipSpec,
    SchedulerConfig,
    SchedulerState,
    TimelineEntry,
)

__all__ = [
    "Classification",
    "ClipKind",
    "ClipSpec",
    "SchedulerConfig",
    "SchedulerState",
    "Timeline",
    "TimelineEntry",
    "build_timeline",
    "run_scheduler",
]
