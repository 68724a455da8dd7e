"""
Scheduler data types.

Canonical data structures shared by every pipeline stage. Stages and tests
import from this module rather than redefining shapes locally.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from storecast.infra.exceptions import (
    InvalidWindow,
    NonPositiveDuration,
    NonPositiveFrequency,
    ValidationError,
)
from storecast.scheduling.clock import SECONDS_PER_DAY

if TYPE_CHECKING:
    from storecast.scheduling.timeline import Timeline


FILLER_TYPE = "Music"
NORMAL_TYPE = "Normal"
IDLE_TYPE = "Silence"

DEFAULT_TOTAL_DURATION_SECONDS = 54_000  # 15 hours
DEFAULT_BATCH_SIZE = 30


class ClipKind(str, Enum):
    """Whether a clip pads the day or is scheduled on its own terms."""

    FILLER = "filler"
    NORMAL = "normal"


@dataclass(frozen=True)
class ClipSpec:
    """
    One catalog clip, immutable once built.

    ``frequency`` is ignored for filler clips. ``window`` is a half-open
    ``(start_seconds, end_seconds)`` range and only normal clips may carry one.
    ``label`` keeps the catalog's own type string (e.g. "Greeting") so output
    rows report what the caller sent.
    """
    name: str
    kind: ClipKind
    duration_seconds: int
    frequency: int = 1
    window: tuple[int, int] | None = None
    label: str | None = None

    def __post_init__(self) -> None:
        if self.duration_seconds <= 0:
            raise NonPositiveDuration(
                f"Clip '{self.name}' duration must be positive, got {self.duration_seconds}"
            )
        if self.kind is ClipKind.NORMAL and self.frequency < 1:
            raise NonPositiveFrequency(
                f"Clip '{self.name}' frequency must be at least 1, got {self.frequency}"
            )
        if self.window is not None:
            if self.kind is ClipKind.FILLER:
                raise InvalidWindow(f"Filler clip '{self.name}' cannot have a time slot")
            start, end = self.window
            if end <= start:
                raise InvalidWindow(
                    f"Clip '{self.name}' window must end after it starts ({start}..{end})"
                )
            if start < 0 or end > SECONDS_PER_DAY:
                raise InvalidWindow(
                    f"Clip '{self.name}' window {start}..{end} is outside the broadcast day"
                )

    @property
    def is_filler(self) -> bool:
        return self.kind is ClipKind.FILLER

    @property
    def type_label(self) -> str:
        """Type string used in rendered playlists."""
        if self.label:
            return self.label
        return FILLER_TYPE if self.is_filler else NORMAL_TYPE

    @property
    def committed_seconds(self) -> int:
        """Airtime this clip reserves: duration times frequency (0 for filler)."""
        if self.is_filler:
            return 0
        return self.duration_seconds * self.frequency


@dataclass
class TimelineEntry:
    """
    A single scheduled occurrence.

    ``clip is None`` marks an idle entry: dead air between the end of the
    packed content and a fixed-window occurrence that must start later.
    Only ``start_seconds`` moves when the timeline shifts; duration is fixed
    for clip entries and shrinks for idle entries as they absorb a shift.
    """
    start_seconds: int
    duration_seconds: int
    clip: ClipSpec | None = None

    @property
    def end_seconds(self) -> int:
        return self.start_seconds + self.duration_seconds

    @property
    def is_idle(self) -> bool:
        return self.clip is None

    @property
    def name(self) -> str:
        return self.clip.name if self.clip is not None else ""

    @property
    def type_label(self) -> str:
        return self.clip.type_label if self.clip is not None else IDLE_TYPE


@dataclass(frozen=True)
class SchedulerConfig:
    """Tunables for one scheduling run."""
    total_duration_seconds: int = DEFAULT_TOTAL_DURATION_SECONDS
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        if not 0 < self.total_duration_seconds <= SECONDS_PER_DAY:
            raise ValidationError(
                f"total_duration_seconds must be in (0, {SECONDS_PER_DAY}], "
                f"got {self.total_duration_seconds}"
            )
        if self.batch_size < 1:
            raise ValidationError(f"batch_size must be at least 1, got {self.batch_size}")

    @classmethod
    def from_settings(cls) -> SchedulerConfig:
        from storecast.infra.settings import settings

        return cls(
            total_duration_seconds=settings.total_duration_seconds,
            batch_size=settings.batch_size,
        )


@dataclass
class Classification:
    """Classifier output: the three buckets plus the derived totals."""
    fillers: list[ClipSpec]
    flexible: list[ClipSpec]
    fixed: list[ClipSpec]
    committed_seconds: int
    filler_rate: int


@dataclass
class SchedulerState:
    """
    Everything one run produces, threaded through the stages in order.

    Created per call and discarded afterwards; nothing here is shared
    between runs.
    """
    config: SchedulerConfig
    classification: Classification
    filler_pool: list[ClipSpec] = field(default_factory=list)
    timeline: Timeline | None = None
