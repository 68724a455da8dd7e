"""
The broadcast-day timeline.

An explicit, ordered list of TimelineEntry objects starting at 0 with no
gaps and no overlaps. Every mutation goes through insert-and-shift, which
re-lays later entries end to start so contiguity is maintained rather than
assumed.

Idle entries (dead air ahead of a fixed-window occurrence) absorb shifts:
a shift that reaches an idle entry shrinks it, or removes it and carries the
remainder on, and entries after it stay where they are.
"""

from __future__ import annotations

from typing import Any, Iterator

from storecast.scheduling.clock import format_range, format_slot
from storecast.scheduling.types import ClipSpec, TimelineEntry


class Timeline:
    """Ordered, contiguous sequence of scheduled occurrences."""

    def __init__(self) -> None:
        self._entries: list[TimelineEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TimelineEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> TimelineEntry:
        return self._entries[index]

    @property
    def entries(self) -> tuple[TimelineEntry, ...]:
        return tuple(self._entries)

    @property
    def end_seconds(self) -> int:
        """End of the last entry (0 for an empty timeline)."""
        if not self._entries:
            return 0
        return self._entries[-1].end_seconds

    @property
    def total_seconds(self) -> int:
        """Summed duration of every entry, idle included."""
        return sum(e.duration_seconds for e in self._entries)

    @property
    def idle_seconds(self) -> int:
        return sum(e.duration_seconds for e in self._entries if e.is_idle)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, clip: ClipSpec) -> TimelineEntry:
        """Append an occurrence right after the current last entry."""
        entry = TimelineEntry(self.end_seconds, clip.duration_seconds, clip)
        self._entries.append(entry)
        return entry

    def append_at(self, clip: ClipSpec, start_seconds: int) -> TimelineEntry:
        """Append an occurrence starting at ``start_seconds``, recording any gap as idle."""
        end = self.end_seconds
        if start_seconds < end:
            raise ValueError(
                f"Cannot append at {start_seconds}s: timeline already runs to {end}s"
            )
        if start_seconds > end:
            self._entries.append(TimelineEntry(end, start_seconds - end, None))
        return self.append(clip)

    def insert(self, index: int, clip: ClipSpec) -> TimelineEntry:
        """
        Insert-and-shift: splice ``clip`` in before ``entries[index]``.

        The new entry starts where the previous entry ends (0 at the front);
        every later entry is then moved to start at its predecessor's end,
        keeping its own duration, until an idle entry absorbs the shift.
        """
        if not 0 <= index <= len(self._entries):
            raise IndexError(f"Insert position {index} outside 0..{len(self._entries)}")
        start = self._entries[index - 1].end_seconds if index > 0 else 0
        entry = TimelineEntry(start, clip.duration_seconds, clip)
        self._entries.insert(index, entry)
        self._reflow(index + 1)
        return entry

    def split_idle(self, index: int, at_seconds: int) -> None:
        """
        Cut the idle entry at ``index`` in two at ``at_seconds``.

        Callers insert an occurrence at ``index + 1`` straight away so two
        idle entries never stay adjacent.
        """
        entry = self._entries[index]
        if not entry.is_idle:
            raise ValueError(f"Entry {index} is not idle")
        if not entry.start_seconds < at_seconds < entry.end_seconds:
            raise ValueError(
                f"Split point {at_seconds}s outside idle span "
                f"{entry.start_seconds}..{entry.end_seconds}"
            )
        tail = TimelineEntry(at_seconds, entry.end_seconds - at_seconds, None)
        entry.duration_seconds = at_seconds - entry.start_seconds
        self._entries.insert(index + 1, tail)

    def _reflow(self, index: int) -> None:
        entries = self._entries
        while index < len(entries):
            required = entries[index - 1].end_seconds
            entry = entries[index]
            overlap = required - entry.start_seconds
            if overlap <= 0:
                break
            if entry.is_idle:
                if overlap >= entry.duration_seconds:
                    del entries[index]
                    continue
                entry.start_seconds = required
                entry.duration_seconds -= overlap
                break
            entry.start_seconds = required
            index += 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def position_after(self, target_seconds: int) -> int:
        """Index of the first entry starting strictly after ``target_seconds``, else len."""
        for pos, entry in enumerate(self._entries):
            if entry.start_seconds > target_seconds:
                return pos
        return len(self._entries)

    def blocking_entry(self, index: int, shift_seconds: int) -> int | None:
        """
        Index of the first fixed-window occurrence that inserting
        ``shift_seconds`` at ``index`` would push to or past its window end.

        Mirrors the reflow: idle entries soak up the shift on the way.
        """
        for pos in range(index, len(self._entries)):
            entry = self._entries[pos]
            if entry.is_idle:
                shift_seconds -= entry.duration_seconds
                if shift_seconds <= 0:
                    return None
                continue
            window = entry.clip.window
            if window is not None and entry.start_seconds + shift_seconds >= window[1]:
                return pos
        return None

    def is_contiguous(self) -> bool:
        """True when the first entry starts at 0 and each entry starts where the last ended."""
        previous_end = 0
        for entry in self._entries:
            if entry.start_seconds != previous_end:
                return False
            previous_end = entry.end_seconds
        return True

    def occurrences(self, name: str) -> list[TimelineEntry]:
        return [e for e in self._entries if e.clip is not None and e.clip.name == name]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_rows(self) -> list[dict[str, Any]]:
        """One dict per entry, in broadcast order."""
        rows: list[dict[str, Any]] = []
        for entry in self._entries:
            clip = entry.clip
            rows.append(
                {
                    "window": format_range(entry.start_seconds, entry.end_seconds),
                    "start_seconds": entry.start_seconds,
                    "end_seconds": entry.end_seconds,
                    "name": entry.name,
                    "type": entry.type_label,
                    "duration": entry.duration_seconds,
                    "frequency": clip.frequency if clip is not None and not clip.is_filler else None,
                    "time_slot": format_slot(*clip.window) if clip is not None and clip.window else None,
                }
            )
        return rows

    def to_playlist(self) -> dict[str, dict[str, Any]]:
        """The output contract: ``"HH:MM:SS-HH:MM:SS"`` -> clip fields, in order."""
        playlist: dict[str, dict[str, Any]] = {}
        for row in self.to_rows():
            key = row.pop("window")
            del row["start_seconds"], row["end_seconds"]
            playlist[key] = row
        return playlist
