"""Filler interleaving."""

from __future__ import annotations

from storecast.scheduling.filler_interleaver import interleave_filler, open_slot
from storecast.scheduling.timeline import Timeline
from storecast.scheduling.types import ClipKind, ClipSpec

M5 = ClipSpec("M", ClipKind.FILLER, 5)
M30 = ClipSpec("M", ClipKind.FILLER, 30)


def _packed(count: int, duration: int = 10) -> Timeline:
    timeline = Timeline()
    for _ in range(count):
        timeline.append(ClipSpec("A", ClipKind.NORMAL, duration))
    return timeline


def _gapped() -> Timeline:
    """A 0-10, idle 10-100, G 100-105 with G windowed to 100..160."""
    timeline = Timeline()
    timeline.append(ClipSpec("A", ClipKind.NORMAL, 10))
    timeline.append_at(ClipSpec("G", ClipKind.NORMAL, 5, window=(100, 160)), 100)
    return timeline


class TestInterleave:
    def test_one_filler_after_every_rate_entries(self):
        timeline = interleave_filler([M5] * 3, 2, _packed(6))
        assert "".join(e.name for e in timeline) == "AMAAMAAMA"
        assert timeline.is_contiguous()

    def test_rate_zero_on_empty_timeline(self):
        jingle = ClipSpec("Jingle", ClipKind.FILLER, 10)
        timeline = interleave_filler([jingle] * 3, 0, Timeline())
        assert [(e.name, e.start_seconds) for e in timeline] == [
            ("Jingle", 0),
            ("Jingle", 10),
            ("Jingle", 20),
        ]

    def test_pool_dropped_once_position_runs_off_the_end(self):
        timeline = interleave_filler([M5] * 3, 5, _packed(2))
        assert [e.name for e in timeline] == ["A", "A"]

    def test_empty_pool_leaves_timeline_alone(self):
        timeline = interleave_filler([], 1, _packed(3))
        assert len(timeline) == 3


class TestIdleAndWindows:
    def test_idle_absorbs_filler(self):
        timeline = interleave_filler([M30, M30], 1, _gapped())
        assert [e.name for e in timeline] == ["M", "A", "M", "", "G"]
        assert timeline.occurrences("G")[0].start_seconds == 100
        assert timeline.idle_seconds == 30
        assert timeline.is_contiguous()

    def test_slot_after_idle_moves_in_front_of_it(self):
        timeline = interleave_filler([M30], 3, _gapped())
        assert [e.name for e in timeline] == ["A", "M", "", "G"]
        assert timeline.occurrences("G")[0].start_seconds == 100

    def test_open_slot_skips_past_window_it_would_break(self):
        timeline = _gapped()
        # 150s at index 1 would push G to 160; the slot moves after G.
        assert open_slot(timeline, 1, 150) == 3
        assert open_slot(timeline, 1, 60) == 1

    def test_open_slot_past_end(self):
        assert open_slot(_packed(2), 3, 5) is None
        assert open_slot(_packed(2), -1, 5) is None
        assert open_slot(_packed(2), 2, 5) == 2

    def test_filler_never_pushes_window_occurrence_out(self):
        timeline = _gapped()
        big = ClipSpec("Big", ClipKind.FILLER, 150)
        interleave_filler([big], 1, timeline)
        (g,) = timeline.occurrences("G")
        assert 100 <= g.start_seconds < 160
        assert [e.name for e in timeline] == ["A", "", "G", "Big"]
