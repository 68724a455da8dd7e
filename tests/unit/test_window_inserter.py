"""Fixed-window insertion."""

from __future__ import annotations

import pytest

from storecast.infra.exceptions import ScheduleError, WindowUnreachable
from storecast.scheduling.timeline import Timeline
from storecast.scheduling.types import ClipKind, ClipSpec
from storecast.scheduling.window_inserter import check_windows, insert_fixed, window_targets


def _clip(name: str, duration: int, frequency: int = 1, window=None) -> ClipSpec:
    return ClipSpec(name, ClipKind.NORMAL, duration, frequency=frequency, window=window)


def _spans(timeline: Timeline):
    return [(e.name, e.start_seconds, e.end_seconds) for e in timeline]


class TestWindowTargets:
    def test_even_spread(self):
        assert window_targets((28_800, 29_400), 2) == [28_800, 29_100]

    def test_floor_division(self):
        assert window_targets((0, 10), 3) == [0, 3, 6]

    def test_targets_stay_inside_window(self):
        for frequency in range(1, 40):
            targets = window_targets((100, 137), frequency)
            assert len(targets) == frequency
            assert all(100 <= t < 137 for t in targets)


class TestInsertFixed:
    def test_empty_timeline_lands_on_targets(self):
        greeting = _clip("Greeting", 5, frequency=2, window=(28_800, 29_400))
        timeline = insert_fixed([greeting], Timeline())

        assert _spans(timeline) == [
            ("", 0, 28_800),
            ("Greeting", 28_800, 28_805),
            ("", 28_805, 29_100),
            ("Greeting", 29_100, 29_105),
        ]
        assert timeline.is_contiguous()

    def test_starts_where_predecessor_ends(self):
        timeline = Timeline()
        for i in range(10):
            timeline.append(_clip(f"A{i}", 60))
        insert_fixed([_clip("G", 5, window=(120, 300))], timeline)

        (g,) = timeline.occurrences("G")
        assert g.start_seconds == 180
        assert timeline.end_seconds == 605

    def test_goes_before_entry_running_past_window_end(self):
        timeline = Timeline()
        timeline.append(_clip("A", 130))
        timeline.append(_clip("B", 200))
        insert_fixed([_clip("G", 5, frequency=2, window=(120, 250))], timeline)

        assert [e.name for e in timeline] == ["A", "G", "G", "B"]
        assert [g.start_seconds for g in timeline.occurrences("G")] == [130, 135]

    def test_splits_idle_for_earlier_window(self):
        timeline = Timeline()
        timeline.append_at(_clip("G1", 5, window=(28_800, 29_400)), 28_800)
        insert_fixed([_clip("H", 10, window=(7_200, 10_800))], timeline)

        assert _spans(timeline) == [
            ("", 0, 7_200),
            ("H", 7_200, 7_210),
            ("", 7_210, 28_800),
            ("G1", 28_800, 28_805),
        ]

    def test_processes_clips_by_window_start(self):
        late = _clip("Late", 5, window=(600, 900))
        early = _clip("Early", 5, window=(60, 120))
        timeline = insert_fixed([late, early], Timeline())

        assert [e.name for e in timeline if not e.is_idle] == ["Early", "Late"]
        assert timeline.occurrences("Early")[0].start_seconds == 60
        assert timeline.occurrences("Late")[0].start_seconds == 600
        assert timeline.is_contiguous()

    def test_idle_at_target_is_filled_from_its_start(self):
        timeline = Timeline()
        timeline.append(_clip("A", 10))
        timeline.append_at(_clip("G", 5, window=(100, 200)), 100)
        insert_fixed([_clip("H", 5, window=(10, 50))], timeline)

        assert _spans(timeline)[:3] == [("A", 0, 10), ("H", 10, 15), ("", 15, 100)]
        assert timeline.occurrences("G")[0].start_seconds == 100


class TestUnreachableWindows:
    def test_clip_spanning_whole_window(self):
        timeline = Timeline()
        timeline.append(_clip("Long", 3_600))
        with pytest.raises(WindowUnreachable) as exc_info:
            insert_fixed([_clip("G", 5, window=(600, 1_200))], timeline)
        assert "'G'" in str(exc_info.value)
        assert "00:10-00:20" in str(exc_info.value)

    def test_earlier_occurrence_pushed_out_by_later_clip(self):
        tight = _clip("A", 5, frequency=2, window=(100, 110))
        wide = _clip("B", 10, window=(100, 300))
        with pytest.raises(WindowUnreachable) as exc_info:
            insert_fixed([tight, wide], Timeline())
        assert "'A'" in str(exc_info.value)

    def test_is_a_schedule_error(self):
        assert issubclass(WindowUnreachable, ScheduleError)
        assert WindowUnreachable.code == "WINDOW_UNREACHABLE"

    def test_check_windows_passes_conforming_timeline(self):
        timeline = insert_fixed([_clip("G", 5, frequency=2, window=(600, 1_200))], Timeline())
        check_windows(timeline)
