"""
Contract Tests: clip catalog parsing

Descriptors from the broadcast console become ClipSpecs:
- numeric fields accept numbers or numeric strings
- "Music" items are filler and ignore frequency and time slot
- absent or malformed fields raise typed validation errors
"""

from __future__ import annotations

import json

import pytest

from storecast.catalog import ClipDescriptor, load_catalog, parse_catalog
from storecast.infra.exceptions import (
    InvalidClipDescriptor,
    InvalidTimeFormat,
    InvalidWindow,
    NonPositiveDuration,
    NonPositiveFrequency,
    ValidationError,
)
from storecast.scheduling import ClipKind


def _item(**overrides):
    item = {"name": "Greeting", "type": "Greeting", "frequency": 2, "duration": 5, "time_slot": "08:00-08:10"}
    item.update(overrides)
    return item


class TestParseCatalog:
    def test_fixed_window_clip(self):
        (clip,) = parse_catalog([_item()])
        assert clip.kind is ClipKind.NORMAL
        assert clip.window == (28_800, 29_400)
        assert clip.frequency == 2
        assert clip.type_label == "Greeting"

    def test_numeric_strings(self):
        (clip,) = parse_catalog([_item(frequency="3", duration="30")])
        assert (clip.frequency, clip.duration_seconds) == (3, 30)

    def test_blank_time_slot_is_flexible(self):
        (clip,) = parse_catalog([_item(time_slot="  ")])
        assert clip.window is None

    def test_camel_case_time_slot(self):
        item = _item()
        item["timeSlot"] = item.pop("time_slot")
        (clip,) = parse_catalog([item])
        assert clip.window == (28_800, 29_400)

    def test_music_is_filler_and_ignores_schedule_fields(self):
        (clip,) = parse_catalog([{"name": "Track 01", "type": "Music", "duration": 214, "time_slot": "08:00-08:10"}])
        assert clip.kind is ClipKind.FILLER
        assert clip.window is None
        assert clip.committed_seconds == 0

    def test_keeps_catalog_order_and_ignores_extra_keys(self):
        clips = parse_catalog(
            [
                {"name": "B", "type": "Ad", "frequency": 1, "duration": 10, "id": 7},
                {"name": "A", "type": "Music", "duration": 200},
            ]
        )
        assert [c.name for c in clips] == ["B", "A"]

    def test_whitespace_is_stripped(self):
        (clip,) = parse_catalog([_item(name="  Greeting  ")])
        assert clip.name == "Greeting"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"duration": None},
            {"duration": "thirty"},
            {"duration": 2.5},
            {"duration": True},
            {"frequency": False},
            {"frequency": None},
        ],
    )
    def test_malformed_fields(self, overrides):
        with pytest.raises(InvalidClipDescriptor):
            parse_catalog([_item(**overrides)])

    def test_missing_field(self):
        item = _item()
        del item["duration"]
        with pytest.raises(InvalidClipDescriptor) as exc_info:
            parse_catalog([item])
        assert "Catalog item 0" in str(exc_info.value)
        assert "duration" in str(exc_info.value)

    def test_item_must_be_object(self):
        with pytest.raises(InvalidClipDescriptor):
            parse_catalog([["Greeting", 5]])

    @pytest.mark.parametrize(
        "overrides, error",
        [
            ({"duration": 0}, NonPositiveDuration),
            ({"frequency": 0}, NonPositiveFrequency),
            ({"time_slot": "8am-9am"}, InvalidTimeFormat),
            ({"time_slot": "09:00-08:00"}, InvalidWindow),
        ],
    )
    def test_domain_rules(self, overrides, error):
        with pytest.raises(error):
            parse_catalog([_item(**overrides)])

    def test_all_failures_are_validation_errors(self):
        for overrides in ({"duration": 0}, {"frequency": None}, {"time_slot": "x"}):
            with pytest.raises(ValidationError):
                parse_catalog([_item(**overrides)])


class TestClipDescriptor:
    def test_model_validate(self):
        descriptor = ClipDescriptor.model_validate(_item())
        assert descriptor.time_slot == "08:00-08:10"
        assert not descriptor.is_filler


class TestLoadCatalog:
    def test_list_document(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([_item(), {"name": "T", "type": "Music", "duration": 60}]), encoding="utf-8")
        assert [c.name for c in load_catalog(path)] == ["Greeting", "T"]

    def test_items_document(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"items": [_item()]}), encoding="utf-8")
        assert len(load_catalog(path)) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidClipDescriptor):
            load_catalog(path)

    @pytest.mark.parametrize("document", [{"clips": []}, "text", 42])
    def test_wrong_shape(self, tmp_path, document):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        with pytest.raises(InvalidClipDescriptor):
            load_catalog(path)

    def test_yaml_document(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "items:\n"
            "  - {name: Greeting, type: Greeting, frequency: 2, duration: 5, time_slot: \"08:00-08:10\"}\n"
            "  - {name: Track 01, type: Music, duration: 214}\n",
            encoding="utf-8",
        )
        greeting, track = load_catalog(path)
        assert greeting.window == (28_800, 29_400)
        assert track.kind is ClipKind.FILLER

    def test_yml_list_document(self, tmp_path):
        path = tmp_path / "catalog.yml"
        path.write_text("- name: Deals\n  type: Promotion\n  frequency: '4'\n  duration: 30\n", encoding="utf-8")
        (clip,) = load_catalog(path)
        assert (clip.name, clip.frequency) == ("Deals", 4)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("items: [unclosed\n", encoding="utf-8")
        with pytest.raises(InvalidClipDescriptor):
            load_catalog(path)

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(InvalidClipDescriptor):
            load_catalog(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "absent.json")
