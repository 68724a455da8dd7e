"""
Clip catalog loading.

Turns the clip descriptors handed over by the broadcast console (request
bodies, JSON exports) into validated ClipSpec values. Numeric fields may
arrive as numbers or numeric strings; anything absent or malformed is
rejected instead of being coerced. Catalog files are JSON or YAML.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from storecast.infra.exceptions import InvalidClipDescriptor
from storecast.scheduling.clock import parse_window
from storecast.scheduling.types import FILLER_TYPE, ClipKind, ClipSpec

YAML_SUFFIXES = (".yaml", ".yml")


class ClipDescriptor(BaseModel):
    """One catalog item as the console sends it."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Clip display name")
    type: str = Field(..., min_length=1, description='"Music" for filler, anything else is scheduled')
    duration: int = Field(..., description="Clip length in seconds")
    frequency: int | None = Field(None, description="Required plays per day (normal clips)")
    time_slot: str | None = Field(
        None,
        validation_alias=AliasChoices("time_slot", "timeSlot"),
        description='Fixed broadcast window "HH:MM-HH:MM"',
    )

    @field_validator("duration", "frequency", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("must be an integer, not a boolean")
        return value

    @field_validator("time_slot", mode="before")
    @classmethod
    def _empty_slot_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def is_filler(self) -> bool:
        return self.type == FILLER_TYPE

    def to_clip_spec(self) -> ClipSpec:
        """Validate domain rules and build the immutable ClipSpec.

        Filler clips ignore ``frequency`` and ``time_slot``.
        """
        if self.is_filler:
            return ClipSpec(
                name=self.name,
                kind=ClipKind.FILLER,
                duration_seconds=self.duration,
                label=self.type,
            )

        if self.frequency is None:
            raise InvalidClipDescriptor(f"Clip '{self.name}' is missing a frequency")
        return ClipSpec(
            name=self.name,
            kind=ClipKind.NORMAL,
            duration_seconds=self.duration,
            frequency=self.frequency,
            window=parse_window(self.time_slot) if self.time_slot is not None else None,
            label=self.type,
        )


def _describe(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "item"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


def parse_catalog(items: Iterable[Mapping[str, Any]]) -> list[ClipSpec]:
    """Parse descriptors into ClipSpecs, keeping catalog order.

    Raises:
        InvalidClipDescriptor: an item is not a mapping, or a field is absent
            or malformed.
        InvalidTimeFormat, InvalidWindow, NonPositiveDuration,
        NonPositiveFrequency: a well-formed item breaks a domain rule.
    """
    clips: list[ClipSpec] = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise InvalidClipDescriptor(f"Catalog item {index} is not an object")
        try:
            descriptor = ClipDescriptor.model_validate(dict(item))
        except PydanticValidationError as e:
            raise InvalidClipDescriptor(f"Catalog item {index}: {_describe(e)}") from e
        clips.append(descriptor.to_clip_spec())
    return clips


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise InvalidClipDescriptor(f"Catalog {path} is not valid YAML: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidClipDescriptor(f"Catalog {path} is not valid JSON: {e}") from e


def load_catalog(path: Path) -> list[ClipSpec]:
    """Read a catalog file: a list of descriptors or ``{"items": [...]}``.

    ``.yaml`` / ``.yml`` files are read as YAML, anything else as JSON.
    """
    path = Path(path)
    data = _read_document(path)

    if isinstance(data, Mapping):
        data = data.get("items")
    if not isinstance(data, list):
        raise InvalidClipDescriptor(
            f"Catalog {path} must hold a list of clips or an object with an 'items' list"
        )
    return parse_catalog(data)
