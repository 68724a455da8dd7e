"""
Playlist artifact writer.

Persists one scheduled broadcast day for a program as two files:

    <program_id>.plog            fixed-width, operator readable
    <program_id>.playlist.json   keyed playlist for the console to store

Side-effect free beyond writing files. Deterministic for a given timeline
and generation time. Each file is written to a temp path and renamed.
"""

from __future__ import annotations

import json
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from storecast.infra.exceptions import BusinessRuleError, InvalidProgramId
from storecast.scheduling.clock import to_clock_string

if TYPE_CHECKING:
    from storecast.scheduling.timeline import Timeline


# Column widths: START 8, END 8, DUR 8, TYPE 12, NAME remainder
W_START, W_END, W_DUR, W_TYPE = 8, 8, 8, 12
W_NAME = 60
PLOG_UNDERLINE = "-------- -------- -------- ------------ " + "-" * 40


class PlaylistArtifactExistsError(BusinessRuleError):
    """Raised when the artifact already exists and overwrite was not requested."""

    code = "ARTIFACT_EXISTS"


@dataclass
class _ArtifactRow:
    """One playlist line in both artifacts."""
    start_str: str
    end_str: str
    dur_str: str
    type_str: str
    name: str


def _build_rows(timeline: "Timeline") -> list[_ArtifactRow]:
    rows: list[_ArtifactRow] = []
    for entry in timeline:
        name = entry.name.strip() or "-"
        if len(name) > W_NAME:
            name = name[:W_NAME]
        rows.append(
            _ArtifactRow(
                start_str=to_clock_string(entry.start_seconds),
                end_str=to_clock_string(entry.end_seconds),
                dur_str=to_clock_string(entry.duration_seconds),
                type_str=entry.type_label[:W_TYPE],
                name=name,
            )
        )
    return rows


def _write_atomic(path: Path, text: str) -> None:
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


class PlaylistArtifactWriter:
    """Writes playlist artifacts (.plog + .playlist.json) for a broadcast program."""

    def __init__(self, base_path: Path = Path("data/playlists")) -> None:
        self._base_path = Path(base_path)

    def paths_for(self, program_id: str) -> tuple[Path, Path]:
        """(.plog, .playlist.json) paths for ``program_id``.

        Raises:
            InvalidProgramId: empty, "." or "..", or contains a path separator.
        """
        if not program_id or "/" in program_id or "\\" in program_id or program_id in (".", ".."):
            raise InvalidProgramId(f"Invalid program id: {program_id!r}")
        return (
            self._base_path / f"{program_id}.plog",
            self._base_path / f"{program_id}.playlist.json",
        )

    def write(
        self,
        program_id: str,
        timeline: Timeline,
        *,
        filler_rate: int | None = None,
        generated_utc: datetime | None = None,
        playlist_id: str | None = None,
        overwrite: bool = False,
    ) -> Path:
        """
        Writes:
            .plog (fixed-width)
            .playlist.json (keyed playlist + totals)

        Returns:
            Path to the .plog file

        Raises:
            PlaylistArtifactExistsError: if either file exists and overwrite is False.
        """
        plog_path, json_path = self.paths_for(program_id)
        if not overwrite:
            for path in (plog_path, json_path):
                if path.exists():
                    raise PlaylistArtifactExistsError(f"Playlist artifact already exists: {path}")

        self._base_path.mkdir(parents=True, exist_ok=True)

        now = generated_utc or datetime.now(timezone.utc)
        generated_utc_str = now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S") + "Z"
        pl_id = playlist_id or str(uuid.uuid4())
        total = timeline.total_seconds

        lines = [
            "# STORECAST PLAYLIST",
            f"# PROGRAM: {program_id}",
            f"# TOTAL_DURATION: {to_clock_string(total)} ({total}s)",
        ]
        if timeline.idle_seconds:
            lines.append(f"# IDLE: {to_clock_string(timeline.idle_seconds)}")
        if filler_rate is not None:
            lines.append(f"# FILLER_RATE: {filler_rate}")
        lines += [
            f"# GENERATED_UTC: {generated_utc_str}",
            f"# PLAYLIST_ID: {pl_id}",
            "# VERSION: 1",
            "",
            f"{'START':<{W_START}} {'END':<{W_END}} {'DUR':<{W_DUR}} {'TYPE':<{W_TYPE}} NAME",
            PLOG_UNDERLINE,
        ]
        for r in _build_rows(timeline):
            lines.append(
                f"{r.start_str:<{W_START}} {r.end_str:<{W_END}} {r.dur_str:<{W_DUR}} "
                f"{r.type_str:<{W_TYPE}} {r.name}"
            )
        _write_atomic(plog_path, "\n".join(lines) + "\n")

        document = {
            "program_id": program_id,
            "playlist_id": pl_id,
            "generated_utc": generated_utc_str,
            "filler_rate": filler_rate,
            "total_seconds": total,
            "idle_seconds": timeline.idle_seconds,
            "playlist": timeline.to_playlist(),
        }
        _write_atomic(json_path, json.dumps(document, indent=2, ensure_ascii=False) + "\n")

        return plog_path
