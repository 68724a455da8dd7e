from __future__ import annotations

import json
from pathlib import Path

import typer

from ...catalog import load_catalog
from ...infra.exceptions import StorecastError
from ...infra.logging import get_logger
from ...infra.settings import settings
from ...planning import PlaylistArtifactWriter
from ...scheduling import SchedulerConfig, run_scheduler
from ...scheduling.classifier import classify
from ...scheduling.clock import to_clock_string
from ...scheduling.filler_pool import build_filler_pool

app = typer.Typer(name="playlist", help="Playlist scheduling operations")


def _wants_json(ctx: typer.Context, json_output: bool) -> bool:
    return json_output or bool((ctx.obj or {}).get("json"))


def _config(total_duration: int | None, batch_size: int | None) -> SchedulerConfig:
    return SchedulerConfig(
        total_duration_seconds=total_duration if total_duration is not None else settings.total_duration_seconds,
        batch_size=batch_size if batch_size is not None else settings.batch_size,
    )


def _fail(json_output: bool, error_code: str, error_msg: str) -> None:
    if json_output:
        typer.echo(json.dumps({"status": "error", "code": error_code, "message": error_msg}, indent=2))
    else:
        typer.echo(f"Error: {error_msg}", err=True)
    raise typer.Exit(1)


@app.command("generate")
def generate(
    ctx: typer.Context,
    catalog: Path = typer.Argument(..., help="JSON or YAML catalog: a list of clips or {\"items\": [...]}"),
    total_duration: int | None = typer.Option(None, "--total-duration", help="Broadcast length in seconds (default from settings)"),
    batch_size: int | None = typer.Option(None, "--batch-size", help="Round-robin batch size for flexible clips"),
    program_id: str | None = typer.Option(None, "--program-id", help="Write artifacts for this broadcast program"),
    output_dir: Path | None = typer.Option(None, "--output-dir", help="Artifact directory (default STORECAST_ARTIFACT_DIR)"),
    force: bool = typer.Option(False, "--force", help="Replace existing artifacts for the program"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Schedule a clip catalog into one broadcast-day playlist.

    Examples:
        storecast playlist generate catalog.json
        storecast playlist generate catalog.json --program-id morning-mix --output-dir out/
    """
    json_output = _wants_json(ctx, json_output)
    log = get_logger(__name__)

    try:
        config = _config(total_duration, batch_size)
        clips = load_catalog(catalog)
        state = run_scheduler(clips, config)
        timeline = state.timeline

        plog_path = None
        if program_id:
            writer = PlaylistArtifactWriter(output_dir or Path(settings.artifact_dir))
            plog_path = writer.write(
                program_id,
                timeline,
                filler_rate=state.classification.filler_rate,
                overwrite=force,
            )
            log.info("playlist_artifact_written", program_id=program_id, path=str(plog_path))
    except FileNotFoundError:
        _fail(json_output, "CATALOG_NOT_FOUND", f"Catalog not found: {catalog}")
    except StorecastError as e:
        _fail(json_output, e.code, str(e))

    if json_output:
        payload = {
            "status": "ok",
            "total_seconds": timeline.total_seconds,
            "idle_seconds": timeline.idle_seconds,
            "filler_rate": state.classification.filler_rate,
            "artifact": str(plog_path) if plog_path else None,
            "playlist": timeline.to_playlist(),
        }
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title=f"Playlist ({len(timeline)} entries)")
    table.add_column("Window", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Name", style="green")
    table.add_column("Duration", justify="right")
    for row in timeline.to_rows():
        table.add_row(row["window"], row["type"], row["name"] or "-", to_clock_string(row["duration"]))
    console.print(table)
    console.print(f"[bold]Total:[/bold] {to_clock_string(timeline.total_seconds)}")
    console.print(f"Filler rate: {state.classification.filler_rate}")
    if timeline.idle_seconds:
        console.print(f"Idle: {to_clock_string(timeline.idle_seconds)}")
    if plog_path:
        console.print(f"Artifact written: {plog_path}")


@app.command("inspect")
def inspect_catalog(
    ctx: typer.Context,
    catalog: Path = typer.Argument(..., help="JSON or YAML catalog: a list of clips or {\"items\": [...]}"),
    total_duration: int | None = typer.Option(None, "--total-duration", help="Broadcast length in seconds (default from settings)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Classify a catalog without building the timeline."""
    json_output = _wants_json(ctx, json_output)

    try:
        config = _config(total_duration, None)
        clips = load_catalog(catalog)
        classification = classify(clips, config)
        pool = build_filler_pool(
            classification.fillers,
            classification.committed_seconds,
            config.total_duration_seconds,
        )
    except FileNotFoundError:
        _fail(json_output, "CATALOG_NOT_FOUND", f"Catalog not found: {catalog}")
    except StorecastError as e:
        _fail(json_output, e.code, str(e))

    summary = {
        "fillers": len(classification.fillers),
        "flexible": len(classification.flexible),
        "fixed": len(classification.fixed),
        "committed_seconds": classification.committed_seconds,
        "filler_rate": classification.filler_rate,
        "filler_pool": len(pool),
        "total_duration_seconds": config.total_duration_seconds,
    }

    if json_output:
        typer.echo(json.dumps({"status": "ok", "summary": summary}, indent=2))
        return

    typer.echo("Catalog summary:")
    typer.echo(f"  Filler clips: {summary['fillers']}")
    typer.echo(f"  Flexible clips: {summary['flexible']}")
    typer.echo(f"  Fixed-window clips: {summary['fixed']}")
    typer.echo(f"  Committed: {to_clock_string(summary['committed_seconds'])}")
    typer.echo(f"  Filler rate: {summary['filler_rate']}")
    typer.echo(f"  Filler pool: {summary['filler_pool']} occurrences")
