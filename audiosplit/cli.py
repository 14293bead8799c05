"""Typer-based command line interface for audiosplit."""

from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import json
import sys
import typer
from dotenv import load_dotenv

from .core import cutting, planner
from .core.timestamps import AudioSplitError

load_dotenv()

DEFAULT_EXT = "mp3"

app = typer.Typer(help="Split an audio file at timestamps with ffmpeg")


def read_timestamp_file(path: str) -> List[str]:
    """Return timestamps listed one per line in *path*.

    Blank lines and lines starting with ``#`` are skipped.
    """
    stamps = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        stamps.append(line)
    return stamps


def collect_timestamps(timestamps: Optional[List[str]], from_file: Optional[str]) -> List[str]:
    stamps = list(timestamps or [])
    if from_file:
        if not Path(from_file).exists():
            sys.exit(f"❌  {from_file} not found")
        stamps += read_timestamp_file(from_file)
    return stamps


def default_extension(input_file: str, ext: Optional[str]) -> str:
    """Use *ext* when given, else the input's suffix, else ``mp3``."""
    if ext:
        return ext.lstrip(".")
    return Path(input_file).suffix.lstrip(".") or DEFAULT_EXT


@app.command()
def split(
    input_file: str = typer.Argument(..., help="Audio file to split"),
    timestamps: Optional[List[str]] = typer.Argument(
        None, help="Cut points, e.g. 20 02:32.5 1:02:32"
    ),
    from_file: Optional[str] = typer.Option(
        None, "--from-file", "-f", help="Text file with one timestamp per line"
    ),
    ext: Optional[str] = typer.Option(
        None, envvar="AUDIOSPLIT_EXT", help="Output extension (default: input's)"
    ),
    out_dir: str = typer.Option(
        ".", envvar="AUDIOSPLIT_OUT_DIR", help="Directory for the numbered segments"
    ),
    ffmpeg: str = typer.Option(
        "ffmpeg", envvar="AUDIOSPLIT_FFMPEG", help="ffmpeg executable"
    ),
    overwrite: bool = typer.Option(False, help="Overwrite existing segment files"),
    dry_run: bool = typer.Option(False, help="Print the ffmpeg commands only"),
):
    """Cut INPUT_FILE into ``1.ext``, ``2.ext``, … at the given timestamps."""
    stamps = collect_timestamps(timestamps, from_file)
    try:
        cutting.split_audio(
            input_file,
            stamps,
            default_extension(input_file, ext),
            out_dir=out_dir,
            ffmpeg=ffmpeg,
            overwrite=overwrite,
            dry_run=dry_run,
        )
    except AudioSplitError as exc:
        sys.exit(f"❌  {exc}")


@app.command("plan")
def plan_cmd(
    input_file: str = typer.Argument(..., help="Audio file to split"),
    timestamps: Optional[List[str]] = typer.Argument(None, help="Cut points"),
    from_file: Optional[str] = typer.Option(
        None, "--from-file", "-f", help="Text file with one timestamp per line"
    ),
    ext: Optional[str] = typer.Option(
        None, envvar="AUDIOSPLIT_EXT", help="Output extension (default: input's)"
    ),
    json_out: Optional[Path] = typer.Option(
        None, "--json", "-j", help="Also write the plan to this JSON file"
    ),
):
    """Show the cut ranges without running ffmpeg."""
    stamps = collect_timestamps(timestamps, from_file)
    try:
        instructions = planner.plan_from_strings(
            input_file, stamps, default_extension(input_file, ext)
        )
    except AudioSplitError as exc:
        sys.exit(f"❌  {exc}")

    for ins in instructions:
        typer.echo(f"{ins.output}\t{ins.start}\t{ins.end or 'end'}")
    if json_out is not None:
        json_out.parent.mkdir(parents=True, exist_ok=True)
        json_out.write_text(
            json.dumps([i.as_dict() for i in instructions], indent=2), encoding="utf-8"
        )
        typer.echo(f"✅ wrote {json_out}")


def main() -> None:
    """Run the Typer application."""
    app()


if __name__ == "__main__":
    main()
