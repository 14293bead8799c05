"""Run ffmpeg for each planned cut."""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable, List

from .planner import CutInstruction, plan_from_strings
from .timestamps import AudioSplitError


class ExternalToolFailure(AudioSplitError, RuntimeError):
    """ffmpeg could not be started or exited with a non-zero status."""

    def __init__(self, instruction: CutInstruction, reason: str):
        self.instruction = instruction
        super().__init__(f"ffmpeg failed on {instruction.output}: {reason}")


def build_command(
    instruction: CutInstruction,
    out_dir: str = ".",
    ffmpeg: str = "ffmpeg",
    overwrite: bool = False,
) -> List[str]:
    """Return the ffmpeg argv for *instruction*.

    ``-to`` is left out for the trailing segment so ffmpeg reads to the end
    of the stream.
    """
    cmd = [ffmpeg, "-v", "error", "-y" if overwrite else "-n", "-ss", instruction.start]
    if instruction.end is not None:
        cmd += ["-to", instruction.end]
    cmd += ["-i", instruction.source, str(Path(out_dir) / instruction.output)]
    return cmd


def extract_part(
    instruction: CutInstruction,
    out_dir: str = ".",
    ffmpeg: str = "ffmpeg",
    overwrite: bool = False,
) -> None:
    cmd = build_command(instruction, out_dir, ffmpeg, overwrite)
    print("Running:", " ".join(cmd))
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as exc:
        raise ExternalToolFailure(instruction, f"exit status {exc.returncode}") from exc
    except OSError as exc:
        raise ExternalToolFailure(instruction, str(exc)) from exc


def split_audio(
    source: str,
    raw_timestamps: Iterable[str],
    extension: str,
    out_dir: str = ".",
    ffmpeg: str = "ffmpeg",
    overwrite: bool = False,
    dry_run: bool = False,
) -> List[CutInstruction]:
    """Split *source* at *raw_timestamps* into ``1.ext``, ``2.ext``, …

    Every timestamp is parsed before ffmpeg runs once. Segments are cut one
    at a time in time order and the first ffmpeg failure stops the run;
    files already written are left in place.
    """
    instructions = plan_from_strings(source, raw_timestamps, extension)
    if not dry_run:
        Path(out_dir).mkdir(parents=True, exist_ok=True)

    for ins in instructions:
        print(f"🎬  {ins.output}  {ins.start}–{ins.end or 'end'}")
        if dry_run:
            print("Running:", " ".join(build_command(ins, out_dir, ffmpeg, overwrite)))
            continue
        extract_part(ins, out_dir, ffmpeg, overwrite)

    verb = "planned" if dry_run else "written"
    print(f"✅  {len(instructions)} segment(s) {verb} in {out_dir}/")
    return instructions


__all__ = ["ExternalToolFailure", "build_command", "extract_part", "split_audio"]
