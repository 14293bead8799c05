"""Turn a set of timestamps into ordered ffmpeg cut ranges."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional

from .timestamps import ZERO, TimeOffset, parse, to_ffmpeg


@dataclass(frozen=True)
class CutInstruction:
    """One ffmpeg request: cut *source* from *start* to *end* into *output*.

    ``end`` is ``None`` for the last segment, which runs to the end of the
    input.
    """

    source: str
    start: str
    end: Optional[str]
    output: str

    def as_dict(self) -> dict:
        return asdict(self)


def output_name(index: int, extension: str) -> str:
    return f"{index}.{extension}"


def plan(source: str, offsets: Iterable[TimeOffset], extension: str) -> List[CutInstruction]:
    """Return the cut instructions for splitting *source* at *offsets*.

    Offsets are sorted by their position in time (ties keep their input
    order) and each one closes the segment opened by the previous boundary.
    Boundaries are written with :func:`to_ffmpeg`. One extra open-ended
    instruction covers the tail, so the result always has
    ``len(offsets) + 1`` entries.
    """
    ordered = sorted(offsets, key=lambda o: o.total_milliseconds)
    starts = [ZERO, *ordered]
    ends: List[Optional[TimeOffset]] = [*ordered, None]

    return [
        CutInstruction(
            source=source,
            start=to_ffmpeg(start),
            end=to_ffmpeg(end) if end is not None else None,
            output=output_name(i, extension),
        )
        for i, (start, end) in enumerate(zip(starts, ends), 1)
    ]


def plan_from_strings(
    source: str, raw_timestamps: Iterable[str], extension: str
) -> List[CutInstruction]:
    """Parse every timestamp in *raw_timestamps*, then :func:`plan`.

    A single malformed timestamp aborts before anything is planned.
    """
    offsets = [parse(ts) for ts in raw_timestamps]
    return plan(source, offsets, extension)


__all__ = ["CutInstruction", "output_name", "plan", "plan_from_strings"]
