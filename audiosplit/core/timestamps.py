"""Timestamp parsing and rendering.

Accepted input is deliberately loose: ``SS``, ``MM:SS`` or ``H:MM:SS``,
each optionally followed by ``.mmm``. Fields are read from the right, so the
last colon-delimited field is always seconds. No field width is enforced and
nothing is carried over (``0:75:00`` is 75 minutes, not 1h15m).
"""
from __future__ import annotations

import re
from dataclasses import dataclass

_DIGITS = re.compile(r"[0-9]+")
_FIELD_NAMES = ("hours", "minutes", "seconds")


class AudioSplitError(Exception):
    """Base class for every error raised by audiosplit."""


class MalformedField(AudioSplitError, ValueError):
    """A timestamp or one of its fields is not a non-negative integer."""

    def __init__(self, text: str, field: str, reason: str | None = None):
        self.text = text
        self.field = field
        msg = reason or f"{field} is not a non-negative integer"
        super().__init__(f"bad timestamp {text!r}: {msg}")


@dataclass(frozen=True)
class TimeOffset:
    """Absolute offset into the input media."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0

    @property
    def total_milliseconds(self) -> int:
        return (
            (self.hours * 3600 + self.minutes * 60 + self.seconds) * 1000
            + self.milliseconds
        )

    @property
    def total_seconds(self) -> float:
        return self.hours * 3600 + self.minutes * 60 + self.seconds + self.milliseconds / 1000

    def __str__(self) -> str:
        return render(self)


ZERO = TimeOffset()


def _to_int(text: str, value: str, field: str) -> int:
    if not _DIGITS.fullmatch(value):
        raise MalformedField(text, field)
    return int(value)


def parse(text: str) -> TimeOffset:
    """Parse *text* into a :class:`TimeOffset`.

    Raises :class:`MalformedField` when any part is not made of ASCII
    digits, when the input is empty, or when more than two colons are given.
    """
    if not text:
        raise MalformedField(text, "seconds", "empty timestamp")

    time_part, dot, ms_part = text.rpartition(".")
    if not dot:
        time_part, ms_part = text, "0"

    fields = time_part.split(":")
    if len(fields) > len(_FIELD_NAMES):
        raise MalformedField(text, "hours", "too many ':' separated fields")

    values = dict.fromkeys(_FIELD_NAMES, 0)
    for name, value in zip(_FIELD_NAMES[-len(fields):], fields):
        values[name] = _to_int(text, value, name)

    return TimeOffset(
        hours=values["hours"],
        minutes=values["minutes"],
        seconds=values["seconds"],
        milliseconds=_to_int(text, ms_part, "milliseconds"),
    )


def render(offset: TimeOffset) -> str:
    """Return ``H:MM:SS.mmm`` with the fields exactly as parsed.

    ``parse(render(x)) == x``. Fields are not carried, so the result is for
    display; use :func:`to_ffmpeg` for command lines.
    """
    return (
        f"{offset.hours}:{offset.minutes:02d}:{offset.seconds:02d}"
        f".{offset.milliseconds:03d}"
    )


def to_ffmpeg(offset: TimeOffset) -> str:
    """Return *offset* as a carried ``H:MM:SS.mmm`` ffmpeg duration.

    Minutes and seconds stay within 0-59 and the value equals
    :attr:`TimeOffset.total_seconds`, so ``100`` becomes ``0:01:40.000`` and
    ``02:32.1234`` becomes ``0:02:33.234``.
    """
    secs, ms = divmod(offset.total_milliseconds, 1000)
    mins, secs = divmod(secs, 60)
    hours, mins = divmod(mins, 60)
    return f"{hours}:{mins:02d}:{secs:02d}.{ms:03d}"


__all__ = [
    "AudioSplitError",
    "MalformedField",
    "TimeOffset",
    "ZERO",
    "parse",
    "render",
    "to_ffmpeg",
]
