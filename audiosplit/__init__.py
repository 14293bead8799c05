"""Audiosplit package."""

from .core import (
    timestamps,
    planner,
    cutting,
)
from .core.cutting import ExternalToolFailure
from .core.timestamps import AudioSplitError, MalformedField

__all__ = [
    "AudioSplitError",
    "ExternalToolFailure",
    "MalformedField",
    "timestamps",
    "planner",
    "cutting",
]
