"""Core timestamp, planning and cutting package."""

from . import (
    timestamps,
    planner,
    cutting,
)

__all__ = [
    "timestamps",
    "planner",
    "cutting",
]
