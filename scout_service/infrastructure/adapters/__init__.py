"""Infrastructure adapters."""

from .grid_scouting_adapter import GridScoutingAdapter

__all__ = [
    "GridScoutingAdapter",
]
