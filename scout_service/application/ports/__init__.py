"""Application ports (interfaces)."""

from .scouting_service import ProgressCallbackPort, ScoutingDataPort

__all__ = [
    "ProgressCallbackPort",
    "ScoutingDataPort",
]
