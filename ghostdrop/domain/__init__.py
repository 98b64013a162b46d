"""Domain models and display helpers for GhostDrop."""

from . import helpers, models

__all__ = ["helpers", "models"]
