"""Local referee used for self-play and tests."""

from .fleet import FleetMap, PlacementError, Ship, random_fleet
from .local import LocalPort

__all__ = ["FleetMap", "LocalPort", "PlacementError", "Ship", "random_fleet"]
