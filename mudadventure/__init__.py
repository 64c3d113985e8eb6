"""Adventure event tracking for MUD clients."""

from mudadventure.pipeline import AdventureTracker

__all__ = ["AdventureTracker"]
