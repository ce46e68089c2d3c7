"""API route modules."""

from . import boosts, geofences, health, vendors

__all__ = ["boosts", "geofences", "health", "vendors"]
