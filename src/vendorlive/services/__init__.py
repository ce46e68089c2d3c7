"""Engine services."""

from .engine import VendorLiveEngine

__all__ = ["VendorLiveEngine"]
