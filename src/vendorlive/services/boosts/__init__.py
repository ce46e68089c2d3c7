"""Visibility boost management."""

from .manager import VisibilityBoostManager, tier_for

__all__ = ["VisibilityBoostManager", "tier_for"]
