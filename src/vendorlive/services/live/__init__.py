"""Live-status registry."""

from .registry import LiveStatusRegistry

__all__ = ["LiveStatusRegistry"]
