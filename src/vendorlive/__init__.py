"""Vendor live-location and engagement analytics engine."""

__version__ = "0.1.0"
