"""Location analytics helpers."""

from .aggregator import best_locations, compute_location_analytics, format_time_slot, rating_for_revenue

__all__ = [
    "compute_location_analytics",
    "best_locations",
    "format_time_slot",
    "rating_for_revenue",
]
