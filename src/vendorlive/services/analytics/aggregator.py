"""Location performance analytics derived from the session ledger."""

from __future__ import annotations

import math
from collections import Counter
from statistics import fmean
from typing import Dict, Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo

from ...config import settings
from ...models.domain import LocationAnalytics, LocationHistoryEntry
from ..geospatial import coordinate_bucket

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
BEST_DAYS_LIMIT = 3
REVENUE_PER_RATING_POINT = 100.0
MIN_RATING = 1
MAX_RATING = 5


def compute_location_analytics(
    entries: Iterable[LocationHistoryEntry],
    *,
    timezone: Optional[str] = None,
) -> list[LocationAnalytics]:
    """Group sessions into ~111 m buckets and summarize each, best revenue first.

    Recomputed from scratch on every call.
    """

    tz = ZoneInfo(timezone or settings.analytics_timezone)
    buckets: Dict[str, List[LocationHistoryEntry]] = {}
    for entry in entries:
        key = coordinate_bucket(entry.latitude, entry.longitude)
        buckets.setdefault(key, []).append(entry)

    analytics = [_summarize_bucket(key, bucket, tz) for key, bucket in buckets.items()]
    return sorted(analytics, key=lambda item: item.avg_revenue, reverse=True)


def best_locations(analytics: Sequence[LocationAnalytics], limit: int = 5) -> list[LocationAnalytics]:
    return list(analytics[: max(limit, 0)])


def rating_for_revenue(avg_revenue: float) -> int:
    # half-up: 2.5 -> 3
    banded = math.floor(avg_revenue / REVENUE_PER_RATING_POINT + 0.5)
    return min(MAX_RATING, max(MIN_RATING, banded))


def format_time_slot(hour: Optional[int]) -> str:
    if hour is None:
        return "N/A"
    return f"{hour:02d}:00 - {hour + 1:02d}:00"


def _summarize_bucket(key: str, entries: List[LocationHistoryEntry], tz: ZoneInfo) -> LocationAnalytics:
    customers = [entry.customers_served for entry in entries if entry.customers_served is not None]
    revenues = [entry.revenue for entry in entries if entry.revenue is not None]
    avg_revenue = fmean(revenues) if revenues else 0.0

    day_counts: Counter[str] = Counter()
    hour_counts: Counter[int] = Counter()
    for entry in entries:
        local_start = entry.start_time.astimezone(tz)
        day_counts[WEEKDAY_NAMES[local_start.weekday()]] += 1
        hour_counts[local_start.hour] += 1

    # most_common keeps first-seen order for equal counts
    best_days = [day for day, _ in day_counts.most_common(BEST_DAYS_LIMIT)]
    best_hour = hour_counts.most_common(1)[0][0] if hour_counts else None

    lat, lng = key.split(",")
    return LocationAnalytics(
        location_id=key,
        address=entries[0].address or f"{lat}, {lng}",
        visit_count=len(entries),
        avg_customers=fmean(customers) if customers else 0.0,
        avg_revenue=avg_revenue,
        best_days=best_days,
        best_time_slot=format_time_slot(best_hour),
        rating=rating_for_revenue(avg_revenue),
    )
