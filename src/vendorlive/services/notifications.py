"""Notification payloads and the default local dispatcher."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..models.domain import AlertEvent, GeoFenceAlert, TruckLocation

logger = logging.getLogger(__name__)


def live_notification(vendor_id: str, vendor_name: str, location: TruckLocation) -> dict:
    body = f"Open now at {location.address}" if location.address else "Check the map to find them!"
    return {
        "title": f"{vendor_name} is now live!",
        "body": body,
        "data": {"type": "truck_live", "vendorId": vendor_id},
    }


def geofence_notification(alert: GeoFenceAlert) -> dict:
    if alert.event_type is AlertEvent.EXIT:
        title = f"{alert.vendor_name} has left {alert.zone_name}"
        body = f"{alert.vendor_name} is no longer in {alert.zone_name}"
    else:
        title = f"{alert.vendor_name} is nearby!"
        body = f"{alert.vendor_name} just arrived in {alert.zone_name}"
    return {
        "title": title,
        "body": body,
        "data": {
            "type": "geofence_alert",
            "vendorId": alert.vendor_id,
            "zoneId": alert.zone_id,
            "event": alert.event_type.value,
        },
    }


class LoggingNotificationDispatcher:
    """Records notifications in memory and logs them; ``enabled=False`` makes it a no-op."""

    def __init__(self, enabled: bool = True, history_limit: Optional[int] = 100) -> None:
        self.enabled = enabled
        self.history_limit = history_limit
        self.sent: list[dict] = []

    async def schedule_local(self, title: str, body: str, data: Mapping[str, Any]) -> None:
        if not self.enabled:
            return
        logger.info("Notification: %s | %s", title, body)
        self.sent.append({"title": title, "body": body, "data": dict(data)})
        if self.history_limit is not None and len(self.sent) > self.history_limit:
            del self.sent[: len(self.sent) - self.history_limit]
