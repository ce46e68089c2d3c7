"""Position providers backed by client-reported coordinates."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from ...models.domain import Position

logger = logging.getLogger(__name__)


class ReverseGeocoder(Protocol):
    async def reverse_address(self, lat: float, lon: float) -> Optional[str]:
        ...


class PositionUnavailableError(RuntimeError):
    """Raised when no position fix is available for the vendor device."""


class ReportedPositionProvider:
    """
    Serves the coordinates reported by the vendor's device.

    The device is the source of truth for position and permission, so this
    provider only relays them. Addresses come from an optional reverse
    geocoder; lookup failures propagate to the engine which treats them as a
    device error.
    """

    def __init__(
        self,
        position: Optional[Position] = None,
        *,
        permission_granted: bool = True,
        geocoder: Optional[ReverseGeocoder] = None,
        address: Optional[str] = None,
    ) -> None:
        self.position = position
        self.permission_granted = permission_granted
        self.geocoder = geocoder
        self.address = address

    def report(self, position: Position, address: Optional[str] = None) -> None:
        self.position = position
        self.address = address

    async def request_permission(self) -> bool:
        return self.permission_granted

    async def get_current_position(self) -> Position:
        if self.position is None:
            raise PositionUnavailableError("No position has been reported for this device.")
        return self.position

    async def reverse_geocode(self, position: Position) -> Optional[str]:
        if self.address:
            return self.address
        if self.geocoder is None:
            return None
        return await self.geocoder.reverse_address(position.latitude, position.longitude)
