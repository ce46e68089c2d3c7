"""Request-scoped accessors for objects held on the application state."""

from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request, status

from ..services.engine import VendorLiveEngine
from ..services.geocoding.provider import ReverseGeocoder


def get_engine(request: Request) -> VendorLiveEngine:
    engine: Optional[VendorLiveEngine] = getattr(request.app.state, "engine", None)
    if engine is None or not engine.initialized:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Vendor engine is not initialized.",
        )
    return engine


def get_geocoder(request: Request) -> Optional[ReverseGeocoder]:
    return getattr(request.app.state, "geocoder", None)
