"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...config import settings
from ...services.engine import VendorLiveEngine
from ..deps import get_engine

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/engine", status_code=status.HTTP_200_OK)
def health_engine(engine: VendorLiveEngine = Depends(get_engine)) -> dict:
    """Report the in-memory state sizes of the engine."""
    return {
        "storage_backend": settings.storage_backend,
        "live_trucks": len(engine.get_live_trucks()),
        "history_entries": len(engine.ledger),
        "subscribed_zones": len(engine.get_subscribed_zones()),
        "featured_vendors": len(engine.get_featured_vendors()),
        "geofence_debounce": engine.geofences.debounce,
    }


@router.post("/health/flush", status_code=status.HTTP_200_OK)
async def flush_engine(engine: VendorLiveEngine = Depends(get_engine)) -> dict:
    """Force a write of all engine collections to the durable store."""
    persisted = await engine.flush()
    return {"persisted": persisted}
