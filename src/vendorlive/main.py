"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import boosts, geofences, health, vendors
from .config import settings
from .persistence import build_store
from .services.collaborators import KeyValueStore, NotificationDispatcher, PositionProvider
from .services.engine import VendorLiveEngine
from .services.geocoding.nominatim import NominatimClient
from .services.geocoding.provider import ReportedPositionProvider, ReverseGeocoder
from .services.notifications import LoggingNotificationDispatcher

logger = logging.getLogger(__name__)


def build_engine(
    store: KeyValueStore | None = None,
    position_provider: PositionProvider | None = None,
    notifier: NotificationDispatcher | None = None,
    geocoder: ReverseGeocoder | None = None,
) -> VendorLiveEngine:
    """Wire the engine with the collaborators selected by settings."""

    if geocoder is None and settings.geocode_enabled:
        geocoder = NominatimClient()
    return VendorLiveEngine(
        store=store or build_store(),
        position_provider=position_provider or ReportedPositionProvider(geocoder=geocoder),
        notifier=notifier or LoggingNotificationDispatcher(enabled=settings.notifications_enabled),
    )


def create_app(engine: VendorLiveEngine | None = None, geocoder: ReverseGeocoder | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if geocoder is None and settings.geocode_enabled:
            app.state.geocoder = NominatimClient()
        else:
            app.state.geocoder = geocoder
        app.state.engine = engine or build_engine(geocoder=app.state.geocoder)
        if not app.state.engine.initialized:
            await app.state.engine.initialize()
        yield
        if not await app.state.engine.flush():
            logger.warning("Final flush of vendor engine state failed")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(vendors.router, prefix=settings.api_prefix)
    app.include_router(boosts.router, prefix=settings.api_prefix)
    app.include_router(geofences.router, prefix=settings.api_prefix)
    return app


app = create_app()
