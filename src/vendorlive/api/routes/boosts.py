"""Featured listing (boost) endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from ...models.catalog import BOOST_PRICING
from ...models.domain import FeaturedListing
from ...schemas.boosts import (
    ActiveBoostResponse,
    BoostPurchaseRequest,
    BoostTierModel,
    FeaturedListingModel,
    FeaturedVendorsResponse,
)
from ...schemas.vendors import OutcomeResponse
from ...services.engine import VendorLiveEngine
from ..deps import get_engine

router = APIRouter(prefix="/boosts", tags=["boosts"])


def _listing_model(listing: FeaturedListing) -> FeaturedListingModel:
    return FeaturedListingModel(**listing.model_dump())


@router.get("/pricing", response_model=List[BoostTierModel], status_code=status.HTTP_200_OK)
def list_pricing() -> List[BoostTierModel]:
    return [
        BoostTierModel(
            level=level,
            id=tier.id,
            name=tier.name,
            price=tier.price,
            duration_hours=tier.duration_hours,
            description=tier.description,
            multiplier=tier.multiplier,
            features=list(tier.features),
        )
        for level, tier in BOOST_PRICING.items()
    ]


@router.get("/featured", response_model=FeaturedVendorsResponse, status_code=status.HTTP_200_OK)
def list_featured(engine: VendorLiveEngine = Depends(get_engine)) -> FeaturedVendorsResponse:
    return FeaturedVendorsResponse(vendor_ids=engine.get_featured_vendors())


@router.post("/{vendor_id}", response_model=FeaturedListingModel, status_code=status.HTTP_201_CREATED)
async def purchase_boost(
    vendor_id: str,
    request: BoostPurchaseRequest,
    engine: VendorLiveEngine = Depends(get_engine),
) -> FeaturedListingModel:
    listing = await engine.purchase_boost(vendor_id, request.boost_level)
    return _listing_model(listing)


@router.get("/{vendor_id}", response_model=ActiveBoostResponse, status_code=status.HTTP_200_OK)
def get_active_boost(vendor_id: str, engine: VendorLiveEngine = Depends(get_engine)) -> ActiveBoostResponse:
    listing = engine.get_active_boost(vendor_id)
    return ActiveBoostResponse(
        vendor_id=vendor_id,
        listing=_listing_model(listing) if listing else None,
        multiplier=engine.get_boost_multiplier(vendor_id),
    )


@router.post("/{vendor_id}/impressions", response_model=OutcomeResponse, status_code=status.HTTP_200_OK)
async def record_impression(vendor_id: str, engine: VendorLiveEngine = Depends(get_engine)) -> OutcomeResponse:
    outcome = await engine.record_impression(vendor_id)
    return OutcomeResponse(vendor_id=vendor_id, outcome=outcome.value)


@router.post("/{vendor_id}/clicks", response_model=OutcomeResponse, status_code=status.HTTP_200_OK)
async def record_click(vendor_id: str, engine: VendorLiveEngine = Depends(get_engine)) -> OutcomeResponse:
    outcome = await engine.record_click(vendor_id)
    return OutcomeResponse(vendor_id=vendor_id, outcome=outcome.value)
