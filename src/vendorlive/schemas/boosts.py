"""Pydantic models for boost endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import BoostLevel


class BoostPurchaseRequest(BaseModel):
    boost_level: BoostLevel


class FeaturedListingModel(BaseModel):
    vendor_id: str
    start_date: datetime
    end_date: datetime
    boost_level: BoostLevel
    impressions: int
    clicks: int


class ActiveBoostResponse(BaseModel):
    vendor_id: str
    listing: Optional[FeaturedListingModel] = None
    multiplier: float = Field(..., ge=1.0)


class BoostTierModel(BaseModel):
    level: BoostLevel
    id: str
    name: str
    price: float
    duration_hours: int
    description: str
    multiplier: float
    features: List[str]


class FeaturedVendorsResponse(BaseModel):
    vendor_ids: List[str]
