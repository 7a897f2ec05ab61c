"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uzhavar_gateway.domain.models import (
    Market,
    Farmer,
    CropLoad,
    Sale,
    SmsLog,
    MarketSummary,
    QualityGrade,
    LoadStatus,
    DeliveryStatus,
)


class MarketSchema(BaseModel):
    id: str
    name: str
    district: str

    @classmethod
    def from_domain(cls, market: Market) -> "MarketSchema":
        return cls(id=market.id, name=market.name, district=market.district)


class FarmerCreate(BaseModel):
    """Request body for POST /v1/markets/{market_id}/farmers"""

    name: str = Field(..., min_length=1, description="Farmer name")
    phone: str = Field(..., min_length=1, description="Mobile number for SMS notices")
    village: str = ""
    primary_crop: str = ""


class FarmerSchema(BaseModel):
    id: str
    name: str
    phone: str
    village: str
    primary_crop: str
    market_id: str

    @classmethod
    def from_domain(cls, farmer: Farmer) -> "FarmerSchema":
        return cls(
            id=farmer.id,
            name=farmer.name,
            phone=farmer.phone,
            village=farmer.village,
            primary_crop=farmer.primary_crop,
            market_id=farmer.market_id,
        )


class LoadCreate(BaseModel):
    """Request body for POST /v1/markets/{market_id}/loads"""

    farmer_id: str = Field(..., min_length=1)
    crop: str = Field(..., min_length=1)
    quantity: Decimal = Field(..., gt=0, decimal_places=3, description="Quantity in kg")
    grade: QualityGrade = QualityGrade.A
    arrival_date: Optional[date] = None


class LoadSchema(BaseModel):
    id: str
    farmer_id: str
    market_id: str
    crop: str
    quantity: float
    grade: QualityGrade
    arrival_date: date
    status: LoadStatus

    @classmethod
    def from_domain(cls, load: CropLoad) -> "LoadSchema":
        return cls(
            id=load.id,
            farmer_id=load.farmer_id,
            market_id=load.market_id,
            crop=load.crop,
            quantity=float(load.quantity),
            grade=load.grade,
            arrival_date=load.arrival_date,
            status=load.status,
        )


class SaleCreate(BaseModel):
    """Request body for POST /v1/markets/{market_id}/loads/{load_id}/sale"""

    price_per_unit: Decimal = Field(..., gt=0, decimal_places=4, description="Price per kg")
    buyer_name: str = Field(..., min_length=1)


class SaleSchema(BaseModel):
    id: str
    load_id: str
    farmer_id: str
    market_id: str
    price_per_unit: float
    buyer_name: str
    total_amount: float
    deductions: float
    net_amount: float
    timestamp: datetime

    @classmethod
    def from_domain(cls, sale: Sale) -> "SaleSchema":
        return cls(
            id=sale.id,
            load_id=sale.load_id,
            farmer_id=sale.farmer_id,
            market_id=sale.market_id,
            price_per_unit=float(sale.price_per_unit),
            buyer_name=sale.buyer_name,
            total_amount=float(sale.total_amount),
            deductions=float(sale.deductions),
            net_amount=float(sale.net_amount),
            timestamp=sale.timestamp,
        )


class SmsLogSchema(BaseModel):
    id: str
    market_id: str
    farmer_name: str
    phone: str
    message: str
    timestamp: datetime
    status: DeliveryStatus

    @classmethod
    def from_domain(cls, log: SmsLog) -> "SmsLogSchema":
        return cls(
            id=log.id,
            market_id=log.market_id,
            farmer_name=log.farmer_name,
            phone=log.phone,
            message=log.message,
            timestamp=log.timestamp,
            status=log.status,
        )


class SettlementResponse(BaseModel):
    """Response for POST /v1/markets/{market_id}/loads/{load_id}/sale"""

    sale: SaleSchema
    load: LoadSchema
    notice: SmsLogSchema


class DailySummaryResponse(BaseModel):
    """Response for POST /v1/markets/{market_id}/daily-summaries"""

    market_id: str
    day: date
    sent: int
    summaries: List[SmsLogSchema]


class DashboardResponse(BaseModel):
    """Response for GET /v1/markets/{market_id}/dashboard"""

    market: MarketSchema
    farmer_count: int
    net_sales: float
    arrivals_kg: float
    pending_loads: int
    crop_mix: Dict[str, float]

    @classmethod
    def from_domain(cls, market: Market, summary: MarketSummary) -> "DashboardResponse":
        return cls(
            market=MarketSchema.from_domain(market),
            farmer_count=summary.farmer_count,
            net_sales=float(summary.net_sales),
            arrivals_kg=float(summary.arrivals_kg),
            pending_loads=summary.pending_loads,
            crop_mix={crop: float(qty) for crop, qty in summary.crop_mix.items()},
        )


class AssistantRequest(BaseModel):
    """Request body for POST /v1/assistant"""

    prompt: str = Field(..., min_length=1, max_length=4000)


class AssistantResponse(BaseModel):
    reply: str
