"""GET /v1/markets and per-market dashboard"""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from uzhavar_gateway.api.v1.schemas import MarketSchema, DashboardResponse
from uzhavar_gateway.api.dependencies import get_market
from uzhavar_gateway.infrastructure.database.session import get_db
from uzhavar_gateway.infrastructure.database.repositories import (
    MarketRepository,
    FarmerRepository,
    LoadRepository,
    SaleRepository,
)
from uzhavar_gateway.domain.dashboard import summarize_market
from uzhavar_gateway.domain.models import Market

router = APIRouter()


@router.get("/markets", response_model=List[MarketSchema])
def list_markets(db: Session = Depends(get_db)):
    return [MarketSchema.from_domain(m) for m in MarketRepository(db).list_markets()]


@router.get("/markets/{market_id}/dashboard", response_model=DashboardResponse)
def get_dashboard(market: Market = Depends(get_market), db: Session = Depends(get_db)):
    """
    Headline totals for a market.

    Returns:
        Producer count, net sales, arrivals (kg), pending loads and crop mix
    """
    summary = summarize_market(
        FarmerRepository(db).list_farmers(market.id),
        LoadRepository(db).list_loads(market.id),
        SaleRepository(db).list_sales(market.id),
    )
    return DashboardResponse.from_domain(market, summary)
