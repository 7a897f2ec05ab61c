"""Per-market dashboard totals"""

from decimal import Decimal
from typing import Dict, List
from uzhavar_gateway.domain.models import Farmer, CropLoad, Sale, LoadStatus, MarketSummary


def summarize_market(farmers: List[Farmer], loads: List[CropLoad], sales: List[Sale]) -> MarketSummary:
    """Headline numbers for one market: producers, net sales, arrivals, pending loads, crop mix"""
    crop_mix: Dict[str, Decimal] = {}
    for load in loads:
        crop_mix[load.crop] = crop_mix.get(load.crop, Decimal(0)) + load.quantity

    return MarketSummary(
        farmer_count=len(farmers),
        net_sales=sum((s.net_amount for s in sales), Decimal(0)),
        arrivals_kg=sum((l.quantity for l in loads), Decimal(0)),
        pending_loads=sum(1 for l in loads if l.status == LoadStatus.PENDING),
        crop_mix=crop_mix,
    )
