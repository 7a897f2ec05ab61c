"""SMS log and daily earnings summaries"""

import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from uzhavar_gateway.api.v1.schemas import SmsLogSchema, DailySummaryResponse
from uzhavar_gateway.api.dependencies import get_market, get_request_id, require_admin
from uzhavar_gateway.config import settings
from uzhavar_gateway.infrastructure.database.session import get_db
from uzhavar_gateway.infrastructure.database.repositories import FarmerRepository, SaleRepository, SmsLogRepository
from uzhavar_gateway.domain.aggregation import aggregate_daily_sales, generate_daily_summaries
from uzhavar_gateway.domain.models import Market
from uzhavar_gateway.infrastructure.observability.metrics import sms_log_counter
from uzhavar_gateway.infrastructure.observability.logging import log_daily_summaries
from uzhavar_gateway.utils.date_utils import today_utc

router = APIRouter()


@router.get("/markets/{market_id}/sms-logs", response_model=List[SmsLogSchema])
def list_sms_logs(
    limit: int = Query(100, ge=1, le=1000),
    market: Market = Depends(get_market),
    db: Session = Depends(get_db),
):
    """Outbound notifications, most recent first"""
    return [SmsLogSchema.from_domain(log) for log in SmsLogRepository(db).list_logs(market.id, limit=limit)]


@router.post(
    "/markets/{market_id}/daily-summaries",
    response_model=DailySummaryResponse,
    dependencies=[Depends(require_admin)],
)
def send_daily_summaries(
    request: Request,
    day: Optional[date] = Query(None, description="UTC calendar day, defaults to today"),
    market: Market = Depends(get_market),
    db: Session = Depends(get_db),
):
    """
    Log one earnings summary SMS per farmer with sales on `day`.

    Returns an empty summary list (sent=0) when nothing was sold that day.
    """
    request_id = get_request_id(request)
    day = day or today_utc()

    try:
        aggregate = aggregate_daily_sales(SaleRepository(db).list_sales(market.id), day)
        summaries = generate_daily_summaries(
            aggregate,
            FarmerRepository(db).farmers_by_id(market.id),
            market.id,
            system_name=settings.system_name,
            currency=settings.currency_symbol,
        )
        if summaries:
            SmsLogRepository(db).add_logs(summaries)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    sms_log_counter.labels(kind="daily_summary").inc(len(summaries))
    log_daily_summaries(request_id, market.id, day.isoformat(), len(summaries))

    return DailySummaryResponse(
        market_id=market.id,
        day=day,
        sent=len(summaries),
        summaries=[SmsLogSchema.from_domain(log) for log in summaries],
    )
