"""Settlement endpoint, sales ledger and CSV export"""

import time
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from uzhavar_gateway.api.v1.schemas import SaleCreate, SaleSchema, LoadSchema, SmsLogSchema, SettlementResponse
from uzhavar_gateway.api.dependencies import get_market, get_request_id
from uzhavar_gateway.config import settings
from uzhavar_gateway.infrastructure.database.session import get_db
from uzhavar_gateway.infrastructure.database.repositories import FarmerRepository, LoadRepository, SaleRepository
from uzhavar_gateway.domain.settlement import record_sale, mark_sold
from uzhavar_gateway.domain.notifications import format_sale_notice, build_sms_log
from uzhavar_gateway.domain.export import export_sales_csv
from uzhavar_gateway.domain.exceptions import InvalidInputError, InvalidStateError, RecordNotFoundError
from uzhavar_gateway.domain.models import Market
from uzhavar_gateway.infrastructure.observability.metrics import record_settlement, settlement_rejections_counter
from uzhavar_gateway.infrastructure.observability.logging import log_settlement

router = APIRouter()


@router.post("/markets/{market_id}/loads/{load_id}/sale", response_model=SettlementResponse, status_code=201)
def create_sale(
    load_id: str,
    request_body: SaleCreate,
    request: Request,
    market: Market = Depends(get_market),
    db: Session = Depends(get_db),
):
    """
    Settle a pending load against a buyer.

    Flow:
    1. Load the pending load and its farmer (both must belong to this market)
    2. Build the Sale (total, 5% market fee, net) and the SOLD transition
    3. Format the farmer's sale notice
    4. Write load status + Sale + notice in one transaction
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        load = LoadRepository(db).get_load(market.id, load_id)
        farmer = FarmerRepository(db).get_farmer(market.id, load.farmer_id)

        sale = record_sale(
            load,
            unit_price=request_body.price_per_unit,
            buyer_name=request_body.buyer_name,
            fee_rate=settings.market_fee_rate,
        )
        sold_load = mark_sold(load)

        message = format_sale_notice(
            farmer,
            sale,
            load,
            system_name=settings.system_name,
            currency=settings.currency_symbol,
        )
        notice = build_sms_log(farmer, message, market.id, now=sale.timestamp)

        SaleRepository(db).record_settlement(sale, notice)
        db.commit()

    except RecordNotFoundError as e:
        db.rollback()
        settlement_rejections_counter.labels(reason="not_found").inc()
        logging.warning(f"Settlement lookup failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidStateError as e:
        db.rollback()
        settlement_rejections_counter.labels(reason="invalid_state").inc()
        logging.warning(f"Settlement rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except InvalidInputError as e:
        db.rollback()
        settlement_rejections_counter.labels(reason="invalid_input").inc()
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_settlement(market.id, sale.net_amount)
    log_settlement(request_id, market.id, sale.id, load.id, sale.net_amount, duration_ms)

    return SettlementResponse(
        sale=SaleSchema.from_domain(sale),
        load=LoadSchema.from_domain(sold_load),
        notice=SmsLogSchema.from_domain(notice),
    )


@router.get("/markets/{market_id}/sales", response_model=List[SaleSchema])
def list_sales(market: Market = Depends(get_market), db: Session = Depends(get_db)):
    return [SaleSchema.from_domain(s) for s in SaleRepository(db).list_sales(market.id)]


@router.get("/markets/{market_id}/sales/export")
def export_sales(market: Market = Depends(get_market), db: Session = Depends(get_db)):
    """Download the market's sales ledger as CSV (header + one row per sale)"""
    content = export_sales_csv(
        SaleRepository(db).list_sales(market.id),
        FarmerRepository(db).farmers_by_id(market.id),
        LoadRepository(db).loads_by_id(market.id),
        currency=settings.currency_symbol,
    )
    filename = f"{settings.system_name}_{market.district}_Data.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
