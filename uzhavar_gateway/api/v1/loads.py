"""Crop arrival intake and listing per market"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from uzhavar_gateway.api.v1.schemas import LoadCreate, LoadSchema
from uzhavar_gateway.api.dependencies import get_market, get_request_id
from uzhavar_gateway.infrastructure.database.session import get_db
from uzhavar_gateway.infrastructure.database.repositories import FarmerRepository, LoadRepository
from uzhavar_gateway.domain.intake import receive_load
from uzhavar_gateway.domain.exceptions import InvalidInputError, RecordNotFoundError
from uzhavar_gateway.domain.models import Market, LoadStatus

router = APIRouter()


@router.post("/markets/{market_id}/loads", response_model=LoadSchema, status_code=201)
def create_load(
    request_body: LoadCreate,
    request: Request,
    market: Market = Depends(get_market),
    db: Session = Depends(get_db),
):
    """
    Record a crop arrival as a PENDING load.

    The farmer must be registered in this market.
    """
    try:
        farmer = FarmerRepository(db).get_farmer(market.id, request_body.farmer_id)
        load = receive_load(
            farmer,
            crop=request_body.crop,
            quantity=request_body.quantity,
            grade=request_body.grade,
            arrival_date=request_body.arrival_date,
            market_id=market.id,
        )
        LoadRepository(db).add_load(load)
        db.commit()
    except RecordNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInputError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    logging.info(
        "Load received",
        extra={"request_id": get_request_id(request), "market_id": market.id, "load_id": load.id},
    )
    return LoadSchema.from_domain(load)


@router.get("/markets/{market_id}/loads", response_model=List[LoadSchema])
def list_loads(
    status: Optional[LoadStatus] = Query(None, description="Filter by PENDING or SOLD"),
    market: Market = Depends(get_market),
    db: Session = Depends(get_db),
):
    return [LoadSchema.from_domain(l) for l in LoadRepository(db).list_loads(market.id, status=status)]
