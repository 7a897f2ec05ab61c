"""Farmer registration and listing per market"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from uzhavar_gateway.api.v1.schemas import FarmerCreate, FarmerSchema
from uzhavar_gateway.api.dependencies import get_market, get_request_id
from uzhavar_gateway.infrastructure.database.session import get_db
from uzhavar_gateway.infrastructure.database.repositories import FarmerRepository
from uzhavar_gateway.domain.intake import register_farmer
from uzhavar_gateway.domain.exceptions import InvalidInputError
from uzhavar_gateway.domain.models import Market

router = APIRouter()


@router.post("/markets/{market_id}/farmers", response_model=FarmerSchema, status_code=201)
def create_farmer(
    request_body: FarmerCreate,
    request: Request,
    market: Market = Depends(get_market),
    db: Session = Depends(get_db),
):
    try:
        farmer = register_farmer(
            market,
            name=request_body.name,
            phone=request_body.phone,
            village=request_body.village,
            primary_crop=request_body.primary_crop,
        )
        FarmerRepository(db).add_farmer(farmer)
        db.commit()
    except InvalidInputError as e:
        db.rollback()
        raise HTTPException(status_code=422, detail=str(e))

    logging.info(
        "Farmer registered",
        extra={"request_id": get_request_id(request), "market_id": market.id, "farmer_id": farmer.id},
    )
    return FarmerSchema.from_domain(farmer)


@router.get("/markets/{market_id}/farmers", response_model=List[FarmerSchema])
def list_farmers(market: Market = Depends(get_market), db: Session = Depends(get_db)):
    return [FarmerSchema.from_domain(f) for f in FarmerRepository(db).list_farmers(market.id)]
