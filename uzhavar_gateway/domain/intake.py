"""Farmer registration and crop arrival intake"""

from datetime import date
from decimal import Decimal
from uzhavar_gateway.domain.models import Market, Farmer, CropLoad, QualityGrade, LoadStatus
from uzhavar_gateway.domain.exceptions import InvalidInputError
from uzhavar_gateway.utils.date_utils import today_utc
from uzhavar_gateway.utils.identifiers import new_id

# Scale of the crop_load.quantity column
QUANTITY_QUANTUM = Decimal("0.001")


def register_farmer(
    market: Market,
    name: str,
    phone: str,
    village: str = "",
    primary_crop: str = "",
) -> Farmer:
    """
    Build a new Farmer owned by `market`.

    Name and phone are mandatory; village and primary crop are free text.
    """
    name = (name or "").strip()
    phone = (phone or "").strip()
    if not name:
        raise InvalidInputError("Farmer name is required")
    if not phone:
        raise InvalidInputError("Farmer phone is required")

    return Farmer(
        id=new_id("F"),
        name=name,
        phone=phone,
        village=(village or "").strip(),
        primary_crop=(primary_crop or "").strip(),
        market_id=market.id,
    )


def receive_load(
    farmer: Farmer,
    crop: str,
    quantity: Decimal,
    grade: QualityGrade = QualityGrade.A,
    arrival_date: date | None = None,
    market_id: str | None = None,
) -> CropLoad:
    """
    Record the arrival of a crop load from `farmer`.

    The load always belongs to the farmer's market; a caller-supplied
    `market_id` that disagrees is rejected rather than silently overridden.
    """
    crop = (crop or "").strip()
    if not crop:
        raise InvalidInputError("Crop name is required")
    if quantity is None or quantity <= 0:
        raise InvalidInputError(f"Quantity must be positive, got {quantity}")
    if Decimal(quantity) != Decimal(quantity).quantize(QUANTITY_QUANTUM):
        raise InvalidInputError(f"Quantity {quantity} has more than 3 decimal places")
    if market_id is not None and market_id != farmer.market_id:
        raise InvalidInputError(
            f"Farmer {farmer.id} belongs to market {farmer.market_id}, not {market_id}"
        )

    return CropLoad(
        id=new_id("L"),
        farmer_id=farmer.id,
        market_id=farmer.market_id,
        crop=crop,
        quantity=Decimal(quantity),
        grade=QualityGrade(grade),
        arrival_date=arrival_date or today_utc(),
        status=LoadStatus.PENDING,
    )
