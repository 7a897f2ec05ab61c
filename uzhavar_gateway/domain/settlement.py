"""Settlement engine - turns a pending crop load into a sale"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from uzhavar_gateway.domain.models import CropLoad, Sale, LoadStatus
from uzhavar_gateway.domain.exceptions import InvalidInputError, InvalidStateError
from uzhavar_gateway.utils.date_utils import utcnow
from uzhavar_gateway.utils.identifiers import new_id

MARKET_FEE_RATE = Decimal("0.05")
# Scale of the sale amount columns
AMOUNT_QUANTUM = Decimal("0.0001")


@dataclass(frozen=True)
class SettlementAmounts:
    total_amount: Decimal
    deductions: Decimal
    net_amount: Decimal


def compute_settlement(quantity: Decimal, unit_price: Decimal, fee_rate: Decimal = MARKET_FEE_RATE) -> SettlementAmounts:
    """
    Derive sale amounts.

    total = quantity * unit_price
    deductions = total * fee_rate
    net = total - deductions

    total and deductions are rounded half-up to AMOUNT_QUANTUM, the scale the
    ledger stores. net is taken from the rounded values, so
    net + deductions == total holds exactly.
    Example: 250kg at 35/kg -> 8750, 437.5, 8312.5
    """
    total = (Decimal(quantity) * Decimal(unit_price)).quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    deductions = (total * Decimal(fee_rate)).quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    return SettlementAmounts(
        total_amount=total,
        deductions=deductions,
        net_amount=total - deductions,
    )


def record_sale(
    load: CropLoad,
    unit_price: Decimal,
    buyer_name: str,
    fee_rate: Decimal = MARKET_FEE_RATE,
    now: datetime | None = None,
) -> Sale:
    """
    Build the Sale for a pending load.

    All checks run before anything is constructed. The caller must persist
    the Sale together with mark_sold(load) as one unit.

    Raises:
        InvalidStateError: load is not PENDING
        InvalidInputError: non-positive price or quantity, price finer than
            AMOUNT_QUANTUM, empty buyer name
    """
    if load.status != LoadStatus.PENDING:
        raise InvalidStateError(f"Load {load.id} is {load.status.value}, only PENDING loads can be sold")
    if unit_price is None or unit_price <= 0:
        raise InvalidInputError(f"Unit price must be positive, got {unit_price}")
    if Decimal(unit_price) != Decimal(unit_price).quantize(AMOUNT_QUANTUM):
        raise InvalidInputError(f"Unit price {unit_price} has more than 4 decimal places")
    if load.quantity is None or load.quantity <= 0:
        raise InvalidInputError(f"Load {load.id} has non-positive quantity {load.quantity}")
    buyer_name = (buyer_name or "").strip()
    if not buyer_name:
        raise InvalidInputError("Buyer name is required")

    amounts = compute_settlement(load.quantity, unit_price, fee_rate)

    return Sale(
        id=new_id("S"),
        load_id=load.id,
        farmer_id=load.farmer_id,
        market_id=load.market_id,
        price_per_unit=Decimal(unit_price),
        buyer_name=buyer_name,
        total_amount=amounts.total_amount,
        deductions=amounts.deductions,
        net_amount=amounts.net_amount,
        timestamp=now or utcnow(),
    )


def mark_sold(load: CropLoad) -> CropLoad:
    """Return the load transitioned PENDING -> SOLD"""
    if load.status != LoadStatus.PENDING:
        raise InvalidStateError(f"Load {load.id} is already {load.status.value}")
    return replace(load, status=LoadStatus.SOLD)
