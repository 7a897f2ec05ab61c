"""Farmer-facing SMS text for sales and daily summaries"""

from datetime import datetime
from decimal import Decimal
from uzhavar_gateway.domain.models import Farmer, Sale, CropLoad, SmsLog, DeliveryStatus
from uzhavar_gateway.utils.date_utils import utcnow
from uzhavar_gateway.utils.identifiers import new_id

SYSTEM_NAME = "Uzhavar360"
CURRENCY_SYMBOL = "₹"


def format_amount(value: Decimal | int | float) -> str:
    """
    Render a number the way it reads on a receipt: no exponent, no trailing zeros.

    Decimal("8750.0000") -> "8750", Decimal("437.50") -> "437.5"
    """
    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    if amount == 0:
        return "0"
    return format(amount.normalize(), "f")


def format_sale_notice(
    farmer: Farmer,
    sale: Sale,
    load: CropLoad,
    system_name: str = SYSTEM_NAME,
    currency: str = CURRENCY_SYMBOL,
) -> str:
    return (
        f"{system_name}: Hi {farmer.name}, your {format_amount(load.quantity)}kg of {load.crop} "
        f"(Grade {load.grade.value}) has been sold for {currency}{format_amount(sale.price_per_unit)}/kg. "
        f"Total: {currency}{format_amount(sale.total_amount)}. "
        f"Deductions: {currency}{format_amount(sale.deductions)}. "
        f"Net Amount: {currency}{format_amount(sale.net_amount)} will be credited shortly."
    )


def format_daily_summary(
    farmer: Farmer,
    net_total: Decimal,
    system_name: str = SYSTEM_NAME,
    currency: str = CURRENCY_SYMBOL,
) -> str:
    return (
        f"{system_name}: Daily Summary for {farmer.name}. "
        f"Total earnings today: {currency}{format_amount(net_total)}. "
        f"Thank you for using {system_name}."
    )


def build_sms_log(farmer: Farmer, message: str, market_id: str, now: datetime | None = None) -> SmsLog:
    """Log entry for a message to `farmer`; name and phone are copied, not referenced"""
    return SmsLog(
        id=new_id("SMS"),
        market_id=market_id,
        farmer_name=farmer.name,
        phone=farmer.phone,
        message=message,
        timestamp=now or utcnow(),
        status=DeliveryStatus.DELIVERED,
    )
