"""Daily per-farmer aggregation of a market's sales"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional
from uzhavar_gateway.domain.models import Farmer, Sale, SmsLog, UserRole
from uzhavar_gateway.domain.exceptions import PermissionDeniedError
from uzhavar_gateway.domain.notifications import (
    SYSTEM_NAME,
    CURRENCY_SYMBOL,
    format_daily_summary,
    build_sms_log,
)
from uzhavar_gateway.utils.date_utils import utc_day, utcnow

logger = logging.getLogger(__name__)


def authorize_summaries(role: Optional[UserRole]) -> UserRole:
    """Only market staff (ADMIN) may send bulk summaries"""
    if role != UserRole.ADMIN:
        raise PermissionDeniedError(f"Role {role.value if role else 'none'} cannot send daily summaries")
    return role


def aggregate_daily_sales(sales: Iterable[Sale], day: date) -> Dict[str, Decimal]:
    """
    Sum net amounts per farmer for sales settled on `day` (UTC calendar day).

    Returns an empty dict when nothing was sold that day; callers treat that
    as "nothing to summarize".
    """
    totals: Dict[str, Decimal] = {}
    for sale in sales:
        if utc_day(sale.timestamp) != day:
            continue
        totals[sale.farmer_id] = totals.get(sale.farmer_id, Decimal(0)) + sale.net_amount
    return totals


def generate_daily_summaries(
    aggregate: Mapping[str, Decimal],
    farmer_lookup: Mapping[str, Farmer],
    market_id: str,
    system_name: str = SYSTEM_NAME,
    currency: str = CURRENCY_SYMBOL,
    now: datetime | None = None,
) -> List[SmsLog]:
    """
    One summary SmsLog per farmer in `aggregate`.

    Farmers missing from `farmer_lookup` are skipped with a warning: sales
    may outlive pruned farmer records.
    """
    now = now or utcnow()
    logs = []
    for farmer_id, net_total in aggregate.items():
        farmer = farmer_lookup.get(farmer_id)
        if farmer is None:
            logger.warning(
                "Skipping daily summary for unknown farmer",
                extra={"farmer_id": farmer_id, "market_id": market_id},
            )
            continue
        message = format_daily_summary(farmer, net_total, system_name=system_name, currency=currency)
        logs.append(build_sms_log(farmer, message, market_id, now=now))
    return logs
