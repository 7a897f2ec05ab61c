"""CSV export of a market's sales ledger"""

import csv
import io
from typing import Iterable, Mapping
from uzhavar_gateway.domain.models import Farmer, CropLoad, Sale
from uzhavar_gateway.domain.notifications import CURRENCY_SYMBOL, format_amount
from uzhavar_gateway.utils.date_utils import ensure_utc

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def export_sales_csv(
    sales: Iterable[Sale],
    farmers: Mapping[str, Farmer],
    loads: Mapping[str, CropLoad],
    currency: str = CURRENCY_SYMBOL,
) -> str:
    """
    Serialize sales as CSV: one header row, then one row per sale.

    Columns: Farmer, Crop, Qty (kg), Buyer, Net Amount, Timestamp.
    Sales whose farmer or load can no longer be resolved still get a row
    ("Unknown" / 0). Fields containing commas are quoted.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["Farmer", "Crop", "Qty (kg)", "Buyer", f"Net Amount ({currency})", "Timestamp"])

    for sale in sales:
        farmer = farmers.get(sale.farmer_id)
        load = loads.get(sale.load_id)
        writer.writerow(
            [
                farmer.name if farmer else "Unknown",
                load.crop if load else "Unknown",
                format_amount(load.quantity) if load else "0",
                sale.buyer_name,
                format_amount(sale.net_amount),
                ensure_utc(sale.timestamp).strftime(TIMESTAMP_FORMAT),
            ]
        )

    return buffer.getvalue()
