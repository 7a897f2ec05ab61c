"""Reference markets and demo ledger loaded at start-up"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from sqlalchemy.orm import Session
from uzhavar_gateway.domain.models import Market, Farmer, CropLoad, Sale, QualityGrade, LoadStatus
from uzhavar_gateway.infrastructure.database.models import MarketRecord, FarmerRecord
from uzhavar_gateway.infrastructure.database.repositories import (
    MarketRepository,
    FarmerRepository,
    LoadRepository,
    sale_record,
)

logger = logging.getLogger(__name__)

TAMIL_NADU_MARKETS = [
    Market(id="M001", name="Salem (Dhadagapatti)", district="Salem"),
    Market(id="M002", name="Coimbatore (R.S. Puram)", district="Coimbatore"),
    Market(id="M003", name="Madurai (Anna Nagar)", district="Madurai"),
    Market(id="M004", name="Trichy (Gandhi Market)", district="Trichy"),
    Market(id="M005", name="Chennai (Koyambedu)", district="Chennai"),
    Market(id="M006", name="Hosur Uzhavar Sandhai", district="Krishnagiri"),
]

DEMO_FARMERS = [
    Farmer("F001", "Ravi Kumar", "9876543210", "Soolagiri", "Tomato", "M001"),
    Farmer("F002", "Lakshmi Narayanan", "9845678901", "Kelamangalam", "Carrot", "M001"),
    Farmer("F003", "Muthu Swamy", "9123456789", "Bargur", "Beans", "M002"),
    Farmer("F004", "Anitha Selvam", "9988776655", "Omalur", "Onion", "M001"),
]

DEMO_LOADS = [
    CropLoad("L101", "F001", "M001", "Tomato", Decimal("250"), QualityGrade.A, date(2023, 10, 24), LoadStatus.SOLD),
    CropLoad("L102", "F002", "M001", "Carrot", Decimal("150"), QualityGrade.B, date(2023, 10, 24), LoadStatus.PENDING),
    CropLoad("L103", "F004", "M001", "Onion", Decimal("500"), QualityGrade.A, date(2023, 10, 24), LoadStatus.SOLD),
]

DEMO_SALES = [
    Sale(
        id="S201",
        load_id="L101",
        farmer_id="F001",
        market_id="M001",
        price_per_unit=Decimal("35"),
        buyer_name="Zomato Hyperpure",
        total_amount=Decimal("8750"),
        deductions=Decimal("437.5"),
        net_amount=Decimal("8312.5"),
        timestamp=datetime(2023, 10, 24, 10, 30, tzinfo=timezone.utc),
    ),
    Sale(
        id="S202",
        load_id="L103",
        farmer_id="F004",
        market_id="M001",
        price_per_unit=Decimal("42"),
        buyer_name="BigBasket",
        total_amount=Decimal("21000"),
        deductions=Decimal("1050"),
        net_amount=Decimal("19950"),
        timestamp=datetime(2023, 10, 24, 11, 15, tzinfo=timezone.utc),
    ),
]


def seed_reference_data(db: Session, include_demo_ledger: bool = True) -> None:
    """
    Insert the markets, and on an empty ledger the demo farmers, loads and sales.

    Safe to call on every start-up.
    """
    market_repo = MarketRepository(db)
    for market in TAMIL_NADU_MARKETS:
        if db.get(MarketRecord, market.id) is None:
            market_repo.add_market(market)
    db.flush()

    if include_demo_ledger and db.query(FarmerRecord).count() == 0:
        farmer_repo = FarmerRepository(db)
        load_repo = LoadRepository(db)
        for farmer in DEMO_FARMERS:
            farmer_repo.add_farmer(farmer)
        for load in DEMO_LOADS:
            load_repo.add_load(load)
        # Historical sales are imported as-is; their loads are already SOLD
        db.add_all([sale_record(sale) for sale in DEMO_SALES])
        logger.info("Seeded demo ledger", extra={"farmers": len(DEMO_FARMERS), "sales": len(DEMO_SALES)})

    db.commit()
