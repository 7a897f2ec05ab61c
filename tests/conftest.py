"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from uzhavar_gateway.api.main import create_app
from uzhavar_gateway.infrastructure.database.models import Base
from uzhavar_gateway.infrastructure.database.session import get_db
from uzhavar_gateway.infrastructure.database.seed import seed_reference_data
from uzhavar_gateway.domain.models import Market, Farmer, CropLoad, Sale, QualityGrade, LoadStatus


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database seeded with markets and the demo ledger"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    seed_reference_data(db)
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def salem() -> Market:
    return Market(id="M001", name="Salem (Dhadagapatti)", district="Salem")


@pytest.fixture
def ravi() -> Farmer:
    return Farmer(
        id="F001",
        name="Ravi Kumar",
        phone="9876543210",
        village="Soolagiri",
        primary_crop="Tomato",
        market_id="M001",
    )


@pytest.fixture
def anitha() -> Farmer:
    return Farmer(
        id="F004",
        name="Anitha Selvam",
        phone="9988776655",
        village="Omalur",
        primary_crop="Onion",
        market_id="M001",
    )


@pytest.fixture
def tomato_load() -> CropLoad:
    """Pending 250kg Grade A tomato load from Ravi Kumar"""
    return CropLoad(
        id="L101",
        farmer_id="F001",
        market_id="M001",
        crop="Tomato",
        quantity=Decimal("250"),
        grade=QualityGrade.A,
        arrival_date=date(2023, 10, 24),
        status=LoadStatus.PENDING,
    )


@pytest.fixture
def onion_load() -> CropLoad:
    return CropLoad(
        id="L103",
        farmer_id="F004",
        market_id="M001",
        crop="Onion",
        quantity=Decimal("500"),
        grade=QualityGrade.A,
        arrival_date=date(2023, 10, 24),
        status=LoadStatus.PENDING,
    )


def _make_sale(
    sale_id: str,
    farmer_id: str,
    net_amount: str,
    timestamp: datetime,
    load_id: str | None = None,
    market_id: str = "M001",
) -> Sale:
    """Sale with consistent amounts for a given net (5% fee)"""
    net = Decimal(net_amount)
    total = net / Decimal("0.95")
    return Sale(
        id=sale_id,
        load_id=load_id or f"L-{sale_id}",
        farmer_id=farmer_id,
        market_id=market_id,
        price_per_unit=Decimal("10"),
        buyer_name="Koyambedu Traders",
        total_amount=total,
        deductions=total - net,
        net_amount=net,
        timestamp=timestamp,
    )


@pytest.fixture
def fixture_sales() -> list[Sale]:
    """The two settled sales of the demo ledger (S201, S202)"""
    return [
        _make_sale("S201", "F001", "8312.5", datetime(2023, 10, 24, 10, 30, tzinfo=timezone.utc), load_id="L101"),
        _make_sale("S202", "F004", "19950", datetime(2023, 10, 24, 11, 15, tzinfo=timezone.utc), load_id="L103"),
    ]


@pytest.fixture
def make_sale():
    """Factory for sales with consistent amounts"""
    return _make_sale
