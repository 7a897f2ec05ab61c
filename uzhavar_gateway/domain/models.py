"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class UserRole(str, Enum):
    COLLECTOR = "COLLECTOR"
    ADMIN = "ADMIN"
    FARMER = "FARMER"


class QualityGrade(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class LoadStatus(str, Enum):
    PENDING = "PENDING"
    SOLD = "SOLD"


class DeliveryStatus(str, Enum):
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Market:
    """Physical produce market, the partition key for every other record"""

    id: str
    name: str
    district: str


@dataclass
class Farmer:
    """Registered producer selling through one market"""

    id: str
    name: str
    phone: str
    village: str
    primary_crop: str
    market_id: str


@dataclass
class CropLoad:
    """Single intake of produce from a farmer"""

    id: str
    farmer_id: str
    market_id: str
    crop: str
    quantity: Decimal  # kg
    grade: QualityGrade
    arrival_date: date
    status: LoadStatus = LoadStatus.PENDING


@dataclass(frozen=True)
class Sale:
    """Settled sale of one load; amounts are derived at settlement time"""

    id: str
    load_id: str
    farmer_id: str
    market_id: str
    price_per_unit: Decimal
    buyer_name: str
    total_amount: Decimal
    deductions: Decimal
    net_amount: Decimal
    timestamp: datetime


@dataclass(frozen=True)
class SmsLog:
    """Outbound farmer notification; name and phone are snapshots"""

    id: str
    market_id: str
    farmer_name: str
    phone: str
    message: str
    timestamp: datetime
    status: DeliveryStatus = DeliveryStatus.DELIVERED


@dataclass
class User:
    id: str
    name: str
    email: str
    role: UserRole


@dataclass
class MarketSummary:
    """Dashboard totals for one market"""

    farmer_count: int
    net_sales: Decimal
    arrivals_kg: Decimal
    pending_loads: int
    crop_mix: dict[str, Decimal]
