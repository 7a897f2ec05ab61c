"""SQLAlchemy ORM models for the market ledger"""

from sqlalchemy import Column, String, Numeric, DateTime, Date, ForeignKey, Text, event
from sqlalchemy.orm import declarative_base, relationship
from uzhavar_gateway.domain.exceptions import InvalidStateError

Base = declarative_base()


class MarketRecord(Base):
    """Reference data, seeded at start-up"""

    __tablename__ = "market"

    id = Column(String(64), primary_key=True)
    name = Column(Text, nullable=False)
    district = Column(Text, nullable=False)


class FarmerRecord(Base):
    """Registered farmer"""

    __tablename__ = "farmer"

    id = Column(String(64), primary_key=True)
    market_id = Column(String(64), ForeignKey("market.id"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    village = Column(Text, nullable=False, default="")
    primary_crop = Column(Text, nullable=False, default="")

    loads = relationship("CropLoadRecord", back_populates="farmer")


class CropLoadRecord(Base):
    """Crop arrival; status moves PENDING -> SOLD once"""

    __tablename__ = "crop_load"

    id = Column(String(64), primary_key=True)
    farmer_id = Column(String(64), ForeignKey("farmer.id"), nullable=False, index=True)
    market_id = Column(String(64), ForeignKey("market.id"), nullable=False, index=True)
    crop = Column(Text, nullable=False)
    quantity = Column(Numeric(14, 3), nullable=False)
    grade = Column(String(1), nullable=False)
    arrival_date = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="PENDING")

    farmer = relationship("FarmerRecord", back_populates="loads")


class SaleRecord(Base):
    """Settled sale; immutable once flushed"""

    __tablename__ = "sale"

    id = Column(String(64), primary_key=True)
    # One sale per load, enforced by the schema as well as the conditional status update
    load_id = Column(String(64), ForeignKey("crop_load.id"), nullable=False, unique=True)
    farmer_id = Column(String(64), nullable=False, index=True)
    market_id = Column(String(64), ForeignKey("market.id"), nullable=False, index=True)
    price_per_unit = Column(Numeric(18, 4), nullable=False)
    buyer_name = Column(Text, nullable=False)
    total_amount = Column(Numeric(18, 4), nullable=False)
    deductions = Column(Numeric(18, 4), nullable=False)
    net_amount = Column(Numeric(18, 4), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)


class SmsLogRecord(Base):
    """Outbound notification log; immutable once flushed"""

    __tablename__ = "sms_log"

    id = Column(String(64), primary_key=True)
    market_id = Column(String(64), ForeignKey("market.id"), nullable=False, index=True)
    farmer_name = Column(Text, nullable=False)
    phone = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(String(16), nullable=False, default="DELIVERED")


def _reject_update(mapper, connection, target):
    raise InvalidStateError(f"{type(target).__name__} {target.id} is append-only and cannot be modified")


def _reject_delete(mapper, connection, target):
    raise InvalidStateError(f"{type(target).__name__} {target.id} is append-only and cannot be deleted")


for _append_only in (SaleRecord, SmsLogRecord):
    event.listen(_append_only, "before_update", _reject_update)
    event.listen(_append_only, "before_delete", _reject_delete)
