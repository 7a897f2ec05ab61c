"""Data access layer for the market ledger, partitioned by market"""

from typing import Dict, Iterable, List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from uzhavar_gateway.infrastructure.database.models import (
    MarketRecord,
    FarmerRecord,
    CropLoadRecord,
    SaleRecord,
    SmsLogRecord,
)
from uzhavar_gateway.domain.models import (
    Market,
    Farmer,
    CropLoad,
    Sale,
    SmsLog,
    QualityGrade,
    LoadStatus,
    DeliveryStatus,
)
from uzhavar_gateway.domain.exceptions import RecordNotFoundError, InvalidStateError
from uzhavar_gateway.utils.date_utils import ensure_utc

def to_market(row: MarketRecord) -> Market:
    return Market(id=row.id, name=row.name, district=row.district)

def to_farmer(row: FarmerRecord) -> Farmer:
    return Farmer(
        id=row.id,
        name=row.name,
        phone=row.phone,
        village=row.village,
        primary_crop=row.primary_crop,
        market_id=row.market_id,
    )

def to_load(row: CropLoadRecord) -> CropLoad:
    return CropLoad(
        id=row.id,
        farmer_id=row.farmer_id,
        market_id=row.market_id,
        crop=row.crop,
        quantity=row.quantity,
        grade=QualityGrade(row.grade),
        arrival_date=row.arrival_date,
        status=LoadStatus(row.status),
    )

def to_sale(row: SaleRecord) -> Sale:
    return Sale(
        id=row.id,
        load_id=row.load_id,
        farmer_id=row.farmer_id,
        market_id=row.market_id,
        price_per_unit=row.price_per_unit,
        buyer_name=row.buyer_name,
        total_amount=row.total_amount,
        deductions=row.deductions,
        net_amount=row.net_amount,
        timestamp=ensure_utc(row.timestamp),
    )

def to_sms_log(row: SmsLogRecord) -> SmsLog:
    return SmsLog(
        id=row.id,
        market_id=row.market_id,
        farmer_name=row.farmer_name,
        phone=row.phone,
        message=row.message,
        timestamp=ensure_utc(row.timestamp),
        status=DeliveryStatus(row.status),
    )

def sale_record(sale: Sale) -> SaleRecord:
    return SaleRecord(
        id=sale.id,
        load_id=sale.load_id,
        farmer_id=sale.farmer_id,
        market_id=sale.market_id,
        price_per_unit=sale.price_per_unit,
        buyer_name=sale.buyer_name,
        total_amount=sale.total_amount,
        deductions=sale.deductions,
        net_amount=sale.net_amount,
        timestamp=sale.timestamp,
    )

def sms_log_record(log: SmsLog) -> SmsLogRecord:
    return SmsLogRecord(
        id=log.id,
        market_id=log.market_id,
        farmer_name=log.farmer_name,
        phone=log.phone,
        message=log.message,
        timestamp=log.timestamp,
        status=log.status.value,
    )

class MarketRepository:
    """Repository for reference markets"""

    def __init__(self, db: Session):
        self.db = db

    def add_market(self, market: Market) -> None:
        self.db.add(MarketRecord(id=market.id, name=market.name, district=market.district))

    def list_markets(self) -> List[Market]:
        return [to_market(row) for row in self.db.query(MarketRecord).order_by(MarketRecord.id).all()]

    def get_market(self, market_id: str) -> Market:
        row = self.db.get(MarketRecord, market_id)
        if row is None:
            raise RecordNotFoundError(f"Market {market_id} not found")
        return to_market(row)

class FarmerRepository:
    """Repository for registered farmers"""

    def __init__(self, db: Session):
        self.db = db

    def add_farmer(self, farmer: Farmer) -> None:
        """Append a farmer; the market must already exist"""
        if self.db.get(MarketRecord, farmer.market_id) is None:
            raise RecordNotFoundError(f"Market {farmer.market_id} not found")
        self.db.add(
            FarmerRecord(
                id=farmer.id,
                market_id=farmer.market_id,
                name=farmer.name,
                phone=farmer.phone,
                village=farmer.village,
                primary_crop=farmer.primary_crop,
            )
        )
        self.db.flush()

    def list_farmers(self, market_id: str) -> List[Farmer]:
        rows = (
            self.db.query(FarmerRecord)
            .filter(FarmerRecord.market_id == market_id)
            .order_by(FarmerRecord.name)
            .all()
        )
        return [to_farmer(row) for row in rows]

    def get_farmer(self, market_id: str, farmer_id: str) -> Farmer:
        row = self.db.get(FarmerRecord, farmer_id)
        if row is None or row.market_id != market_id:
            raise RecordNotFoundError(f"Farmer {farmer_id} not found in market {market_id}")
        return to_farmer(row)

    def farmers_by_id(self, market_id: str) -> Dict[str, Farmer]:
        return {f.id: f for f in self.list_farmers(market_id)}

class LoadRepository:
    """Repository for crop loads"""

    def __init__(self, db: Session):
        self.db = db

    def add_load(self, load: CropLoad) -> None:
        self.db.add(
            CropLoadRecord(
                id=load.id,
                farmer_id=load.farmer_id,
                market_id=load.market_id,
                crop=load.crop,
                quantity=load.quantity,
                grade=load.grade.value,
                arrival_date=load.arrival_date,
                status=load.status.value,
            )
        )
        self.db.flush()

    def list_loads(self, market_id: str, status: Optional[LoadStatus] = None) -> List[CropLoad]:
        query = self.db.query(CropLoadRecord).filter(CropLoadRecord.market_id == market_id)
        if status is not None:
            query = query.filter(CropLoadRecord.status == status.value)
        rows = query.order_by(CropLoadRecord.arrival_date.desc(), CropLoadRecord.id).all()
        return [to_load(row) for row in rows]

    def get_load(self, market_id: str, load_id: str) -> CropLoad:
        row = self.db.get(CropLoadRecord, load_id)
        if row is None or row.market_id != market_id:
            raise RecordNotFoundError(f"Load {load_id} not found in market {market_id}")
        return to_load(row)

    def loads_by_id(self, market_id: str) -> Dict[str, CropLoad]:
        return {l.id: l for l in self.list_loads(market_id)}

class SaleRepository:
    """Repository for sales; the only writer of load status"""

    def __init__(self, db: Session):
        self.db = db

    def record_settlement(self, sale: Sale, notice: Optional[SmsLog] = None) -> None:
        """
        Write a settlement as one unit: load PENDING -> SOLD, the Sale, and its notice.

        The status change is a conditional update, so a load that was sold by
        a concurrent request (or already SOLD) matches no row and nothing is
        written. Caller commits or rolls back.

        Raises:
            InvalidStateError: load is not PENDING or already has a sale
        """
        updated = (
            self.db.query(CropLoadRecord)
            .filter(
                CropLoadRecord.id == sale.load_id,
                CropLoadRecord.market_id == sale.market_id,
                CropLoadRecord.status == LoadStatus.PENDING.value,
            )
            .update({CropLoadRecord.status: LoadStatus.SOLD.value})
        )
        if updated != 1:
            raise InvalidStateError(f"Load {sale.load_id} is not pending in market {sale.market_id}")

        self.db.add(sale_record(sale))
        if notice is not None:
            self.db.add(sms_log_record(notice))

        try:
            self.db.flush()
        except IntegrityError as e:
            raise InvalidStateError(f"Load {sale.load_id} already has a sale") from e

    def list_sales(self, market_id: str) -> List[Sale]:
        rows = (
            self.db.query(SaleRecord)
            .filter(SaleRecord.market_id == market_id)
            .order_by(SaleRecord.timestamp, SaleRecord.id)
            .all()
        )
        return [to_sale(row) for row in rows]


class SmsLogRepository:
    """Repository for the append-only notification log"""

    def __init__(self, db: Session):
        self.db = db

    def add_logs(self, logs: Iterable[SmsLog]) -> None:
        self.db.add_all([sms_log_record(log) for log in logs])
        self.db.flush()

    def list_logs(self, market_id: str, limit: int = 100) -> List[SmsLog]:
        """Most recent first"""
        rows = (
            self.db.query(SmsLogRecord)
            .filter(SmsLogRecord.market_id == market_id)
            .order_by(SmsLogRecord.timestamp.desc(), SmsLogRecord.id)
            .limit(limit)
            .all()
        )
        return [to_sms_log(row) for row in rows]
