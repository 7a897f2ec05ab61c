"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from uzhavar_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_settlement(
    request_id: str,
    market_id: str,
    sale_id: str,
    load_id: str,
    net_amount: Decimal,
    duration_ms: float,
) -> None:
    """Log structured settlement outcome"""
    logging.info(
        "Sale recorded",
        extra={
            "request_id": request_id,
            "market_id": market_id,
            "step": "settlement_complete",
            "sale_id": sale_id,
            "load_id": load_id,
            "net_amount": str(net_amount),
            "duration_ms": duration_ms,
        },
    )


def log_daily_summaries(request_id: str, market_id: str, day: str, farmers_notified: int) -> None:
    logging.info(
        "Daily summaries generated",
        extra={
            "request_id": request_id,
            "market_id": market_id,
            "step": "daily_summary",
            "day": day,
            "farmers_notified": farmers_notified,
        },
    )
