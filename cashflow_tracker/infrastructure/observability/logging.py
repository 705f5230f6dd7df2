"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from cashflow_tracker.config import settings


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


def log_forecast(
    request_id: str,
    user_id: str,
    horizon_days: int,
    shortfall_date: Optional[date],
    salary_events: int,
    duration_ms: float,
) -> None:
    """Log structured forecast outcome for analysis"""
    logging.info(
        "Forecast computed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "forecast_complete",
            "outcome": "shortfall" if shortfall_date else "healthy",
            "shortfall_date": shortfall_date.isoformat() if shortfall_date else None,
            "horizon_days": horizon_days,
            "salary_events": salary_events,
            "duration_ms": duration_ms,
        },
    )
