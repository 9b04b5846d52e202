"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from payday_forecast.config import settings


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
    horizon_days: int,
    lowest_balance: str,
    event_count: int,
    duration_ms: float,
) -> None:
    """Log structured forecast outcome"""
    logging.info(
        "Forecast completed",
        extra={
            "request_id": request_id,
            "step": "forecast_complete",
            "horizon_days": horizon_days,
            "lowest_balance": lowest_balance,
            "event_count": event_count,
            "duration_ms": duration_ms,
        },
    )


def log_health_score(request_id: str, grade: str, ratio_defined: bool, duration_ms: float) -> None:
    """Log structured health grade for analysis"""
    logging.info(
        "Health score completed",
        extra={
            "request_id": request_id,
            "step": "health_score_complete",
            "grade": grade,
            "ratio_defined": ratio_defined,
            "duration_ms": duration_ms,
        },
    )


def log_action(request_id: str, action: str, outcome: str, duration_ms: float) -> None:
    """Log structured reducer outcome"""
    logging.info(
        "Action applied",
        extra={
            "request_id": request_id,
            "step": "action_complete",
            "action": action,
            "outcome": outcome,
            "duration_ms": duration_ms,
        },
    )
