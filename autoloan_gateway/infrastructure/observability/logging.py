"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable

from pythonjsonlogger import jsonlogger

from autoloan_gateway.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_evaluation(
    request_id: str,
    approved: bool,
    violation_codes: Iterable[str],
    offer_count: int,
    pd: float,
    duration_ms: float,
) -> None:
    """Log structured evaluation outcome for analysis"""
    logging.info(
        "Evaluation completed",
        extra={
            "request_id": request_id,
            "step": "evaluation_complete",
            "approval_outcome": "approved" if approved else "declined",
            "violation_codes": list(violation_codes),
            "offer_count": offer_count,
            "pd": pd,
            "duration_ms": duration_ms,
        },
    )
