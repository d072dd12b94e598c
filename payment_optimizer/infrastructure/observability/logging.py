"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from payment_optimizer.config import settings


class CustomJsonFormatter(JsonFormatter):
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


def log_allocation(
    request_id: str,
    strategy: str,
    account_count: int,
    total_payment_cents: int,
    unallocated_cents: int,
    score_change_points: float,
    duration_ms: float,
) -> None:
    """Log structured allocation outcome for analysis"""
    logging.info(
        "Allocation completed",
        extra={
            "request_id": request_id,
            "step": "allocation_complete",
            "strategy": strategy,
            "account_count": account_count,
            "total_payment_cents": total_payment_cents,
            "unallocated_cents": unallocated_cents,
            "score_change_points": score_change_points,
            "duration_ms": duration_ms,
        },
    )


def log_override(
    request_id: str,
    account_id: str,
    requested_cents: int,
    applied_cents: int,
    unallocated_cents: int,
) -> None:
    """Log a manual override and whether it was clamped"""
    logging.info(
        "Override applied",
        extra={
            "request_id": request_id,
            "step": "override_applied",
            "account_id": account_id,
            "requested_cents": requested_cents,
            "applied_cents": applied_cents,
            "clamped": requested_cents != applied_cents,
            "unallocated_cents": unallocated_cents,
        },
    )
