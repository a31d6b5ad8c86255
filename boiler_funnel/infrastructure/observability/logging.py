"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger.json import JsonFormatter

from boiler_funnel.config import settings


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_submission(request_id: str, submission_id: str, step: str) -> None:
    """Log a submission being created or advanced through the funnel"""
    logging.info(
        "Submission updated",
        extra={
            "request_id": request_id,
            "submission_id": submission_id,
            "step": step,
        },
    )


def log_finance_quote(request_id: str, price: float, months: int, apr: float, monthly_payment: float) -> None:
    logging.info(
        "Finance quote computed",
        extra={
            "request_id": request_id,
            "step": "finance_quote",
            "price": price,
            "months": months,
            "apr": apr,
            "monthly_payment": round(monthly_payment, 2),
        },
    )


def log_booking(request_id: str, submission_id: str, install_date: str, surcharge: float) -> None:
    logging.info(
        "Install date confirmed",
        extra={
            "request_id": request_id,
            "submission_id": submission_id,
            "step": "booking_confirmed",
            "install_date": install_date,
            "surcharge": surcharge,
        },
    )


def log_payment(
    request_id: str,
    payment_intent_id: str,
    submission_id: str | None,
    status: str,
    amount: float,
) -> None:
    """Log a payment intent outcome; never includes the client secret"""
    logging.info(
        "Payment intent processed",
        extra={
            "request_id": request_id,
            "payment_intent_id": payment_intent_id,
            "submission_id": submission_id,
            "step": "payment",
            "payment_status": status,
            "amount": amount,
        },
    )
