"""
logging_config.py - JSON Logging Configuration

PURPOSE:
    Structured JSON logging shared by the POS client and the POS service, with
    timezone-aware timestamps and per-process context injection.

JSON LOG FIELDS:
    - timestamp: ISO 8601 with the configured timezone (e.g., "2026-10-18T12:01:44.512093+00:00")
    - level: Log level (INFO, ERROR, WARNING, DEBUG, CRITICAL)
    - logger: Module name where the record originated (e.g., "pos_client.cart")
    - message: The rendered log message
    - service_name: Name of the process ("pos-client", "pos-service")
    - correlation_id: Optional id linking a submission attempt to its outcome
    - event_type: Optional queue event type being handled ("product.selected", ...)
    - exception: Full stack trace when exc_info is attached

USAGE:
    from shared.logging_config import setup_logging
    setup_logging("pos-client", level="INFO")

    logger = logging.getLogger(__name__)
    logger.info("Order submitted", extra={"correlation_id": request.request_id})

EXAMPLE JSON OUTPUT:
    {
        "timestamp": "2026-10-18T12:01:44.512093+00:00",
        "level": "INFO",
        "logger": "pos_client.submission",
        "message": "Order ORD-4F1C2A9B7D30 accepted",
        "service_name": "pos-client",
        "correlation_id": "4b3c6f0e-5d2a-4c1e-9a63-a606fbef4a4b"
    }
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional, TextIO
from zoneinfo import ZoneInfo

# Record attributes copied into the JSON payload when present
CONTEXT_FIELDS = ("service_name", "correlation_id", "event_type")


class JsonFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per log record."""

    def __init__(self, tz_name: str = "UTC"):
        super().__init__()
        self.tz = ZoneInfo(tz_name)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, self.tz).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ServiceFilter(logging.Filter):
    """Stamps every record with the name of the running process."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


def setup_logging(
    service_name: str,
    level: str = "INFO",
    tz_name: str = "UTC",
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Setup JSON logging for a process and return the installed handler."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter(tz_name))
    # Filter on the handler so records from child loggers are stamped too
    handler.addFilter(ServiceFilter(service_name))

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
