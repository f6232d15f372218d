"""
Structured Logging Configuration Module

Calculator events are logged as one JSON object per line. Fields attached
through log_action (action, resource, correlation_id, details) become
top-level keys of that object.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Record attributes copied into each JSON entry when present
STRUCTURED_FIELDS = ("action", "resource", "correlation_id", "details")

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JSONFormatter(logging.Formatter):
    """Render a record and its structured fields as a single JSON line"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage()
        }

        for name in STRUCTURED_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        # Decimal and date values in details serialize as strings
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", logger_name: str = "repayment_core",
                  log_format: str = "json", log_file: Optional[str] = None) -> logging.Logger:
    """
    Setup structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Name of the logger
        log_format: "json" for structured output, "text" for plain lines
        log_file: Write to this file instead of stderr

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Reconfiguring replaces the handler rather than stacking a second one
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(TEXT_FORMAT) if log_format == "text" else JSONFormatter()
    )

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False

    return logger


def get_logger(name: str = "repayment_core") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               correlation_id: Optional[str] = None, details: Optional[dict] = None):
    """
    Log a calculator action with structured fields attached to the record

    Args:
        logger: Logger instance
        level: Log level name (info, warning, ...)
        message: Log message
        action: Calculation performed, e.g. "quote"
        resource: Component handling it, e.g. "calculator"
        correlation_id: Request identifier for tracing
        details: Inputs and results worth keeping with the entry
    """
    fields = {
        "action": action,
        "resource": resource,
        "correlation_id": correlation_id,
        "details": details
    }
    logger.log(
        getattr(logging, level.upper()), message,
        extra={name: value for name, value in fields.items() if value is not None}
    )
