"""Centralized logging configuration."""
import logging
import sys
from pathlib import Path
from typing import Optional, Union
import json
from datetime import datetime, timezone


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_type: str = "json",
    enabled: bool = True
) -> None:
    """Configure application logging."""

    if not enabled:
        # Silence everything, including library loggers
        logging.disable(logging.CRITICAL)
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # json for deployments, text for local runs and tests
    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    handlers = [console_handler]

    # File handler if specified
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        handlers=handlers,
        force=True  # Override existing configuration
    )


class JsonFormatter(logging.Formatter):
    """Format logs as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Set by get_logger(..., correlation_id=...) for one refresh cycle
        if hasattr(record, "correlation_id"):
            log_data["correlation_id"] = record.correlation_id

        return json.dumps(log_data, ensure_ascii=False)  # non-ASCII kept as is


def get_logger(
    name: str, correlation_id: Optional[str] = None
) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Get a logger, optionally bound to a correlation ID."""
    logger = logging.getLogger(name)

    if correlation_id:
        return logging.LoggerAdapter(logger, {"correlation_id": correlation_id})

    return logger
