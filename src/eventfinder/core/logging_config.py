"""
Structured logging configuration with trace IDs
"""
import contextvars
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from eventfinder.core.config import settings

# Context variable to store trace ID across async calls
trace_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar('trace_id', default=None)

# Record attributes copied into the JSON payload when passed through `extra`
EXTRA_FIELDS = (
    'user_id', 'event_id', 'booking_id', 'tickets',
    'method', 'path', 'client_ip', 'status_code', 'duration_ms', 'error',
)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter with trace ID, service name and domain identifiers"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.utcnow().isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name

        trace_id = trace_id_var.get()
        if trace_id:
            log_record['trace_id'] = trace_id

        log_record['service'] = settings.APP_NAME

        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_record[field] = getattr(record, field)


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> logging.Logger:
    """Configure root logging (JSON by default, readable text when disabled)"""
    level = level or settings.LOG_LEVEL
    json_format = settings.LOG_JSON if json_format is None else json_format

    if json_format:
        formatter: logging.Formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
    else:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Reduce noise from libraries
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    return root_logger


def get_trace_id() -> Optional[str]:
    """Get current trace ID"""
    return trace_id_var.get()


def set_trace_id(trace_id: str) -> None:
    """Set trace ID for current context"""
    trace_id_var.set(trace_id)


def generate_trace_id() -> str:
    """Generate a new trace ID"""
    return str(uuid.uuid4())
