"""
Logging setup for the employee API.
JSON lines in production, plain text everywhere else.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Optional

from employee_api.core.config import Settings

_handler: Optional[logging.Handler] = None


class JSONFormatter(logging.Formatter):
    def __init__(self, service_name: str = "employee-api", environment: str = "production"):
        super().__init__()
        self.service_name = service_name
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "environment": self.environment,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, default=str)


def setup_logging(settings: Settings) -> None:
    """Install one stdout handler on the root logger.

    Calling it again (one call per app instance) swaps the handler instead of
    stacking a second one.
    """
    global _handler

    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if _handler is not None:
        root_logger.removeHandler(_handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if settings.is_production:
        handler.setFormatter(JSONFormatter(environment=settings.app_env))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"))

    root_logger.addHandler(handler)
    _handler = handler

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
