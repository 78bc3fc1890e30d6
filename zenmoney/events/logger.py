"""
Event Logger

DESIGN DECISION: Every swallowed failure is logged.
Storage and advisor errors never reach the user as exceptions, so the
structured log is the only place they remain visible.

The event logger:
- Is synchronous; it only writes to the local log
- Gracefully handles failures (doesn't crash the app if logging fails)
"""

import logging
from typing import Optional

import structlog

from zenmoney.models.events import AppEvent, EventBuilder, EventSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_log_level(debug: bool = False) -> None:
    """Route stdlib logging (and so structlog) at INFO, or DEBUG in debug mode."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )


class EventLogger:
    """
    Central diagnostic logging service.

    Storage, flows and the advisor all report through one instance so
    the log reads as a single timeline.
    """

    def __init__(self, name: Optional[str] = None):
        self._logger = structlog.get_logger(name or "zenmoney")

    def log(self, event: AppEvent) -> bool:
        """
        Log an event at the level matching its severity.

        Returns False if the log write itself failed.
        """
        log_dict = event.to_log_dict()
        try:
            if event.severity == EventSeverity.ERROR:
                self._logger.error("app_event", **log_dict)
            elif event.severity == EventSeverity.WARNING:
                self._logger.warning("app_event", **log_dict)
            elif event.severity == EventSeverity.DEBUG:
                self._logger.debug("app_event", **log_dict)
            else:
                self._logger.info("app_event", **log_dict)
        except Exception:
            return False
        return True

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an unexpected error."""
        self.log(EventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
