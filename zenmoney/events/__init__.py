"""Event logging package."""

from zenmoney.events.logger import EventLogger, configure_log_level

__all__ = ["EventLogger", "configure_log_level"]
