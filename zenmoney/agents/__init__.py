"""AI Agents package."""

from zenmoney.agents.advisor import (
    ACCESS_DENIED_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    INVALID_REQUEST_MESSAGE,
    MISSING_KEY_MESSAGE,
    AdvisorAgent,
    build_system_instruction,
    describe_error,
)

__all__ = [
    "ACCESS_DENIED_MESSAGE",
    "EMPTY_RESPONSE_MESSAGE",
    "INVALID_REQUEST_MESSAGE",
    "MISSING_KEY_MESSAGE",
    "AdvisorAgent",
    "build_system_instruction",
    "describe_error",
]
