"""Advisor - natural-language hints about a running session."""
from __future__ import annotations

from caravan.advisor.client import AdvisorClient, AdvisorError, GeminiClient, MockClient
from caravan.advisor.config import AdvisorConfig
from caravan.advisor.oracle import (
    EMPTY_MESSAGE,
    ERROR_MESSAGE,
    GREETING,
    MISSING_KEY_MESSAGE,
    Oracle,
)
from caravan.advisor.summary import SYSTEM_PROMPT, summarize, user_message

__all__ = [
    "AdvisorClient",
    "AdvisorConfig",
    "AdvisorError",
    "EMPTY_MESSAGE",
    "ERROR_MESSAGE",
    "GREETING",
    "GeminiClient",
    "MISSING_KEY_MESSAGE",
    "MockClient",
    "Oracle",
    "SYSTEM_PROMPT",
    "summarize",
    "user_message",
]
