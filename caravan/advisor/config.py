"""Advisor configuration dataclass."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

API_KEY_VARS = ("GEMINI_API_KEY", "API_KEY")


@dataclass(frozen=True)
class AdvisorConfig:
    """Immutable configuration for the Oracle.

    Attributes:
        model: Model name sent to the text-generation service.
        base_url: Service root URL.
        api_key: Credential; None means the Oracle answers with its
            missing-credential fallback.
        timeout: Seconds before an HTTP request is abandoned.
        thread_pool_size: Workers used for asynchronous requests.
    """

    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com"
    api_key: str | None = None
    timeout: float = 10.0
    thread_pool_size: int = 1

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")
        if self.thread_pool_size < 1:
            raise ValueError(
                f"thread_pool_size must be >= 1, got {self.thread_pool_size}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> AdvisorConfig:
        """Read the API key from ``GEMINI_API_KEY`` (or ``API_KEY``)."""
        env = os.environ if environ is None else environ
        api_key = None
        for name in API_KEY_VARS:
            if env.get(name):
                api_key = env[name]
                break
        return cls(api_key=api_key, **overrides)  # type: ignore[arg-type]
