"""Advisor client protocol, mock client and the Gemini REST client."""
from __future__ import annotations

import json
import random as _random_mod
import time
import urllib.error
import urllib.request
from typing import Callable, Protocol, runtime_checkable

from caravan.types import CaravanError


class AdvisorError(CaravanError):
    """Exception raised by advisor client operations."""


@runtime_checkable
class AdvisorClient(Protocol):
    """Protocol for text-generation clients.

    Implementations make blocking calls (the Oracle runs them on a worker
    thread). Any exception may be raised on failure.
    """

    def query(self, system_prompt: str, user_message: str) -> str:
        """Send a prompt and return the response text."""
        ...


class MockClient:
    """Deterministic client for testing.

    Args:
        responses: A fixed response string, OR a callable (str, str) -> str.
        latency: Simulated delay in seconds before returning.
        error_rate: Probability of raising (0.0--1.0).
        error_exception: Exception raised on simulated error. Defaults to
            AdvisorError("mock error").
    """

    def __init__(
        self,
        responses: str | Callable[[str, str], str],
        latency: float = 0.0,
        error_rate: float = 0.0,
        error_exception: BaseException | None = None,
    ) -> None:
        self._responses = responses
        self._latency = latency
        self._error_rate = error_rate
        self._error_exception = (
            error_exception if error_exception is not None else AdvisorError("mock error")
        )
        self._rng = _random_mod.Random()
        self.calls: list[tuple[str, str]] = []

    def query(self, system_prompt: str, user_message: str) -> str:
        self.calls.append((system_prompt, user_message))
        if self._error_rate > 0.0 and self._rng.random() < self._error_rate:
            raise self._error_exception

        if self._latency > 0.0:
            time.sleep(self._latency)

        if callable(self._responses):
            return self._responses(system_prompt, user_message)
        return self._responses


class GeminiClient:
    """Client for the Gemini ``generateContent`` REST endpoint.

    Uses POST /v1beta/models/<model>:generateContent with a system
    instruction and a single user turn.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: float = 10.0,
    ) -> None:
        if not api_key:
            raise AdvisorError("api_key must be non-empty")
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def url(self) -> str:
        return f"{self._base_url}/v1beta/models/{self._model}:generateContent"

    def query(self, system_prompt: str, user_message: str) -> str:
        """Send a generateContent request and return the concatenated text parts."""
        payload = json.dumps({
            "system_instruction": {"parts": [{"text": system_prompt}]},
            "contents": [
                {"role": "user", "parts": [{"text": user_message}]},
            ],
        }).encode("utf-8")

        req = urllib.request.Request(
            self.url,
            data=payload,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self._api_key,
            },
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                body = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as exc:
            raise AdvisorError(f"HTTP {exc.code} from advisor service") from exc
        except urllib.error.URLError as exc:
            raise AdvisorError(f"advisor service unreachable: {exc.reason}") from exc

        try:
            parts = body["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AdvisorError("unexpected response shape") from exc
        return "".join(part.get("text", "") for part in parts)
