"""Oracle - asks the advisor service about a session, never failing the caller."""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from caravan.advisor.client import AdvisorClient, GeminiClient
from caravan.advisor.config import AdvisorConfig
from caravan.advisor.summary import SYSTEM_PROMPT, user_message
from caravan.model import Session

logger = logging.getLogger(__name__)

GREETING = "Ask the High Priest for guidance..."
MISSING_KEY_MESSAGE = "The spirits are silent... (Missing API_KEY)"
ERROR_MESSAGE = "The gods are displeased with the connection."
EMPTY_MESSAGE = "The stars are cloudy today."


class Oracle:
    """Advice on demand, with its own loading and message state.

    ``consult`` blocks; ``request`` runs the same call on a worker thread and
    ``poll`` collects the answer. Every failure becomes one of the fixed
    fallback messages.
    """

    def __init__(
        self,
        client: AdvisorClient | None,
        config: AdvisorConfig | None = None,
    ) -> None:
        self.config: AdvisorConfig = config if config is not None else AdvisorConfig()
        self._client = client
        self._executor: ThreadPoolExecutor | None = None
        self._pending: Future[str] | None = None
        self._message = GREETING

    @classmethod
    def from_config(cls, config: AdvisorConfig) -> Oracle:
        """Build an Oracle backed by Gemini, or a silent one without an API key."""
        client = None
        if config.api_key:
            client = GeminiClient(
                config.api_key,
                model=config.model,
                base_url=config.base_url,
                timeout=config.timeout,
            )
        return cls(client, config)

    @property
    def client(self) -> AdvisorClient | None:
        return self._client

    @property
    def loading(self) -> bool:
        return self._pending is not None and not self._pending.done()

    @property
    def message(self) -> str:
        return self._message

    def consult(self, session: Session) -> str:
        """Ask for advice about *session* and wait for the answer."""
        return self._ask(user_message(session))

    def _ask(self, message: str) -> str:
        if self._client is None:
            return MISSING_KEY_MESSAGE
        try:
            text = self._client.query(SYSTEM_PROMPT, message)
        except Exception as exc:
            logger.warning("oracle query failed: %s: %s", type(exc).__name__, exc)
            return ERROR_MESSAGE
        text = (text or "").strip()
        return text or EMPTY_MESSAGE

    def request(self, session: Session) -> bool:
        """Start an asynchronous consultation. False if one is already running."""
        if self.loading:
            return False
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.config.thread_pool_size,
                thread_name_prefix="caravan-oracle",
            )
        # The summary is built here so the worker never touches the session.
        self._pending = self._executor.submit(self._ask, user_message(session))
        return True

    def poll(self) -> str | None:
        """Return the finished answer once, or None while nothing new is ready."""
        pending = self._pending
        if pending is None or not pending.done():
            return None
        self._pending = None
        self._message = pending.result()
        return self._message

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        self._pending = None
