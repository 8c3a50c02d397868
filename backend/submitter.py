"""Client-side state for the prompt form: idle, loading, result."""

from __future__ import annotations

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:8000/api/generate-music"


class PromptSubmitter:
    """Sends the current prompt to the backend and keeps the form state.

    ``is_loading`` stays true for the entire round trip. A second
    :meth:`submit` during that window does nothing, which is what the
    disabled button in the UI reflects.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.endpoint = endpoint
        self.prompt = ""
        self.is_loading = False
        self.music: Optional[str] = None
        self._session = session or requests.Session()
        self._timeout = timeout

    def submit(self) -> None:
        """Start a request and wait for it; a no-op while one is in flight."""
        if self.start():
            self.send()

    def start(self) -> bool:
        """Enter the loading state. Returns False if a request is already in flight."""
        if self.is_loading:
            logger.debug("Ignoring submit while a request is in flight")
            return False
        self.is_loading = True
        return True

    def send(self) -> None:
        """Post the prompt started by :meth:`start` and leave the loading state."""
        try:
            response = self._session.post(
                self.endpoint,
                json={"prompt": self.prompt},
                timeout=self._timeout,
            )
            response.raise_for_status()
            body = response.json()
            if not isinstance(body, dict):
                raise ValueError(f"Unexpected response body: {body!r}")
            self.music = body.get("music")
        except (requests.RequestException, ValueError) as exc:
            logger.error("Song request failed: %s", exc)
        finally:
            self.is_loading = False
