# aiservices/httpmusicgenerationclient.py
from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..schemas import MusicJob
from .musicgenerationclient import MusicApiError, MusicGenerationClient, SubmissionReceipt

logger = logging.getLogger(__name__)


class HTTPMusicGenerationClient(MusicGenerationClient):
    """
    Talks to a JSON music generation API:
      - POST {base}/jobs          create a job
      - GET  {base}/jobs          list jobs, oldest first
      - GET  {base}/jobs/{id}     fetch one job
    Every response body is wrapped as {"data": ..., "error": ...}.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or get_settings()

        # Fail before any request is made when the credential is missing
        api_key = self.settings.require_api_key()

        self._base_url = self.settings.music_api_base_url.rstrip("/")
        self._timeout = self.settings.request_timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            }
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    # --- Jobs ----------------------------------------------------------------

    def submit(self, prompt: str, duration: int, mode: str) -> SubmissionReceipt:
        payload = {"prompt": prompt, "duration": duration, "mode": mode}
        body = self._request("POST", "/jobs", json=payload)

        data = body.get("data")
        job_id = None
        if isinstance(data, dict) and data.get("id") is not None:
            job_id = str(data["id"])

        return SubmissionReceipt(job_id=job_id, error=self._error_text(body), raw=data)

    def list_jobs(self) -> List[MusicJob]:
        body = self._request("GET", "/jobs")
        self._raise_for_envelope(body)

        data = body.get("data") or []
        if not isinstance(data, list):
            raise MusicApiError(f"Expected a list of jobs, got {type(data).__name__}")
        return [self._parse_job(item) for item in data]

    def get_job(self, job_id: str) -> MusicJob:
        body = self._request("GET", f"/jobs/{job_id}")
        self._raise_for_envelope(body)
        return self._parse_job(body.get("data"))

    # --- Internals ------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        url = f"{self._base_url}{path}"
        response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        response.raise_for_status()

        body = response.json()
        if not isinstance(body, dict):
            raise MusicApiError(f"Unexpected response body from {method} {path}: {body!r}")
        return body

    @staticmethod
    def _error_text(body: dict) -> Optional[str]:
        error = body.get("error")
        if not error:
            return None
        if isinstance(error, dict):
            return str(error.get("message") or error)
        return str(error)

    def _raise_for_envelope(self, body: dict) -> None:
        error = self._error_text(body)
        if error is not None:
            raise MusicApiError(error)

    @staticmethod
    def _parse_job(item: Any) -> MusicJob:
        try:
            return MusicJob.model_validate(item)
        except ValidationError as exc:
            raise MusicApiError(f"Malformed job in response: {exc}") from exc
