"""Domain logic for turning a prompt into a finished remote music job."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Literal, Optional

from .aiservices.httpmusicgenerationclient import HTTPMusicGenerationClient
from .aiservices.musicgenerationclient import MusicApiError, MusicGenerationClient
from .config import Settings, get_settings
from .schemas import MusicJob

logger = logging.getLogger(__name__)

STATE_FINISHED = "finished"
STATE_FAILED = "failed"
TERMINAL_STATES = frozenset({STATE_FINISHED, STATE_FAILED})

FAILURE_MESSAGE = "AI song generation failed"
TIMEOUT_MESSAGE = "AI song generation timed out"


@dataclass(frozen=True)
class GenerationResult:
    status: Literal["success", "failed", "timeout", "error"]
    music: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, music: Optional[str]) -> "GenerationResult":
        return cls(status="success", music=music)

    @classmethod
    def failure(cls, status: Literal["failed", "timeout", "error"], message: str) -> "GenerationResult":
        return cls(status=status, error=message)


class MusicGenerationService:
    """High-level orchestrator for one prompt-to-song round trip."""

    def __init__(
        self,
        settings: Settings | None = None,
        client: MusicGenerationClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client or HTTPMusicGenerationClient(self.settings)
        self._sleep = sleep
        self._clock = clock

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def generate(self, prompt: str) -> GenerationResult:
        """Submit ``prompt`` and block until the remote job is terminal.

        Remote errors never propagate: they are logged and reported as a
        generic failure result.
        """
        try:
            return self._generate(prompt)
        except Exception:
            logger.exception("Music generation failed for prompt of %s chars", len(prompt))
            return GenerationResult.failure("error", FAILURE_MESSAGE)

    def _generate(self, prompt: str) -> GenerationResult:
        receipt = self._client.submit(
            prompt,
            duration=self.settings.music_duration,
            mode=self.settings.music_mode,
        )
        logger.info("Submitted music job: %s", receipt)
        if receipt.error:
            # The job list is still consulted; a rejected submission surfaces
            # as whatever job the remote service reports last.
            logger.warning("Music service reported a submission error: %s", receipt.error)

        job_id = receipt.job_id
        job = self._fetch_job(job_id)
        logger.debug("Initial job snapshot: %s", job)

        started = self._clock()
        interval = self.settings.poll_interval_seconds
        budget = self.settings.max_wait_seconds

        while job.state not in TERMINAL_STATES:
            if budget is not None and (self._clock() - started) + interval > budget:
                logger.warning("Job %s still %s after %ss, giving up", job.id, job.state, budget)
                return GenerationResult.failure("timeout", TIMEOUT_MESSAGE)

            self._sleep(interval)
            job = self._fetch_job(job_id)
            logger.debug("Polled job snapshot: %s", job)

        if job.state == STATE_FAILED:
            logger.warning("Music job %s failed", job.id)
            return GenerationResult.failure("failed", FAILURE_MESSAGE)

        logger.info("Music job %s finished: %s", job.id, job.media_uri)
        return GenerationResult.success(job.media_uri)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _fetch_job(self, job_id: Optional[str]) -> MusicJob:
        if job_id is not None:
            return self._client.get_job(job_id)

        # Without an id the most recent job is assumed to be last in the list.
        jobs = self._client.list_jobs()
        if not jobs:
            raise MusicApiError("Music service returned an empty job list")
        return jobs[-1]


@lru_cache
def get_music_service() -> MusicGenerationService:
    return MusicGenerationService(get_settings())
