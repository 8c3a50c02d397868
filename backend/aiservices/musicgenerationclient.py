from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..schemas import MusicJob

# Abstract interface for music generation backends so the HTTP client and
# test doubles can be used interchangeably by the service.


class MusicApiError(RuntimeError):
    """Raised when the music service reports an error in its response envelope."""


@dataclass
class SubmissionReceipt:
    """Whatever the remote service returned for a job submission."""

    job_id: Optional[str] = None
    error: Optional[str] = None
    raw: Any = field(default=None, repr=False)


class MusicGenerationClient(ABC):
    """Abstract interface for a music generation client.

    Implementations must provide synchronous methods used by the
    rest of the application.
    """

    @abstractmethod
    def submit(self, prompt: str, duration: int, mode: str) -> SubmissionReceipt:
        """Create a generation job."""

    @abstractmethod
    def list_jobs(self) -> List[MusicJob]:
        """Return all known jobs, oldest first."""

    @abstractmethod
    def get_job(self, job_id: str) -> MusicJob:
        """Return a single job by its identifier."""
