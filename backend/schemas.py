"""Pydantic models shared by the FastAPI endpoints and the music API client."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MusicJob(BaseModel):
    """Snapshot of a job as reported by the remote music service."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = Field(default=None, description="Remote job identifier")
    state: str = Field(..., description="Lifecycle state, e.g. queued, processing, finished, failed")
    media_uri: Optional[str] = Field(default=None, description="URI of the generated audio")


class GenerateMusicRequest(BaseModel):
    prompt: str = Field(..., description="Text prompt describing the song")


class GenerateMusicResponse(BaseModel):
    music: Optional[str] = Field(default=None, description="Media URI of the generated song")


class ErrorResponse(BaseModel):
    error: str
