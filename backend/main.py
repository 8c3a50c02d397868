"""FastAPI entry point exposing the Songsmith REST API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .config import get_settings
from .schemas import ErrorResponse, GenerateMusicRequest, GenerateMusicResponse
from .service import MusicGenerationService, get_music_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the service up front so a missing API key stops the process at startup.
    factory = app.dependency_overrides.get(get_music_service, get_music_service)
    factory()
    logger.info("Songsmith backend ready")
    yield


app = FastAPI(title="Songsmith Backend", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", summary="Health Check Endpoint")
async def healthcheck():
    settings = get_settings()
    return {
        "status": "ok",
        "musicApi": settings.music_api_base_url,
        "mode": settings.music_mode,
    }


@app.post(
    "/api/generate-music",
    response_model=GenerateMusicResponse,
    response_model_exclude_none=True,
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
        status.HTTP_504_GATEWAY_TIMEOUT: {"model": ErrorResponse},
    },
    summary="Generate a song from a text prompt",
)
async def generate_music(
    payload: GenerateMusicRequest,
    service: MusicGenerationService = Depends(get_music_service),
):
    # Blocks for the whole polling duration; the client waits for one full response.
    result = await run_in_threadpool(service.generate, payload.prompt)

    if result.ok:
        return GenerateMusicResponse(music=result.music)

    status_code = (
        status.HTTP_504_GATEWAY_TIMEOUT
        if result.status == "timeout"
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=result.error or "").model_dump(),
    )


__all__ = ["app"]


if __name__ == "__main__":  # pragma: no cover - convenience entry point
    import uvicorn

    logging.basicConfig(level=get_settings().log_level)
    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000, reload=True)
