"""photogen - FastAPI Application.

This module exposes the :class:`~photogen.core.service.ReplicateService`
operations as JSON endpoints and provides the ``main()`` CLI function that
launches the uvicorn server.

Architecture
------------
The routes are a pass-through: every service operation already returns a
tagged result (``status``/``error`` or ``success``), so each route answers
200 with that result. Only malformed request bodies are rejected, with
FastAPI's standard 422 validation response.

The service is created once in the application lifespan and stored on
``app.state.service``. A missing Replicate API token therefore stops the
server at startup instead of failing individual requests.

Endpoints
---------
========  ===============================  =================================
Method    Path                             Purpose
========  ===============================  =================================
GET       ``/api/health``                  Liveness and version
GET       ``/api/trainers``                Supported trainer catalogue
POST      ``/api/models``                  Create a destination model
POST      ``/api/trainings``               Start a training job
GET       ``/api/trainings/{id}``          Training job status
POST      ``/api/trainings/{id}/cancel``   Cancel a training job
POST      ``/api/generate/trained``        Generate with a trained model
POST      ``/api/generate/lora``           Generate with LoRA weights
========  ===============================  =================================

Usage
-----
CLI (installed entry point)::

    photogen

Direct invocation::

    python -m photogen.api.main
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool

from photogen import __version__
from photogen.api.models import CancelTrainingResponse, CreateModelRequest, HealthResponse
from photogen.core.config import config
from photogen.core.models import (
    DestinationModelResult,
    GenerationResult,
    LoRAGenerationRequest,
    TrainedModelGenerationRequest,
    TrainerInfo,
    TrainingJob,
    TrainingRequest,
)
from photogen.core.service import ReplicateService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared :class:`ReplicateService` on startup.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.service = ReplicateService(config=config)
    logger.info("ReplicateService initialised.")

    yield

    logger.info("Shutting down.")


app = FastAPI(
    title="photogen",
    description="Fine-tune personalized image models and generate images via Replicate.",
    version=__version__,
    lifespan=lifespan,
)


def _service(request: Request) -> ReplicateService:
    return request.app.state.service


# ---------------------------------------------------------------------------
# Routes.
#
# Service calls block on the provider (generation waits for completion), so
# they run in the threadpool to keep the event loop free.
# ---------------------------------------------------------------------------


@app.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(version=__version__)


@app.get("/api/trainers", response_model=list[TrainerInfo])
async def list_trainers(request: Request) -> list[TrainerInfo]:
    """Return the supported trainer catalogue."""
    return _service(request).get_available_trainers()


@app.post("/api/models", response_model=DestinationModelResult)
async def create_model(req: CreateModelRequest, request: Request) -> DestinationModelResult:
    """Create a private destination model under the configured owner."""
    return await run_in_threadpool(
        _service(request).create_destination_model, req.model_name, req.description
    )


@app.post("/api/trainings", response_model=TrainingJob)
async def start_training(req: TrainingRequest, request: Request) -> TrainingJob:
    """Start a LoRA training job.

    Args:
        req: Validated :class:`TrainingRequest` payload.

    Returns:
        The submitted job, or a ``failed`` job describing why submission failed.
    """
    return await run_in_threadpool(_service(request).start_training, req)


@app.get("/api/trainings/{training_id}", response_model=TrainingJob)
async def get_training(training_id: str, request: Request) -> TrainingJob:
    """Return the current provider state of a training job."""
    return await run_in_threadpool(_service(request).get_training_status, training_id)


@app.post("/api/trainings/{training_id}/cancel", response_model=CancelTrainingResponse)
async def cancel_training(training_id: str, request: Request) -> CancelTrainingResponse:
    """Request cancellation; ``success`` is False when the provider refused."""
    success = await run_in_threadpool(_service(request).cancel_training, training_id)
    return CancelTrainingResponse(id=training_id, success=success)


@app.post("/api/generate/trained", response_model=GenerationResult)
async def generate_trained(req: TrainedModelGenerationRequest, request: Request) -> GenerationResult:
    """Generate an image with a trained ``owner/model:version`` reference."""
    return await run_in_threadpool(_service(request).generate_with_trained_model, req)


@app.post("/api/generate/lora", response_model=GenerationResult)
async def generate_lora(req: LoRAGenerationRequest, request: Request) -> GenerationResult:
    """Generate an image with the LoRA base model and external weights."""
    return await run_in_threadpool(_service(request).generate_with_lora, req)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~photogen.core.config.config`
    (``PHOTOGEN_SERVER_HOST``, ``PHOTOGEN_SERVER_PORT``, ``PHOTOGEN_LOG_LEVEL``).
    Defaults to ``0.0.0.0:8000``.
    """
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "photogen.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
