"""Pydantic request and response models specific to the HTTP API.

Training and generation endpoints accept the core request models from
:mod:`photogen.core.models` directly; the models here cover the remaining
payloads.

Models
------
CreateModelRequest
    Payload for ``POST /api/models``.
CancelTrainingResponse
    Response of ``POST /api/trainings/{id}/cancel``.
HealthResponse
    Response of ``GET /api/health``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateModelRequest(BaseModel):
    """Request body for the ``POST /api/models`` endpoint.

    Attributes:
        model_name: Human-readable name the destination model id derives from.
        description: Optional description shown on the provider.
    """

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = Field(
        ...,
        min_length=1,
        description="Human-readable model name.",
    )
    description: str | None = Field(
        default=None,
        description="Description shown on the provider.",
    )


class CancelTrainingResponse(BaseModel):
    """Response body for the ``POST /api/trainings/{id}/cancel`` endpoint."""

    id: str
    success: bool


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
