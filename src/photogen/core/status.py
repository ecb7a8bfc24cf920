"""Translation of Replicate job payloads into photogen results.

Replicate returns loosely typed ``Training`` and ``Prediction`` objects whose
fields vary with job state. This module parses them into an explicit tagged
union discriminated by ``status`` and maps each variant onto
:class:`~photogen.core.models.TrainingJob` or
:class:`~photogen.core.models.GenerationResult`. No untyped provider field
leaves this module.

Provider Variants
-----------------
==================  =========================  ==========================
Provider status     TrainingJob.status          GenerationResult.status
==================  =========================  ==========================
starting            starting                    processing
processing          processing                  processing
succeeded           succeeded                   completed (failed if no output)
failed              failed                      failed
canceled            canceled                    failed
anything else       failed                      failed
==================  =========================  ==========================
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from photogen.core.models import (
    GeneratedImage,
    GenerationResult,
    GenerationStatus,
    ProviderUrls,
    TrainingJob,
    TrainingStatus,
)

logger = logging.getLogger(__name__)

# Fields read from SDK objects; anything else on the object is ignored.
_PAYLOAD_FIELDS = ("id", "status", "urls", "output", "error", "logs", "input")


class _ProviderPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    urls: ProviderUrls | None = None
    output: Any = None
    error: str | None = None
    logs: str | None = None
    input: Any = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return None if value is None else str(value)

    @field_validator("error", mode="before")
    @classmethod
    def _coerce_error(cls, value):
        if value is None or value == "":
            return None
        return value if isinstance(value, str) else str(value)

    @field_validator("logs", mode="before")
    @classmethod
    def _drop_non_text_logs(cls, value):
        return value if isinstance(value, str) else None


class InProgressResponse(_ProviderPayload):
    status: Literal["starting", "processing"]


class SucceededResponse(_ProviderPayload):
    status: Literal["succeeded"]


class FailedResponse(_ProviderPayload):
    status: Literal["failed"]


class CanceledResponse(_ProviderPayload):
    status: Literal["canceled"]


ProviderResponse = Annotated[
    Union[InProgressResponse, SucceededResponse, FailedResponse, CanceledResponse],
    Field(discriminator="status"),
]

_response_adapter: TypeAdapter[ProviderResponse] = TypeAdapter(ProviderResponse)


class UnexpectedResponseError(Exception):
    """Raised when a provider payload does not match any known variant."""

    def __init__(self, status: Any, payload: dict[str, Any]) -> None:
        super().__init__(f"Unexpected response status: {status or 'undefined'}")
        self.status = status
        self.payload = payload


def synthetic_id(prefix: str) -> str:
    """Build a placeholder id (``<prefix>_<epoch ms>``) for results without one."""
    return f"{prefix}_{int(time.time() * 1000)}"


def snapshot(raw: Any) -> dict[str, Any]:
    """Read the known payload fields from an SDK object or mapping."""
    if isinstance(raw, Mapping):
        return {key: raw.get(key) for key in _PAYLOAD_FIELDS}
    return {key: getattr(raw, key, None) for key in _PAYLOAD_FIELDS}


def parse_provider_response(raw: Any) -> ProviderResponse:
    """Parse a provider object into its tagged variant.

    Args:
        raw: ``replicate`` Training/Prediction object, or an equivalent mapping.

    Returns:
        One of the :data:`ProviderResponse` variants.

    Raises:
        UnexpectedResponseError: If the status is missing or unknown.
    """
    payload = snapshot(raw)
    try:
        return _response_adapter.validate_python(payload)
    except PydanticValidationError as e:
        raise UnexpectedResponseError(payload.get("status"), payload) from e


def to_training_job(raw: Any, destination_model_id: str | None = None) -> TrainingJob:
    """Map a provider training object onto a :class:`TrainingJob`.

    Unknown statuses become a ``failed`` job carrying the provider id.
    """
    try:
        response = parse_provider_response(raw)
    except UnexpectedResponseError as e:
        logger.error(f"Unexpected training payload: {e.payload}")
        job_id = e.payload.get("id")
        return TrainingJob(
            id=str(job_id) if job_id is not None else synthetic_id("unknown"),
            status=TrainingStatus.FAILED,
            error=f"Unexpected training status: {e.status or 'undefined'}",
            destination_model_id=destination_model_id,
        )

    return TrainingJob(
        id=response.id or synthetic_id("unknown"),
        status=TrainingStatus(response.status),
        urls=response.urls,
        error=response.error,
        output=response.output,
        logs=response.logs,
        input=response.input,
        destination_model_id=destination_model_id,
    )


def _first_output(output: Any) -> Any:
    if isinstance(output, (list, tuple)):
        return output[0] if output else None
    return output


def to_generation_result(raw: Any, width: int, height: int) -> GenerationResult:
    """Map a finished (or timed-out) prediction onto a :class:`GenerationResult`.

    Args:
        raw: Prediction returned by the provider, possibly ``None``.
        width: Width recorded on the produced image.
        height: Height recorded on the produced image.

    Returns:
        GenerationResult; never raises.
    """
    if raw is None:
        logger.error("Prediction is null or undefined")
        return GenerationResult(
            id=synthetic_id("replicate_null"),
            status=GenerationStatus.FAILED,
            error="Replicate returned null response",
        )

    try:
        response = parse_provider_response(raw)
    except UnexpectedResponseError as e:
        logger.error(f"Unexpected prediction status or structure: {e.payload}")
        job_id = e.payload.get("id")
        return GenerationResult(
            id=str(job_id) if job_id is not None else synthetic_id("unknown"),
            status=GenerationStatus.FAILED,
            error=str(e),
        )

    if isinstance(response, SucceededResponse):
        image_url = _first_output(response.output)
        if not image_url:
            logger.error(f"Prediction {response.id} succeeded without output")
            return GenerationResult(
                id=response.id or synthetic_id("unknown"),
                status=GenerationStatus.FAILED,
                error="Replicate prediction succeeded without output",
            )
        logger.info(f"Generation succeeded, image URL: {image_url}")
        return GenerationResult(
            id=response.id or synthetic_id("success"),
            status=GenerationStatus.COMPLETED,
            images=[GeneratedImage(url=str(image_url), width=width, height=height)],
        )

    if isinstance(response, FailedResponse):
        logger.error(f"Generation failed: {response.error}")
        return GenerationResult(
            id=response.id or synthetic_id("failed"),
            status=GenerationStatus.FAILED,
            error=response.error or "Replicate generation failed",
        )

    if isinstance(response, InProgressResponse):
        logger.info(f"Generation {response.id} still {response.status}")
        return GenerationResult(
            id=response.id or synthetic_id("processing"),
            status=GenerationStatus.PROCESSING,
        )

    logger.warning(f"Generation {response.id} was canceled")
    return GenerationResult(
        id=response.id or synthetic_id("canceled"),
        status=GenerationStatus.FAILED,
        error="Replicate prediction was canceled",
    )
