"""Pydantic request and result models for the provider adapter.

Every public operation of :class:`~photogen.core.service.ReplicateService`
accepts one of the request models below and returns one of the result models.
Results are tagged by ``status`` (or ``success``) and carry an ``error``
string instead of raising, so an HTTP caller can always serialise them.

Models
------
TrainingRequest
    Parameters for starting a LoRA fine-tuning job.
TrainingJob
    Snapshot of a training job as last reported by the provider.
DestinationModelResult
    Outcome of creating the provider-side model that training populates.
TrainedModelGenerationRequest / LoRAGenerationRequest
    Parameters for the two image generation modes.
GenerationResult
    Outcome of a generation call, with zero or one image.
TrainerInfo
    Catalogue entry describing a supported trainer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from photogen.core.dimensions import AspectRatio


class TrainingStatus(str, Enum):
    """Lifecycle states of a provider training job."""

    STARTING = "starting"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        return self in (TrainingStatus.SUCCEEDED, TrainingStatus.FAILED, TrainingStatus.CANCELED)


class GenerationStatus(str, Enum):
    """Normalised outcome of a generation call."""

    COMPLETED = "completed"
    FAILED = "failed"
    PROCESSING = "processing"


class TrainingRequest(BaseModel):
    """Parameters for :meth:`ReplicateService.start_training`.

    ``zip_url`` is optional at the type level so that a missing archive is
    reported as a failed :class:`TrainingJob` rather than a schema error.
    Hyperparameters left as ``None`` take the selected trainer profile's
    defaults.

    Attributes:
        model_name: Human-readable name; used to derive the destination model id.
        trigger_word: Token the trained model will associate with the subject.
        zip_url: HTTP(S) URL or ``/api/`` path of the training images archive.
        base_model: Base model identifier; selects the trainer profile.
        steps: Number of training steps.
        learning_rate: Optimizer learning rate.
        lora_rank: LoRA rank.
        batch_size: Training batch size.
        resolution: Comma-separated training resolutions, e.g. ``"512,768,1024"``.
    """

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = Field(..., description="Human-readable model name.")
    trigger_word: str = Field(..., description="Trigger word for the trained subject.")
    zip_url: str | None = Field(
        default=None,
        description="HTTP(S) URL or /api/ path of the training images ZIP.",
    )
    base_model: str | None = Field(
        default=None,
        description="Base model identifier (FLUX.1-dev or SDXL).",
    )
    steps: int | None = Field(default=None, ge=1)
    learning_rate: float | None = Field(default=None, gt=0)
    lora_rank: int | None = Field(default=None, ge=1)
    batch_size: int | None = Field(default=None, ge=1)
    resolution: str | None = None


class ProviderUrls(BaseModel):
    """Provider endpoints for polling and cancelling a job."""

    get: str | None = None
    cancel: str | None = None


class TrainingJob(BaseModel):
    """Snapshot of a training job.

    Attributes:
        id: Provider job id, or a synthetic ``error_<ms>`` id when submission failed.
        status: Current lifecycle state.
        urls: Provider poll/cancel URLs.
        error: Error message for failed jobs.
        output: Raw provider output (weights URL and version once succeeded).
        logs: Raw trainer logs.
        input: Input parameters as received by the provider.
        destination_model_id: ``owner/name`` of the model this job populates.
    """

    id: str
    status: TrainingStatus
    urls: ProviderUrls | None = None
    error: str | None = None
    output: Any = None
    logs: str | None = None
    input: Any = None
    destination_model_id: str | None = None


class DestinationModelResult(BaseModel):
    """Outcome of :meth:`ReplicateService.create_destination_model`."""

    model_config = ConfigDict(protected_namespaces=())

    success: bool
    model_id: str | None = Field(default=None, description="owner/name of the created model.")
    error: str | None = None


class GenerationRequest(BaseModel):
    """Fields shared by both generation modes.

    Attributes:
        prompt: User prompt; the trigger word is prepended when missing.
        trigger_word: Optional trigger word of the trained subject.
        width: Explicit width in pixels; overrides ``aspect_ratio``.
        height: Explicit height in pixels; overrides ``aspect_ratio``.
        steps: Inference steps (configured default when ``None``).
        seed: Random seed; ``None`` lets the provider choose.
        aspect_ratio: Named ratio; unrecognised values fall back to ``1:1``.
    """

    prompt: str = Field(..., description="Prompt text.")
    trigger_word: str | None = None
    width: int | None = Field(default=None, ge=64)
    height: int | None = Field(default=None, ge=64)
    steps: int | None = Field(default=None, ge=1)
    seed: int | None = None
    aspect_ratio: AspectRatio | str | None = Field(
        default=None,
        description="Aspect ratio preset (e.g. '1:1', '16:9').",
    )


class TrainedModelGenerationRequest(GenerationRequest):
    """Generate with a model produced by a finished training job."""

    model_config = ConfigDict(protected_namespaces=())

    model_ref: str = Field(
        ...,
        description="Trained model reference in owner/model:version form.",
    )


class LoRAGenerationRequest(GenerationRequest):
    """Generate with the LoRA base model and external LoRA weights."""

    lora_path: str = Field(
        ...,
        description="LoRA weights path relative to the hosting domain, or a full URL.",
    )
    lora_scale: float | None = Field(default=None, description="LoRA strength (default 1.0).")


class GeneratedImage(BaseModel):
    url: str
    width: int
    height: int


class GenerationResult(BaseModel):
    """Outcome of a generation call.

    ``images`` is empty unless ``status`` is ``completed``.
    """

    id: str
    status: GenerationStatus
    images: list[GeneratedImage] = Field(default_factory=list)
    error: str | None = None


class TrainerInfo(BaseModel):
    """Catalogue entry returned by :meth:`ReplicateService.get_available_trainers`."""

    id: str
    name: str
    description: str
    version: str
    base_model: str
    estimated_time: str
    cost: str
