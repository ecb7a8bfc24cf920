"""Trainer profiles for LoRA fine-tuning on Replicate.

A trainer profile identifies which remote training procedure to invoke (an
``owner/name:version`` triple) together with the default hyperparameters and
fixed settings that procedure expects. Two profiles are supported:

- **FLUX** (default): ``ostris/flux-dev-lora-trainer`` for FLUX.1-dev
- **SDXL**: ``ostris/sdxl-lora-trainer`` for Stable Diffusion XL

Profile Selection
-----------------
:func:`select_trainer_profile` is a total mapping from a requested base model
to a :class:`TrainerKind`. Unrecognised or missing base models select FLUX;
an unrecognised value is logged so the fallback is never silent.

Usage Example
-------------
    >>> profile = select_trainer_profile("stabilityai/stable-diffusion-xl-base-1.0")
    >>> profile.kind
    <TrainerKind.SDXL: 'sdxl'>
    >>> training_input = profile.build_input(request)

See Also
--------
- photogen.core.training.TrainingOrchestrator: submits jobs using these profiles
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from photogen.core.models import TrainerInfo, TrainingRequest

logger = logging.getLogger(__name__)

FLUX_BASE_MODEL = "black-forest-labs/FLUX.1-dev"
SDXL_BASE_MODEL = "stabilityai/stable-diffusion-xl-base-1.0"

# Version placeholder resolved to the trainer's current version at submission.
LATEST_VERSION = "latest"


class TrainerKind(str, Enum):
    """Supported trainer variants."""

    FLUX = "flux"
    SDXL = "sdxl"


@dataclass(frozen=True)
class TrainerProfile:
    """Identity, defaults and fixed settings of one remote trainer.

    Attributes
    ----------
    kind : TrainerKind
        Variant this profile implements
    owner, name, version : str
        Replicate trainer identity; ``version`` may be ``"latest"``
    base_model : str
        Base model the trainer fine-tunes
    display_name, description, estimated_time, cost : str
        Catalogue metadata
    model_prefix : str
        Prefix for destination model ids created for this trainer
    steps_key : str
        Input key the trainer uses for the step count
    default_steps, default_lora_rank, default_batch_size : int
        Hyperparameter defaults
    default_resolution : str
        Comma-separated training resolutions
    default_learning_rate : float
        Optimizer learning rate default
    fixed_input : dict[str, Any]
        Settings sent with every job (optimizer, captioning, logging intervals)
    """

    kind: TrainerKind
    owner: str
    name: str
    version: str
    base_model: str
    display_name: str
    description: str
    estimated_time: str
    cost: str
    model_prefix: str
    steps_key: str
    default_resolution: str
    default_steps: int = 1000
    default_lora_rank: int = 16
    default_batch_size: int = 1
    default_learning_rate: float = 0.0004
    fixed_input: dict[str, Any] = field(default_factory=dict)

    @property
    def trainer_id(self) -> str:
        return f"{self.owner}/{self.name}"

    def build_input(self, request: TrainingRequest) -> dict[str, Any]:
        """Build the trainer input payload for a training request.

        Request hyperparameters that are ``None`` take this profile's defaults.
        The archive URL is expected to be validated already.

        Args:
            request: Training request with archive URL and trigger word

        Returns
        -------
        dict[str, Any]
            Input dictionary for ``trainings.create``
        """
        training_input: dict[str, Any] = {
            "input_images": request.zip_url,
            "trigger_word": request.trigger_word,
            self.steps_key: _pick(request.steps, self.default_steps),
            "lora_rank": _pick(request.lora_rank, self.default_lora_rank),
            "batch_size": _pick(request.batch_size, self.default_batch_size),
            "resolution": _pick(request.resolution, self.default_resolution),
            "learning_rate": _pick(request.learning_rate, self.default_learning_rate),
        }
        training_input.update(self.fixed_input)
        return training_input

    def to_info(self) -> TrainerInfo:
        return TrainerInfo(
            id=self.trainer_id,
            name=self.display_name,
            description=self.description,
            version=self.version,
            base_model=self.base_model,
            estimated_time=self.estimated_time,
            cost=self.cost,
        )


def _pick(value, default):
    return default if value is None else value


TRAINER_PROFILES: dict[TrainerKind, TrainerProfile] = {
    TrainerKind.FLUX: TrainerProfile(
        kind=TrainerKind.FLUX,
        owner="ostris",
        name="flux-dev-lora-trainer",
        version="c6e78d2501e8088876e99ef21e4460d0dc121af7a4b786b9a4c2d75c620e300d",
        base_model=FLUX_BASE_MODEL,
        display_name="FLUX Dev LoRA Trainer",
        description="Train LoRA models for FLUX.1-dev using ai-toolkit",
        estimated_time="10-30 minutes",
        cost="$0.001525 per second",
        model_prefix="flux-lora",
        steps_key="steps",
        default_resolution="512,768,1024",
        fixed_input={
            "optimizer": "adamw8bit",
            "autocaption": True,
            "caption_dropout_rate": 0.05,
            "cache_latents_to_disk": False,
            "wandb_project": "flux_train_replicate",
            "wandb_save_interval": 100,
            "wandb_sample_interval": 100,
            "gradient_checkpointing": False,
        },
    ),
    TrainerKind.SDXL: TrainerProfile(
        kind=TrainerKind.SDXL,
        owner="ostris",
        name="sdxl-lora-trainer",
        version=LATEST_VERSION,
        base_model=SDXL_BASE_MODEL,
        display_name="SDXL LoRA Trainer",
        description="Train LoRA models for Stable Diffusion XL",
        estimated_time="15-45 minutes",
        cost="$0.001525 per second",
        model_prefix="sdxl-lora",
        steps_key="max_train_steps",
        default_resolution="1024",
        fixed_input={
            "optimizer": "adamw8bit",
            "autocaption": True,
            "lr_scheduler": "constant",
            "lr_warmup_steps": 0,
            "seed": 42,
            "cache_latents_to_disk": False,
        },
    ),
}

_BASE_MODEL_KINDS: dict[str, TrainerKind] = {
    FLUX_BASE_MODEL: TrainerKind.FLUX,
    SDXL_BASE_MODEL: TrainerKind.SDXL,
}


def trainer_kind_for(base_model: str | None) -> TrainerKind:
    """Map a base model identifier to a trainer kind (FLUX when unknown)."""
    if not base_model:
        return TrainerKind.FLUX

    kind = _BASE_MODEL_KINDS.get(base_model)
    if kind is None:
        logger.warning(f"Unrecognised base model '{base_model}', using FLUX trainer")
        return TrainerKind.FLUX
    return kind


def select_trainer_profile(base_model: str | None) -> TrainerProfile:
    """Return the trainer profile for a requested base model."""
    return TRAINER_PROFILES[trainer_kind_for(base_model)]


def available_trainers() -> list[TrainerInfo]:
    """List catalogue entries for every supported trainer."""
    return [profile.to_info() for profile in TRAINER_PROFILES.values()]
