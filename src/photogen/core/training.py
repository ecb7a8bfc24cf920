"""LoRA training orchestration on Replicate.

:class:`TrainingOrchestrator` sequences everything needed to start a
fine-tuning job and to follow it afterwards:

1. Validate the training images archive URL
2. Select a trainer profile from the requested base model
3. Create a private destination model under the configured owner
4. Resolve the trainer version (``latest`` is looked up on the provider)
5. Submit the training job

Every public method is non-throwing: failures come back as a ``failed``
:class:`~photogen.core.models.TrainingJob`, an unsuccessful
:class:`~photogen.core.models.DestinationModelResult`, or ``False``.
Nothing is retried.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from photogen.core.config import PhotogenConfig
from photogen.core.models import (
    DestinationModelResult,
    TrainerInfo,
    TrainingJob,
    TrainingRequest,
    TrainingStatus,
)
from photogen.core.provider import ProviderClient
from photogen.core.status import synthetic_id, to_training_job
from photogen.core.trainers import (
    LATEST_VERSION,
    TrainerProfile,
    available_trainers,
    select_trainer_profile,
)
from photogen.core.validation import validate_zip_url

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
# Replicate model names allow lowercase letters, digits, dashes, underscores and periods.
_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9._-]")


def slugify_model_name(model_name: str) -> str:
    """Lower-case a model name, hyphenate whitespace and drop disallowed characters."""
    slug = _WHITESPACE.sub("-", model_name.strip().lower())
    return _INVALID_NAME_CHARS.sub("", slug)


def build_destination_name(model_name: str, prefix: str = "flux-lora") -> str:
    """Derive a globally unique destination model name.

    The name combines the slugified model name with a millisecond timestamp
    and a six-character random suffix, so repeated requests with identical
    names never collide.

    Args:
        model_name: Human-readable model name.
        prefix: Leading label, usually the trainer profile's ``model_prefix``.

    Returns:
        Model name such as ``flux-lora-my-dog-1718000000000-a1b2c3``.
    """
    timestamp = int(time.time() * 1000)
    suffix = uuid.uuid4().hex[:6]
    slug = slugify_model_name(model_name)
    parts = [prefix, slug, str(timestamp), suffix] if slug else [prefix, str(timestamp), suffix]
    return "-".join(parts)


class TrainingOrchestrator:
    """Starts, polls and cancels LoRA training jobs.

    Attributes:
        provider (ProviderClient): Shared Replicate client handle.
        config (PhotogenConfig): Supplies the owner namespace and hardware class.
    """

    def __init__(self, provider: ProviderClient, config: PhotogenConfig) -> None:
        self.provider = provider
        self.config = config

    @property
    def client(self):
        return self.provider.client

    def create_destination_model(
        self,
        model_name: str,
        description: str | None = None,
        prefix: str = "flux-lora",
    ) -> DestinationModelResult:
        """Create the private model that a training job will populate.

        Args:
            model_name: Human-readable model name.
            description: Model description shown on the provider.
            prefix: Leading label of the generated model name.

        Returns:
            DestinationModelResult with ``model_id`` as ``owner/name`` on success.
        """
        owner = self.config.model_owner
        name = build_destination_name(model_name, prefix)
        logger.info(f"Creating destination model: {owner}/{name}")

        try:
            self.client.models.create(
                owner=owner,
                name=name,
                visibility=self.config.destination_visibility,
                hardware=self.config.destination_hardware,
                description=description or f"Fine-tuned FLUX LoRA model for {model_name}",
            )
        except Exception as e:
            logger.error(f"Failed to create destination model {owner}/{name}: {e}")
            return DestinationModelResult(success=False, error=str(e) or "Unknown error")

        model_id = f"{owner}/{name}"
        logger.info(f"Successfully created model: {model_id}")
        return DestinationModelResult(success=True, model_id=model_id)

    def _resolve_trainer_version(self, profile: TrainerProfile) -> str:
        if profile.version != LATEST_VERSION:
            return profile.version

        logger.info(f"Resolving latest version of {profile.trainer_id}")
        model = self.client.models.get(profile.trainer_id)
        latest = getattr(model, "latest_version", None)
        if latest is None or not getattr(latest, "id", None):
            raise RuntimeError(f"Trainer {profile.trainer_id} has no published version")
        return latest.id

    def start_training(self, request: TrainingRequest) -> TrainingJob:
        """Submit a LoRA training job.

        Args:
            request: Training parameters, including the images archive URL.

        Returns:
            TrainingJob with the provider id, status, URLs and destination
            model id, or a ``failed`` job with an ``error_<ms>`` id.
        """
        try:
            zip_url = validate_zip_url(request.zip_url)
            logger.info(f"Using training images ZIP: {zip_url}")

            profile = select_trainer_profile(request.base_model)
            logger.info(f"Selected trainer {profile.trainer_id} ({profile.kind.value})")

            model_result = self.create_destination_model(
                request.model_name, prefix=profile.model_prefix
            )
            if not model_result.success:
                raise RuntimeError(f"Failed to create destination model: {model_result.error}")
            logger.info(f"Using destination model: {model_result.model_id}")

            version = self._resolve_trainer_version(profile)
            training_input = profile.build_input(request)
            logger.debug(f"Training input: {training_input}")

            logger.info(f"Starting {profile.base_model} training with {profile.trainer_id}...")
            training = self.client.trainings.create(
                version=f"{profile.trainer_id}:{version}",
                input=training_input,
                destination=model_result.model_id,
            )
        except Exception as e:
            logger.error(f"Replicate training error: {type(e).__name__}: {e}")
            return TrainingJob(
                id=synthetic_id("error"),
                status=TrainingStatus.FAILED,
                error=str(e) or "Unknown error occurred",
            )

        job = to_training_job(training, destination_model_id=model_result.model_id)
        logger.info(f"Replicate training created successfully: {job.id} ({job.status.value})")
        return job

    def get_training_status(self, training_id: str) -> TrainingJob:
        """Fetch the current state of a training job.

        Args:
            training_id: Provider training id.

        Returns:
            TrainingJob mirroring the provider, or a ``failed`` job carrying
            the fetch error.
        """
        try:
            training = self.client.trainings.get(training_id)
        except Exception as e:
            logger.error(f"Error getting training status for {training_id}: {e}")
            return TrainingJob(
                id=training_id,
                status=TrainingStatus.FAILED,
                error=str(e) or "Failed to get status",
            )

        job = to_training_job(training)
        if job.status is TrainingStatus.FAILED or job.error:
            logger.warning(
                f"Training {job.id} failed: status={job.status.value} error={job.error} "
                f"input={job.input} created_at={getattr(training, 'created_at', None)} "
                f"completed_at={getattr(training, 'completed_at', None)}"
            )
            if job.logs:
                logger.debug(f"Training {job.id} logs:\n{job.logs}")
        return job

    def cancel_training(self, training_id: str) -> bool:
        """Request cancellation of a training job.

        Returns:
            True if the provider accepted the request, False otherwise.
        """
        try:
            self.client.trainings.cancel(training_id)
        except Exception as e:
            logger.error(f"Error canceling training {training_id}: {e}")
            return False

        logger.info(f"Canceled training {training_id}")
        return True

    def get_available_trainers(self) -> list[TrainerInfo]:
        return available_trainers()
