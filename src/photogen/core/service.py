"""Replicate service facade.

:class:`ReplicateService` is the single object callers use. It owns one
:class:`~photogen.core.provider.ProviderClient` and delegates to the training
orchestrator and generation invoker, which share that client read-only.

Usage
-----
::

    from photogen.core.models import TrainingRequest, LoRAGenerationRequest
    from photogen.core.service import ReplicateService

    service = ReplicateService()  # reads REPLICATE_API_TOKEN

    job = service.start_training(
        TrainingRequest(
            model_name="My Dog",
            trigger_word="sks",
            zip_url="https://uploads.example.com/dog.zip",
        )
    )
    job = service.get_training_status(job.id)

    result = service.generate_with_lora(
        LoRAGenerationRequest(prompt="a dog on the moon", lora_path="user/dog-lora")
    )

Only construction can raise (missing API token). Every operation returns a
tagged result.
"""

from __future__ import annotations

import logging

import replicate

from photogen.core.config import PhotogenConfig
from photogen.core.config import config as default_config
from photogen.core.generation import GenerationInvoker
from photogen.core.models import (
    DestinationModelResult,
    GenerationResult,
    LoRAGenerationRequest,
    TrainedModelGenerationRequest,
    TrainerInfo,
    TrainingJob,
    TrainingRequest,
)
from photogen.core.provider import ProviderClient
from photogen.core.training import TrainingOrchestrator

logger = logging.getLogger(__name__)


class ReplicateService:
    """Training and generation operations against Replicate.

    Args:
        api_token: Explicit API token (environment is used when ``None``).
        config: Configuration; defaults to the global instance.
        client: Pre-built Replicate client, bypassing credential resolution.

    Raises:
        MissingCredentialsError: If no API token can be resolved.
    """

    def __init__(
        self,
        api_token: str | None = None,
        config: PhotogenConfig | None = None,
        client: replicate.Client | None = None,
    ) -> None:
        self.config = config or default_config
        self.provider = ProviderClient(api_token=api_token, client=client)
        self.training = TrainingOrchestrator(self.provider, self.config)
        self.generation = GenerationInvoker(self.provider, self.config)
        logger.info(f"ReplicateService ready (model owner: {self.config.model_owner})")

    def create_destination_model(
        self, model_name: str, description: str | None = None
    ) -> DestinationModelResult:
        return self.training.create_destination_model(model_name, description)

    def start_training(self, request: TrainingRequest) -> TrainingJob:
        return self.training.start_training(request)

    def get_training_status(self, training_id: str) -> TrainingJob:
        return self.training.get_training_status(training_id)

    def cancel_training(self, training_id: str) -> bool:
        return self.training.cancel_training(training_id)

    def generate_with_trained_model(self, request: TrainedModelGenerationRequest) -> GenerationResult:
        return self.generation.generate_with_trained_model(request)

    def generate_with_lora(self, request: LoRAGenerationRequest) -> GenerationResult:
        return self.generation.generate_with_lora(request)

    def get_available_trainers(self) -> list[TrainerInfo]:
        return self.training.get_available_trainers()
