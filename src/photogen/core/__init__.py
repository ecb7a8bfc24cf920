"""Core provider integration for photogen.

This package contains everything that talks to, or reasons about, the remote
training and inference provider (Replicate):

- **config.py**: Pydantic Settings configuration (``PHOTOGEN_`` prefix)
- **provider.py**: API token resolution and the shared ``replicate.Client``
- **trainers.py**: FLUX and SDXL trainer profiles with default hyperparameters
- **training.py**: Destination model creation, training submission, polling
  and cancellation
- **generation.py**: Trained-model and LoRA image generation
- **status.py**: Provider payload parsing into a tagged union and mapping to
  results
- **dimensions.py / prompts.py**: Aspect ratio lookup and trigger-word prompts
- **service.py**: ``ReplicateService`` facade used by callers

Usage Example
-------------
    from photogen.core import ReplicateService, TrainingRequest

    service = ReplicateService()
    job = service.start_training(
        TrainingRequest(model_name="me", trigger_word="sks", zip_url=url)
    )
"""

from photogen.core.config import PhotogenConfig, config
from photogen.core.models import (
    DestinationModelResult,
    GeneratedImage,
    GenerationResult,
    GenerationStatus,
    LoRAGenerationRequest,
    TrainedModelGenerationRequest,
    TrainerInfo,
    TrainingJob,
    TrainingRequest,
    TrainingStatus,
)
from photogen.core.provider import MissingCredentialsError
from photogen.core.service import ReplicateService

__all__ = [
    "DestinationModelResult",
    "GeneratedImage",
    "GenerationResult",
    "GenerationStatus",
    "LoRAGenerationRequest",
    "MissingCredentialsError",
    "PhotogenConfig",
    "ReplicateService",
    "TrainedModelGenerationRequest",
    "TrainerInfo",
    "TrainingJob",
    "TrainingRequest",
    "TrainingStatus",
    "config",
]
