"""Image generation with trained models and LoRA weights.

:class:`GenerationInvoker` supports two modes that share prompt composition,
dimension resolution and response mapping:

- **Trained model**: run the version produced by a finished training job,
  addressed as ``owner/model:version``.
- **LoRA weights**: run the configured LoRA base model with an external
  weights file, addressed by a path on the model-hosting domain.

Both modes create a prediction and block on ``Prediction.wait()`` until the
provider reports a terminal state; polling is left entirely to the SDK.
Results are always returned as a
:class:`~photogen.core.models.GenerationResult`; nothing is raised.
"""

from __future__ import annotations

import logging
from typing import Any

from photogen.core.config import PhotogenConfig
from photogen.core.dimensions import Dimensions, resolve_size
from photogen.core.models import (
    GenerationRequest,
    GenerationResult,
    GenerationStatus,
    LoRAGenerationRequest,
    TrainedModelGenerationRequest,
)
from photogen.core.prompts import compose_prompt
from photogen.core.provider import ProviderClient
from photogen.core.status import synthetic_id, to_generation_result
from photogen.core.validation import parse_model_reference

logger = logging.getLogger(__name__)


def format_lora_url(lora_path: str, host: str = "https://huggingface.co/") -> str:
    """Qualify a LoRA weights path against the model-hosting domain.

    Paths that already start with *host* are returned unchanged, so the
    function is idempotent.

    Args:
        lora_path: Relative repository path (``"user/repo"``) or full URL.
        host: Hosting domain with trailing slash.

    Returns:
        Fully qualified weights URL.
    """
    if lora_path.startswith(host):
        return lora_path
    return f"{host}{lora_path.lstrip('/')}"


class GenerationInvoker:
    """Issues prediction requests and normalises their output.

    Attributes:
        provider (ProviderClient): Shared Replicate client handle.
        config (PhotogenConfig): Supplies inference defaults and the LoRA runner.
    """

    def __init__(self, provider: ProviderClient, config: PhotogenConfig) -> None:
        self.provider = provider
        self.config = config

    @property
    def client(self):
        return self.provider.client

    def _base_input(self, request: GenerationRequest, size: Dimensions) -> dict[str, Any]:
        model_input: dict[str, Any] = {
            "prompt": compose_prompt(request.prompt, request.trigger_word),
            "width": size.width,
            "height": size.height,
            "num_inference_steps": (
                request.steps if request.steps is not None else self.config.num_inference_steps
            ),
            "guidance_scale": self.config.guidance_scale,
            "num_outputs": 1,
            "output_format": self.config.output_format,
            "output_quality": self.config.output_quality,
        }
        # The provider rejects explicit nulls; omit the seed to let it pick one.
        if request.seed is not None:
            model_input["seed"] = request.seed
        return model_input

    def _create_and_wait(self, size: Dimensions, **create_kwargs) -> GenerationResult:
        logger.info("Creating Replicate prediction...")
        prediction = self.client.predictions.create(**create_kwargs)
        if prediction is None:
            return to_generation_result(None, size.width, size.height)
        logger.info(f"Replicate prediction created: {prediction.id}")

        logger.info("Waiting for prediction to complete...")
        prediction.wait()
        logger.info(f"Prediction {prediction.id} finished with status: {prediction.status}")

        return to_generation_result(prediction, size.width, size.height)

    def generate_with_trained_model(self, request: TrainedModelGenerationRequest) -> GenerationResult:
        """Generate an image with a model produced by training.

        The model reference is validated before any provider call.

        Args:
            request: Prompt, size and the ``owner/model:version`` reference.

        Returns:
            GenerationResult with one image when completed.
        """
        logger.info(
            f"Starting trained model generation: model={request.model_ref} "
            f"trigger_word={request.trigger_word}"
        )
        try:
            reference = parse_model_reference(request.model_ref)
            size = resolve_size(request.aspect_ratio, request.width, request.height)
            model_input = self._base_input(request, size)
            logger.info(f"Trained model parameters: {model_input}")

            return self._create_and_wait(size, version=reference.version, input=model_input)
        except Exception as e:
            logger.error(f"Trained model generation error: {type(e).__name__}: {e}")
            return GenerationResult(
                id=synthetic_id("replicate_trained_err"),
                status=GenerationStatus.FAILED,
                error=str(e) or "Replicate trained model generation failed",
            )

    def generate_with_lora(self, request: LoRAGenerationRequest) -> GenerationResult:
        """Generate an image with the LoRA base model and external weights.

        Args:
            request: Prompt, size, weights path and optional LoRA scale.

        Returns:
            GenerationResult with one image when completed.
        """
        logger.info(
            f"Starting LoRA generation: lora_path={request.lora_path} "
            f"trigger_word={request.trigger_word}"
        )
        try:
            size = resolve_size(request.aspect_ratio, request.width, request.height)
            model_input = self._base_input(request, size)
            model_input.update(
                {
                    "lora_url": format_lora_url(request.lora_path, self.config.lora_host),
                    "lora_scale": (
                        request.lora_scale
                        if request.lora_scale is not None
                        else self.config.lora_scale
                    ),
                    "go_fast": self.config.go_fast,
                }
            )
            logger.info(f"LoRA generation parameters: {model_input}")

            return self._create_and_wait(
                size, model=self.config.lora_base_model, input=model_input
            )
        except Exception as e:
            logger.error(f"LoRA generation error: {type(e).__name__}: {e}")
            return GenerationResult(
                id=synthetic_id("replicate_err"),
                status=GenerationStatus.FAILED,
                error=str(e) or "Replicate generation failed",
            )
