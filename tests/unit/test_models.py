"""Tests for photogen.core.models: request and result schemas."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from photogen.core.models import (
    GenerationResult,
    GenerationStatus,
    LoRAGenerationRequest,
    TrainedModelGenerationRequest,
    TrainingJob,
    TrainingRequest,
    TrainingStatus,
)


class TestTrainingStatus:
    @pytest.mark.parametrize("status", ["succeeded", "failed", "canceled"])
    def test_terminal_states(self, status):
        assert TrainingStatus(status).is_terminal

    @pytest.mark.parametrize("status", ["starting", "processing"])
    def test_in_progress_states(self, status):
        assert not TrainingStatus(status).is_terminal


class TestTrainingRequest:
    """Validation of training parameters."""

    def test_minimal_request(self):
        request = TrainingRequest(model_name="dog", trigger_word="sks")
        assert request.zip_url is None
        assert request.base_model is None
        assert request.steps is None

    def test_missing_trigger_word_rejected(self):
        with pytest.raises(ValidationError):
            TrainingRequest(model_name="dog")

    @pytest.mark.parametrize(
        "field, value",
        [("steps", 0), ("learning_rate", 0), ("lora_rank", 0), ("batch_size", 0)],
    )
    def test_non_positive_hyperparameters_rejected(self, field, value):
        with pytest.raises(ValidationError):
            TrainingRequest(model_name="dog", trigger_word="sks", **{field: value})


class TestGenerationRequests:
    """Validation of generation parameters."""

    def test_trained_requires_model_ref(self):
        with pytest.raises(ValidationError):
            TrainedModelGenerationRequest(prompt="p")

    def test_lora_requires_path(self):
        with pytest.raises(ValidationError):
            LoRAGenerationRequest(prompt="p")

    def test_width_lower_bound(self):
        with pytest.raises(ValidationError):
            LoRAGenerationRequest(prompt="p", lora_path="u/r", width=32)

    def test_unknown_aspect_ratio_accepted(self):
        """Unrecognised ratios are tolerated and resolved to the default size later."""
        request = LoRAGenerationRequest(prompt="p", lora_path="u/r", aspect_ratio="21:9")
        assert request.aspect_ratio == "21:9"


class TestResults:
    def test_generation_result_defaults_to_no_images(self):
        result = GenerationResult(id="x", status=GenerationStatus.FAILED, error="boom")
        assert result.images == []

    def test_training_job_serialises_status_value(self):
        job = TrainingJob(id="t", status=TrainingStatus.PROCESSING)
        assert job.model_dump(mode="json")["status"] == "processing"
