"""Tests for photogen.core.training: training orchestration.

All tests use a mocked ``replicate.Client`` so that no network calls occur.
Tests cover:

- Destination model naming and creation.
- Archive URL validation before any provider call.
- FLUX/SDXL trainer selection and version resolution.
- Non-throwing failure handling for start, status and cancel.
"""

from __future__ import annotations

import re
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from photogen.core.models import TrainingRequest, TrainingStatus
from photogen.core.provider import ProviderClient
from photogen.core.trainers import SDXL_BASE_MODEL
from photogen.core.training import (
    TrainingOrchestrator,
    build_destination_name,
    slugify_model_name,
)


@pytest.fixture
def orchestrator(test_config, mock_client) -> TrainingOrchestrator:
    return TrainingOrchestrator(ProviderClient(client=mock_client), test_config)


@pytest.fixture
def training_request() -> TrainingRequest:
    return TrainingRequest(
        model_name="My Dog",
        trigger_word="sks",
        zip_url="https://uploads.example.com/dog.zip",
    )


class TestDestinationNaming:
    """Destination model id derivation."""

    def test_slugify(self):
        assert slugify_model_name("  My  Dog Rex ") == "my-dog-rex"

    def test_slugify_drops_disallowed_characters(self):
        assert slugify_model_name("Rex's Photos!") == "rexs-photos"

    def test_name_format(self):
        name = build_destination_name("My Dog")
        assert re.fullmatch(r"flux-lora-my-dog-\d{13}-[0-9a-f]{6}", name)

    def test_custom_prefix(self):
        assert build_destination_name("My Dog", prefix="sdxl-lora").startswith("sdxl-lora-my-dog-")

    def test_names_are_unique_for_identical_input(self):
        """Repeated requests with the same name never collide."""
        names = {build_destination_name("Same Name") for _ in range(50)}
        assert len(names) == 50

    @patch("photogen.core.training.time.time", return_value=1718000000.0)
    def test_timestamp_in_milliseconds(self, _mock_time):
        assert "-1718000000000-" in build_destination_name("dog")

    def test_empty_slug_skipped(self):
        assert re.fullmatch(r"flux-lora-\d{13}-[0-9a-f]{6}", build_destination_name("!!!"))


class TestCreateDestinationModel:
    """create_destination_model behaviour."""

    def test_creates_private_model_under_configured_owner(self, orchestrator, mock_client):
        result = orchestrator.create_destination_model("My Dog")

        assert result.success is True
        assert result.error is None
        assert result.model_id.startswith("test-owner/flux-lora-my-dog-")

        kwargs = mock_client.models.create.call_args.kwargs
        assert kwargs["owner"] == "test-owner"
        assert kwargs["visibility"] == "private"
        assert kwargs["hardware"] == "gpu-t4"
        assert kwargs["description"] == "Fine-tuned FLUX LoRA model for My Dog"
        assert result.model_id == f"test-owner/{kwargs['name']}"

    def test_custom_description(self, orchestrator, mock_client):
        orchestrator.create_destination_model("My Dog", description="Rex portraits")
        assert mock_client.models.create.call_args.kwargs["description"] == "Rex portraits"

    def test_provider_failure_returns_error(self, orchestrator, mock_client):
        mock_client.models.create.side_effect = RuntimeError("name already taken")

        result = orchestrator.create_destination_model("My Dog")

        assert result.success is False
        assert result.model_id is None
        assert result.error == "name already taken"


class TestStartTraining:
    """start_training behaviour."""

    @pytest.mark.parametrize("zip_url", [None, ""])
    def test_missing_zip_url_fails_without_network(self, orchestrator, mock_client, zip_url):
        job = orchestrator.start_training(
            TrainingRequest(model_name="x", trigger_word="sks", zip_url=zip_url)
        )

        assert job.status is TrainingStatus.FAILED
        assert job.id.startswith("error_")
        assert "ZIP URL is required" in job.error
        assert mock_client.mock_calls == []

    def test_malformed_zip_url_fails_without_network(self, orchestrator, mock_client):
        job = orchestrator.start_training(
            TrainingRequest(model_name="x", trigger_word="sks", zip_url="file:///tmp/a.zip")
        )

        assert job.status is TrainingStatus.FAILED
        assert "Invalid ZIP URL format" in job.error
        assert mock_client.mock_calls == []

    def test_flux_submission(self, orchestrator, mock_client, training_request):
        job = orchestrator.start_training(training_request)

        assert job.id == "train-abc"
        assert job.status is TrainingStatus.STARTING
        assert job.urls.cancel.endswith("/cancel")
        assert job.destination_model_id.startswith("test-owner/flux-lora-my-dog-")

        kwargs = mock_client.trainings.create.call_args.kwargs
        assert kwargs["version"] == (
            "ostris/flux-dev-lora-trainer:"
            "c6e78d2501e8088876e99ef21e4460d0dc121af7a4b786b9a4c2d75c620e300d"
        )
        assert kwargs["destination"] == job.destination_model_id
        assert kwargs["input"]["steps"] == 1000
        assert kwargs["input"]["lora_rank"] == 16
        assert kwargs["input"]["resolution"] == "512,768,1024"
        assert kwargs["input"]["input_images"] == "https://uploads.example.com/dog.zip"
        mock_client.models.get.assert_not_called()

    def test_internal_api_zip_path_accepted(self, orchestrator, mock_client):
        job = orchestrator.start_training(
            TrainingRequest(model_name="x", trigger_word="sks", zip_url="/api/uploads/42/zip")
        )
        assert job.status is TrainingStatus.STARTING

    def test_sdxl_submission_resolves_latest_version(self, orchestrator, mock_client, training_request):
        mock_client.models.get.return_value = SimpleNamespace(
            latest_version=SimpleNamespace(id="sdxl-version-hash")
        )
        training_request.base_model = SDXL_BASE_MODEL

        job = orchestrator.start_training(training_request)

        assert job.status is TrainingStatus.STARTING
        assert job.destination_model_id.startswith("test-owner/sdxl-lora-my-dog-")
        mock_client.models.get.assert_called_once_with("ostris/sdxl-lora-trainer")
        kwargs = mock_client.trainings.create.call_args.kwargs
        assert kwargs["version"] == "ostris/sdxl-lora-trainer:sdxl-version-hash"
        assert kwargs["input"]["max_train_steps"] == 1000
        assert kwargs["input"]["resolution"] == "1024"

    def test_sdxl_without_published_version_fails(self, orchestrator, mock_client, training_request):
        mock_client.models.get.return_value = SimpleNamespace(latest_version=None)
        training_request.base_model = SDXL_BASE_MODEL

        job = orchestrator.start_training(training_request)

        assert job.status is TrainingStatus.FAILED
        assert "no published version" in job.error
        mock_client.trainings.create.assert_not_called()

    def test_destination_failure_is_wrapped(self, orchestrator, mock_client, training_request):
        mock_client.models.create.side_effect = RuntimeError("quota exceeded")

        job = orchestrator.start_training(training_request)

        assert job.status is TrainingStatus.FAILED
        assert job.error == "Failed to create destination model: quota exceeded"
        mock_client.trainings.create.assert_not_called()

    def test_training_create_failure_returns_failed_job(
        self, orchestrator, mock_client, training_request
    ):
        mock_client.trainings.create.side_effect = RuntimeError("invalid input_images")

        job = orchestrator.start_training(training_request)

        assert job.status is TrainingStatus.FAILED
        assert job.id.startswith("error_")
        assert job.error == "invalid input_images"

    def test_not_retried(self, orchestrator, mock_client, training_request):
        mock_client.trainings.create.side_effect = RuntimeError("503")
        orchestrator.start_training(training_request)
        assert mock_client.trainings.create.call_count == 1


class TestGetTrainingStatus:
    """get_training_status behaviour."""

    def test_maps_provider_state(self, orchestrator, mock_client, training_factory):
        mock_client.trainings.get.return_value = training_factory(
            status="succeeded", output={"version": "test-owner/m:v1"}
        )

        job = orchestrator.get_training_status("train-abc")

        mock_client.trainings.get.assert_called_once_with("train-abc")
        assert job.status is TrainingStatus.SUCCEEDED
        assert job.output == {"version": "test-owner/m:v1"}

    def test_failed_training_logged(self, orchestrator, mock_client, training_factory, caplog):
        mock_client.trainings.get.return_value = training_factory(
            status="failed", error="bad zip", logs="Traceback..."
        )

        job = orchestrator.get_training_status("train-abc")

        assert job.status is TrainingStatus.FAILED
        assert job.error == "bad zip"
        assert job.logs == "Traceback..."
        assert "bad zip" in caplog.text

    def test_fetch_error_returns_failed_job(self, orchestrator, mock_client):
        mock_client.trainings.get.side_effect = RuntimeError("not found")

        job = orchestrator.get_training_status("train-missing")

        assert job.id == "train-missing"
        assert job.status is TrainingStatus.FAILED
        assert job.error == "not found"


class TestCancelTraining:
    """cancel_training behaviour."""

    def test_success(self, orchestrator, mock_client):
        assert orchestrator.cancel_training("train-abc") is True
        mock_client.trainings.cancel.assert_called_once_with("train-abc")

    def test_provider_rejection_returns_false(self, orchestrator, mock_client):
        mock_client.trainings.cancel.side_effect = RuntimeError("already finished")
        assert orchestrator.cancel_training("train-abc") is False


class TestAvailableTrainers:
    def test_lists_trainers(self, orchestrator):
        assert len(orchestrator.get_available_trainers()) == 2
