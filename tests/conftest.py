"""Shared pytest fixtures for photogen tests."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from photogen.core.config import PhotogenConfig
from photogen.core.service import ReplicateService


class MockPrediction:
    """Stand-in for ``replicate.Prediction``.

    Starts in ``starting`` and moves to the configured final state when
    :meth:`wait` is called, the way the SDK reloads the prediction in place.

    Attributes
    ----------
    wait_calls : int
        Number of times wait() was called
    """

    def __init__(
        self,
        id: str = "pred-123",
        final_status: str = "succeeded",
        output=None,
        error=None,
    ):
        self.id = id
        self.status = "starting"
        self.output = None
        self.error = None
        self.logs = None
        self.input = None
        self.urls = {
            "get": f"https://api.replicate.com/v1/predictions/{id}",
            "cancel": f"https://api.replicate.com/v1/predictions/{id}/cancel",
        }
        self._final = (final_status, output, error)
        self.wait_calls = 0

    def wait(self):
        self.wait_calls += 1
        self.status, self.output, self.error = self._final


def make_training(**overrides) -> SimpleNamespace:
    """Build a stand-in ``replicate.Training`` with realistic defaults."""
    fields = {
        "id": "train-abc",
        "status": "starting",
        "urls": {
            "get": "https://api.replicate.com/v1/trainings/train-abc",
            "cancel": "https://api.replicate.com/v1/trainings/train-abc/cancel",
        },
        "output": None,
        "error": None,
        "logs": "",
        "input": None,
        "created_at": "2024-06-10T12:00:00Z",
        "completed_at": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.fixture
def test_config() -> PhotogenConfig:
    """Create a test configuration independent of any .env file.

    Returns:
        PhotogenConfig instance for testing
    """
    return PhotogenConfig(
        _env_file=None,
        model_owner="test-owner",
        destination_hardware="gpu-t4",
        num_inference_steps=28,
        guidance_scale=3.5,
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock ``replicate.Client`` with successful defaults.

    Returns:
        MagicMock whose models/trainings/predictions namespaces succeed
    """
    client = MagicMock()
    client.trainings.create.return_value = make_training()
    client.trainings.get.return_value = make_training(status="processing")
    client.predictions.create.return_value = MockPrediction(
        output=["https://replicate.delivery/out-0.webp"]
    )
    return client


@pytest.fixture
def service(test_config: PhotogenConfig, mock_client: MagicMock) -> ReplicateService:
    """Create a ReplicateService wired to the mock client."""
    return ReplicateService(config=test_config, client=mock_client)


@pytest.fixture
def prediction_factory():
    """Return the MockPrediction class for building predictions in tests."""
    return MockPrediction


@pytest.fixture
def training_factory():
    """Return the make_training helper for building trainings in tests."""
    return make_training


@pytest.fixture
def test_client(service: ReplicateService):
    """Create a FastAPI TestClient whose lifespan installs the mock-backed service.

    Yields:
        TestClient bound to ``photogen.api.main.app``
    """
    from fastapi.testclient import TestClient

    from photogen.api.main import app

    with patch("photogen.api.main.ReplicateService", return_value=service):
        with TestClient(app) as client:
            yield client
