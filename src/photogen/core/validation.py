"""Input validation performed before any provider call."""

from typing import NamedTuple

# Archive URLs served by the application's own upload routes.
INTERNAL_API_PREFIX = "/api/"


class ValidationError(Exception):
    """User-friendly validation error.

    Raised when caller input fails validation. The message is surfaced
    unchanged in the ``error`` field of the returned result.
    """

    pass


class ModelReference(NamedTuple):
    owner: str
    name: str
    version: str

    @property
    def model(self) -> str:
        return f"{self.owner}/{self.name}"


def validate_zip_url(zip_url: str | None) -> str:
    """Check that a training archive URL is present and well-formed.

    Args:
        zip_url: HTTP(S) URL or internal API path of the training images
            archive.

    Returns:
        The validated URL.

    Raises:
        ValidationError: If the URL is missing or not an HTTP URL / API path.
    """
    if not zip_url:
        raise ValidationError(
            "ZIP URL is required for Replicate training. "
            "Please create a ZIP file of training images first."
        )

    if not (zip_url.startswith("http") or zip_url.startswith(INTERNAL_API_PREFIX)):
        raise ValidationError(
            f"Invalid ZIP URL format: {zip_url}. Must be a valid HTTP URL or API endpoint."
        )

    return zip_url


def parse_model_reference(model_ref: str | None) -> ModelReference:
    """Split an ``owner/model:version`` reference into its parts.

    Args:
        model_ref: Trained model reference, e.g. ``"acme/flux-lora-me:4f2a..."``.

    Returns:
        ModelReference with owner, name and version.

    Raises:
        ValidationError: If any of the three parts is missing.
    """
    expected = "Expected format: owner/model:version"
    if not model_ref or "/" not in model_ref or ":" not in model_ref:
        raise ValidationError(f"Invalid Replicate model ID format: {model_ref}. {expected}")

    model, _, version = model_ref.rpartition(":")
    owner, _, name = model.partition("/")
    if not version:
        raise ValidationError(f"Could not extract version from model ID: {model_ref}")
    if not owner or not name or "/" in name:
        raise ValidationError(f"Invalid Replicate model ID format: {model_ref}. {expected}")

    return ModelReference(owner=owner, name=name, version=version)
