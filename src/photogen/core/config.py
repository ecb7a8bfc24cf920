"""Configuration management for photogen.

This module provides centralized configuration using Pydantic Settings. All
configuration is loaded from environment variables with the PHOTOGEN_ prefix,
allowing deployments to change provider defaults without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PHOTOGEN_* prefix)
2. .env file in the project root
3. Default values defined in PhotogenConfig

Example .env file:
    PHOTOGEN_MODEL_OWNER=my-replicate-user
    PHOTOGEN_DESTINATION_HARDWARE=gpu-t4
    PHOTOGEN_NUM_INFERENCE_STEPS=28
    PHOTOGEN_LOG_LEVEL=DEBUG

The Replicate API token is deliberately NOT part of this class. It is read
from ``REPLICATE_API_TOKEN`` (or ``NEXT_PUBLIC_REPLICATE_API_TOKEN``) by
:func:`photogen.core.provider.resolve_api_token`, matching the variable names
the hosting platform already exports.

Global Configuration Instance
------------------------------
A global `config` instance is created at module import time:

    from photogen.core.config import config

    print(config.model_owner)
    print(config.lora_base_model)

See Also
--------
- PhotogenConfig: Full configuration class documentation
- photogen.core.service.ReplicateService: main consumer of this config
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhotogenConfig(BaseSettings):
    """Main configuration for the photogen provider adapter.

    Attributes
    ----------
    Destination Models:
        model_owner : str
            Replicate account namespace that owns created destination models
        destination_hardware : str
            Hardware class recorded on created destination models
        destination_visibility : Literal["private", "public"]
            Visibility of created destination models

    Generation:
        lora_base_model : str
            Replicate model that runs a base model plus external LoRA weights
        lora_host : str
            Model-hosting domain that relative LoRA paths are resolved against
        num_inference_steps : int
            Default number of inference steps
        guidance_scale : float
            Guidance scale sent with every prediction
        output_format : Literal["webp", "jpg", "png"]
            Image container requested from the provider
        output_quality : int
            Encoder quality requested from the provider (0-100)
        lora_scale : float
            Default LoRA strength when the request does not specify one
        go_fast : bool
            Ask the LoRA runner for its optimized inference path

    Server:
        server_host : str
            Bind address for the JSON API
        server_port : int
            Port for the JSON API
        log_level : str
            Root logging level applied by the server entry point

    Examples
    --------
    Create a custom configuration:

        >>> custom = PhotogenConfig(model_owner="acme", num_inference_steps=20)
        >>> custom.model_owner
        'acme'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PHOTOGEN_",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )

    # Destination model settings
    model_owner: str = Field(
        default="micahp",
        min_length=1,
        description="Replicate account that owns destination models",
    )
    destination_hardware: str = Field(
        default="gpu-t4",
        description="Hardware class recorded on destination models",
    )
    destination_visibility: Literal["private", "public"] = Field(
        default="private",
        description="Visibility of destination models",
    )

    # Generation settings
    lora_base_model: str = Field(
        default="black-forest-labs/flux-dev-lora",
        description="Replicate model that applies external LoRA weights",
    )
    lora_host: str = Field(
        default="https://huggingface.co/",
        description="Domain that relative LoRA paths are resolved against",
    )
    num_inference_steps: int = Field(
        default=28,
        description="Default number of inference steps",
        ge=1,
        le=100,
    )
    guidance_scale: float = Field(
        default=3.5,
        description="Guidance scale sent with every prediction",
        ge=0.0,
    )
    output_format: Literal["webp", "jpg", "png"] = Field(
        default="webp",
        description="Image format requested from the provider",
    )
    output_quality: int = Field(default=90, ge=0, le=100)
    lora_scale: float = Field(
        default=1.0,
        description="Default LoRA strength",
    )
    go_fast: bool = Field(
        default=True,
        description="Use the LoRA runner's optimized inference path",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level applied by the server entry point",
    )


# Global configuration instance
config = PhotogenConfig()
