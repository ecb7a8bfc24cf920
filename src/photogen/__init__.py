"""photogen - Replicate training and inference adapter for personalized photos."""

__version__ = "0.1.0"

from photogen.core.config import PhotogenConfig, config
from photogen.core.service import ReplicateService

__all__ = [
    "PhotogenConfig",
    "ReplicateService",
    "config",
]
