"""Replicate client setup and credential resolution.

The API token is resolved once, in priority order:

1. An explicit ``api_token`` argument
2. ``REPLICATE_API_TOKEN``
3. ``NEXT_PUBLIC_REPLICATE_API_TOKEN``

If none is set, :class:`ProviderClient` refuses to construct. This is the
only place in the adapter that raises to its caller; every operation built on
top of the client returns tagged results instead.

A single :class:`replicate.Client` is created per :class:`ProviderClient` and
shared read-only for the lifetime of the process.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

import replicate

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS: tuple[str, ...] = ("REPLICATE_API_TOKEN", "NEXT_PUBLIC_REPLICATE_API_TOKEN")


class MissingCredentialsError(RuntimeError):
    """Raised when no Replicate API token can be found."""

    pass


def resolve_api_token(
    api_token: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Resolve the Replicate API token.

    Args:
        api_token: Explicit token; wins over the environment when non-empty.
        environ: Environment mapping to read (defaults to ``os.environ``).

    Returns:
        The API token.

    Raises:
        MissingCredentialsError: If no source provides a token.
    """
    env = os.environ if environ is None else environ

    token = api_token
    for name in TOKEN_ENV_VARS:
        if token:
            break
        token = env.get(name)

    if not token:
        # Variable names only; values are never logged.
        available = [key for key in env if "REPLICATE" in key]
        logger.error(f"No Replicate API token found. Replicate variables present: {available}")
        raise MissingCredentialsError(
            "Replicate API token is required. Please set REPLICATE_API_TOKEN environment variable."
        )

    logger.info(f"Replicate API token loaded ({token[:8]}...)")
    return token


class ProviderClient:
    """Owns the long-lived Replicate client handle.

    Attributes:
        client (replicate.Client):
            The SDK client used for every provider call.

    Examples
    --------
        >>> provider = ProviderClient()  # reads REPLICATE_API_TOKEN
        >>> provider.client.trainings.get("abc123")

    Tests inject a stand-in client directly:

        >>> provider = ProviderClient(client=MagicMock())
    """

    def __init__(self, api_token: str | None = None, client: replicate.Client | None = None) -> None:
        if client is not None:
            self.client = client
            return

        token = resolve_api_token(api_token)
        try:
            self.client = replicate.Client(api_token=token)
        except Exception as e:
            logger.error(f"Failed to initialize Replicate client: {e}")
            raise
        logger.info("Replicate client initialized successfully")
