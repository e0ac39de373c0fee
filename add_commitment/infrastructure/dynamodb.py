"""
DynamoDB client factory for the add-commitment function.

The boto3 client is created once per process and reused across invocations;
Lambda keeps the process warm between requests, so connection setup is paid
only on cold start. The client holds no request-specific state and is never
mutated after creation.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from add_commitment.config import Settings, get_settings
from add_commitment.errors import StorageError

# Retries belong to the invoking infrastructure; a failed put surfaces immediately.
_CLIENT_CONFIG = Config(retries={"max_attempts": 1, "mode": "standard"})


def client_kwargs(settings: Settings) -> Dict[str, Any]:
    """Build keyword arguments for `boto3.client` from settings."""
    kwargs: Dict[str, Any] = {"config": _CLIENT_CONFIG}
    if settings.aws_region:
        kwargs["region_name"] = settings.aws_region
    if settings.dynamodb_endpoint_url:
        kwargs["endpoint_url"] = settings.dynamodb_endpoint_url
    return kwargs


@lru_cache(maxsize=1)
def get_dynamodb_client() -> Any:
    """
    Return the process-wide DynamoDB client, creating it on first use.

    Raises
    ------
    StorageError
        If the client cannot be created (e.g., no region configured).
    """
    try:
        return boto3.client("dynamodb", **client_kwargs(get_settings()))
    except BotoCoreError as exc:
        raise StorageError(f"Could not create DynamoDB client: {exc}") from exc


__all__ = ["client_kwargs", "get_dynamodb_client"]
