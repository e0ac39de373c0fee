"""
Pytest configuration for the add-commitment function.

Provides fixtures for:
- Environment isolation (no stray AWS/app env vars, fresh cached settings)
- An in-memory DynamoDB client double with put-item overwrite semantics
- Valid commitment payloads and API Gateway proxy events
"""

from __future__ import annotations

import json
import os
import uuid
from typing import Any, Callable, Dict, List, Optional

import pytest

from add_commitment.config import Settings, get_settings
from add_commitment.infrastructure.dynamodb import get_dynamodb_client
from add_commitment.writer import CommitmentWriter

TEST_TABLE = "CommitmentsTable-test"

_ISOLATED_ENV_VARS = (
    "COMMITMENTS_TABLE",
    "AWS_REGION",
    "DYNAMODB_ENDPOINT_URL",
    "APP_ENV",
    "LOG_LEVEL",
    "JSON_LOGS",
    "LENIENT_BODY_PARSING",
    "INCLUDE_ERROR_DETAILS",
)


class FakeDynamoClient:
    """
    Minimal stand-in for a boto3 DynamoDB client.

    Stores items per table keyed by the `id` attribute; a put on an existing
    key replaces the item, as DynamoDB's PutItem does.
    """

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.tables: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.put_calls: List[Dict[str, Any]] = []
        self.error = error

    def put_item(self, TableName: str, Item: Dict[str, Any]) -> Dict[str, Any]:
        self.put_calls.append({"TableName": TableName, "Item": Item})
        if self.error is not None:
            raise self.error
        self.tables.setdefault(TableName, {})[Item["id"]["S"]] = Item
        return {}

    def items(self, table_name: str = TEST_TABLE) -> Dict[str, Dict[str, Any]]:
        return self.tables.get(table_name, {})


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Clear app env vars and the settings/client caches around every test.
    """
    for name in _ISOLATED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_dynamodb_client.cache_clear()
    yield
    get_settings.cache_clear()
    get_dynamodb_client.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides, ignoring any `.env` file.
    """
    return Settings(
        _env_file=None,
        commitments_table=TEST_TABLE,
        aws_region="us-east-1",
        log_level="DEBUG",
        json_logs=False,
    )


@pytest.fixture
def fake_client() -> FakeDynamoClient:
    return FakeDynamoClient()


@pytest.fixture
def writer(fake_client: FakeDynamoClient) -> CommitmentWriter:
    return CommitmentWriter(fake_client, TEST_TABLE)


@pytest.fixture
def valid_payload() -> Dict[str, str]:
    return {
        "paymentId": str(uuid.uuid4()),
        "userId": str(uuid.uuid4()),
        "paymentTimestamp": "2024-01-01T00:00:00Z",
        "description": "rent",
        "currency": "USD",
        "amount": "1500.00",
    }


@pytest.fixture
def make_event() -> Callable[..., Dict[str, Any]]:
    """
    Build an API Gateway proxy event around a body (serialized unless already text).
    """

    def _make(body: Any, **extra: Any) -> Dict[str, Any]:
        if body is not None and not isinstance(body, (str, bytes)):
            body = json.dumps(body)
        event = {
            "httpMethod": "POST",
            "path": "/commitments",
            "headers": {"Content-Type": "application/json"},
            "isBase64Encoded": False,
            "body": body,
        }
        event.update(extra)
        return event

    return _make


@pytest.fixture(scope="session")
def integration_enabled() -> bool:
    return os.getenv("RUN_INTEGRATION_TESTS", "0") == "1"
