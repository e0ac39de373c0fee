from __future__ import annotations

from typing import Any, Dict, List

import pytest
from botocore.exceptions import ClientError, NoRegionError

from add_commitment import config
from add_commitment.config import Settings
from add_commitment.errors import StorageError
from add_commitment.infrastructure import dynamodb as dynamodb_module
from add_commitment.infrastructure.dynamodb import client_kwargs, get_dynamodb_client
from scripts import create_table


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.commitments_table == "CommitmentsTable"
    assert settings.aws_region is None
    assert settings.dynamodb_endpoint_url is None
    assert settings.log_level == "INFO"
    assert settings.json_logs is True
    assert settings.lenient_body_parsing is False
    assert settings.include_error_details is True


def test_get_settings_reads_environment(monkeypatch):
    monkeypatch.setenv("COMMITMENTS_TABLE", "prod-commitments")
    monkeypatch.setenv("LENIENT_BODY_PARSING", "true")
    monkeypatch.setenv("DYNAMODB_ENDPOINT_URL", "http://localhost:8000")

    settings = config.get_settings()

    assert settings.commitments_table == "prod-commitments"
    assert settings.lenient_body_parsing is True
    assert settings.dynamodb_endpoint_url == "http://localhost:8000"


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()


def test_client_kwargs_only_include_configured_overrides():
    kwargs = client_kwargs(Settings(_env_file=None))
    assert set(kwargs) == {"config"}
    assert kwargs["config"].retries == {"max_attempts": 1, "mode": "standard"}

    kwargs = client_kwargs(
        Settings(_env_file=None, aws_region="eu-west-1", dynamodb_endpoint_url="http://ddb:8000")
    )
    assert kwargs["region_name"] == "eu-west-1"
    assert kwargs["endpoint_url"] == "http://ddb:8000"


def test_get_dynamodb_client_is_created_once(monkeypatch):
    created: List[Dict[str, Any]] = []

    def fake_client(service: str, **kwargs: Any) -> object:
        created.append({"service": service, **kwargs})
        return object()

    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setattr(dynamodb_module.boto3, "client", fake_client)

    first = get_dynamodb_client()
    second = get_dynamodb_client()

    assert first is second
    assert len(created) == 1
    assert created[0]["service"] == "dynamodb"
    assert created[0]["region_name"] == "us-east-1"


def test_get_dynamodb_client_wraps_botocore_errors(monkeypatch):
    def fake_client(service: str, **kwargs: Any) -> object:
        raise NoRegionError()

    monkeypatch.setattr(dynamodb_module.boto3, "client", fake_client)

    with pytest.raises(StorageError, match="Could not create DynamoDB client"):
        get_dynamodb_client()


class _FakeWaiter:
    def __init__(self) -> None:
        self.waited_for: List[str] = []

    def wait(self, TableName: str) -> None:
        self.waited_for.append(TableName)


class _FakeAdminClient:
    def __init__(self, existing: bool = False) -> None:
        self.existing = existing
        self.created: List[Dict[str, Any]] = []
        self.waiter = _FakeWaiter()

    def create_table(self, **kwargs: Any) -> Dict[str, Any]:
        if self.existing:
            raise ClientError(
                {"Error": {"Code": "ResourceInUseException", "Message": "Table already exists"}},
                "CreateTable",
            )
        self.created.append(kwargs)
        return {}

    def get_waiter(self, name: str) -> _FakeWaiter:
        assert name == "table_exists"
        return self.waiter


def test_table_definition_uses_id_hash_key():
    definition = create_table._table_definition("CommitmentsTable")
    assert definition["TableName"] == "CommitmentsTable"
    assert definition["KeySchema"] == [{"AttributeName": "id", "KeyType": "HASH"}]
    assert definition["AttributeDefinitions"] == [{"AttributeName": "id", "AttributeType": "S"}]
    assert definition["BillingMode"] == "PAY_PER_REQUEST"


def test_create_table_creates_and_waits():
    client = _FakeAdminClient()
    assert create_table._create_table(client, "CommitmentsTable", wait=True) is True
    assert client.created[0]["TableName"] == "CommitmentsTable"
    assert client.waiter.waited_for == ["CommitmentsTable"]


def test_create_table_tolerates_existing_table():
    client = _FakeAdminClient(existing=True)
    assert create_table._create_table(client, "CommitmentsTable") is False
    assert client.waiter.waited_for == []
