import base64
from unittest.mock import MagicMock

import pytest
from azure.storage.blob import BlobServiceClient

from azure_blob_adapter import StorageConfig

ACCOUNT_NAME = "azure_account"
ACCOUNT_KEY = base64.b64encode(b"azure_key").decode()
CONTAINER_NAME = "azure_container"


@pytest.fixture
def storage_config():
    return StorageConfig(
        account_name=ACCOUNT_NAME,
        account_key=ACCOUNT_KEY,
        container_name=CONTAINER_NAME,
    )


@pytest.fixture
def blob_service_client():
    """A real SDK client; constructing it performs no network I/O."""
    return BlobServiceClient.from_connection_string(
        f"DefaultEndpointsProtocol=https;AccountName={ACCOUNT_NAME};AccountKey={ACCOUNT_KEY}"
    )


@pytest.fixture
def service_client():
    return MagicMock(spec=BlobServiceClient)


@pytest.fixture
def container(service_client):
    return service_client.get_container_client.return_value
