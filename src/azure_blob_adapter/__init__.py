from azure_blob_adapter.config import (
    AppConfig,
    CacheConfig,
    RetryConfig,
    StorageConfig,
    load_config,
)
from azure_blob_adapter.exceptions import (
    CacheServiceError,
    InvalidArgumentError,
    InvalidConfigurationError,
    SigningError,
    StorageObjectNotFoundError,
    StorageOperationError,
    StoragePermissionError,
)
from azure_blob_adapter.logging import setup_logging
from azure_blob_adapter.models import FileAttributes
from azure_blob_adapter.signing import SignedUrlGenerator, generate_temporary_url
from azure_blob_adapter.url_resolver import PathResolver, resolve_url

__all__ = [
    "setup_logging",
    "AppConfig",
    "CacheConfig",
    "RetryConfig",
    "StorageConfig",
    "load_config",
    "CacheServiceError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "SigningError",
    "StorageObjectNotFoundError",
    "StorageOperationError",
    "StoragePermissionError",
    "FileAttributes",
    "PathResolver",
    "resolve_url",
    "SignedUrlGenerator",
    "generate_temporary_url",
]
