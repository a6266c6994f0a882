"""Composition of the blob service client, adapter and metadata cache."""

import logging

import redis
from azure.storage.blob import BlobServiceClient, ExponentialRetry, LinearRetry

from azure_blob_adapter.config import (
    AppConfig,
    CacheConfig,
    RetryConfig,
    StorageConfig,
    load_config,
)
from azure_blob_adapter.infrastructure import (
    AzureBlobStorageAdapter,
    CachedFilesystem,
    MemoryCacheService,
    NullCacheService,
    RedisCacheService,
)
from azure_blob_adapter.infrastructure.interfaces import CacheService, Filesystem
from azure_blob_adapter.logging import setup_logging

logger = logging.getLogger(__name__)


def build_connection_string(config: StorageConfig) -> str:
    """Builds the Azure storage connection string for the configured credentials."""
    if config.sas_token:
        return f"BlobEndpoint={config.endpoint};SharedAccessSignature={config.sas_token};"

    connection_string = f"DefaultEndpointsProtocol=https;AccountName={config.account_name};"
    if config.account_key:
        connection_string += f"AccountKey={config.account_key};"
    if config.endpoint:
        connection_string += f"BlobEndpoint={config.endpoint};"
    return connection_string


def create_retry_policy(config: RetryConfig) -> LinearRetry | ExponentialRetry:
    """
    Creates the SDK retry policy for the configured backoff.

    Connection failures are retried as well as failed requests.

    Args:
        config: Retry settings; interval is in milliseconds.

    Returns:
        An ExponentialRetry when increase is "exponential", otherwise a LinearRetry.
    """
    backoff = config.interval / 1000
    if config.increase == "exponential":
        return ExponentialRetry(
            initial_backoff=backoff,
            increment_base=2,
            retry_total=config.tries,
            retry_connect=config.tries,
        )
    return LinearRetry(
        backoff=backoff,
        retry_total=config.tries,
        retry_connect=config.tries,
    )


def create_blob_service_client(
    config: StorageConfig, retry: RetryConfig | None = None
) -> BlobServiceClient:
    """Creates the blob service client, with a retry policy when configured."""
    options = {}
    if retry is not None:
        options["retry_policy"] = create_retry_policy(retry)
    return BlobServiceClient.from_connection_string(build_connection_string(config), **options)


def create_cache_service(config: CacheConfig | None) -> CacheService:
    """
    Creates the metadata cache for the configured store.

    Raises:
        ConnectionError: If the Redis store is selected and does not answer a ping.
    """
    if config is None:
        return NullCacheService()

    if config.store == "memory":
        return MemoryCacheService(config.prefix, config.expire)

    client = redis.Redis(
        host=config.redis_host,
        port=config.redis_port,
        decode_responses=True,
    )
    try:
        client.ping()
    except redis.RedisError as e:
        logger.error("Redis connection failed", extra={"host": config.redis_host})
        raise ConnectionError("Redis connection failed") from e
    return RedisCacheService(client, config.prefix, config.expire)


def create_filesystem(
    config: AppConfig, client: BlobServiceClient | None = None
) -> Filesystem:
    """
    Creates the Azure-backed filesystem described by the configuration.

    Args:
        config: Adapter configuration.
        client: Blob service client to use instead of building one.

    Returns:
        The adapter wrapped in the metadata cache decorator.
    """
    if client is None:
        client = create_blob_service_client(config.storage, config.retry)
    adapter = AzureBlobStorageAdapter(client, config.storage)
    cache = create_cache_service(config.cache)
    logger.info(
        "Filesystem created",
        extra={
            "container": config.storage.container_name,
            "cache": config.cache.store if config.cache else None,
            "retry": config.retry.increase if config.retry else None,
        },
    )
    return CachedFilesystem(adapter, cache)


def get_filesystem() -> Filesystem:
    """Returns a filesystem configured from environment variables."""
    setup_logging()
    return create_filesystem(load_config())
