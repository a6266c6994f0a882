"""Adapter configuration loaded from environment variables."""

import os
from typing import Literal

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    Field,
    NonNegativeInt,
    PositiveInt,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from azure_blob_adapter.exceptions import InvalidConfigurationError

ROOT_CONTAINER = "$root"

_http_url = TypeAdapter(AnyHttpUrl)


class StorageConfig(BaseModel, frozen=True):
    """
    Azure Blob Storage account and container configuration.

    Validated once at construction. Invalid values raise
    InvalidConfigurationError rather than a pydantic ValidationError.
    """

    account_name: str = ""
    account_key: str | None = Field(default=None, repr=False)
    container_name: str
    custom_base_url: str | None = None
    key_prefix: str | None = None
    endpoint: str | None = None
    sas_token: str | None = Field(default=None, repr=False)

    @field_validator("container_name")
    @classmethod
    def _require_container_name(cls, value: str) -> str:
        if not value:
            raise InvalidConfigurationError("container_name", "must not be empty")
        return value

    @field_validator("custom_base_url", "endpoint")
    @classmethod
    def _require_absolute_url(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return None
        try:
            _http_url.validate_python(value)
        except ValidationError as e:
            raise InvalidConfigurationError(
                info.field_name, f"'{value}' is not an absolute http(s) URL", cause=e
            ) from e
        return value

    @field_validator("key_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str | None) -> str | None:
        # Surrounding slashes are dropped so joins never double up.
        if value is None:
            return None
        return value.strip("/") or None

    @model_validator(mode="after")
    def _require_credentials(self) -> "StorageConfig":
        if self.sas_token:
            if not self.endpoint:
                raise InvalidConfigurationError(
                    "endpoint", "required when authenticating with a SAS token"
                )
        elif not self.account_name:
            raise InvalidConfigurationError(
                "account_name", "required when not authenticating with a SAS token"
            )
        return self


class RetryConfig(BaseModel, frozen=True):
    """Retry policy applied by the blob service client."""

    tries: NonNegativeInt = 3
    interval: NonNegativeInt = 1000  # milliseconds
    increase: Literal["linear", "exponential"] = "linear"


class CacheConfig(BaseModel, frozen=True):
    """Metadata cache configuration."""

    store: Literal["memory", "redis"] = "memory"
    prefix: str = "azure_blob"
    expire: PositiveInt | None = None  # seconds, None keeps entries until invalidated
    redis_host: str = "redis"
    redis_port: int = 6379


class AppConfig(BaseModel, frozen=True):
    """Root adapter configuration."""

    storage: StorageConfig
    retry: RetryConfig | None = None
    cache: CacheConfig | None = None


def _getenv(name: str) -> str | None:
    return os.getenv(name) or None


def _invalid(setting: str, error: ValidationError) -> InvalidConfigurationError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return InvalidConfigurationError(f"{setting}.{field}", first["msg"], cause=error)


def load_config() -> AppConfig:
    """
    Loads configuration from environment variables.

    Raises:
        InvalidConfigurationError: If a variable holds a value the adapter cannot use.
    """
    retry = None
    if _getenv("AZURE_STORAGE_RETRY_TRIES"):
        try:
            retry = RetryConfig(
                tries=os.getenv("AZURE_STORAGE_RETRY_TRIES"),
                interval=_getenv("AZURE_STORAGE_RETRY_INTERVAL") or 1000,
                increase=_getenv("AZURE_STORAGE_RETRY_INCREASE") or "linear",
            )
        except ValidationError as e:
            raise _invalid("retry", e) from e

    cache = None
    cache_store = _getenv("AZURE_STORAGE_CACHE")
    if cache_store:
        try:
            cache = CacheConfig(
                store=cache_store,
                prefix=_getenv("AZURE_STORAGE_CACHE_PREFIX") or "azure_blob",
                expire=_getenv("AZURE_STORAGE_CACHE_EXPIRE"),
                redis_host=_getenv("REDIS_HOST") or "redis",
                redis_port=_getenv("REDIS_PORT") or 6379,
            )
        except ValidationError as e:
            raise _invalid("cache", e) from e

    return AppConfig(
        storage=StorageConfig(
            account_name=os.getenv("AZURE_STORAGE_NAME", ""),
            account_key=_getenv("AZURE_STORAGE_KEY"),
            container_name=os.getenv("AZURE_STORAGE_CONTAINER", ""),
            custom_base_url=_getenv("AZURE_STORAGE_URL"),
            key_prefix=_getenv("AZURE_STORAGE_PREFIX"),
            endpoint=_getenv("AZURE_STORAGE_ENDPOINT"),
            sas_token=_getenv("AZURE_STORAGE_SAS_TOKEN"),
        ),
        retry=retry,
        cache=cache,
    )
