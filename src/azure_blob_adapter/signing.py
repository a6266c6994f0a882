"""Time-limited, read-only signed URLs for blobs."""

from datetime import datetime, timezone

from azure.storage.blob import (
    BlobSasPermissions,
    ContainerSasPermissions,
    generate_blob_sas,
    generate_container_sas,
)

from azure_blob_adapter.config import StorageConfig
from azure_blob_adapter.exceptions import InvalidArgumentError, SigningError
from azure_blob_adapter.url_resolver import PathResolver


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC already.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SignedUrlGenerator:
    """
    Builds service SAS URLs signed with the storage account key.

    Key prefix and root container rules are the same as for public URLs.
    Expiry is enforced by Azure; this class only encodes it.
    """

    def __init__(self, config: StorageConfig, resolver: PathResolver | None = None):
        self._account_name = config.account_name
        self._account_key = config.account_key
        self._resolver = resolver or PathResolver(config)

    def generate(self, key: str, expires_at: datetime) -> str:
        """
        Generates a read-only URL valid until the given instant.

        Args:
            key: Object key, optionally with a leading slash.
            expires_at: Expiry instant. Naive values are treated as UTC.

        Returns:
            The object URL with SAS query parameters appended.

        Raises:
            SigningError: If no account key is configured or it is malformed.
            InvalidArgumentError: If expires_at is not in the future.
        """
        object_name = self._resolver.object_name(key)
        if not self._account_key:
            raise SigningError(object_name, "no account key configured")

        expiry = _as_utc(expires_at)
        if expiry <= datetime.now(timezone.utc):
            raise InvalidArgumentError("expires_at", f"{expiry.isoformat()} is not in the future")

        try:
            if object_name:
                token = generate_blob_sas(
                    account_name=self._account_name,
                    container_name=self._resolver.container_name,
                    blob_name=object_name,
                    account_key=self._account_key,
                    permission=BlobSasPermissions(read=True),
                    expiry=expiry,
                )
            else:
                token = generate_container_sas(
                    account_name=self._account_name,
                    container_name=self._resolver.container_name,
                    account_key=self._account_key,
                    permission=ContainerSasPermissions(read=True),
                    expiry=expiry,
                )
        except ValueError as e:
            raise SigningError(object_name, "account key is not valid base64", cause=e) from e

        return f"{self._resolver.url(key)}?{token}"


def generate_temporary_url(config: StorageConfig, key: str, expires_at: datetime) -> str:
    """Generates a read-only signed URL for an object. See SignedUrlGenerator.generate."""
    return SignedUrlGenerator(config).generate(key, expires_at)
