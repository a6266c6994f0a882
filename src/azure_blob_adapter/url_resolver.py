"""Object key normalisation and public URL construction."""

from urllib.parse import quote

from azure_blob_adapter.config import ROOT_CONTAINER, StorageConfig

DEFAULT_ENDPOINT_TEMPLATE = "https://{account_name}.blob.core.windows.net"


class PathResolver:
    """
    Maps object keys onto blob names and public URLs for one container.

    The base URL is the custom URL when configured, then the custom blob
    endpoint, then the account's default public endpoint. Objects in the
    root container are addressed without a container segment.
    """

    def __init__(self, config: StorageConfig):
        self._container_name = config.container_name
        self._prefix = config.key_prefix or ""
        base_url = config.custom_base_url or config.endpoint
        if not base_url:
            base_url = DEFAULT_ENDPOINT_TEMPLATE.format(account_name=config.account_name)
        self._base_url = base_url.rstrip("/")

    @property
    def container_name(self) -> str:
        return self._container_name

    def object_name(self, key: str) -> str:
        """
        Returns the blob name for a key.

        Exactly one leading slash is stripped, then the key prefix (if any)
        is joined on with a single slash.
        """
        if key.startswith("/"):
            key = key[1:]
        if not self._prefix:
            return key
        if not key:
            return self._prefix
        return f"{self._prefix}/{key}"

    def relative_path(self, object_name: str) -> str:
        """Strips the key prefix from a blob name reported by the service."""
        if self._prefix and object_name.startswith(f"{self._prefix}/"):
            return object_name[len(self._prefix) + 1 :]
        return object_name

    def url(self, key: str) -> str:
        """Builds the public URL of a key, percent-encoding the container and blob name."""
        segments = [self._base_url]
        if self._container_name != ROOT_CONTAINER:
            segments.append(quote(self._container_name, safe="/~"))
        object_name = self.object_name(key)
        if object_name:
            segments.append(quote(object_name, safe="/~"))
        return "/".join(segments)


def resolve_url(config: StorageConfig, key: str) -> str:
    """
    Resolves the public URL of an object.

    Args:
        config: Storage configuration.
        key: Object key, optionally with a leading slash.

    Returns:
        The absolute URL of the object.
    """
    return PathResolver(config).url(key)
