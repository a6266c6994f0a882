"""Custom exceptions for the Azure blob storage adapter."""


class InvalidConfigurationError(Exception):
    """Raised when a storage setting is missing or malformed."""

    def __init__(self, setting: str, reason: str, cause: Exception | None = None):
        self.setting = setting
        self.reason = reason
        self.cause = cause
        super().__init__(f"Invalid configuration for '{setting}': {reason}")


class InvalidArgumentError(Exception):
    """Raised when an operation receives an unusable argument."""

    def __init__(self, argument: str, reason: str):
        self.argument = argument
        self.reason = reason
        super().__init__(f"Invalid argument '{argument}': {reason}")


class SigningError(Exception):
    """Raised when a temporary URL cannot be signed."""

    def __init__(self, object_name: str, reason: str, cause: Exception | None = None):
        self.object_name = object_name
        self.reason = reason
        self.cause = cause
        super().__init__(f"Failed to sign URL for '{object_name}': {reason}")


class StorageObjectNotFoundError(Exception):
    """Raised when the requested blob does not exist."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Object '{object_name}' not found in storage")


class StoragePermissionError(Exception):
    """Raised when the storage account rejects the credentials for an operation."""

    def __init__(self, object_name: str, operation: str, cause: Exception | None = None):
        self.object_name = object_name
        self.operation = operation
        self.cause = cause
        super().__init__(f"Permission denied to {operation} '{object_name}'")


class StorageOperationError(Exception):
    """Raised when a storage operation fails for any other reason."""

    def __init__(self, object_name: str, operation: str, cause: Exception | None = None):
        self.object_name = object_name
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation} '{object_name}' in storage")


class CacheServiceError(Exception):
    """Raised when cache operations fail."""

    def __init__(self, key: str, operation: str, cause: Exception | None = None):
        self.key = key
        self.operation = operation
        self.cause = cause
        super().__init__(f"Cache {operation} failed for key '{key}'")
