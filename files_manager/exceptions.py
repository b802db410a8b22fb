"""
Exceptions raised by the files_manager storage layer.

Only configuration parsing and the explicit connect steps raise these.
Errors from pymongo/motor and redis during normal operations propagate
unchanged.
"""

from typing import Any, Dict, Optional


class FilesManagerError(Exception):
    """Base exception for all files_manager errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(FilesManagerError):
    """Invalid value for a configuration option."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details=details)
        self.config_key = config_key


class StorageConnectionError(FilesManagerError):
    """A backing server could not be reached during startup."""

    def __init__(self, message: str, url: Optional[str] = None):
        details = {"url": url} if url else None
        super().__init__(message, details=details)
        self.url = url


class DocumentStoreConnectionError(StorageConnectionError):
    pass


class CacheConnectionError(StorageConnectionError):
    pass
