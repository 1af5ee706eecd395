"""Errors raised by the qBittorrent client."""

from .models import ApiLevel


class QBittorrentError(Exception):
    """Base class for client errors."""


class ApiNotSupportedError(QBittorrentError):
    """The operation is not available in the active API generation."""

    def __init__(self, operation: str, api_level: ApiLevel):
        self.operation = operation
        self.api_level = api_level
        super().__init__(
            f"{operation} is not supported by the {api_level.value} API"
        )


class LoginFailedError(QBittorrentError):
    """The server rejected the supplied credentials."""
