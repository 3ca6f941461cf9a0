"""
Error types raised by the item client
"""
from typing import Optional


class ItemClientError(Exception):
    """Base class for all item client errors."""


class RequestError(ItemClientError):
    """The request could not complete: no response was obtained."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class DecodeError(ItemClientError):
    """The response body is not a valid ItemDetail."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ConfigError(ItemClientError):
    """Invalid or missing configuration."""
