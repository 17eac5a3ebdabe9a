from __future__ import annotations

from typing import Optional


class ResourceError(Exception):
    """Base class for every failure raised by the resource client."""

    def __init__(self, message: str, *, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class NetworkError(ResourceError):
    """The request did not complete (connection refused, timeout, ...)."""


class ServerError(ResourceError):
    def __init__(self, message: str, *, url: Optional[str] = None, status_code: int = 0):
        super().__init__(message, url=url)
        self.status_code = status_code


class ParseError(ResourceError):
    """The response body was not JSON or did not match the expected shape."""
