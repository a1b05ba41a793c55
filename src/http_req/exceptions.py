"""
Custom exceptions for http_req.

This module defines the exception hierarchy used throughout
the library. Transport failures are converted into these types
with the original exception kept on ``cause``.
"""

from typing import Optional


class HTTPReqError(Exception):
    """Base exception for all http_req errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConnectionError(HTTPReqError):
    """
    Raised on I/O failures: refused or reset connections, DNS failures,
    and streams that end before the expected data arrived.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Connection error: {message}", cause)


class TLSError(HTTPReqError):
    """Raised when the TLS handshake or certificate validation fails."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"TLS error: {message}", cause)


class ProtocolError(HTTPReqError):
    """Raised when a response header block is not valid HTTP/1.1."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Protocol error: {message}", cause)


class UriError(HTTPReqError):
    """Raised when a URI cannot be parsed."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"URI error: {message}", cause)
