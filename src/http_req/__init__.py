"""
http_req - minimal synchronous HTTP/1.1 client

Builds HTTP/1.1 request messages, sends them over plaintext or TLS
sockets and streams the response body to a caller-supplied sink.
"""

__version__ = "0.1.0"

from .http_primitives import Headers, Method
from .uri import Uri
from .response import Response
from .streams import copy_to_end, copy_until
from .http11 import RequestBuilder
from .request import Request, get, head, post
from .exceptions import (
    HTTPReqError,
    ConnectionError,
    ProtocolError,
    TLSError,
    UriError,
)

__all__ = [
    "Headers",
    "Method",
    "Uri",
    "Response",
    "copy_until",
    "copy_to_end",
    "RequestBuilder",
    "Request",
    "get",
    "head",
    "post",
    "HTTPReqError",
    "ConnectionError",
    "ProtocolError",
    "TLSError",
    "UriError",
]
