"""
Network backend components for http_req.

This module provides the transport abstractions the request engine
runs over: the stream interface, the backend that opens plaintext
and TLS streams, and an in-memory implementation for tests.
"""

from .backend import NetworkBackend
from .stream import NetworkStream
from .sync import SocketStream, SyncBackend
from .mock import MockNetworkBackend, MockNetworkStream
from .utils import create_ssl_context, get_socket_info

__all__ = [
    "NetworkBackend",
    "NetworkStream",
    "SocketStream",
    "SyncBackend",
    "MockNetworkBackend",
    "MockNetworkStream",
    "create_ssl_context",
    "get_socket_info",
]
