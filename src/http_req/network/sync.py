"""
Blocking socket backend for http_req.

SocketStream wraps a connected ``socket.socket`` (or ``ssl.SSLSocket``)
and SyncBackend creates them. Timeouts are a property of the transport
and are configured here, not in the request engine.
"""

import logging
import socket
import ssl
from typing import Any, Optional

from ..exceptions import ConnectionError, TLSError
from .backend import NetworkBackend
from .stream import NetworkStream
from .utils import create_ssl_context, get_socket_info

logger = logging.getLogger(__name__)


class SocketStream(NetworkStream):
    """Network stream over a blocking socket."""

    DEFAULT_READ_SIZE = 65536

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock
        self._closed = False

    def read(self, max_bytes: Optional[int] = None) -> bytes:
        if self._closed:
            raise RuntimeError("Stream is closed")
        try:
            return self.sock.recv(max_bytes or self.DEFAULT_READ_SIZE)
        except ssl.SSLEOFError:
            # peer dropped the connection without close_notify
            return b""
        except OSError as exc:
            raise ConnectionError(f"socket read failed: {exc}", cause=exc) from exc

    def write(self, data: bytes) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")
        try:
            self.sock.sendall(data)
        except OSError as exc:
            raise ConnectionError(f"socket write failed: {exc}", cause=exc) from exc

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self.sock.close()

    def get_extra_info(self, name: str) -> Optional[Any]:
        if name == "socket":
            return self.sock
        elif name in ("peername", "sockname"):
            return get_socket_info(self.sock)[name]
        elif name == "ssl_object":
            return isinstance(self.sock, ssl.SSLSocket)
        return None

    @property
    def is_closed(self) -> bool:
        return self._closed


class SyncBackend(NetworkBackend):
    """
    Network backend using blocking sockets and the ``ssl`` module.

    Args:
        timeout: Socket timeout in seconds applied to connect, read and
                 write. None blocks indefinitely.
        ssl_context: Context used for TLS. Defaults to one built on the
                     system trust store.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        ssl_context: Optional[ssl.SSLContext] = None,
    ) -> None:
        self._timeout = timeout
        self._ssl_context = ssl_context

    def connect_tcp(self, host: str, port: int) -> SocketStream:
        logger.debug(f"Connecting to {host}:{port}")
        try:
            sock = socket.create_connection((host, port), timeout=self._timeout)
        except socket.gaierror as exc:
            raise ConnectionError(f"DNS failure for host {host!r}", cause=exc) from exc
        except OSError as exc:
            raise ConnectionError(
                f"could not connect to {host}:{port}: {exc}", cause=exc
            ) from exc

        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        return SocketStream(sock)

    def connect_tls(self, stream: NetworkStream, host: str) -> SocketStream:
        if self._ssl_context is None:
            self._ssl_context = create_ssl_context()

        sock = stream.get_extra_info("socket")
        logger.debug(f"Starting TLS handshake with {host}")
        try:
            ssl_sock = self._ssl_context.wrap_socket(sock, server_hostname=host)
        except (ssl.SSLError, ssl.CertificateError, ValueError) as exc:
            raise TLSError(f"handshake with {host!r} failed: {exc}", cause=exc) from exc
        except OSError as exc:
            raise ConnectionError(f"connection lost during handshake: {exc}", cause=exc) from exc

        return SocketStream(ssl_sock)
