"""
Mock network implementations for testing.

This module provides in-memory implementations of NetworkStream and
NetworkBackend so the request engine can be exercised without sockets.
"""

from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import ConnectionError
from .backend import NetworkBackend
from .stream import NetworkStream


class MockNetworkStream(NetworkStream):
    """
    Mock network stream for testing.

    Reads are served from ``data``; writes are recorded and exposed
    through ``written_data``.
    """

    def __init__(self, data: bytes = b"", read_size: Optional[int] = None):
        """
        Initialize the mock stream.

        Args:
            data: Data available for reading.
            read_size: If set, caps every read at this many bytes to
                       mimic a socket returning short reads.
        """
        self._data = data
        self._position = 0
        self._read_size = read_size
        self._closed = False
        self._extra_info: Dict[str, Any] = {}
        self._write_buffer: List[bytes] = []
        self.read_calls: List[Optional[int]] = []
        self.flush_count = 0

    def read(self, max_bytes: Optional[int] = None) -> bytes:
        if self._closed:
            raise RuntimeError("Stream is closed")

        self.read_calls.append(max_bytes)

        if self._position >= len(self._data):
            return b""

        end = len(self._data)
        if max_bytes is not None:
            end = min(end, self._position + max_bytes)
        if self._read_size is not None:
            end = min(end, self._position + self._read_size)

        result = self._data[self._position:end]
        self._position = end
        return result

    def write(self, data: bytes) -> None:
        if self._closed:
            raise RuntimeError("Stream is closed")

        self._write_buffer.append(bytes(data))

    def flush(self) -> None:
        self.flush_count += 1

    def close(self) -> None:
        self._closed = True

    def get_extra_info(self, name: str) -> Optional[Any]:
        return self._extra_info.get(name)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def written_data(self) -> bytes:
        """Get all data that was written to the stream."""
        return b"".join(self._write_buffer)

    @property
    def remaining_data(self) -> bytes:
        """Get the data that has not been read yet."""
        return self._data[self._position:]

    def set_extra_info(self, name: str, value: Any) -> None:
        self._extra_info[name] = value

    def add_data(self, data: bytes) -> None:
        """Add data to be available for reading."""
        self._data += data


class MockNetworkBackend(NetworkBackend):
    """
    Mock network backend for testing.

    Every TCP connection is served ``response``. A TLS upgrade moves
    the unread data onto a new stream flagged with ``ssl_object``.
    """

    def __init__(self, response: bytes = b"", refuse: bool = False):
        self._response = response
        self._refuse = refuse
        self.connections: List[Tuple[Tuple[str, int], MockNetworkStream]] = []
        self.tls_connections: List[Tuple[str, MockNetworkStream]] = []

    def connect_tcp(self, host: str, port: int) -> MockNetworkStream:
        if self._refuse:
            raise ConnectionError(f"could not connect to {host}:{port}")

        stream = MockNetworkStream(self._response)
        stream.set_extra_info("peername", (host, port))
        stream.set_extra_info("ssl_object", False)
        self.connections.append(((host, port), stream))
        return stream

    def connect_tls(self, stream: NetworkStream, host: str) -> MockNetworkStream:
        data = b""
        if isinstance(stream, MockNetworkStream):
            data = stream.remaining_data

        tls_stream = MockNetworkStream(data)
        tls_stream.set_extra_info("peername", stream.get_extra_info("peername"))
        tls_stream.set_extra_info("ssl_object", True)
        tls_stream.set_extra_info("server_hostname", host)
        self.tls_connections.append((host, tls_stream))
        return tls_stream

    def reset(self) -> None:
        """Forget all recorded connections."""
        self.connections.clear()
        self.tls_connections.clear()
