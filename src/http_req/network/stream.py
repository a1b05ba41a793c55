"""
Network stream interface for http_req.

This module defines the NetworkStream interface that all network stream
implementations must follow. The request engine only ever talks to this
interface, so plaintext and TLS transports are interchangeable.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class NetworkStream(ABC):
    """
    Interface for blocking network streams.

    Streams are used for exactly one request/response exchange and
    support the context manager protocol so they are always closed.
    """

    @abstractmethod
    def read(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Read data from the stream.

        Args:
            max_bytes: Maximum number of bytes to read. If None, an
                      implementation-defined chunk size is used.

        Returns:
            The data read, or ``b""`` once the peer has closed the stream.

        Raises:
            ConnectionError: If a network error occurs.
        """
        pass

    @abstractmethod
    def write(self, data: bytes) -> None:
        """
        Write all of ``data`` to the stream.

        Raises:
            ConnectionError: If a network error occurs.
        """
        pass

    def flush(self) -> None:
        """Flush buffered writes. Socket streams send eagerly, so this is a no-op."""

    @abstractmethod
    def close(self) -> None:
        """Close the stream and release the underlying socket."""
        pass

    @abstractmethod
    def get_extra_info(self, name: str) -> Optional[Any]:
        """
        Get extra information about the stream.

        Args:
            name: The name of the information to retrieve. Common values include:
                 - "socket": The underlying socket object
                 - "peername": The remote endpoint address
                 - "sockname": The local endpoint address
                 - "ssl_object": Whether the stream is TLS encrypted

        Returns:
            The requested information or None if not available.
        """
        pass

    @property
    @abstractmethod
    def is_closed(self) -> bool:
        """Check if the stream is closed."""
        pass

    def __enter__(self) -> "NetworkStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
