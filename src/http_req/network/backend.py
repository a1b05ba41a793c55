"""
Network backend interface for http_req.

A backend opens plaintext TCP streams and upgrades them to TLS. The
Request layer picks between the two based on the URI scheme.
"""

from abc import ABC, abstractmethod
from .stream import NetworkStream


class NetworkBackend(ABC):
    """Interface for network backend implementations."""

    @abstractmethod
    def connect_tcp(self, host: str, port: int) -> NetworkStream:
        """
        Connect to a TCP endpoint.

        Args:
            host: The hostname or IP address to connect to.
            port: The port number to connect to.

        Returns:
            A NetworkStream representing the TCP connection.

        Raises:
            ConnectionError: If the connection fails.
        """
        pass

    @abstractmethod
    def connect_tls(self, stream: NetworkStream, host: str) -> NetworkStream:
        """
        Wrap a connected TCP stream with a TLS client handshake.

        Args:
            stream: The existing TCP NetworkStream to upgrade.
            host: The hostname used for SNI and certificate verification.

        Returns:
            A NetworkStream representing the TLS connection.

        Raises:
            TLSError: If the handshake or certificate validation fails.
        """
        pass
