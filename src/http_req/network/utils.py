"""
Network utilities for http_req.
"""

import socket
import ssl
from typing import Any, Dict


def create_ssl_context() -> ssl.SSLContext:
    """
    Create a client SSL context backed by the system trust store.

    Returns:
        Context that verifies certificates and host names
    """
    return ssl.create_default_context()


def get_socket_info(sock: socket.socket) -> Dict[str, Any]:
    """
    Get information about a socket.

    Args:
        sock: Socket object

    Returns:
        Dictionary with socket information
    """
    info: Dict[str, Any] = {}

    try:
        info["peername"] = sock.getpeername()
    except OSError:
        info["peername"] = None

    try:
        info["sockname"] = sock.getsockname()
    except OSError:
        info["sockname"] = None

    return info
