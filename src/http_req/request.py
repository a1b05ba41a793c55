"""
High-level requests for http_req.

Request opens the connection itself, picking a plaintext or TLS
stream from the URI scheme, and closes it once the exchange is over.
The module-level helpers cover the common one-shot cases.
"""

import io
import logging
import time
from typing import Any, Optional, Union

from typing_extensions import Self

from .http11 import Body, RequestBuilder
from .http_primitives import HeaderInput, Method, Sink
from .network.backend import NetworkBackend
from .network.sync import SyncBackend
from .response import Response
from .uri import Uri

logger = logging.getLogger(__name__)

HTTPS_SCHEME = "https"


class Request:
    """
    Relatively high-level HTTP request.

    It opens a TCP stream (wrapped with TLS for ``https`` URIs) for
    every ``send`` and sends ``Connection: Close``, so each Request
    uses exactly one connection.
    """

    def __init__(self, uri: Uri, backend: Optional[NetworkBackend] = None) -> None:
        self.inner = RequestBuilder(uri)
        self.inner.add_header("Connection", "Close")
        self._backend = backend or SyncBackend()

    @property
    def uri(self) -> Uri:
        return self.inner.uri

    def set_headers(self, headers: HeaderInput) -> Self:
        """Replace all headers with ``headers``."""
        self.inner.set_headers(headers)
        return self

    def add_header(self, key: Any, value: Any) -> Self:
        """Add a header to the existing ones."""
        self.inner.add_header(key, value)
        return self

    def set_method(self, method: Union[Method, str, bytes]) -> Self:
        """Change the request method."""
        self.inner.set_method(method)
        return self

    def set_body(self, body: Optional[Body]) -> Self:
        """Set the request body."""
        self.inner.set_body(body)
        return self

    def send(self, writer: Sink) -> Response:
        """
        Connect, send the request and stream the response body to ``writer``.

        The message is serialized before connecting, so an encoding error
        never opens a connection. A missing host is passed on as an empty
        string, so that failure surfaces from the connect attempt.

        Raises:
            ConnectionError: If connecting, reading or writing fails
            TLSError: If the TLS handshake fails
            ProtocolError: If a header cannot be encoded or the response
                head is malformed
        """
        msg = self.inner.parse_msg()
        host = self.uri.host or ""
        port = self.uri.corr_port
        start_time = time.time()

        try:
            with self._backend.connect_tcp(host, port) as stream:
                if self.uri.scheme == HTTPS_SCHEME:
                    with self._backend.connect_tls(stream, host) as tls_stream:
                        response = self.inner.send_msg(tls_stream, msg, writer)
                else:
                    response = self.inner.send_msg(stream, msg, writer)
        except Exception as e:
            duration = time.time() - start_time
            logger.error(f"{self.inner.method} {self.uri} failed: {e} ({duration:.3f}s)")
            raise

        duration = time.time() - start_time
        logger.debug(
            f"{self.inner.method} {self.uri} -> {response.status_code} ({duration:.3f}s)"
        )
        return response


def _as_uri(uri: Union[str, Uri]) -> Uri:
    if isinstance(uri, Uri):
        return uri
    return Uri.parse(uri)


def get(
    uri: Union[str, Uri],
    writer: Sink,
    backend: Optional[NetworkBackend] = None,
) -> Response:
    """Send a GET request, writing the body to ``writer``."""
    request = Request(_as_uri(uri), backend=backend)

    return request.send(writer)


def head(uri: Union[str, Uri], backend: Optional[NetworkBackend] = None) -> Response:
    """Send a HEAD request and return the response head."""
    request = Request(_as_uri(uri), backend=backend)
    request.set_method(Method.HEAD)

    return request.send(io.BytesIO())


def post(
    uri: Union[str, Uri],
    body: Body,
    writer: Sink,
    backend: Optional[NetworkBackend] = None,
) -> Response:
    """Send a POST request with ``body``, writing the response body to ``writer``."""
    request = Request(_as_uri(uri), backend=backend)
    request.set_method(Method.POST)
    request.add_header("Content-Length", len(body))
    request.set_body(body)

    return request.send(writer)
