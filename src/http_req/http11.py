"""
HTTP/1.1 message engine for http_req.

This module implements RequestBuilder, which serializes a request and
runs one request/response exchange over any already-open stream. It
does not open connections itself; see ``request.Request`` for that.
"""

import io
import logging
from typing import Any, Optional, Union

from typing_extensions import Self

from .exceptions import ProtocolError
from .http_primitives import HeaderInput, Headers, Method, Sink
from .network.stream import NetworkStream
from .response import Response
from .streams import copy_to_end, copy_until
from .uri import Uri

logger = logging.getLogger(__name__)

CR_LF = "\r\n"
CR_LF_2 = b"\r\n\r\n"
HTTP_VERSION = "HTTP/1.1"

Body = Union[bytes, bytearray, memoryview]


class RequestBuilder:
    """
    Relatively low-level HTTP request builder.

    It works with any stream that can be read from and written to, and
    does not add a ``Connection`` header, so by default the server may
    keep the connection open after the response.

    The builder keeps references to the ``uri`` and the body it is
    given rather than copies; the caller must keep them unchanged until
    ``send`` returns.
    """

    def __init__(self, uri: Uri) -> None:
        self.uri = uri
        self.version = HTTP_VERSION
        self._method = Method.GET
        self._headers = Headers.default_http(uri)
        self._body: Optional[Body] = None

    @property
    def method(self) -> Method:
        return self._method

    @property
    def headers(self) -> Headers:
        return self._headers

    @property
    def body(self) -> Optional[Body]:
        return self._body

    def set_method(self, method: Union[Method, str, bytes]) -> Self:
        """Set the request method."""
        self._method = Method.coerce(method)
        return self

    def set_headers(self, headers: HeaderInput) -> Self:
        """Replace all headers with ``headers``."""
        self._headers = Headers(headers)
        return self

    def add_header(self, key: Any, value: Any) -> Self:
        """Add a header to the existing ones, replacing one with the same name."""
        self._headers.insert(key, value)
        return self

    def set_body(self, body: Optional[Body]) -> Self:
        """Set the request body, sent verbatim after the header block."""
        self._body = body
        return self

    def parse_msg(self) -> bytes:
        """
        Serialize the request message for this builder.

        The URI parts are ASCII already. Header values must be latin-1.

        Raises:
            ProtocolError: If a header cannot be encoded
        """
        request_line = f"{self._method} {self.uri.resource} {self.version}{CR_LF}"
        headers = "".join(f"{key}: {value}{CR_LF}" for key, value in self._headers)

        try:
            msg = bytearray((request_line + headers + CR_LF).encode("latin-1"))
        except UnicodeEncodeError as exc:
            raise ProtocolError(f"request head is not latin-1: {exc}", cause=exc) from exc

        if self._body is not None:
            msg += self._body

        return bytes(msg)

    def write_msg(self, stream: NetworkStream, msg: bytes) -> None:
        """Write ``msg`` to ``stream`` and flush it."""
        stream.write(msg)
        stream.flush()

    def read_head(self, stream: NetworkStream) -> Response:
        """Read and parse the head of the server's response."""
        head = io.BytesIO()
        copy_until(stream, head, CR_LF_2)

        return Response.from_head(head.getvalue())

    def send(self, stream: NetworkStream, writer: Sink) -> Response:
        """
        Send the request over ``stream``.

        The response body is copied to ``writer`` until the stream ends,
        except for HEAD requests, which never read a body.

        Args:
            stream: An open stream to the server
            writer: Sink receiving the response body

        Returns:
            The parsed response head

        Raises:
            ConnectionError: If reading or writing the stream fails
            ProtocolError: If a header cannot be encoded or the response
                head is malformed
        """
        return self.send_msg(stream, self.parse_msg(), writer)

    def send_msg(self, stream: NetworkStream, msg: bytes, writer: Sink) -> Response:
        """Send an already serialized ``msg`` over ``stream``, as ``send`` does."""
        self.write_msg(stream, msg)
        logger.debug(f"Sent {self._method} {self.uri.resource} ({len(msg)} bytes)")

        response = self.read_head(stream)
        logger.debug(f"Response status: {response.status_code} {response.reason}")

        if self._method is not Method.HEAD:
            received = copy_to_end(stream, writer)
            logger.debug(f"Response body: {received} bytes")

        return response
