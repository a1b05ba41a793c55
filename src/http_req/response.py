"""
HTTP response head for http_req.

The request engine captures the raw response head (status line,
header lines and the terminating blank line) from the connection and
hands it to ``Response.from_head``. Parsing is done with h11, fed a
synthetic request so its client state machine accepts the response.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

import h11

from .exceptions import ProtocolError
from .http_primitives import Headers


@dataclass(frozen=True)
class Response:
    """
    Immutable HTTP response head.

    The body is not part of this value: the engine streams it to the
    caller's sink separately.
    """

    status_code: int
    reason: str = ""
    version: str = "1.1"
    headers: Headers = field(default_factory=Headers)

    @classmethod
    def from_head(cls, head: Union[bytes, bytearray]) -> "Response":
        """
        Parse a raw response head.

        Args:
            head: Bytes up to and including the first ``\\r\\n\\r\\n``

        Returns:
            New Response instance

        Raises:
            ProtocolError: If the head is malformed or incomplete
        """
        conn = h11.Connection(h11.CLIENT)
        conn.send(h11.Request(method="GET", target="/", headers=[("Host", "localhost")]))
        conn.send(h11.EndOfMessage())

        try:
            conn.receive_data(bytes(head))
            event = conn.next_event()
        except h11.RemoteProtocolError as exc:
            raise ProtocolError(f"malformed response head: {exc}", cause=exc) from exc

        if event is h11.NEED_DATA:
            raise ProtocolError("incomplete response head")

        if not isinstance(event, (h11.Response, h11.InformationalResponse)):
            raise ProtocolError(f"unexpected event {type(event).__name__}")

        headers = Headers(
            (name.decode("latin-1"), value.decode("latin-1"))
            for name, value in event.headers.raw_items()
        )

        return cls(
            status_code=event.status_code,
            reason=event.reason.decode("latin-1"),
            version=event.http_version.decode("ascii"),
            headers=headers,
        )

    def content_len(self) -> Optional[int]:
        """Value of the Content-Length header, if present and valid."""
        value = self.headers.get("Content-Length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    def is_informational(self) -> bool:
        return 100 <= self.status_code < 200

    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

