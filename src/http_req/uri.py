"""
URI value for http_req.

The request engine only needs a handful of fields from a URI: the
scheme, the host, the port to connect to and the resource path sent
in the request line. Parsing is delegated to ``urllib.parse``.
"""

from typing import Dict, NamedTuple, Optional
from urllib.parse import quote, urlsplit

from .exceptions import UriError

DEFAULT_PORTS: Dict[str, int] = {"http": 80, "https": 443}

# Reserved characters and existing escapes pass through. Anything else
# is percent-encoded as UTF-8.
SAFE_CHARS = "!#$%&'()*+,/:;=?@[]~"


def _quote(text: str) -> str:
    return quote(text, safe=SAFE_CHARS)


class Uri(NamedTuple):
    """Immutable representation of a parsed URI."""

    scheme: str
    user_info: Optional[str]
    host: Optional[str]
    port: Optional[int]
    path: str
    query: Optional[str]
    fragment: Optional[str]
    raw: str

    @classmethod
    def parse(cls, text: str) -> "Uri":
        """
        Parse a URI string.

        Args:
            text: Absolute URI such as ``https://example.com:8443/a?b=c``

        Returns:
            New Uri instance

        Raises:
            UriError: If the text has no scheme, an invalid port
                or a host that cannot be IDNA-encoded
        """
        try:
            parts = urlsplit(text)
            port = parts.port
        except ValueError as exc:
            raise UriError(f"invalid uri {text!r}", cause=exc) from exc

        if not parts.scheme:
            raise UriError(f"missing scheme in {text!r}")

        host = parts.hostname
        if host and not host.isascii():
            try:
                host.encode("idna")
            except UnicodeError as exc:
                raise UriError(f"invalid host in {text!r}", cause=exc) from exc

        user_info = None
        if "@" in parts.netloc:
            user_info = parts.netloc.rpartition("@")[0]

        return cls(
            scheme=parts.scheme,
            user_info=user_info,
            host=host,
            port=port,
            path=parts.path,
            query=parts.query or None,
            fragment=parts.fragment or None,
            raw=text,
        )

    @property
    def default_port(self) -> Optional[int]:
        """Conventional port for the scheme, if known."""
        return DEFAULT_PORTS.get(self.scheme)

    @property
    def corr_port(self) -> int:
        """Port to connect to: the explicit port, else the scheme default."""
        if self.port is not None:
            return self.port
        return self.default_port or DEFAULT_PORTS["http"]

    @property
    def resource(self) -> str:
        """Path and query as sent in the request line, percent-encoded."""
        resource = self.path or "/"
        if self.query:
            resource += "?" + self.query
        return _quote(resource)

    @property
    def ascii_host(self) -> str:
        """Host name in its ASCII (IDNA) form."""
        host = self.host or ""
        if host.isascii():
            return host
        return host.encode("idna").decode("ascii")

    @property
    def escaped(self) -> str:
        """The URI text with spaces and non-ASCII characters percent-encoded."""
        return _quote(self.raw)

    @property
    def host_header(self) -> str:
        """Value for the Host header, with the port only when non-default."""
        host = self.ascii_host
        if ":" in host:
            host = f"[{host}]"
        if self.port is not None and self.port != self.default_port:
            return f"{host}:{self.port}"
        return host

    def __str__(self) -> str:
        return self.raw
