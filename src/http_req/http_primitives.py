"""
HTTP primitives for http_req.

This module defines the small value types shared by the request
engine: the request method, the header collection and the byte
source/sink protocols the engine reads from and writes to.
"""

from enum import Enum
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Union,
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from .uri import Uri


HeaderInput = Union["Headers", Mapping[Any, Any], Iterable[Tuple[Any, Any]]]


class Source(Protocol):
    """Anything bytes can be read from, ``b""`` meaning end of data."""

    def read(self, max_bytes: int) -> bytes:
        ...


class Sink(Protocol):
    """Anything bytes can be written to, such as ``io.BytesIO`` or a binary file."""

    def write(self, data: bytes) -> Any:
        ...

    def flush(self) -> None:
        ...


class Method(Enum):
    """HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: Union["Method", str, bytes]) -> "Method":
        """
        Convert a method token into a Method.

        Args:
            value: A Method, or its token as str or bytes (any case)

        Returns:
            The matching Method

        Raises:
            ValueError: If the token is not a known method
        """
        if isinstance(value, Method):
            return value
        if isinstance(value, bytes):
            value = value.decode("ascii")
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(f"Unknown HTTP method: {value!r}") from None


def _to_str(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


class Headers:
    """
    Ordered, case-insensitive collection of HTTP headers.

    Iteration yields ``(key, value)`` string pairs in insertion order,
    with keys in the case they were first inserted with.
    """

    def __init__(self, headers: Optional[HeaderInput] = None) -> None:
        self._items: Dict[str, Tuple[str, str]] = {}

        if headers is None:
            return

        if isinstance(headers, (Headers, Mapping)):
            pairs: Iterable[Tuple[Any, Any]] = headers.items()
        else:
            pairs = headers

        for key, value in pairs:
            self.insert(key, value)

    @classmethod
    def default_http(cls, uri: "Uri") -> "Headers":
        """Create the default headers for a request to ``uri``."""
        headers = cls()
        headers.insert("Host", uri.host_header)
        headers.insert("Referer", uri.escaped)
        return headers

    def insert(self, key: Any, value: Any) -> None:
        """Insert a header, replacing the value of an existing one."""
        key = _to_str(key)
        lower = key.lower()
        if lower in self._items:
            key = self._items[lower][0]
        self._items[lower] = (key, _to_str(value))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a header value by name (case-insensitive)."""
        item = self._items.get(key.lower())
        if item is None:
            return default
        return item[1]

    def remove(self, key: str) -> None:
        """Remove a header if present."""
        self._items.pop(key.lower(), None)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._items.values()))

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return self.items()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._normalized() == other._normalized()

    def _normalized(self) -> Dict[str, str]:
        return {lower: value for lower, (_, value) in self._items.items()}

    def __repr__(self) -> str:
        return f"Headers({list(self._items.values())!r})"
