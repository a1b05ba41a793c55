"""
Stream copying helpers for http_req.

``copy_until`` captures a response head from a live connection
without consuming any of the body that follows it, so the body can be
streamed afterwards with ``copy_to_end``.
"""

from typing import Union

from .exceptions import ConnectionError
from .http_primitives import Sink, Source

PROBE_SIZE = 10
DEFAULT_CHUNK_SIZE = 65536


def _overlap(buf: bytearray, delimiter: bytes) -> int:
    """Length of the longest tail of ``buf`` that is a proper prefix of ``delimiter``."""
    for size in range(min(len(buf), len(delimiter) - 1), 0, -1):
        if buf.endswith(delimiter[:size]):
            return size
    return 0


def copy_until(
    reader: Source,
    writer: Sink,
    delimiter: Union[bytes, bytearray],
) -> int:
    """
    Copy data from ``reader`` to ``writer`` up to and including ``delimiter``.

    Reads never go past the end of the delimiter: after a bounded
    probe, each read asks only for the bytes still missing to
    complete a match at the tail of the buffer. The whole buffer is
    written to ``writer`` in one call and flushed.

    Args:
        reader: Source to read from
        writer: Sink receiving the captured bytes
        delimiter: Non-empty byte sequence ending the capture

    Returns:
        Number of bytes read

    Raises:
        ValueError: If the delimiter is empty
        ConnectionError: If the reader ends before the delimiter is seen
    """
    delimiter = bytes(delimiter)
    if not delimiter:
        raise ValueError("delimiter must not be empty")

    buf = bytearray()
    want = min(PROBE_SIZE, len(delimiter))

    while True:
        chunk = reader.read(want)
        if not chunk:
            raise ConnectionError(
                f"stream ended after {len(buf)} bytes without {delimiter!r}"
            )
        buf.extend(chunk)

        if buf.endswith(delimiter):
            break

        want = len(delimiter) - _overlap(buf, delimiter)

    writer.write(bytes(buf))
    writer.flush()

    return len(buf)


def copy_to_end(
    reader: Source,
    writer: Sink,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """
    Copy everything left in ``reader`` to ``writer``.

    Returns:
        Number of bytes copied
    """
    total = 0
    while True:
        chunk = reader.read(chunk_size)
        if not chunk:
            break
        writer.write(chunk)
        total += len(chunk)

    writer.flush()
    return total
