"""
Basic HTTP/1.1 client example using http_req.

This example demonstrates the one-shot helpers and a Request with
custom headers, streaming bodies to memory and to a file.
"""

import io
import logging

from http_req import Method, Request, Uri, get, head
from http_req.network import SyncBackend

# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


def simple_get_request():
    """Demonstrate a simple GET request."""
    body = io.BytesIO()
    response = get("https://www.rust-lang.org/learn", body)

    logger.info(f"Response status: {response.status_code} {response.reason}")
    logger.info(f"Response body length: {len(body.getvalue())} bytes")


def head_request():
    """Demonstrate a HEAD request."""
    response = head("http://example.com/")

    logger.info(f"Response status: {response.status_code}")
    logger.info(f"Content-Length: {response.content_len()}")


def request_with_headers():
    """Demonstrate a Request with custom headers and a socket timeout."""
    uri = Uri.parse("https://example.com/")
    request = Request(uri, backend=SyncBackend(timeout=10.0))
    request.set_method(Method.GET)
    request.add_header("Accept", "text/html")
    request.add_header("User-Agent", "http_req/0.1.0")

    with open("example.html", "wb") as writer:
        response = request.send(writer)

    logger.info(f"Saved body of {uri} ({response.status_code})")


def main():
    simple_get_request()
    head_request()
    request_with_headers()


if __name__ == "__main__":
    main()
