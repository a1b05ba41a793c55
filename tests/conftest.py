"""
Pytest configuration for http_req tests.

This file contains shared fixtures and configuration
for all tests in the project.
"""

import io

import pytest

from http_req.network.mock import MockNetworkBackend, MockNetworkStream
from http_req.uri import Uri


URI = "http://doc.rust-lang.org/std/string/index.html"
URI_S = "https://doc.rust-lang.org/std/string/index.html"

RESPONSE = (
    b"HTTP/1.1 200 OK\r\n"
    b"Date: Sat, 11 Jan 2003 02:44:04 GMT\r\n"
    b"Content-Type: text/html\r\n"
    b"Content-Length: 100\r\n\r\n"
    b"<html>hello</html>\r\n\r\nhello"
)

RESPONSE_HEAD = (
    b"HTTP/1.1 200 OK\r\n"
    b"Date: Sat, 11 Jan 2003 02:44:04 GMT\r\n"
    b"Content-Type: text/html\r\n"
    b"Content-Length: 100\r\n\r\n"
)


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run tests that need network access",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: test needs network access")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-integration"):
        return
    skip = pytest.mark.skip(reason="needs --run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def uri_text():
    """Plain HTTP uri as text."""
    return URI


@pytest.fixture
def secure_uri_text():
    """HTTPS uri as text."""
    return URI_S


@pytest.fixture
def response_bytes():
    """Canned response, head and body."""
    return RESPONSE


@pytest.fixture
def response_head():
    """Head of the canned response, through the blank line."""
    return RESPONSE_HEAD


@pytest.fixture
def uri():
    """Parsed plain HTTP uri."""
    return Uri.parse(URI)


@pytest.fixture
def secure_uri():
    """Parsed HTTPS uri."""
    return Uri.parse(URI_S)


@pytest.fixture
def response_stream():
    """Mock stream serving a canned response."""
    return MockNetworkStream(RESPONSE)


@pytest.fixture
def backend():
    """Mock backend serving a canned response on every connection."""
    return MockNetworkBackend(RESPONSE)


@pytest.fixture
def sink():
    """In-memory body sink."""
    return io.BytesIO()
