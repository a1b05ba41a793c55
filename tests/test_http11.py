"""
Tests for the HTTP/1.1 request builder.
"""

import pytest

from http_req.exceptions import ConnectionError, ProtocolError
from http_req.http11 import RequestBuilder
from http_req.http_primitives import Headers, Method
from http_req.network.mock import MockNetworkStream
from http_req.uri import Uri

BODY = b"Name=James+Jay"


class BrokenStream(MockNetworkStream):
    """Stream whose writes fail like a reset connection."""

    def write(self, data: bytes) -> None:
        raise ConnectionError("connection reset by peer")


class TestRequestBuilderState:
    """Test RequestBuilder construction and setters."""

    def test_defaults(self, uri):
        """Test the default state of a new builder."""
        builder = RequestBuilder(uri)

        assert builder.method is Method.GET
        assert builder.version == "HTTP/1.1"
        assert builder.body is None
        assert builder.headers == Headers.default_http(uri)

    def test_set_method(self, uri):
        """Test changing the method."""
        builder = RequestBuilder(uri)
        assert builder.set_method(Method.HEAD) is builder
        assert builder.method is Method.HEAD

        builder.set_method("post")
        assert builder.method is Method.POST

    def test_set_headers(self, uri):
        """Test that replacing headers discards the previous ones."""
        headers = Headers()
        headers.insert("Accept-Charset", "utf-8")
        headers.insert("Accept-Language", "en-US")
        headers.insert("Host", "doc.rust-lang.org")
        headers.insert("Connection", "Close")

        builder = RequestBuilder(uri).set_headers(headers)

        assert builder.headers == headers
        assert "Referer" not in builder.headers

    def test_add_header(self, uri):
        """Test adding a header to the defaults."""
        builder = RequestBuilder(uri).add_header("Connection", "Close")

        expected = Headers()
        expected.insert("Host", "doc.rust-lang.org")
        expected.insert("Referer", "http://doc.rust-lang.org/std/string/index.html")
        expected.insert("Connection", "Close")
        assert builder.headers == expected

    def test_add_header_overrides(self, uri):
        """Test that adding an existing header replaces only that header."""
        builder = RequestBuilder(uri).add_header("host", "other.example")

        assert builder.headers.get("Host") == "other.example"
        assert builder.headers.get("Referer") == str(uri)
        assert len(builder.headers) == 2

    def test_set_body(self, uri):
        """Test attaching a body without copying it."""
        body = bytearray(BODY)
        builder = RequestBuilder(uri).set_body(body)

        assert builder.body is body

    def test_chaining(self, uri):
        """Test chaining setters."""
        builder = (
            RequestBuilder(uri)
            .set_method(Method.PUT)
            .add_header("Content-Length", len(BODY))
            .set_body(BODY)
        )

        assert builder.method is Method.PUT
        assert builder.headers.get("Content-Length") == "14"
        assert builder.body == BODY


class TestParseMsg:
    """Test request serialization."""

    def test_default_msg(self, uri):
        """Test the message of a default builder."""
        msg = RequestBuilder(uri).parse_msg()

        assert msg == (
            b"GET /std/string/index.html HTTP/1.1\r\n"
            b"Host: doc.rust-lang.org\r\n"
            b"Referer: http://doc.rust-lang.org/std/string/index.html\r\n"
            b"\r\n"
        )

    def test_one_header(self, uri):
        """Test request line, single header and blank line with no body."""
        builder = RequestBuilder(uri).set_headers({"Accept": "*/*"})

        lines = builder.parse_msg().split(b"\r\n")

        assert lines == [b"GET /std/string/index.html HTTP/1.1", b"Accept: */*", b"", b""]

    def test_header_order(self, uri):
        """Test that headers are serialized in insertion order."""
        builder = RequestBuilder(uri).set_headers(
            [("X-First", "1"), ("X-Second", "2"), ("X-Third", "3")]
        )

        msg = builder.parse_msg()

        assert msg.index(b"X-First") < msg.index(b"X-Second") < msg.index(b"X-Third")

    def test_body_appended_verbatim(self, uri):
        """Test that the body follows the blank line with no framing."""
        builder = RequestBuilder(uri).set_method(Method.POST).set_body(BODY)

        msg = builder.parse_msg()

        head, body = msg.split(b"\r\n\r\n", 1)
        assert body == BODY
        assert msg.startswith(b"POST /std/string/index.html HTTP/1.1\r\n")
        assert b"Content-Length" not in head
        assert b"Transfer-Encoding" not in head

    def test_empty_body(self, uri):
        """Test that an empty body adds no bytes."""
        builder = RequestBuilder(uri)
        assert builder.set_body(b"").parse_msg() == builder.set_body(None).parse_msg()

    def test_idempotent(self, uri):
        """Test that serializing twice gives the same bytes."""
        builder = RequestBuilder(uri).set_body(BODY)
        assert builder.parse_msg() == builder.parse_msg()

    def test_resource_with_query(self):
        """Test that the query string is part of the request line."""
        builder = RequestBuilder(Uri.parse("http://example.com/search?q=http"))
        assert builder.parse_msg().startswith(b"GET /search?q=http HTTP/1.1\r\n")

    def test_non_ascii_uri(self):
        """Test that a non-ASCII path and host serialize as ASCII."""
        builder = RequestBuilder(Uri.parse("http://日本.jp/日本"))

        assert builder.parse_msg() == (
            b"GET /%E6%97%A5%E6%9C%AC HTTP/1.1\r\n"
            b"Host: xn--wgv71a.jp\r\n"
            b"Referer: http://%E6%97%A5%E6%9C%AC.jp/%E6%97%A5%E6%9C%AC\r\n"
            b"\r\n"
        )

    def test_latin1_header_value(self, uri):
        """Test that latin-1 header values are sent as single bytes."""
        builder = RequestBuilder(uri).set_headers({"X-Name": "café"})
        assert b"X-Name: caf\xe9\r\n" in builder.parse_msg()

    def test_unencodable_header(self, uri):
        """Test that a header outside latin-1 is a protocol error."""
        builder = RequestBuilder(uri).add_header("X-Name", "日本")

        with pytest.raises(ProtocolError, match="latin-1") as exc_info:
            builder.parse_msg()
        assert isinstance(exc_info.value.cause, UnicodeEncodeError)


class TestSend:
    """Test sending over an open stream."""

    def test_send(self, uri, response_stream, sink):
        """Test a full exchange over a mock stream."""
        builder = RequestBuilder(uri).add_header("Connection", "Close")

        response = builder.send(response_stream, sink)

        assert response.status_code == 200
        assert response.headers.get("Content-Type") == "text/html"
        assert sink.getvalue() == b"<html>hello</html>\r\n\r\nhello"
        assert response_stream.written_data == builder.parse_msg()
        assert response_stream.flush_count == 1

    def test_head_never_reads_body(self, uri, response_stream, sink):
        """Test that HEAD requests leave the body untouched."""
        builder = RequestBuilder(uri).set_method(Method.HEAD)

        response = builder.send(response_stream, sink)

        assert response.status_code == 200
        assert sink.getvalue() == b""
        assert response_stream.remaining_data == b"<html>hello</html>\r\n\r\nhello"

    def test_read_head(self, uri):
        """Test reading just the head."""
        stream = MockNetworkStream(b"HTTP/1.1 200 OK\r\nContent-Length: 5\r\n\r\nhello")

        response = RequestBuilder(uri).read_head(stream)

        assert response.content_len() == 5
        assert stream.remaining_data == b"hello"

    def test_send_msg(self, uri, response_stream, sink):
        """Test sending a message serialized ahead of time."""
        builder = RequestBuilder(uri)
        msg = builder.parse_msg()

        response = builder.send_msg(response_stream, msg, sink)

        assert response.status_code == 200
        assert response_stream.written_data == msg

    def test_write_msg(self, uri):
        """Test writing and flushing a message."""
        stream = MockNetworkStream()

        RequestBuilder(uri).write_msg(stream, b"GET / HTTP/1.1\r\n\r\n")

        assert stream.written_data == b"GET / HTTP/1.1\r\n\r\n"
        assert stream.flush_count == 1

    def test_malformed_head(self, uri, sink):
        """Test that a bad status line is a protocol error."""
        stream = MockNetworkStream(b"NOT HTTP AT ALL\r\n\r\nbody")

        with pytest.raises(ProtocolError):
            RequestBuilder(uri).send(stream, sink)

        assert sink.getvalue() == b""

    def test_truncated_head(self, uri, sink):
        """Test that a connection closing mid-head is an I/O error."""
        stream = MockNetworkStream(b"HTTP/1.1 200 OK\r\nContent-Le")

        with pytest.raises(ConnectionError):
            RequestBuilder(uri).send(stream, sink)

    def test_body_streamed_to_file_like(self, uri, response_bytes, tmp_path):
        """Test streaming the body into a binary file."""
        path = tmp_path / "body.html"

        with open(path, "wb") as writer:
            RequestBuilder(uri).send(MockNetworkStream(response_bytes), writer)

        assert path.read_bytes() == b"<html>hello</html>\r\n\r\nhello"

    def test_body_without_framing(self, uri, sink):
        """Test that the body is forwarded raw until the stream ends."""
        chunked = (
            b"HTTP/1.1 200 OK\r\nTransfer-Encoding: chunked\r\n\r\n"
            b"5\r\nhello\r\n0\r\n\r\n"
        )

        RequestBuilder(uri).send(MockNetworkStream(chunked), sink)

        assert sink.getvalue() == b"5\r\nhello\r\n0\r\n\r\n"

    def test_send_io_errors_propagate(self, uri, sink):
        """Test that stream failures abort the send."""
        stream = BrokenStream()

        with pytest.raises(ConnectionError, match="reset"):
            RequestBuilder(uri).send(stream, sink)

        assert stream.written_data == b""

