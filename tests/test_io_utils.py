import io
from pathlib import Path

import httpx
import pytest

from data_grid_parser.errors import ErrorKind, FetchError
from data_grid_parser.io_utils import fetch_text, read_text_content
from data_grid_parser.records import normalize


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_read_text_content_from_path(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text('[{"a": 1}]', encoding="utf-8")
    assert read_text_content(path) == '[{"a": 1}]'
    assert read_text_content(str(path)) == '[{"a": 1}]'


def test_read_text_content_from_file_objects() -> None:
    assert read_text_content(io.BytesIO(b"\xef\xbb\xbf<r/>")) == "<r/>"
    assert read_text_content(io.StringIO("[1]")) == "[1]"


def test_read_text_content_errors(tmp_path: Path) -> None:
    with pytest.raises(FetchError):
        read_text_content(None)
    with pytest.raises(FetchError) as excinfo:
        read_text_content(tmp_path / "missing.json")
    assert excinfo.value.kind is ErrorKind.IO_ERROR
    with pytest.raises(FetchError):
        read_text_content(io.BytesIO(b"\xff\xfe\x00bad"))


def test_fetch_text_returns_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == "https://example.com/data.json"
        return httpx.Response(200, text='[{"a": 1}]', headers={"content-type": "application/json"})

    assert fetch_text("  https://example.com/data.json ", client=_client(handler)) == '[{"a": 1}]'


def test_fetch_text_reports_http_status() -> None:
    client = _client(lambda request: httpx.Response(404, text="nope"))
    with pytest.raises(FetchError) as excinfo:
        fetch_text("https://example.com/missing", client=client)
    assert "status: 404" in str(excinfo.value)
    assert excinfo.value.detail == "HTTP 404"


def test_fetch_text_wraps_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as excinfo:
        fetch_text("https://example.com/", client=_client(handler))
    assert "connection refused" in excinfo.value.detail


def test_fetch_text_limits_body_size() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"x" * 100))
    with pytest.raises(FetchError):
        fetch_text("https://example.com/", client=client, max_bytes=10)


@pytest.mark.parametrize("url", ["", "   ", "ftp://example.com/data.xml", "data.json"])
def test_fetch_text_rejects_bad_urls(url) -> None:
    with pytest.raises(FetchError):
        fetch_text(url)


def test_fetch_text_drops_utf8_byte_order_mark() -> None:
    client = _client(
        lambda request: httpx.Response(
            200,
            content=b'\xef\xbb\xbf[{"a": 1}]',
            headers={"content-type": "application/json; charset=utf-8"},
        )
    )
    text = fetch_text("https://example.com/data.json", client=client)
    assert text == '[{"a": 1}]'
    assert normalize(text).headers == ["a"]
