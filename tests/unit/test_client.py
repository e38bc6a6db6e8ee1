import json

import httpx
import pytest

from mediafs.core.config import Settings
from mediafs.core.errors import BadParameters, Conflict, NotFound, PermissionDenied, ServerError, TransportError
from mediafs.models.metadata import Encoding
from mediafs.transport.client import MediaFileServer

from tests.unit.sample_assets import Widget

BASE_URL = "http://mfs.test/api"


def make_server(handler, **kwargs):
    return MediaFileServer(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


def test_get_builds_url_and_decodes_assets():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"__CLASS__": "MFS::Metadata::Encoding", "Name": "mp3", "Bitrate": 128})

    with make_server(handler) as server:
        encoding = server.get(("encoding", "mp3"))

    assert requests[0].method == "GET"
    assert str(requests[0].url) == "http://mfs.test/api/encoding/mp3"
    assert isinstance(encoding, Encoding)
    assert encoding.bitrate == 128


def test_path_segments_are_quoted():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[])

    make_server(handler).get(("widget", "a b/c"))

    assert requests[0].url.raw_path == b"/api/widget/a%20b%2Fc"


def test_error_payload_raises_typed_error():
    def handler(request):
        return httpx.Response(404, json={"__CLASS__": "NotFound", "errormessage": "No such encoding"})

    with pytest.raises(NotFound) as info:
        make_server(handler).get(("encoding", "nope"))

    assert info.value.message == "No such encoding"


def test_error_payload_in_successful_response():
    def handler(request):
        return httpx.Response(200, json={"__CLASS__": "PermissionDenied", "errormessage": "read only"})

    with pytest.raises(PermissionDenied):
        make_server(handler).get(("encoding",))


@pytest.mark.parametrize(
    "status, error_class",
    [(400, BadParameters), (403, PermissionDenied), (404, NotFound), (409, Conflict), (500, ServerError)],
)
def test_status_codes_map_to_errors(status, error_class):
    def handler(request):
        return httpx.Response(status, text="nope")

    with pytest.raises(error_class) as info:
        make_server(handler).delete(("widget", "acme"))

    assert type(info.value) is error_class
    assert str(status) in info.value.message


def test_connection_errors_raise_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        make_server(handler).get(("encoding",))


def test_head_returns_headers_or_none():
    def handler(request):
        if request.url.path.endswith("/missing"):
            return httpx.Response(404)
        return httpx.Response(200, headers={"Content-Length": "0", "X-Checksum": "abc"})

    server = make_server(handler)

    assert server.head(("file", "present"))["X-Checksum"] == "abc"
    assert server.head(("file", "missing")) is None


def test_empty_body_decodes_to_none():
    assert make_server(lambda request: httpx.Response(204)).delete(("widget", "acme")) is None


def test_post_sends_encoded_json():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(201, json={"__CLASS__": "MFS::Test::Widget", "Name": "acme"})

    result = make_server(handler).post(("widget",), Widget(Name="acme", Enabled=False), {"X-Trace": "42"})

    request = requests[0]
    assert json.loads(request.content) == {"__CLASS__": "MFS::Test::Widget", "Name": "acme", "Enabled": 0}
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["X-Trace"] == "42"
    assert result == Widget(Name="acme")


def test_put_sends_raw_bytes():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"ok": True})

    result = make_server(handler).put(("file", "1"), "image/jpeg", b"\xff\xd8")

    assert requests[0].method == "PUT"
    assert requests[0].headers["Content-Type"] == "image/jpeg"
    assert requests[0].content == b"\xff\xd8"
    assert result == {"ok": True}


def test_get_octet_stream_returns_bytes():
    server = make_server(lambda request: httpx.Response(200, content=b"\x00\x01\x02"))
    assert server.get_octet_stream(("file", "1", "data")) == b"\x00\x01\x02"


def test_multipart_post_hands_url_to_upload():
    requests = []
    urls = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"__CLASS__": "MFS::Test::Widget", "Name": "up"})

    def upload(url):
        urls.append(url)
        return {"file": ("test_file.txt", b"hello", "text/plain")}

    result = make_server(handler).multipart_post(("widget",), upload)

    assert urls == ["http://mfs.test/api/widget"]
    assert requests[0].headers["Content-Type"].startswith("multipart/form-data")
    assert b"hello" in requests[0].content
    assert result.name == "up"


def test_basic_auth_from_settings():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[])

    settings = Settings(base_url=BASE_URL, username="example@ci-support.com", password="example")
    MediaFileServer.from_settings(settings, transport=httpx.MockTransport(handler)).get(("encoding",))

    assert requests[0].headers["Authorization"].startswith("Basic ")


def test_anonymous_by_default():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=[])

    MediaFileServer.from_settings(Settings(base_url=BASE_URL), transport=httpx.MockTransport(handler)).get(("x",))

    assert "Authorization" not in requests[0].headers


def test_plain_text_body_is_returned_as_text():
    server = make_server(lambda request: httpx.Response(200, text="OK"))

    assert server.put(("file", "1"), "text/plain", b"x") == "OK"
    assert server.multipart_post(("file",), lambda url: {"file": ("a.txt", b"x")}) == "OK"


def test_malformed_json_body_raises_server_error():
    def handler(request):
        return httpx.Response(200, content=b"{not json", headers={"Content-Type": "application/json"})

    with pytest.raises(ServerError) as info:
        make_server(handler).get(("encoding",))

    assert "Undecodable JSON" in info.value.message
