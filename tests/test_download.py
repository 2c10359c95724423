import httpx
import pytest

from svsetup.exceptions import DownloadError
from svsetup.utils.download import DownloadManager


def _manager(handler):
    return DownloadManager(client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_fetch_streams_body_to_destination(tmp_path):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"jar-bytes")

    destination = tmp_path / "plugins" / "foo.jar"
    progress = []

    assert _manager(handler).fetch("https://cdn.example/foo.jar", destination, lambda d, t: progress.append((d, t)))
    assert destination.read_bytes() == b"jar-bytes"
    assert len(seen) == 1
    assert progress[-1] == (9, 9)
    assert [p.name for p in destination.parent.iterdir()] == ["foo.jar"]


def test_fetch_skips_existing_destination(tmp_path):
    def handler(request):
        raise AssertionError("no request expected")

    destination = tmp_path / "paper-1.21.8-1.jar"
    destination.write_bytes(b"original")

    assert _manager(handler).fetch("https://cdn.example/paper.jar", destination) is False
    assert destination.read_bytes() == b"original"


def test_fetch_non_success_status_raises_and_leaves_nothing(tmp_path):
    def handler(request):
        return httpx.Response(404, content=b"not found")

    destination = tmp_path / "foo.jar"

    with pytest.raises(DownloadError) as exc:
        _manager(handler).fetch("https://cdn.example/foo.jar", destination)

    assert isinstance(exc.value.cause, httpx.HTTPStatusError)
    assert list(tmp_path.iterdir()) == []


def test_fetch_transport_error_raises(tmp_path):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(DownloadError):
        _manager(handler).fetch("https://cdn.example/foo.jar", tmp_path / "foo.jar")
    assert list(tmp_path.iterdir()) == []


def test_default_client_carries_user_agent_and_timeouts():
    manager = DownloadManager(connect_timeout=10.0, read_timeout=30.0, user_agent="svsetup-test")

    client = manager.client
    assert client.headers["User-Agent"] == "svsetup-test"
    assert client.timeout.connect == 10.0
    assert client.timeout.read == 30.0
    manager.close()


def test_fetch_invalid_url_raises_download_error(tmp_path):
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(DownloadError) as exc:
        _manager(handler).fetch("https://cdn.example/foo\n.jar", tmp_path / "foo.jar")

    assert isinstance(exc.value.cause, httpx.InvalidURL)
    assert list(tmp_path.iterdir()) == []
