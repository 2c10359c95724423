import os
import tempfile

import pytest

os.environ.setdefault("SVSETUP_CONFIG_DIR", tempfile.mkdtemp(prefix="svsetup-test-"))

from svsetup.exceptions import APIError, DownloadError  # noqa: E402


class FakeHttp:
    """Stands in for BaseHTTPClient; answers get_json from a URL map."""

    def __init__(self, json_map=None):
        self.json_map = json_map or {}
        self.calls = []
        self.connect_timeout = 10.0
        self.read_timeout = 30.0
        self.user_agent = "svsetup-test"

    def get_json(self, url, params=None):
        self.calls.append((url, params))
        if url not in self.json_map:
            raise APIError(f"Failed to fetch data from {url}")
        payload = self.json_map[url]
        if isinstance(payload, Exception):
            raise payload
        return payload


class FakeDownloader:
    """Writes the URL into the destination instead of downloading."""

    def __init__(self, failing=None):
        self.fetched = []
        self.failing = set(failing or [])

    def fetch(self, url, destination, progress_callback=None):
        if destination.exists():
            return False
        if url in self.failing:
            raise DownloadError(f"Failed to download file from {url}")
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(url, encoding="utf-8")
        self.fetched.append((url, destination))
        return True


@pytest.fixture
def fake_http():
    return FakeHttp()


@pytest.fixture
def fake_downloader():
    return FakeDownloader()
