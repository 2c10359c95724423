import pytest
import requests

from svsetup import __version__
from svsetup.config.logging_config import _parse_size
from svsetup.config.settings import Config, load_project_file
from svsetup.exceptions import APIError, ConfigurationError, ValidationError
from svsetup.utils.base_api import BaseHTTPClient
from svsetup.utils.validation import validate_provision_input


def test_config_creates_default_file(tmp_path):
    cfg = Config(config_dir=tmp_path)

    assert cfg.config_file.is_file()
    assert cfg.get("provisioning.server_type") == "paper"
    assert cfg.get("network.connect_timeout") == 10.0
    assert cfg.get("missing.key", "fallback") == "fallback"


def test_config_merges_user_file_over_defaults(tmp_path):
    (tmp_path / "config.yaml").write_text("network:\n  read_timeout: 60\n", encoding="utf-8")

    cfg = Config(config_dir=tmp_path)

    assert cfg.get("network.read_timeout") == 60
    assert cfg.get("network.connect_timeout") == 10.0


def test_project_file_layers_over_user_settings(tmp_path):
    project = tmp_path / "server.yaml"
    project.write_text(
        "provisioning:\n  server_type: purpur\n  plugins:\n    - modrinth:luckperms\n", encoding="utf-8"
    )
    cfg = Config(config_dir=tmp_path / "cfg")

    settings = cfg.provisioning_settings(project)

    assert settings["server_type"] == "purpur"
    assert settings["plugins"] == ["modrinth:luckperms"]
    assert settings["version"] == cfg.get("provisioning.version")


def test_project_file_keeps_versions_as_strings(tmp_path):
    project = tmp_path / "server.yaml"
    project.write_text("provisioning:\n  version: 1.20\n  build: 12\n  include_asp_plugin: false\n", encoding="utf-8")

    settings = load_project_file(project)

    assert settings["version"] == "1.20"
    assert settings["build"] == "12"
    assert settings["include_asp_plugin"] is False


def test_user_config_version_is_read_as_string(tmp_path):
    (tmp_path / "config.yaml").write_text("provisioning:\n  version: 1.21\n", encoding="utf-8")

    assert Config(config_dir=tmp_path).provisioning_settings()["version"] == "1.21"


def test_project_file_must_be_mapping(tmp_path):
    project = tmp_path / "server.yaml"
    project.write_text("- paper\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_project_file(project)


def test_missing_project_file(tmp_path):
    with pytest.raises(ConfigurationError) as exc:
        load_project_file(tmp_path / "nope.yaml")
    assert exc.value.cause is not None


@pytest.mark.parametrize("size,expected", [("10MB", 10 * 1024 ** 2), ("512kb", 512 * 1024), ("7B", 7), ("junk", 10 * 1024 ** 2)])
def test_parse_size(size, expected):
    assert _parse_size(size) == expected


def test_validate_provision_input_cleans_values(tmp_path):
    params = validate_provision_input(
        server_type=" paper ",
        version="1.21.8-10",
        directory=str(tmp_path),
        build=12,
        plugins=["hangar:foo"],
        plugin_urls=["https://cdn.example/a.jar"],
    )

    assert params["server_type"] == "paper"
    assert params["build"] == "12"
    assert params["directory"] == tmp_path.resolve()


@pytest.mark.parametrize("kwargs", [
    {"version": ""},
    {"version": "1.21/8"},
    {"directory": "/etc/minecraft"},
    {"plugin_urls": ["ftp://cdn.example/a.jar"]},
])
def test_validate_provision_input_rejects(tmp_path, kwargs):
    args = {"server_type": "paper", "version": "1.21.8", "directory": str(tmp_path)}
    args.update(kwargs)

    with pytest.raises(ValidationError):
        validate_provision_input(**args)


class _FakeResponse:
    def __init__(self, status, payload=None):
        self.status = status
        self.payload = payload

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Server Error")

    def json(self):
        if self.payload is None:
            raise ValueError("Expecting value")
        return self.payload


class _FakeSession:
    def __init__(self, response):
        self.response = response
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append((url, params, timeout))
        return self.response

    def close(self):
        pass


def test_get_json_returns_payload_with_timeouts():
    client = BaseHTTPClient(connect_timeout=3.0, read_timeout=7.0)
    client._session = _FakeSession(_FakeResponse(200, {"builds": [1]}))

    assert client.get_json("https://api.example/x", params={"q": "a"}) == {"builds": [1]}
    assert client._session.requests == [("https://api.example/x", {"q": "a"}, (3.0, 7.0))]


@pytest.mark.parametrize("response", [_FakeResponse(503), _FakeResponse(200)])
def test_get_json_wraps_failures(response):
    client = BaseHTTPClient()
    client._session = _FakeSession(response)

    with pytest.raises(APIError) as exc:
        client.get_json("https://api.example/x")
    assert exc.value.cause is not None


def test_session_sends_user_agent():
    client = BaseHTTPClient(user_agent="svsetup-test")

    assert client.session.headers["User-Agent"] == "svsetup-test"
    client.close()


def test_default_user_agent_names_the_tool():
    assert BaseHTTPClient().user_agent == f"svsetup/{__version__}"
