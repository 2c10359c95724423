import pytest

from svsetup.exceptions import APIError, ResolutionError
from svsetup.servers.asp import AdvancedSlimePaperResolver, select_plugin_file, select_server_file
from svsetup.servers.papermc import PaperMCResolver
from svsetup.servers.purpur import PurpurResolver
from svsetup.servers.registry import create_resolver_registry
from svsetup.servers.types import ServerType

PAPER = "https://api.papermc.io/v2"
PURPUR = "https://api.purpurmc.org/v2"
ASP = "https://api.infernalsuite.com/v1"


def test_paper_explicit_build_makes_no_requests(fake_http):
    artifact = PaperMCResolver(fake_http).resolve(ServerType.PAPER, "1.21.8", "55")

    assert fake_http.calls == []
    assert artifact.file_name == "paper-1.21.8-55.jar"
    assert artifact.build == "55"
    assert artifact.download_url == (
        f"{PAPER}/projects/paper/versions/1.21.8/builds/55/downloads/paper-1.21.8-55.jar"
    )


def test_paper_latest_is_last_listed_build(fake_http):
    # The list is taken as-is: the last element wins even if it is not the maximum
    fake_http.json_map[f"{PAPER}/projects/paper/versions/1.21.7/"] = {"builds": [10, 32, 17]}

    artifact = PaperMCResolver(fake_http).resolve(ServerType.PAPER, "1.21.7")

    assert artifact.build == "17"
    assert artifact.file_name == "paper-1.21.7-17.jar"


def test_velocity_uses_its_own_project(fake_http):
    fake_http.json_map[f"{PAPER}/projects/velocity/versions/3.4.0-SNAPSHOT/"] = {"builds": [500, 501]}

    artifact = PaperMCResolver(fake_http).resolve(ServerType.VELOCITY, "3.4.0-SNAPSHOT")

    assert artifact.file_name == "velocity-3.4.0-SNAPSHOT-501.jar"
    assert "/projects/velocity/" in artifact.download_url


def test_paper_empty_build_list_fails(fake_http):
    fake_http.json_map[f"{PAPER}/projects/folia/versions/1.21.8/"] = {"builds": []}

    with pytest.raises(ResolutionError):
        PaperMCResolver(fake_http).resolve(ServerType.FOLIA, "1.21.8")


def test_paper_build_listing_must_be_a_list(fake_http):
    fake_http.json_map[f"{PAPER}/projects/paper/versions/1.21.8/"] = {"builds": {"latest": 5}}

    with pytest.raises(ResolutionError):
        PaperMCResolver(fake_http).resolve(ServerType.PAPER, "1.21.8")


def test_paper_unreachable_backend_fails(fake_http):
    fake_http.json_map[f"{PAPER}/projects/paper/versions/9.9/"] = APIError("HTTP 404")

    with pytest.raises(ResolutionError):
        PaperMCResolver(fake_http).resolve(ServerType.PAPER, "9.9")


def test_papermc_rejects_non_papermc_types(fake_http):
    with pytest.raises(ResolutionError):
        PaperMCResolver(fake_http).resolve(ServerType.PURPUR, "1.21.8", "1")


def test_purpur_latest_comes_from_nested_field(fake_http):
    fake_http.json_map[f"{PURPUR}/purpur/1.21.8"] = {"builds": {"latest": "2477", "all": ["2476", "2477"]}}

    artifact = PurpurResolver(fake_http).resolve(ServerType.PURPUR, "1.21.8")

    assert artifact.file_name == "purpur-1.21.8-2477.jar"
    assert artifact.download_url == f"{PURPUR}/purpur/1.21.8/2477/download"


def test_purpur_explicit_build_makes_no_requests(fake_http):
    artifact = PurpurResolver(fake_http).resolve(ServerType.PURPUR, "1.21.8", "2400")

    assert fake_http.calls == []
    assert artifact.file_name == "purpur-1.21.8-2400.jar"


def test_purpur_missing_latest_fails(fake_http):
    fake_http.json_map[f"{PURPUR}/purpur/1.21.8"] = {"builds": [1, 2]}

    with pytest.raises(ResolutionError):
        PurpurResolver(fake_http).resolve(ServerType.PURPUR, "1.21.8")


def _asp_backend(fake_http, files, branch="main", build_id="abc123"):
    fake_http.json_map[f"{ASP}/projects/asp/mcversion/1.21.8/branches"] = [
        {"branch": "develop", "id": "zzz"},
        {"branch": branch, "id": build_id},
    ]
    fake_http.json_map[f"{ASP}/projects/asp/buildId/{build_id}"] = {"files": files}


def test_asp_picks_first_non_plugin_non_api_jar(fake_http):
    _asp_backend(fake_http, [
        {"id": "f1", "fileName": "asp-api-1.21.8.jar", "size": 10},
        {"id": "f2", "fileName": "asp-plugin-1.21.8.jar", "size": 20},
        {"id": "f3", "fileName": "asp-server-1.21.8.jar", "size": 5},
        {"id": "f4", "fileName": "asp-1.21.8.zip", "size": 99},
    ])

    artifact = AdvancedSlimePaperResolver(fake_http, branch="main").resolve(
        ServerType.ADVANCED_SLIME_PAPER, "1.21.8"
    )

    assert artifact.file_name == "asp-server-1.21.8.jar"
    assert artifact.download_url == f"{ASP}/projects/asp/abc123/download/f3"
    assert artifact.build == "abc123"


def test_asp_falls_back_to_largest_jar():
    files = [
        {"id": "f1", "fileName": "ASP-API.jar", "size": 10},
        {"id": "f2", "fileName": "slime-plugin.jar", "size": 300},
        {"id": "f3", "fileName": "api-bundle.jar", "size": 20},
    ]
    assert select_server_file(files)["id"] == "f2"


def test_asp_server_selection_without_jars():
    assert select_server_file([{"id": "x", "fileName": "notes.txt"}]) is None


def test_asp_plugin_selection():
    files = [
        {"id": "f1", "fileName": "asp-server.jar"},
        {"id": "f2", "fileName": "asp-Plugin.jar"},
    ]
    assert select_plugin_file(files)["id"] == "f2"


def test_asp_ignores_explicit_build(fake_http, caplog):
    _asp_backend(fake_http, [{"id": "f1", "fileName": "asp-server.jar", "size": 1}])

    artifact = AdvancedSlimePaperResolver(fake_http, branch="main").resolve(
        ServerType.ADVANCED_SLIME_PAPER, "1.21.8", "77"
    )

    assert artifact.build == "abc123"
    assert "Build 77 ignored" in caplog.text


def test_asp_unknown_branch_fails(fake_http):
    _asp_backend(fake_http, [{"id": "f1", "fileName": "asp-server.jar"}])

    with pytest.raises(ResolutionError) as exc:
        AdvancedSlimePaperResolver(fake_http, branch="nope").resolve(
            ServerType.ADVANCED_SLIME_PAPER, "1.21.8"
        )
    assert "nope" in str(exc.value)


def test_asp_without_branch_fails(fake_http):
    with pytest.raises(ResolutionError):
        AdvancedSlimePaperResolver(fake_http).resolve(ServerType.ADVANCED_SLIME_PAPER, "1.21.8")
    assert fake_http.calls == []


def test_asp_build_without_jars_fails(fake_http):
    _asp_backend(fake_http, [{"id": "f1", "fileName": "readme.md"}])

    with pytest.raises(ResolutionError):
        AdvancedSlimePaperResolver(fake_http, branch="main").resolve(
            ServerType.ADVANCED_SLIME_PAPER, "1.21.8"
        )


def test_asp_entries_without_file_name_are_skipped(fake_http):
    _asp_backend(fake_http, [{"id": "f1", "fileName": None, "size": 1}, {"id": "f2", "fileName": "x.jar"}])

    artifact = AdvancedSlimePaperResolver(fake_http, branch="main").resolve(
        ServerType.ADVANCED_SLIME_PAPER, "1.21.8"
    )
    assert artifact.file_name == "x.jar"


def test_registry_dispatches_every_type(fake_http):
    registry = create_resolver_registry(fake_http, asp_branch="main")

    assert set(registry) == set(ServerType)
    assert isinstance(registry[ServerType.FOLIA], PaperMCResolver)
    assert isinstance(registry[ServerType.PURPUR], PurpurResolver)
    assert registry[ServerType.ADVANCED_SLIME_PAPER].branch == "main"
