from svsetup.utils.versioning import PluginIdentifier, VersionSpec, parse_plugin_identifier, parse_version_spec


def test_version_with_build_suffix_is_split():
    assert parse_version_spec("1.21.8-42") == VersionSpec(version="1.21.8", build="42")


def test_version_without_build_suffix_is_kept():
    assert parse_version_spec("1.21.8") == VersionSpec(version="1.21.8", build=None)


def test_non_numeric_suffix_is_not_a_build():
    assert parse_version_spec("1.21.8-pre1") == VersionSpec(version="1.21.8-pre1")


def test_only_last_numeric_suffix_is_taken():
    assert parse_version_spec("1.21-rc-7") == VersionSpec(version="1.21-rc", build="7")


def test_plugin_name_only():
    assert parse_plugin_identifier("luckperms") == PluginIdentifier(name="luckperms")


def test_plugin_with_source():
    assert parse_plugin_identifier("modrinth:luckperms") == PluginIdentifier(
        name="luckperms", source="modrinth"
    )


def test_plugin_with_source_and_version_rejoins_colons():
    ident = parse_plugin_identifier("hangar:ViaVersion:5.0.0:beta:2")
    assert ident.source == "hangar"
    assert ident.name == "ViaVersion"
    assert ident.version == "5.0.0:beta:2"


def test_plugin_without_source_keeps_version():
    ident = parse_plugin_identifier("ViaVersion:5.0.0")
    assert ident.source is None
    assert ident.name == "ViaVersion"
    assert ident.version == "5.0.0"


def test_plugin_source_is_case_insensitive():
    assert parse_plugin_identifier("Hangar:Foo").source == "hangar"
