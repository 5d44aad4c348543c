"""Tests for loading gograph settings from TOML and the environment."""

import pytest
from pydantic import ValidationError

from gograph.config import GoGraphConfig, LoaderSettings, load_config


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch, tmp_path):
    for name in ("GOGRAPH_CONFIG", "NEO4J_URI", "NEO4J_USER", "NEO4J_PASSWORD", "NEO4J_DATABASE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def _write(tmp_path, text: str):
    path = tmp_path / "custom.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_file() -> None:
    config = load_config()

    assert config == GoGraphConfig()
    assert config.neo4j.uri == "bolt://localhost:7687"
    assert config.loader.block_marker == "[Term]"
    assert config.loader.id_prefix == "GO:"
    assert config.loader.obsolete_marker == "obsolete"
    assert config.loader.channel_capacity == 8


def test_explicit_path(tmp_path) -> None:
    path = _write(tmp_path, '[neo4j]\nuri = "bolt://graph:7687"\npassword = "secret"\n\n[loader]\nchannel_capacity = 2\n')

    config = load_config(path)

    assert config.neo4j.uri == "bolt://graph:7687"
    assert config.neo4j.password == "secret"
    assert config.neo4j.user == "neo4j"
    assert config.loader.channel_capacity == 2


def test_env_var_names_config_file(tmp_path, monkeypatch) -> None:
    path = _write(tmp_path, '[loader]\nid_prefix = "CL:"\n')
    monkeypatch.setenv("GOGRAPH_CONFIG", str(path))

    assert load_config().loader.id_prefix == "CL:"


def test_file_in_working_directory(tmp_path) -> None:
    (tmp_path / "gograph.toml").write_text('[neo4j]\ndatabase = "go"\n', encoding="utf-8")

    assert load_config().neo4j.database == "go"


def test_environment_overrides_file(tmp_path, monkeypatch) -> None:
    path = _write(tmp_path, '[neo4j]\nuri = "bolt://graph:7687"\nuser = "loader"\n')
    monkeypatch.setenv("NEO4J_URI", "neo4j://cluster:7687")
    monkeypatch.setenv("NEO4J_PASSWORD", "from-env")

    config = load_config(path)

    assert config.neo4j.uri == "neo4j://cluster:7687"
    assert config.neo4j.user == "loader"
    assert config.neo4j.password == "from-env"


def test_invalid_channel_capacity(tmp_path) -> None:
    path = _write(tmp_path, "[loader]\nchannel_capacity = 0\n")

    with pytest.raises(ValidationError):
        load_config(path)


def test_settings_are_frozen() -> None:
    with pytest.raises(ValidationError):
        LoaderSettings().channel_capacity = 4
