# tests/core/config/test_discovery.py
"""
Testes da descoberta de arquivos de configuração por convenção de nomes.

Os testes asseguram que:
- apenas o master presente produz exatamente [master]
- overrides sem master produzem [] e um único warning
- a ordem retornada é [master, local, env]
- a primeira extensão existente vence para cada override
- uma lista vazia de extensões desativa os overrides

Invariantes:
    - Caminhos retornados são absolutos, normalizados e existentes
    - Ausência de arquivos nunca levanta exceção
"""

from pathlib import Path

import pytest

from atlas_boot.core.config.discovery import find_config_files
from atlas_boot.core.diagnostics import MISSING_MASTER_CONFIG


def test_master_only(tmp_path: Path, write_config, sink):
    master = write_config("datasources.json", {"db": {}})
    out = find_config_files(str(tmp_path), "production", "datasources", sink=sink)
    assert out == [str(master.absolute())]
    assert sink.records == []


def test_master_local_and_env_order(tmp_path: Path, write_config):
    write_config("datasources.production.json", {})
    write_config("datasources.local.json", {})
    write_config("datasources.json", {})

    out = find_config_files(str(tmp_path), "production", "datasources")
    assert [Path(p).name for p in out] == [
        "datasources.json",
        "datasources.local.json",
        "datasources.production.json",
    ]


def test_first_existing_extension_wins(tmp_path: Path, write_config):
    write_config("model-config.json", {})
    write_config("model-config.local.js", "module.exports = {};")
    write_config("model-config.local.json", {})

    out = find_config_files(str(tmp_path), "dev", "model-config")
    assert [Path(p).name for p in out] == ["model-config.json", "model-config.local.js"]


def test_custom_extensions(tmp_path: Path, write_config):
    write_config("middleware.json", {})
    write_config("middleware.local.js", "module.exports = {};")
    write_config("middleware.staging.yaml", "a: 1\n")

    out = find_config_files(str(tmp_path), "staging", "middleware", ("yaml", "json"))
    assert [Path(p).name for p in out] == ["middleware.json", "middleware.staging.yaml"]


@pytest.mark.parametrize(
    "override",
    ["datasources.local.json", "datasources.production.js", "datasources.local.js"],
)
def test_overrides_without_master_warn_once(tmp_path: Path, write_config, sink, override):
    write_config(override, {})
    write_config("datasources.production.json", {})

    out = find_config_files(str(tmp_path), "production", "datasources", sink=sink)
    assert out == []
    assert sink.codes == [MISSING_MASTER_CONFIG]
    assert "datasources.json" in sink.records[0][0]


def test_nothing_present_is_silent(tmp_path: Path, sink):
    assert find_config_files(str(tmp_path), "production", "datasources", sink=sink) == []
    assert sink.records == []


def test_env_none_skips_env_override(tmp_path: Path, write_config):
    write_config("datasources.json", {})
    write_config("datasources.None.json", {})
    out = find_config_files(str(tmp_path), None, "datasources")
    assert [Path(p).name for p in out] == ["datasources.json"]


def test_injected_exists_probe():
    root = "/virtual/config"
    present = {
        str(Path(root, "models.json").absolute()),
        str(Path(root, "models.test.json").absolute()),
    }
    probed = []

    def exists(path):
        probed.append(path)
        return path in present

    out = find_config_files(root, "test", "models", exists=exists)
    assert out == [str(Path(root, "models.json").absolute()), str(Path(root, "models.test.json").absolute())]
    assert str(Path(root, "models.local.js").absolute()) in probed


def test_root_dir_with_parent_segments_is_normalized(tmp_path: Path, write_config):
    write_config("datasources.json", {})
    (tmp_path / "server").mkdir()
    root = str(tmp_path / "server" / "..")

    out = find_config_files(root, "dev", "datasources")
    assert out == [str(tmp_path / "datasources.json")]
    assert ".." not in out[0]


def test_empty_extensions_disable_overrides(tmp_path: Path, write_config):
    write_config("datasources.json", {})
    write_config("datasources.local.json", {})
    write_config("datasources.dev.js", "module.exports = {};")

    out = find_config_files(str(tmp_path), "dev", "datasources", ())
    assert [Path(p).name for p in out] == ["datasources.json"]
