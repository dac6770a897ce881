"""
Tests for the resolve_zone command-line zone lookup
"""

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent.parent.parent / "scripts" / "resolve_zone.py"


@pytest.fixture
def script():
    spec = importlib.util.spec_from_file_location("resolve_zone_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_prints_zone(script, capsys):
    exit_code = script.main(["33.1599", "131.6046", "--language", "ja", "--env", "test"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["zone_id"] == "apu_campus"
    assert output["zone_name"] == "APU キャンパス"
    assert output["in_service_area"] is False


def test_prints_unzoned(script, capsys):
    exit_code = script.main(["33.28", "131.45", "--env", "test"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["zone_id"] is None
    assert output["in_service_area"] is True


def test_bad_coordinates_exit_code(script):
    assert script.main(["nan", "131.6", "--env", "test"]) == 2


def test_bad_configuration_exit_code(script, tmp_path, monkeypatch):
    env_dir = tmp_path / "environments"
    env_dir.mkdir()
    (env_dir / "base.yaml").write_text("geo:\n  registry_file: zones/missing.yaml\n")
    monkeypatch.setenv("WG_CONFIG_DIR", str(tmp_path))

    assert script.main(["33.1599", "131.6046", "--env", "test"]) == 1


def test_unknown_environment_exit_code(script):
    """An invalid --env is reported, not raised."""
    assert script.main(["33.1599", "131.6046", "--env", "staging"]) == 1


def test_missing_config_dir_exit_code(script, tmp_path, monkeypatch):
    monkeypatch.setenv("WG_CONFIG_DIR", str(tmp_path / "nowhere"))

    assert script.main(["33.1599", "131.6046", "--env", "test"]) == 1
