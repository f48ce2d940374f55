import json
from pathlib import Path

import pytest

from config import (
    SettingsImportError,
    dump_settings,
    export_settings,
    parse_settings,
    read_settings,
    settings_filename,
)
from selector import PriorityWeights


def test_export_then_import_restores_settings(tmp_path: Path) -> None:
    weights = PriorityWeights(cost=0.7, latency=0.2, quality=0.1)

    path = export_settings(tmp_path, "Cheap and cheerful", weights)
    update = read_settings(path)

    assert path.name == "Cheap_and_cheerful.json"
    assert update.name == "Cheap and cheerful"
    assert update.weights == weights


def test_export_uses_two_space_indent() -> None:
    text = dump_settings("r", PriorityWeights(cost=1, latency=0, quality=0))

    assert text.startswith('{\n  "name": "r",\n  "priority": {\n    "cost": 1,')
    assert json.loads(text) == {"name": "r", "priority": {"cost": 1, "latency": 0, "quality": 0}}


@pytest.mark.parametrize("name, expected", [
    ("Default Rule Set", "Default_Rule_Set.json"),
    ("tabs\tand  spaces", "tabs_and_spaces.json"),
    ("", "rules.json"),
    ("../escaped", "_escaped.json"),
    ("team/fast\\rules", "team_fast_rules.json"),
    (".hidden", "hidden.json"),
    ("...", "rules.json"),
])
def test_settings_filename(name, expected) -> None:
    assert settings_filename(name) == expected


def test_import_with_only_name() -> None:
    update = parse_settings('{"name": "Latency first"}')

    assert update.name == "Latency first"
    assert update.weights is None


def test_import_ignores_empty_fields() -> None:
    update = parse_settings('{"name": "", "priority": null}')

    assert update.name is None
    assert update.weights is None


@pytest.mark.parametrize("text", [
    "{not json",
    "[1, 2, 3]",
    '{"priority": {"cost": 1, "latency": 0}}',
    '{"priority": {"cost": "high", "latency": 0, "quality": 0}}',
    '{"priority": "fast"}',
    '{"name": 42}',
    '{"priority": {"cost": NaN, "latency": Infinity, "quality": 0}}',
    '{"priority": {"cost": 1, "latency": 0, "quality": -Infinity}}',
])
def test_import_rejects_malformed_documents(text) -> None:
    with pytest.raises(SettingsImportError):
        parse_settings(text)


def test_read_settings_rejects_binary_file(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(SettingsImportError):
        read_settings(path)


def test_export_stays_inside_output_dir(tmp_path: Path) -> None:
    out = tmp_path / "out"
    out.mkdir()

    path = export_settings(out, "../escaped", PriorityWeights())

    assert path.resolve().parent == out.resolve()
    assert read_settings(path).name == "../escaped"
    assert not (tmp_path / "escaped.json").exists()


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_weights_must_be_finite(value) -> None:
    with pytest.raises(ValueError, match="finite"):
        PriorityWeights.from_dict({"cost": value, "latency": 0, "quality": 0})
