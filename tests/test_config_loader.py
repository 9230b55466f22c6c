from __future__ import annotations

import json
from pathlib import Path

import pytest

from otelconf_docs.config.loader import DEFAULT_TARGETS, TYPE_REFERENCE_GENERATOR, SyncConfig, load_sync_config
from otelconf_docs.errors import ScriptError
from otelconf_docs.exit_codes import ERR_CONFIG, ERR_VALIDATION


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_sync_config(tmp_path)
    assert config == SyncConfig()
    assert config.targets == DEFAULT_TARGETS
    assert config.targets[0].required
    assert not config.targets[1].required


def test_default_yaml_config_is_picked_up(source_repo: Path) -> None:
    config = load_sync_config(source_repo)
    assert config.languages == ("go", "java")
    assert config.marker_prefix == "GENERATED"


def test_explicit_config_is_relative_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source_root = tmp_path / "source"
    source_root.mkdir()
    (source_root / "sync.json").write_text(json.dumps({"marker_prefix": "WRONG"}), encoding="utf-8")
    path = tmp_path / "sync.json"
    path.write_text(
        json.dumps(
            {
                "marker_prefix": "AUTO",
                "targets": [{"marker_id": "types", "path": "docs/types.md", "generator": "type-reference"}],
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    config = load_sync_config(source_root, "sync.json")
    assert config.marker_prefix == "AUTO"
    assert len(config.targets) == 1
    assert config.targets[0].generator == TYPE_REFERENCE_GENERATOR
    assert config.targets[0].required


def test_missing_explicit_config(tmp_path: Path) -> None:
    with pytest.raises(ScriptError) as err:
        load_sync_config(tmp_path, str(tmp_path / "absent.yaml"))
    assert err.value.code == ERR_CONFIG


def test_unknown_keys_fail_validation(tmp_path: Path) -> None:
    (tmp_path / "docsync.yaml").write_text("colour: blue\n", encoding="utf-8")
    with pytest.raises(ScriptError) as err:
        load_sync_config(tmp_path)
    assert err.value.code == ERR_VALIDATION


def test_unknown_generator_fails_validation(tmp_path: Path) -> None:
    (tmp_path / "docsync.yaml").write_text(
        "targets:\n  - marker_id: x\n    path: a.md\n    generator: changelog\n", encoding="utf-8"
    )
    with pytest.raises(ScriptError) as err:
        load_sync_config(tmp_path)
    assert err.value.code == ERR_VALIDATION


def test_duplicate_marker_ids_rejected(tmp_path: Path) -> None:
    row = "  - marker_id: x\n    path: a.md\n    generator: type-reference\n"
    (tmp_path / "docsync.yaml").write_text("targets:\n" + row + row, encoding="utf-8")
    with pytest.raises(ScriptError) as err:
        load_sync_config(tmp_path)
    assert err.value.code == ERR_CONFIG


def test_empty_yaml_config_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / "docsync.yaml").write_text("", encoding="utf-8")
    assert load_sync_config(tmp_path) == SyncConfig()
