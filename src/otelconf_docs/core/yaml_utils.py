from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG, ERR_VALIDATION


def load_yaml(path: Path) -> Any:
    if not path.exists():
        raise ScriptError(f"File not found: {path}", ERR_CONFIG, "missing_file")
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ScriptError(f"{path}: invalid YAML: {exc}", ERR_VALIDATION, "invalid_yaml") from exc


def dump_yaml(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(payload, f, sort_keys=False, allow_unicode=True, default_flow_style=False)
