from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG, ERR_VALIDATION


def load_json(path: Path) -> Any:
    if not path.exists():
        raise ScriptError(f"File not found: {path}", ERR_CONFIG, "missing_file")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ScriptError(f"{path}: invalid JSON: {exc}", ERR_VALIDATION, "invalid_json") from exc


def load_bundled_schema(name: str) -> dict[str, Any]:
    text = resources.files("otelconf_docs").joinpath("schemas").joinpath(name).read_text(encoding="utf-8")
    return json.loads(text)


def validate_payload(payload: Any, schema_name: str, label: str) -> None:
    schema = load_bundled_schema(schema_name)
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda err: [str(part) for part in err.absolute_path])
    if not errors:
        return
    first = errors[0]
    where = "/".join(str(part) for part in first.absolute_path) or "<root>"
    raise ScriptError(f"{label}: schema validation failed at {where}: {first.message}", ERR_VALIDATION, "schema_validation")
