"""Type registry built from the configuration JSON schema.

Each entry under ``$defs`` is one configuration type. A type is either an enum
type (its schema carries an ``enum`` list) or an object type described by its
``properties``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema

from ..core.schema_utils import load_json
from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION


def _ref_name(ref: str) -> str:
    return ref.rsplit("/", 1)[-1]


def schema_type_label(schema: Any) -> str:
    if not isinstance(schema, dict):
        return "any"
    if "$ref" in schema:
        return _ref_name(str(schema["$ref"]))
    for key in ("oneOf", "anyOf"):
        if isinstance(schema.get(key), list):
            labels = [schema_type_label(option) for option in schema[key]]
            labels = [label for label in labels if label != "null"] or labels
            return " | ".join(dict.fromkeys(labels))
    raw = schema.get("type")
    types = raw if isinstance(raw, list) else [raw] if raw else []
    types = [str(t) for t in types if t != "null"] or [str(t) for t in types]
    labels: list[str] = []
    for name in types:
        if name == "array" and "items" in schema:
            labels.append(f"array of {schema_type_label(schema['items'])}")
        else:
            labels.append(name)
    if labels:
        return " | ".join(labels)
    if "enum" in schema:
        return "enum"
    return "any"


@dataclass(frozen=True)
class SourceSchemaProperty:
    property: str
    schema: dict[str, Any]
    required: bool = False

    def type_label(self) -> str:
        return schema_type_label(self.schema)

    def ref_type(self) -> str | None:
        if "$ref" in self.schema:
            return _ref_name(str(self.schema["$ref"]))
        items = self.schema.get("items")
        if isinstance(items, dict) and "$ref" in items:
            return _ref_name(str(items["$ref"]))
        return None

    def description(self) -> str:
        return str(self.schema.get("description") or "")


@dataclass(frozen=True)
class SourceSchemaType:
    type: str
    schema: dict[str, Any]

    def is_enum_type(self) -> bool:
        return isinstance(self.schema.get("enum"), list)

    def sorted_properties(self) -> list[SourceSchemaProperty]:
        props = self.schema.get("properties") or {}
        required = set(self.schema.get("required") or [])
        return [
            SourceSchemaProperty(property=name, schema=props[name] if isinstance(props[name], dict) else {}, required=name in required)
            for name in sorted(props)
        ]

    def sorted_enum_values(self) -> list[str]:
        values = self.schema.get("enum") or []
        return sorted(value if isinstance(value, str) else json.dumps(value) for value in values if value is not None)

    def property_names(self) -> set[str]:
        return set((self.schema.get("properties") or {}).keys())

    def description(self) -> str:
        return str(self.schema.get("description") or "")


def source_types_from_document(document: Any, label: str = "source schema") -> dict[str, SourceSchemaType]:
    if not isinstance(document, dict):
        raise ScriptError(f"{label}: root must be a JSON object", ERR_VALIDATION, "invalid_schema")
    try:
        jsonschema.Draft202012Validator.check_schema(document)
    except jsonschema.SchemaError as exc:
        raise ScriptError(f"{label}: not a valid JSON schema: {exc.message}", ERR_VALIDATION, "invalid_schema") from exc

    defs = document.get("$defs")
    if defs is None:
        defs = document.get("definitions") or {}
    types: dict[str, SourceSchemaType] = {}
    title = document.get("title")
    if isinstance(title, str) and title and isinstance(document.get("properties"), dict):
        types[title] = SourceSchemaType(type=title, schema=document)
    for name in sorted(defs):
        schema = defs[name]
        if not isinstance(schema, dict):
            raise ScriptError(f"{label}: type `{name}` must be an object schema", ERR_VALIDATION, "invalid_schema")
        types[name] = SourceSchemaType(type=name, schema=schema)
    return types


def read_source_types_by_type(path: Path) -> dict[str, SourceSchemaType]:
    return source_types_from_document(load_json(path), str(path))
