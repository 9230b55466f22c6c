"""Per-language implementation support records.

One YAML file per language lives in the languages directory of the source
repository. Records are validated against the bundled
``language-implementation.schema.json`` and then reconciled with the source
schema types by :func:`fix_language_implementations`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

from ..core.schema_utils import validate_payload
from ..core.yaml_utils import dump_yaml, load_yaml
from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG
from ..schema.source import SourceSchemaType

STATUSES = ("supported", "unknown", "not_implemented", "ignored", "not_applicable")
UNKNOWN_STATUS = "unknown"
UNKNOWN_FILE_FORMAT = "unknown"
RECORD_SUFFIX = ".yaml"


@dataclass(frozen=True)
class PropertyOverride:
    property: str
    status: str


@dataclass(frozen=True)
class EnumOverride:
    enum_value: str
    status: str


@dataclass(frozen=True)
class TypeSupportStatus:
    type: str
    status: str
    notes: str = ""
    property_overrides: tuple[PropertyOverride, ...] = ()
    enum_overrides: tuple[EnumOverride, ...] = ()

    def property_status(self, prop: str) -> str:
        for override in self.property_overrides:
            if override.property == prop:
                return override.status
        return self.status

    def enum_value_status(self, value: str) -> str:
        for override in self.enum_overrides:
            if override.enum_value == value:
                return override.status
        return self.status


@dataclass(frozen=True)
class LanguageImplementation:
    language: str
    latest_supported_file_format: str
    type_support_statuses: tuple[TypeSupportStatus, ...] = ()

    def find_type(self, type_name: str) -> TypeSupportStatus | None:
        for status in self.type_support_statuses:
            if status.type == type_name:
                return status
        return None


@dataclass
class FixResult:
    messages: list[str] = field(default_factory=list)
    language_implementations: list[LanguageImplementation] = field(default_factory=list)
    unknown_languages: list[str] = field(default_factory=list)

    def find(self, language: str) -> LanguageImplementation | None:
        for impl in self.language_implementations:
            if impl.language == language:
                return impl
        return None


def implementation_from_payload(language: str, payload: Mapping[str, Any]) -> LanguageImplementation:
    statuses = []
    for row in payload.get("typeSupportStatuses") or []:
        statuses.append(
            TypeSupportStatus(
                type=str(row["type"]),
                status=str(row["status"]),
                notes=str(row.get("notes") or ""),
                property_overrides=tuple(
                    PropertyOverride(property=str(o["property"]), status=str(o["status"]))
                    for o in row.get("propertyOverrides") or []
                ),
                enum_overrides=tuple(
                    EnumOverride(enum_value=str(o["enumValue"]), status=str(o["status"]))
                    for o in row.get("enumOverrides") or []
                ),
            )
        )
    return LanguageImplementation(
        language=language,
        latest_supported_file_format=str(payload["latestSupportedFileFormat"]),
        type_support_statuses=tuple(statuses),
    )


def implementation_to_payload(impl: LanguageImplementation) -> dict[str, Any]:
    return {
        "latestSupportedFileFormat": impl.latest_supported_file_format,
        "typeSupportStatuses": [
            {
                "type": status.type,
                "status": status.status,
                "notes": status.notes,
                "propertyOverrides": [{"property": o.property, "status": o.status} for o in status.property_overrides],
                "enumOverrides": [{"enumValue": o.enum_value, "status": o.status} for o in status.enum_overrides],
            }
            for status in impl.type_support_statuses
        ],
    }


def read_language_implementations(directory: Path) -> list[LanguageImplementation]:
    if not directory.is_dir():
        raise ScriptError(f"Language implementations directory not found: {directory}", ERR_CONFIG, "missing_dir")
    out: list[LanguageImplementation] = []
    for path in sorted(directory.glob(f"*{RECORD_SUFFIX}")):
        payload = load_yaml(path)
        validate_payload(payload, "language-implementation.schema.json", str(path))
        out.append(implementation_from_payload(path.stem, payload))
    return out


def write_language_implementations(directory: Path, implementations: Iterable[LanguageImplementation]) -> list[Path]:
    written: list[Path] = []
    for impl in implementations:
        path = directory / f"{impl.language}{RECORD_SUFFIX}"
        dump_yaml(path, implementation_to_payload(impl))
        written.append(path)
    return written


def remove_language_implementations(directory: Path, languages: Iterable[str]) -> list[Path]:
    removed: list[Path] = []
    for language in languages:
        path = directory / f"{language}{RECORD_SUFFIX}"
        if path.exists():
            path.unlink()
            removed.append(path)
    return removed


def _fix_overrides(
    language: str,
    type_name: str,
    kind: str,
    overrides: Sequence[Any],
    key: str,
    allowed: set[str],
    messages: list[str],
) -> tuple[Any, ...]:
    kept: list[Any] = []
    seen: set[str] = set()
    for override in overrides:
        name = getattr(override, key)
        if name in seen:
            messages.append(f"{language}: removed duplicate {kind} override `{name}` on type {type_name}.")
            continue
        seen.add(name)
        if name not in allowed:
            messages.append(f"{language}: removed {kind} override for unknown {kind} `{name}` on type {type_name}.")
            continue
        kept.append(override)
    ordered = sorted(kept, key=lambda o: getattr(o, key))
    if ordered != kept:
        messages.append(f"{language}: sorted {kind} overrides on type {type_name}.")
    return tuple(ordered)


def _fix_type_support_status(
    language: str,
    status: TypeSupportStatus,
    source_type: SourceSchemaType,
    messages: list[str],
) -> TypeSupportStatus:
    if source_type.is_enum_type():
        if status.property_overrides:
            messages.append(f"{language}: removed property overrides on enum type {status.type}.")
        enum_overrides = _fix_overrides(
            language, status.type, "enum value", status.enum_overrides, "enum_value",
            set(source_type.sorted_enum_values()), messages,
        )
        return TypeSupportStatus(status.type, status.status, status.notes, (), enum_overrides)

    if status.enum_overrides:
        messages.append(f"{language}: removed enum overrides on object type {status.type}.")
    property_overrides = _fix_overrides(
        language, status.type, "property", status.property_overrides, "property",
        source_type.property_names(), messages,
    )
    return TypeSupportStatus(status.type, status.status, status.notes, property_overrides, ())


def _fix_implementation(
    impl: LanguageImplementation,
    source_types: Mapping[str, SourceSchemaType],
    messages: list[str],
) -> LanguageImplementation:
    kept: list[TypeSupportStatus] = []
    seen: set[str] = set()
    for status in impl.type_support_statuses:
        if status.type in seen:
            messages.append(f"{impl.language}: removed duplicate entry for type {status.type}.")
            continue
        seen.add(status.type)
        source_type = source_types.get(status.type)
        if source_type is None:
            messages.append(f"{impl.language}: removed entry for type {status.type} which is not in the source schema.")
            continue
        kept.append(_fix_type_support_status(impl.language, status, source_type, messages))

    if [s.type for s in kept] != sorted(s.type for s in kept):
        messages.append(f"{impl.language}: sorted type support statuses.")
    for type_name in sorted(source_types):
        if type_name not in seen:
            messages.append(f"{impl.language}: added missing type {type_name} with status {UNKNOWN_STATUS}.")
            kept.append(TypeSupportStatus(type=type_name, status=UNKNOWN_STATUS))
    return LanguageImplementation(
        language=impl.language,
        latest_supported_file_format=impl.latest_supported_file_format,
        type_support_statuses=tuple(sorted(kept, key=lambda s: s.type)),
    )


def fix_language_implementations(
    implementations: Sequence[LanguageImplementation],
    source_types: Mapping[str, SourceSchemaType],
    languages: Sequence[str],
) -> FixResult:
    """Reconcile language records with the source schema.

    Every correction appends a message; an empty message list means the records
    were already consistent. Records for languages outside ``languages`` are
    dropped from the result and listed in ``unknown_languages`` so the caller
    can delete their files.
    """
    result = FixResult()
    by_language = {impl.language: impl for impl in implementations}
    for language in languages:
        impl = by_language.get(language)
        if impl is None:
            result.messages.append(f"{language}: LanguageImplementation not found, created with all types {UNKNOWN_STATUS}.")
            impl = LanguageImplementation(language=language, latest_supported_file_format=UNKNOWN_FILE_FORMAT)
        result.language_implementations.append(_fix_implementation(impl, source_types, result.messages))
    for language in sorted(set(by_language) - set(languages)):
        result.messages.append(f"{language}: LanguageImplementation found for unknown language, removing.")
        result.unknown_languages.append(language)
    return result


def read_and_fix_language_implementations(
    directory: Path,
    source_types: Mapping[str, SourceSchemaType],
    languages: Sequence[str],
) -> FixResult:
    return fix_language_implementations(read_language_implementations(directory), source_types, languages)
