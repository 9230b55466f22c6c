"""Markdown fragments spliced into the documentation repository."""

from __future__ import annotations

from typing import Mapping, Sequence

from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION
from ..languages.implementations import FixResult, TypeSupportStatus
from ..schema.source import SourceSchemaType

FIX_HINT = "Language implementations have problems. Please run fix-language-implementations and try again."


def escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\r\n", "\n").replace("\n", "<br>").strip()


def type_link(type_name: str, schema_docs_url: str) -> str:
    return f"[`{type_name}`]({schema_docs_url}#{type_name.lower()})"


def _support_status_details(status: TypeSupportStatus, source_type: SourceSchemaType) -> str:
    details: list[str] = []
    if not source_type.is_enum_type():
        for prop in source_type.sorted_properties():
            details.append(f"* `{prop.property}`: {status.property_status(prop.property)}<br>")
    else:
        for value in source_type.sorted_enum_values():
            details.append(f"* `{value}`: {status.enum_value_status(value)}<br>")
    return "".join(details)


def render_language_implementation_status(
    source_types: Mapping[str, SourceSchemaType],
    fix_result: FixResult,
    languages: Sequence[str],
    schema_docs_url: str,
) -> str:
    if fix_result.messages:
        raise ScriptError(FIX_HINT, ERR_VALIDATION, "language_implementations")

    output: list[str] = []
    for language in languages:
        output.append(f"### {language}\n\n")
        impl = fix_result.find(language)
        if impl is None:
            raise ScriptError(f"Meta schema LanguageImplementation not found for language {language}.", ERR_VALIDATION)
        output.append(f"Latest supported file format: `{impl.latest_supported_file_format}`\n\n")
        output.append("| Type | Status | Notes | Support Status Details |\n")
        output.append("|---|---|---|---|\n")
        for status in impl.type_support_statuses:
            source_type = source_types.get(status.type)
            if source_type is None:
                raise ScriptError(f"SourceSchemaType not found for type {status.type}.", ERR_VALIDATION)
            details = _support_status_details(status, source_type)
            link = type_link(status.type, schema_docs_url)
            output.append(f"| {link} | {status.status} | {status.notes or ''} | {details} |\n")
        output.append("\n")
    return "".join(output)


def render_type_reference(source_types: Mapping[str, SourceSchemaType]) -> str:
    output: list[str] = []
    for name in sorted(source_types):
        source_type = source_types[name]
        output.append(f"### {name}\n\n")
        if source_type.description():
            output.append(f"{source_type.description().strip()}\n\n")
        if source_type.is_enum_type():
            output.append("| Value |\n")
            output.append("|---|\n")
            for value in source_type.sorted_enum_values():
                output.append(f"| `{value}` |\n")
        else:
            props = source_type.sorted_properties()
            if not props:
                output.append("No properties.\n")
            else:
                output.append("| Property | Type | Required? | Description |\n")
                output.append("|---|---|---|---|\n")
                for prop in props:
                    label = escape_cell(prop.type_label())
                    ref = prop.ref_type()
                    if ref and ref in source_types:
                        label = label.replace(ref, f"[`{ref}`](#{ref.lower()})", 1)
                    required = "yes" if prop.required else "no"
                    output.append(f"| `{prop.property}` | {label} | {required} | {escape_cell(prop.description())} |\n")
        output.append("\n")
    return "".join(output)
