from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from ..core.schema_utils import load_json, validate_payload
from ..core.yaml_utils import load_yaml
from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG

DEFAULT_CONFIG_NAME = "docsync.yaml"
LANGUAGE_STATUS_GENERATOR = "language-implementation-status"
TYPE_REFERENCE_GENERATOR = "type-reference"
GENERATORS = (LANGUAGE_STATUS_GENERATOR, TYPE_REFERENCE_GENERATOR)


@dataclass(frozen=True)
class TargetConfig:
    marker_id: str
    path: str
    generator: str
    required: bool = True


DEFAULT_TARGETS: tuple[TargetConfig, ...] = (
    TargetConfig(
        marker_id="language-implementation-status",
        path="content/en/docs/languages/sdk-configuration/language-implementation-status.md",
        generator=LANGUAGE_STATUS_GENERATOR,
    ),
    TargetConfig(
        marker_id="configuration-types",
        path="content/en/docs/languages/sdk-configuration/configuration-types.md",
        generator=TYPE_REFERENCE_GENERATOR,
        required=False,
    ),
)


@dataclass(frozen=True)
class SyncConfig:
    marker_prefix: str = "GENERATED"
    source: str = "opentelemetry-configuration"
    schema_path: str = "opentelemetry_configuration.json"
    languages_dir: str = "language-support-status"
    languages: tuple[str, ...] = ("cpp", "go", "java", "js", "php")
    schema_docs_url: str = "https://github.com/open-telemetry/opentelemetry-configuration/blob/main/schema-docs.md"
    targets: tuple[TargetConfig, ...] = field(default=DEFAULT_TARGETS)

    def schema_file(self, source_root: Path) -> Path:
        return (source_root / self.schema_path).resolve()

    def languages_directory(self, source_root: Path) -> Path:
        return (source_root / self.languages_dir).resolve()


def default_config() -> SyncConfig:
    return SyncConfig()


def _read_config_payload(path: Path) -> Any:
    if path.suffix == ".json":
        return load_json(path)
    return load_yaml(path)


def _targets_from_payload(rows: list[dict[str, Any]]) -> tuple[TargetConfig, ...]:
    targets = tuple(
        TargetConfig(
            marker_id=str(row["marker_id"]),
            path=str(row["path"]),
            generator=str(row["generator"]),
            required=bool(row.get("required", True)),
        )
        for row in rows
    )
    seen: set[str] = set()
    for target in targets:
        if target.marker_id in seen:
            raise ScriptError(f"duplicate target marker id `{target.marker_id}`", ERR_CONFIG, "invalid_config")
        seen.add(target.marker_id)
    return targets


def load_sync_config(source_root: Path, config_path: str | None = None) -> SyncConfig:
    """Resolve the sync configuration for a source repository.

    An explicit ``config_path`` must exist; a relative one is resolved against
    the current directory like any other command-line path. Without one,
    ``docsync.yaml`` at the source root is used when present, and the built-in
    defaults otherwise.
    """
    if config_path:
        path = Path(config_path).resolve()
        if not path.exists():
            raise ScriptError(f"Config file not found: {path}", ERR_CONFIG, "missing_config")
    else:
        path = source_root / DEFAULT_CONFIG_NAME
        if not path.exists():
            return default_config()

    payload = _read_config_payload(path)
    if payload is None:
        payload = {}
    validate_payload(payload, "docsync-config.schema.json", str(path))

    updates: dict[str, Any] = {}
    for key in ("marker_prefix", "source", "schema_path", "languages_dir", "schema_docs_url"):
        if key in payload:
            updates[key] = str(payload[key])
    if "languages" in payload:
        updates["languages"] = tuple(str(lang) for lang in payload["languages"])
    if "targets" in payload:
        updates["targets"] = _targets_from_payload(payload["targets"])
    return replace(default_config(), **updates)
