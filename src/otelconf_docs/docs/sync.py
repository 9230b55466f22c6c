from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from ..config.loader import LANGUAGE_STATUS_GENERATOR, TYPE_REFERENCE_GENERATOR, SyncConfig, TargetConfig
from ..core.context import RunContext
from ..core.logging import log_event
from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG, ERR_DOCS
from ..languages.implementations import read_and_fix_language_implementations
from ..schema.source import SourceSchemaType, read_source_types_by_type
from .markers import DocUpdater
from .render import render_language_implementation_status, render_type_reference


@dataclass(frozen=True)
class TargetResult:
    marker_id: str
    path: str
    status: str


@dataclass
class SyncReport:
    docs_repo: Path
    check: bool
    targets: list[TargetResult] = field(default_factory=list)

    @property
    def drift(self) -> list[TargetResult]:
        return [t for t in self.targets if t.status == "drift"]

    def to_payload(self) -> dict[str, object]:
        return {
            "docs_repo": str(self.docs_repo),
            "mode": "check" if self.check else "write",
            "status": "drift" if self.drift else "ok",
            "targets": [{"marker_id": t.marker_id, "path": t.path, "status": t.status} for t in self.targets],
        }


class ContentGenerator:
    """Renders generator output lazily so sources are only read when needed."""

    def __init__(self, ctx: RunContext, config: SyncConfig) -> None:
        self.ctx = ctx
        self.config = config
        self._source_types: dict[str, SourceSchemaType] | None = None
        self._rendered: dict[str, str] = {}

    def source_types(self) -> dict[str, SourceSchemaType]:
        if self._source_types is None:
            path = self.config.schema_file(self.ctx.source_root)
            log_event(self.ctx, "debug", "schema", "read", path=str(path))
            self._source_types = read_source_types_by_type(path)
        return self._source_types

    def _language_status(self) -> str:
        source_types = self.source_types()
        fix_result = read_and_fix_language_implementations(
            self.config.languages_directory(self.ctx.source_root),
            source_types,
            self.config.languages,
        )
        for message in fix_result.messages:
            log_event(self.ctx, "warn", "languages", "problem", message=message)
        return render_language_implementation_status(
            source_types,
            fix_result,
            self.config.languages,
            self.config.schema_docs_url,
        )

    def _type_reference(self) -> str:
        return render_type_reference(self.source_types())

    def render(self, generator: str) -> str:
        builders: dict[str, Callable[[], str]] = {
            LANGUAGE_STATUS_GENERATOR: self._language_status,
            TYPE_REFERENCE_GENERATOR: self._type_reference,
        }
        if generator not in builders:
            raise ScriptError(f"unknown generator `{generator}`", ERR_CONFIG, "invalid_config")
        if generator not in self._rendered:
            log_event(self.ctx, "info", "docs", "generate", generator=generator)
            self._rendered[generator] = builders[generator]()
        return self._rendered[generator]


def _sync_target(
    ctx: RunContext,
    updater: DocUpdater,
    generator: ContentGenerator,
    docs_repo: Path,
    target: TargetConfig,
    check: bool,
) -> TargetResult:
    path = docs_repo / target.path
    log_event(ctx, "info", "docs", "update", path=target.path, marker_id=target.marker_id)
    if not path.exists():
        if target.required:
            raise ScriptError(f"File not found: {path}", ERR_DOCS, "missing_file")
        log_event(ctx, "warn", "docs", "skip", path=target.path, reason="file not found")
        return TargetResult(target.marker_id, target.path, "skipped")

    update = updater.render_file(path, target.marker_id, generator.render(target.generator))
    if not update.was_updated:
        if target.required:
            raise ScriptError(
                f"Failed to update {target.path} (markers not found for `{target.marker_id}`)",
                ERR_DOCS,
                "markers_not_found",
            )
        log_event(ctx, "warn", "docs", "skip", path=target.path, reason="markers not found")
        return TargetResult(target.marker_id, target.path, "skipped")

    with path.open("r", encoding="utf-8", newline="") as f:
        unchanged = f.read() == update.content
    if unchanged:
        return TargetResult(target.marker_id, target.path, "unchanged")
    if check:
        log_event(ctx, "warn", "docs", "drift", path=target.path, marker_id=target.marker_id)
        return TargetResult(target.marker_id, target.path, "drift")
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(update.content)
    return TargetResult(target.marker_id, target.path, "updated")


def synchronize(ctx: RunContext, config: SyncConfig, docs_repo: str | Path, check: bool = False) -> SyncReport:
    """Regenerate every configured section in ``docs_repo``.

    With ``check`` set nothing is written; targets whose content would change
    are reported with status ``drift``.
    """
    repo = Path(docs_repo).resolve()
    if not repo.is_dir():
        raise ScriptError(f"Documentation repository not found at: {repo}", ERR_CONFIG, "missing_docs_repo")

    log_event(ctx, "info", "sync", "start", message=f"Synchronizing documentation to: {repo}")
    updater = DocUpdater(config.marker_prefix, config.source)
    generator = ContentGenerator(ctx, config)
    report = SyncReport(docs_repo=repo, check=check)
    for target in config.targets:
        result = _sync_target(ctx, updater, generator, repo, target, check)
        log_event(ctx, "info", "docs", "result", path=result.path, status=result.status)
        report.targets.append(result)
    log_event(ctx, "info", "sync", "complete", message="Documentation synchronization complete!")
    return report
