from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from otelconf_docs.config.loader import TYPE_REFERENCE_GENERATOR, TargetConfig, load_sync_config
from otelconf_docs.core.context import RunContext
from otelconf_docs.docs.sync import synchronize
from otelconf_docs.errors import ScriptError
from otelconf_docs.exit_codes import ERR_CONFIG, ERR_DOCS, ERR_VALIDATION

STATUS_PAGE = "content/en/docs/languages/sdk-configuration/language-implementation-status.md"
BEGIN = "<!-- BEGIN GENERATED: language-implementation-status SOURCE: opentelemetry-configuration -->"
END = "<!-- END GENERATED: language-implementation-status SOURCE: opentelemetry-configuration -->"


def test_sync_updates_status_page(run_ctx: RunContext, source_repo: Path, docs_repo: Path) -> None:
    report = synchronize(run_ctx, load_sync_config(source_repo), docs_repo)
    statuses = {t.marker_id: t.status for t in report.targets}
    assert statuses == {"language-implementation-status": "updated", "configuration-types": "skipped"}
    text = (docs_repo / STATUS_PAGE).read_text(encoding="utf-8")
    assert "stale content" not in text
    assert f"{BEGIN}\n### go\n\n" in text
    assert text.count(BEGIN) == 1 and text.count(END) == 1
    assert text.startswith("---\ntitle: Language implementation status\n")
    assert text.endswith(f"{END}\n\nReport problems on the configuration repository.\n")


def test_sync_is_idempotent(run_ctx: RunContext, source_repo: Path, docs_repo: Path) -> None:
    config = load_sync_config(source_repo)
    synchronize(run_ctx, config, docs_repo)
    first = (docs_repo / STATUS_PAGE).read_text(encoding="utf-8")
    report = synchronize(run_ctx, config, docs_repo)
    assert report.targets[0].status == "unchanged"
    assert (docs_repo / STATUS_PAGE).read_text(encoding="utf-8") == first


def test_check_mode_reports_drift_without_writing(run_ctx: RunContext, source_repo: Path, docs_repo: Path) -> None:
    before = (docs_repo / STATUS_PAGE).read_text(encoding="utf-8")
    report = synchronize(run_ctx, load_sync_config(source_repo), docs_repo, check=True)
    assert [t.marker_id for t in report.drift] == ["language-implementation-status"]
    assert report.to_payload()["status"] == "drift"
    assert (docs_repo / STATUS_PAGE).read_text(encoding="utf-8") == before


def test_optional_type_reference_target_is_written(run_ctx: RunContext, source_repo: Path, docs_repo: Path) -> None:
    page = docs_repo / "content/en/docs/languages/sdk-configuration/configuration-types.md"
    page.write_text(
        "# Types\n\n<!-- BEGIN GENERATED: configuration-types -->\n<!-- END GENERATED: configuration-types -->\n",
        encoding="utf-8",
    )
    report = synchronize(run_ctx, load_sync_config(source_repo), docs_repo)
    assert report.targets[1].status == "updated"
    assert "### SeverityNumber" in page.read_text(encoding="utf-8")


def test_required_target_without_markers_fails(run_ctx: RunContext, source_repo: Path, docs_repo: Path) -> None:
    (docs_repo / STATUS_PAGE).write_text("no markers here\n", encoding="utf-8")
    with pytest.raises(ScriptError) as err:
        synchronize(run_ctx, load_sync_config(source_repo), docs_repo)
    assert err.value.code == ERR_DOCS
    assert "markers not found" in str(err.value)


def test_required_target_missing_file_fails(run_ctx: RunContext, source_repo: Path, docs_repo: Path) -> None:
    (docs_repo / STATUS_PAGE).unlink()
    with pytest.raises(ScriptError) as err:
        synchronize(run_ctx, load_sync_config(source_repo), docs_repo)
    assert err.value.code == ERR_DOCS
    assert "File not found" in str(err.value)


def test_missing_docs_repo(run_ctx: RunContext, source_repo: Path, tmp_path: Path) -> None:
    with pytest.raises(ScriptError) as err:
        synchronize(run_ctx, load_sync_config(source_repo), tmp_path / "missing")
    assert err.value.code == ERR_CONFIG


def test_unfixed_records_stop_the_sync(run_ctx: RunContext, source_repo: Path, docs_repo: Path) -> None:
    (source_repo / "language-support-status" / "java.yaml").unlink()
    before = (docs_repo / STATUS_PAGE).read_text(encoding="utf-8")
    with pytest.raises(ScriptError) as err:
        synchronize(run_ctx, load_sync_config(source_repo), docs_repo)
    assert err.value.code == ERR_VALIDATION
    assert "fix-language-implementations" in str(err.value)
    assert (docs_repo / STATUS_PAGE).read_text(encoding="utf-8") == before


def test_type_reference_only_does_not_read_language_records(run_ctx: RunContext, source_repo: Path, docs_repo: Path) -> None:
    (source_repo / "language-support-status" / "go.yaml").unlink()
    page = docs_repo / "types.md"
    page.write_text("<!-- BEGIN GENERATED: types -->\n<!-- END GENERATED: types -->\n", encoding="utf-8")
    config = replace(
        load_sync_config(source_repo),
        targets=(TargetConfig(marker_id="types", path="types.md", generator=TYPE_REFERENCE_GENERATOR),),
    )
    report = synchronize(run_ctx, config, docs_repo)
    assert report.targets[0].status == "updated"
