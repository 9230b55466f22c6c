from __future__ import annotations

import argparse
import json
from pathlib import Path

from ..config.loader import GENERATORS, load_sync_config
from ..core.context import RunContext
from ..core.logging import log_event
from ..exit_codes import ERR_DRIFT, OK
from .sync import ContentGenerator, synchronize


def _emit(payload: dict[str, object], as_json: bool) -> None:
    if as_json:
        print(json.dumps(payload, sort_keys=True))
        return
    print(f"docs_repo={payload['docs_repo']} mode={payload['mode']} status={payload['status']}")
    for row in payload["targets"]:  # type: ignore[union-attr]
        print(f"- {row['path']}: {row['status']}")


def run_sync_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    config = load_sync_config(ctx.source_root, ns.config)
    report = synchronize(ctx, config, ns.docs_repo, check=ns.check)
    payload = {"schema_version": 1, "tool": "otelconf-docs", "run_id": ctx.run_id, **report.to_payload()}
    _emit(payload, ctx.output_format == "json" or ns.json)
    if report.drift:
        return ERR_DRIFT
    return OK


def run_render_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    config = load_sync_config(ctx.source_root, ns.config)
    content = ContentGenerator(ctx, config).render(ns.generator)
    if ns.out:
        out = Path(ns.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8")
        log_event(ctx, "info", "render", "write", path=str(out), generator=ns.generator)
        return OK
    print(content, end="")
    return OK


def configure_docs_parsers(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    sync_p = sub.add_parser("sync", help="synchronize generated sections into the documentation repository")
    sync_p.add_argument("--docs-repo", required=True, help="path to the opentelemetry.io repository")
    sync_p.add_argument("--check", action="store_true", help="report drift without writing files")
    sync_p.add_argument("--json", action="store_true", help="emit JSON output")

    render_p = sub.add_parser("render", help="print one generated markdown fragment")
    render_p.add_argument("generator", choices=list(GENERATORS))
    render_p.add_argument("--out", help="write the fragment to this file instead of stdout")
