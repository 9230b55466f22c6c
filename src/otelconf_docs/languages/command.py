from __future__ import annotations

import argparse
import json

from ..config.loader import load_sync_config
from ..core.context import RunContext
from ..core.logging import log_event
from ..exit_codes import ERR_VALIDATION, OK
from ..schema.source import read_source_types_by_type
from .implementations import (
    read_and_fix_language_implementations,
    remove_language_implementations,
    write_language_implementations,
)


def run_fix_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    config = load_sync_config(ctx.source_root, ns.config)
    source_types = read_source_types_by_type(config.schema_file(ctx.source_root))
    directory = config.languages_directory(ctx.source_root)
    result = read_and_fix_language_implementations(directory, source_types, config.languages)

    written: list[str] = []
    removed: list[str] = []
    if not ns.check and result.messages:
        written = [str(path) for path in write_language_implementations(directory, result.language_implementations)]
        removed = [str(path) for path in remove_language_implementations(directory, result.unknown_languages)]
        log_event(ctx, "info", "languages", "write", files=len(written), removed=len(removed))

    status = "ok" if not result.messages else ("fail" if ns.check else "fixed")
    payload = {
        "schema_version": 1,
        "tool": "otelconf-docs",
        "run_id": ctx.run_id,
        "status": status,
        "messages": result.messages,
        "written": written,
        "removed": removed,
    }
    if ctx.output_format == "json" or ns.json:
        print(json.dumps(payload, sort_keys=True))
    else:
        for message in result.messages:
            print(message)
        print(f"status={status} problems={len(result.messages)} written={len(written)} removed={len(removed)}")
    return ERR_VALIDATION if status == "fail" else OK


def configure_languages_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("fix-language-implementations", help="reconcile language support records with the schema")
    p.add_argument("--check", action="store_true", help="only report problems, exit non-zero when any exist")
    p.add_argument("--json", action="store_true", help="emit JSON output")
