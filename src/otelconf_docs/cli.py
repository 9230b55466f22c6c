from __future__ import annotations

import argparse
import json
import os
import sys

from . import __version__
from .core.context import RunContext
from .core.logging import log_event
from .docs.command import configure_docs_parsers, run_render_command, run_sync_command
from .errors import ScriptError
from .exit_codes import ERR_INTERNAL, ERR_USAGE
from .languages.command import configure_languages_parser, run_fix_command

TOOL = "otelconf-docs"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=TOOL,
        description="Synchronize generated configuration documentation into the docs repository.",
    )
    p.add_argument("--version", action="version", version=f"{TOOL} {__version__}")
    p.add_argument("--run-id", help="run identifier used in log events")
    p.add_argument(
        "--source-root",
        help="configuration source repository (default: $OTELCONF_SOURCE_ROOT, else the current directory)",
    )
    p.add_argument(
        "--config",
        help="sync configuration file, JSON or YAML, relative to the current directory (default: <source-root>/docsync.yaml)",
    )
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug log events")
    vg.add_argument("--quiet", action="store_true", help="only emit warnings and errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    version_p = sub.add_parser("version", help="print version")
    version_p.add_argument("--json", action="store_true", help="emit JSON output")
    configure_docs_parsers(sub)
    configure_languages_parser(sub)
    return p


def _emit_error(ctx_format: str, message: str, code: int) -> None:
    if ctx_format == "json":
        print(
            json.dumps(
                {"schema_version": 1, "tool": TOOL, "status": "fail", "error": {"message": message, "code": code}},
                sort_keys=True,
            ),
            file=sys.stderr,
        )
    else:
        print(message, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    fmt = ns.format or ("json" if "CI" in os.environ else "text")
    ctx = RunContext.from_args(ns.run_id, ns.source_root, fmt, ns.verbose, ns.quiet)
    try:
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, source_root=str(ctx.source_root))
        if ns.cmd == "version":
            payload = {"schema_version": 1, "tool": TOOL, "version": __version__, "git_sha": ctx.git_sha}
            if ctx.output_format == "json" or ns.json:
                print(json.dumps(payload, sort_keys=True))
            else:
                print(f"{TOOL} {__version__}")
            return 0
        if ns.cmd == "sync":
            return run_sync_command(ctx, ns)
        if ns.cmd == "render":
            return run_render_command(ctx, ns)
        if ns.cmd == "fix-language-implementations":
            return run_fix_command(ctx, ns)
        return ERR_USAGE
    except ScriptError as exc:
        _emit_error(ctx.output_format, str(exc), exc.code)
        return exc.code
    except Exception as exc:  # pragma: no cover
        _emit_error(ctx.output_format, f"internal error: {exc}", ERR_INTERNAL)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
