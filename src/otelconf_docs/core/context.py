from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal

from .git import read_git_sha

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    source_root: Path
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    git_sha: str

    @property
    def log_json(self) -> bool:
        return self.output_format == "json"

    @classmethod
    def from_args(
        cls,
        run_id: str | None,
        source_root: str | None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
    ) -> "RunContext":
        root = Path(source_root or os.environ.get("OTELCONF_SOURCE_ROOT", ".")).resolve()
        git_sha = read_git_sha(root)
        default_run = f"docsync-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}-{git_sha}"
        resolved_run_id = run_id or os.environ.get("RUN_ID", default_run)
        return cls(
            run_id=resolved_run_id,
            source_root=root,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            git_sha=git_sha,
        )
