"""Replace generated sections delimited by marker comments.

A section looks like::

    <!-- BEGIN GENERATED: language-implementation-status SOURCE: opentelemetry-configuration -->
    ...generated content...
    <!-- END GENERATED: language-implementation-status SOURCE: opentelemetry-configuration -->

Markers written without the ``SOURCE:`` suffix are still recognized and are
rewritten in the canonical form on update.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from ..errors import ScriptError
from ..exit_codes import ERR_DOCS


@dataclass(frozen=True)
class MarkerPattern:
    begin: str
    end: str


@dataclass(frozen=True)
class SectionUpdate:
    content: str
    was_updated: bool


class DocUpdater:
    def __init__(self, marker_prefix: str = "GENERATED", source: str = "opentelemetry-configuration") -> None:
        self.marker_prefix = marker_prefix
        self.source = source

    def get_marker_pattern(self, marker_id: str) -> MarkerPattern:
        begin = f"<!-- BEGIN {self.marker_prefix}: {marker_id} SOURCE: {self.source} -->"
        end = f"<!-- END {self.marker_prefix}: {marker_id} SOURCE: {self.source} -->"
        return MarkerPattern(begin=begin, end=end)

    def section_regex(self, marker_id: str) -> re.Pattern[str]:
        head = f"{re.escape(self.marker_prefix)}: {re.escape(marker_id)}"
        source = r"(?:\s+SOURCE:\s+[\w-]+)?"
        return re.compile(rf"<!-- BEGIN {head}{source} -->[\s\S]*?<!-- END {head}{source} -->")

    def update_section(self, content: str, marker_id: str, new_content: str) -> SectionUpdate:
        pattern = self.section_regex(marker_id)
        if not pattern.search(content):
            return SectionUpdate(content=content, was_updated=False)
        markers = self.get_marker_pattern(marker_id)
        replacement = f"{markers.begin}\n{new_content}\n{markers.end}"
        return SectionUpdate(content=pattern.sub(lambda _match: replacement, content), was_updated=True)

    def render_file(self, path: Path, marker_id: str, new_content: str) -> SectionUpdate:
        if not path.exists():
            raise ScriptError(f"File not found: {path}", ERR_DOCS, "missing_file")
        with path.open("r", encoding="utf-8", newline="") as f:
            original = f.read()
        return self.update_section(original, marker_id, new_content)

    def update_file(self, path: Path, marker_id: str, new_content: str) -> bool:
        update = self.render_file(path, marker_id, new_content)
        if not update.was_updated:
            return False
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(update.content)
        return True
