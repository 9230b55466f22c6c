from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from otelconf_docs.docs.markers import DocUpdater

_TEXT = st.text(alphabet=st.characters(exclude_characters="<>", exclude_categories=("Cs",)), max_size=60)
_MARKER_ID = st.from_regex(r"[a-z][a-z0-9._-]{0,20}", fullmatch=True)


@pytest.mark.unit
@given(_MARKER_ID, _TEXT, _TEXT, _TEXT, _TEXT)
def test_update_preserves_surrounding_text(marker_id: str, before: str, old: str, after: str, new: str) -> None:
    updater = DocUpdater()
    markers = updater.get_marker_pattern(marker_id)
    content = f"{before}{markers.begin}{old}{markers.end}{after}"
    update = updater.update_section(content, marker_id, new)
    assert update.was_updated
    assert update.content == f"{before}{markers.begin}\n{new}\n{markers.end}{after}"


@pytest.mark.unit
@given(_MARKER_ID, _TEXT, _TEXT)
def test_update_is_idempotent(marker_id: str, body: str, new: str) -> None:
    updater = DocUpdater()
    content = f"<!-- BEGIN GENERATED: {marker_id} -->{body}<!-- END GENERATED: {marker_id} -->"
    once = updater.update_section(content, marker_id, new).content
    twice = updater.update_section(once, marker_id, new).content
    assert once == twice


@pytest.mark.unit
@given(_MARKER_ID, _TEXT)
def test_content_without_markers_is_untouched(marker_id: str, content: str) -> None:
    update = DocUpdater().update_section(content, marker_id, "x")
    assert not update.was_updated
    assert update.content == content
