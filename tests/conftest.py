from __future__ import annotations

import shutil
import socket
from pathlib import Path

import pytest

from otelconf_docs.core.context import RunContext

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

FIXTURES = Path(__file__).resolve().parent / "fixtures"


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture
def source_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "opentelemetry-configuration"
    shutil.copytree(FIXTURES / "source", repo)
    return repo


@pytest.fixture
def docs_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "opentelemetry.io"
    shutil.copytree(FIXTURES / "docs", repo)
    return repo


@pytest.fixture
def run_ctx(source_repo: Path) -> RunContext:
    return RunContext.from_args("pytest-run", str(source_repo), "text", False, False)
