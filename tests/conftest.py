"""Shared fixtures for tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def reports_dir(tmp_path: Path) -> Path:
    """Directory holding one report file per run."""
    reports = tmp_path / "reports"
    reports.mkdir()
    return reports


@pytest.fixture
def write_report(reports_dir: Path) -> Callable[[str, Any], Path]:
    """Write a report into reports_dir; strings are written verbatim."""

    def _write(file_name: str, document: Any) -> Path:
        path = reports_dir / file_name
        content = document if isinstance(document, str) else json.dumps(document)
        path.write_text(content)
        return path

    return _write
