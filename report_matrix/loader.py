"""Discover and parse report documents from a directory."""

import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from report_matrix.aggregator import ReportRun
from report_matrix.models.report import Feature, report_adapter

log = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".json"


class ReportFormatError(ValueError):
    """Raised when a report file is not a valid report document."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path


def normalize_extension(extension: str) -> str:
    """Ensure the extension starts with a dot."""
    return extension if extension.startswith(".") else f".{extension}"


def discover_report_files(
    directory: Path, extension: str = DEFAULT_EXTENSION
) -> Sequence[Path]:
    """List report files in a directory, sorted by file name.

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path is not a directory

    """
    if not directory.exists():
        raise FileNotFoundError(f"Report directory not found: {directory}")
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    extension = normalize_extension(extension)
    return sorted(
        (
            path
            for path in directory.iterdir()
            if path.name.endswith(extension) and path.is_file()
        ),
        key=lambda path: path.name,
    )


def run_id_for(path: Path, extension: str = DEFAULT_EXTENSION) -> str:
    """Derive the run identifier from a report file name."""
    return path.name.removesuffix(normalize_extension(extension))


def load_report(path: Path) -> Sequence[Feature]:
    """Parse one report document.

    Raises:
        ReportFormatError: If the file is not valid JSON or does not match
            the report schema

    """
    content = path.read_bytes()
    try:
        return report_adapter.validate_json(content)
    except ValidationError as e:
        if any(error["type"] == "json_invalid" for error in e.errors()):
            raise ReportFormatError(path, "Invalid JSON in report") from e
        raise ReportFormatError(path, "Invalid report schema") from e


def load_report_runs(
    directory: Path, extension: str = DEFAULT_EXTENSION
) -> Sequence[ReportRun]:
    """Load every report in a directory as one run each.

    Runs are returned in file-name order. Any unreadable or malformed file
    aborts the whole load.
    """
    runs: list[ReportRun] = []
    for path in discover_report_files(directory, extension):
        features = load_report(path)
        run_id = run_id_for(path, extension)
        log.info("Loaded report %s (%d feature(s))", run_id, len(features))
        runs.append(ReportRun(run_id=run_id, features=features))

    if not runs:
        log.warning("No %s reports found in %s", normalize_extension(extension), directory)
    return runs
