"""Configuration for a report merge."""

from pathlib import Path

from pydantic import BaseModel, field_validator

from report_matrix.aggregator import GroupingMode
from report_matrix.loader import DEFAULT_EXTENSION, normalize_extension


class MergeConfig(BaseModel):
    """Settings for one invocation of the merge."""

    input_dir: Path
    output_file: Path
    extension: str = DEFAULT_EXTENSION
    # by-scenario-stream repeats a feature header whenever the feature changes
    grouping_mode: GroupingMode = "by-feature"
    title: str = "Test run comparison"
    strict: bool = False

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        if not value.strip("."):
            raise ValueError("extension must not be empty")
        return normalize_extension(value)
