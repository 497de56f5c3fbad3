"""Models for Cucumber JSON report documents."""

from collections.abc import Sequence
from typing import Any

from pydantic import Field, TypeAdapter, ValidationInfo, field_validator

from report_matrix.models.base import Model

FAILED_STATUS = "failed"


class StepResult(Model):
    """Outcome of a single step as recorded by the test runner."""

    status: str = Field(..., description="passed, failed, skipped, undefined, ...")
    error_message: str | None = Field(
        default=None, description="Failure detail, present when status is failed"
    )
    duration: float | None = Field(default=None, description="Step duration")

    @property
    def failed(self) -> bool:
        """Whether the step failed."""
        return self.status == FAILED_STATUS


class Step(Model):
    """Individual step within a scenario."""

    keyword: str = Field(default="", description="Gherkin keyword, e.g. 'Given '")
    name: str | None = Field(default=None, description="Step text")
    result: StepResult = Field(..., description="Step outcome")

    @property
    def description(self) -> str:
        """Keyword followed by the step text, as written in the feature file."""
        return f"{self.keyword}{self.name}" if self.name else self.keyword


class Scenario(Model):
    """Scenario (or background) element of a feature."""

    id: str = Field(default="", description="Runner-assigned scenario identifier")
    line: int = Field(default=0, description="Source line of the scenario")
    name: str = Field(default="", description="Human-readable scenario name")
    keyword: str = Field(default="", description="Gherkin keyword")
    type: str = Field(default="scenario", description="scenario or background")
    steps: Sequence[Step] = Field(..., description="Steps in execution order")

    @field_validator("id", "line", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # null id or line falls back to the same key parts as a missing one
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class Feature(Model):
    """Feature with its scenarios, one entry of a report document."""

    uri: str = Field(default="", description="Location of the feature file")
    name: str = Field(default="", description="Feature name")
    description: str = Field(default="", description="Free-form feature description")
    elements: Sequence[Scenario] = Field(..., description="Scenarios of the feature")


report_adapter = TypeAdapter(list[Feature])
