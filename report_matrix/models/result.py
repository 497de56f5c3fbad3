"""Models for per-run scenario outcomes."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, TypeAlias

from report_matrix.models.report import Step

ScenarioStatus: TypeAlias = Literal["passed", "failed"]


@dataclass(frozen=True, kw_only=True)
class ScenarioRun:
    """Steps one run recorded for one scenario.

    Contains only the execution record - the aggregate knows which
    scenario and run it belongs to.
    """

    steps: Sequence[Step]

    @property
    def status(self) -> ScenarioStatus:
        """Failed if any step failed, passed otherwise."""
        return "failed" if any(step.result.failed for step in self.steps) else "passed"
