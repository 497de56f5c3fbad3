"""Merge independent report documents into one cross-run aggregate."""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Literal, TypeAlias

from report_matrix.identity import feature_key, scenario_key
from report_matrix.models.report import Feature, Scenario
from report_matrix.models.result import ScenarioRun

log = logging.getLogger(__name__)

GroupingMode: TypeAlias = Literal["by-feature", "by-scenario-stream"]

GROUPING_MODES: Sequence[GroupingMode] = ("by-feature", "by-scenario-stream")


@dataclass(frozen=True, kw_only=True)
class ReportRun:
    """One parsed report document and the run it came from."""

    run_id: str
    features: Sequence[Feature]


@dataclass(kw_only=True)
class ScenarioEntry:
    """One logical scenario and the record each run kept of it."""

    key: str
    name: str
    runs: dict[str, ScenarioRun] = field(default_factory=dict)


@dataclass(kw_only=True)
class FeatureGroup:
    """One logical feature, holding its scenarios in first-seen order."""

    key: str
    name: str
    description: str
    scenarios: dict[str, ScenarioEntry] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class FeatureRow:
    """Group header row announcing a feature."""

    feature: FeatureGroup


@dataclass(frozen=True, kw_only=True)
class ScenarioRow:
    """Table row for a single scenario."""

    feature: FeatureGroup
    scenario: ScenarioEntry


Row: TypeAlias = FeatureRow | ScenarioRow


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Scenario counts for one run."""

    run_id: str
    passed: int
    failed: int
    missing: int


@dataclass(kw_only=True)
class ReportAggregate:
    """Unified view of every run, keyed for deterministic rendering.

    Features, scenarios and runs are kept in dicts, whose iteration order is
    insertion order. That order is the first time each key was seen across
    the whole input and is never changed by later runs.
    """

    run_ids: list[str] = field(default_factory=list)
    features: dict[str, FeatureGroup] = field(default_factory=dict)
    # (feature key, scenario key) pairs in global first-encounter order
    encounter_order: list[tuple[str, str]] = field(default_factory=list)

    def add_run(self, run_id: str, features: Sequence[Feature]) -> None:
        """Record every scenario of one run.

        Adding a run id a second time replaces its records in place; the
        column keeps its original position.
        """
        if run_id not in self.run_ids:
            self.run_ids.append(run_id)

        for feature in features:
            group = self._feature_group(feature)
            for scenario in feature.elements:
                entry = self._scenario_entry(group, scenario)
                entry.runs[run_id] = ScenarioRun(steps=scenario.steps)

    def _feature_group(self, feature: Feature) -> FeatureGroup:
        key = feature_key(feature)
        if (group := self.features.get(key)) is not None:
            if group.name != feature.name:
                log.warning(
                    "Feature %s is named %r in a later run, keeping %r",
                    key,
                    feature.name,
                    group.name,
                )
            if group.description != feature.description:
                log.warning(
                    "Feature %s has a different description in a later run, "
                    "keeping the first one",
                    key,
                )
            return group

        group = FeatureGroup(
            key=key, name=feature.name, description=feature.description
        )
        self.features[key] = group
        return group

    def _scenario_entry(self, group: FeatureGroup, scenario: Scenario) -> ScenarioEntry:
        key = scenario_key(scenario)
        if (entry := group.scenarios.get(key)) is not None:
            return entry

        entry = ScenarioEntry(key=key, name=scenario.name)
        group.scenarios[key] = entry
        self.encounter_order.append((group.key, key))
        return entry

    @property
    def scenario_count(self) -> int:
        """Number of logical scenarios across all features."""
        return sum(len(group.scenarios) for group in self.features.values())

    def iter_scenarios(self) -> Iterator[ScenarioEntry]:
        """Yield every scenario, grouped by feature."""
        for group in self.features.values():
            yield from group.scenarios.values()

    def run_summary(self, run_id: str) -> RunSummary:
        """Count passed, failed and missing scenarios for a run."""
        passed = failed = missing = 0
        for scenario in self.iter_scenarios():
            run = scenario.runs.get(run_id)
            if run is None:
                missing += 1
            elif run.status == "failed":
                failed += 1
            else:
                passed += 1
        return RunSummary(run_id=run_id, passed=passed, failed=failed, missing=missing)

    def has_failures(self) -> bool:
        """Whether any run failed any scenario."""
        return any(
            run.status == "failed"
            for scenario in self.iter_scenarios()
            for run in scenario.runs.values()
        )

    def rows(self, mode: GroupingMode = "by-feature") -> Iterator[Row]:
        """Yield table rows according to the grouping mode.

        ``by-feature`` emits each feature once, followed by all of its
        scenarios. ``by-scenario-stream`` emits scenarios in the order they
        were first encountered and announces a feature whenever it differs
        from the previous row's feature, so a feature whose scenarios are
        interleaved with another's is announced more than once.
        """
        if mode == "by-feature":
            for group in self.features.values():
                yield FeatureRow(feature=group)
                for scenario in group.scenarios.values():
                    yield ScenarioRow(feature=group, scenario=scenario)
        elif mode == "by-scenario-stream":
            current: str | None = None
            for group_key, key in self.encounter_order:
                group = self.features[group_key]
                if group_key != current:
                    yield FeatureRow(feature=group)
                    current = group_key
                yield ScenarioRow(feature=group, scenario=group.scenarios[key])
        else:
            raise ValueError(f"Unknown grouping mode: {mode}")


def merge_runs(runs: Sequence[ReportRun]) -> ReportAggregate:
    """Merge report runs, in the given order, into one aggregate.

    The order of ``runs`` becomes the column order of the output.

    Args:
        runs: Parsed report documents, one per run

    Returns:
        Aggregate holding every feature, scenario and per-run record

    """
    aggregate = ReportAggregate()
    for run in runs:
        log.debug("Merging run %s (%d feature(s))", run.run_id, len(run.features))
        aggregate.add_run(run.run_id, run.features)

    log.info(
        "Merged %d run(s) into %d feature(s) and %d scenario(s)",
        len(aggregate.run_ids),
        len(aggregate.features),
        aggregate.scenario_count,
    )
    return aggregate


def scenario_cells(
    scenario: ScenarioEntry, run_ids: Sequence[str]
) -> Sequence[ScenarioRun | None]:
    """Per-run records of a scenario in column order, None where it did not run."""
    return [scenario.runs.get(run_id) for run_id in run_ids]
