"""Stable identities for features and scenarios across report documents."""

from report_matrix.models.report import Feature, Scenario

SCENARIO_KEY_SEPARATOR = "+line:"


def feature_key(feature: Feature) -> str:
    """Identify a feature by its location.

    Features from different runs with the same uri are the same logical
    feature. Unrelated suites that share file names will be merged.
    """
    return feature.uri


def scenario_key(scenario: Scenario) -> str:
    """Identify a scenario by its id and source line.

    The line disambiguates scenarios sharing an id, e.g. rows expanded from
    one scenario outline. Missing components fall back to ``""`` and ``0``
    so keys can always be built; colliding keys merge their scenarios.
    """
    return f"{scenario.id}{SCENARIO_KEY_SEPARATOR}{scenario.line}"
