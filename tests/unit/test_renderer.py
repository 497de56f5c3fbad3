"""Tests for HTML rendering."""

import re

from report_matrix.aggregator import ReportAggregate, ReportRun, merge_runs
from report_matrix.models.report import report_adapter
from report_matrix.renderer import render_html
from report_matrix.testing.payloads import feature_document, scenario_document


def _merge(*documents: tuple[str, list[dict[str, object]]]) -> ReportAggregate:
    return merge_runs(
        [
            ReportRun(run_id=run_id, features=report_adapter.validate_python(doc))
            for run_id, doc in documents
        ]
    )


def _scenario_rows(html: str) -> list[str]:
    return re.findall(r'<tr class="scenario-row">.*?</tr>', html, flags=re.S)


def _cells(row: str) -> list[str]:
    return re.findall(r"<td(?: [^>]*)?>.*?</td>", row, flags=re.S)[1:]


def test_passed_and_failed_cells() -> None:
    """Renders one row with a passed and a failed cell carrying the error."""
    aggregate = _merge(
        ("run1", [feature_document("f1", "F1", scenario_document("s1", 10, "S1"))]),
        (
            "run2",
            [
                feature_document(
                    "f1", "F1", scenario_document("s1", 10, "S1", error_message="boom")
                )
            ],
        ),
    )

    html = render_html(aggregate)

    assert html.count('<tr class="feature-row">') == 1
    rows = _scenario_rows(html)
    assert len(rows) == 1
    passed, failed = _cells(rows[0])
    assert "scenario-status-passed" in passed
    assert "scenario-status-failed tooltip" in failed
    assert "boom" in failed
    assert "Given a user" in failed
    assert "When they log in" in failed


def test_header_lists_every_run() -> None:
    """Each feature header has one column per run in order."""
    aggregate = _merge(
        ("run1", [feature_document("f1", "F1", scenario_document("s1", 1, "S1"))]),
        ("run2", [feature_document("f2", "F2", scenario_document("s2", 1, "S2"))]),
    )

    html = render_html(aggregate)

    assert re.findall(r'<th class="report-id">(.*?)</th>', html) == [
        "run1",
        "run2",
        "run1",
        "run2",
    ]


def test_missing_run_renders_empty_cell() -> None:
    """Scenarios not executed in a run get an empty cell."""
    aggregate = _merge(
        ("run1", [feature_document("f1", "F1", scenario_document("s1", 1, "S1"))]),
        ("run2", [feature_document("f2", "F2", scenario_document("s2", 1, "S2"))]),
    )

    rows = _scenario_rows(render_html(aggregate))

    assert _cells(rows[0])[1] == "<td></td>"
    assert _cells(rows[1])[0] == "<td></td>"


def test_feature_description() -> None:
    """Non-empty descriptions are shown under the feature name."""
    aggregate = _merge(
        (
            "run1",
            [
                feature_document(
                    "f1", "F1", scenario_document("s1", 1, "S1"), description="About"
                ),
                feature_document("f2", "F2", scenario_document("s2", 1, "S2")),
            ],
        ),
    )

    html = render_html(aggregate)

    assert html.count('<div class="feature-description">About</div>') == 1
    assert html.count('class="feature-description"') == 1


def test_escapes_report_text() -> None:
    """Text from reports is HTML-escaped."""
    aggregate = _merge(
        (
            "run1",
            [
                feature_document(
                    "f1",
                    "<b>F1</b>",
                    scenario_document("s1", 1, "a < b", error_message="<script>"),
                )
            ],
        ),
    )

    html = render_html(aggregate)

    assert "&lt;b&gt;F1&lt;/b&gt;" in html
    assert "a &lt; b" in html
    assert "<script>" not in html


def test_embeds_stylesheets_and_title() -> None:
    """Both stylesheets are inlined and the title is set."""
    html = render_html(_merge(("run1", [])), title="Nightly")

    assert "<title>Nightly</title>" in html
    assert ".scenario-status-failed" in html
    assert ".tooltip:hover .tooltiptext" in html


def test_stream_grouping_repeats_header() -> None:
    """The scenario stream mode re-announces interleaved features."""
    aggregate = _merge(
        (
            "run1",
            [
                feature_document("f1", "F1", scenario_document("a", 1, "A")),
                feature_document("f2", "F2", scenario_document("b", 1, "B")),
            ],
        ),
        ("run2", [feature_document("f1", "F1", scenario_document("c", 2, "C"))]),
    )

    by_feature = render_html(aggregate, "by-feature")
    stream = render_html(aggregate, "by-scenario-stream")

    assert by_feature.count('<tr class="feature-row">') == 2
    assert stream.count('<tr class="feature-row">') == 3


def test_output_is_deterministic() -> None:
    """Merging and rendering the same input twice gives identical output."""
    documents = (
        ("run1", [feature_document("f1", "F1", scenario_document("s1", 1, "S1"))]),
        (
            "run2",
            [feature_document("f1", "F1", scenario_document("s1", 1, "S1", error_message="x"))],
        ),
    )

    assert render_html(_merge(*documents)) == render_html(_merge(*documents))
