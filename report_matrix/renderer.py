"""Render a report aggregate as a self-contained HTML document."""

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from report_matrix.aggregator import GroupingMode, ReportAggregate, scenario_cells

TEMPLATE_NAME = "report.html"


def create_environment() -> Environment:
    """Create the Jinja environment for the bundled templates and stylesheets."""
    return Environment(
        loader=PackageLoader("report_matrix", "templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def render_html(
    aggregate: ReportAggregate,
    grouping_mode: GroupingMode = "by-feature",
    title: str = "Test run comparison",
    environment: Environment | None = None,
) -> str:
    """Render the comparison table.

    One column per run in ``aggregate.run_ids``; scenarios without a record
    for a run get an empty cell. Failed cells carry every step of that run,
    with error messages under failed steps, revealed on hover.
    """
    env = environment or create_environment()
    template = env.get_template(TEMPLATE_NAME)
    return template.render(
        title=title,
        run_ids=aggregate.run_ids,
        rows=list(aggregate.rows(grouping_mode)),
        cells=scenario_cells,
    )
