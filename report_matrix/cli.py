"""CLI entry point for merging test run reports into one comparison table."""

import argparse
import logging
import sys
from collections.abc import Sequence

from report_matrix.aggregator import GROUPING_MODES, ReportAggregate, merge_runs
from report_matrix.config import MergeConfig
from report_matrix.loader import DEFAULT_EXTENSION, load_report_runs
from report_matrix.renderer import render_html

STATUS_SYMBOLS = {
    "passed": "✓",
    "failed": "✗",
}


def log_merge_summary(log: logging.Logger, aggregate: ReportAggregate) -> None:
    """Log a per-run summary of scenario outcomes."""
    log.info("=" * 80)
    log.info(
        "Run Summary (%d feature(s), %d scenario(s)):",
        len(aggregate.features),
        aggregate.scenario_count,
    )
    log.info("=" * 80)

    for run_id in aggregate.run_ids:
        summary = aggregate.run_summary(run_id)
        symbol = STATUS_SYMBOLS["failed" if summary.failed else "passed"]
        log.info(
            "%s %s: %d passed, %d failed, %d missing",
            symbol,
            run_id,
            summary.passed,
            summary.failed,
            summary.missing,
        )


def run(config: MergeConfig) -> int:
    """Merge the reports described by the config and return exit code."""
    log = logging.getLogger("report_matrix")

    log.info("Loading reports from %s", config.input_dir)
    runs = load_report_runs(config.input_dir, config.extension)

    aggregate = merge_runs(runs)
    log_merge_summary(log, aggregate)

    html = render_html(aggregate, config.grouping_mode, config.title)
    config.output_file.write_text(html, encoding="utf-8")
    log.info("Report written to %s", config.output_file)

    if config.strict and aggregate.has_failures():
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Merge Cucumber JSON reports into a side-by-side HTML comparison"
    )
    parser.add_argument(
        "input_dir",
        help="Directory containing one report file per test run",
    )
    parser.add_argument(
        "output_file",
        help="Path of the HTML document to write",
    )
    parser.add_argument(
        "--extension",
        default=DEFAULT_EXTENSION,
        help="Extension of report files (default: %(default)s)",
    )
    parser.add_argument(
        "--grouping-mode",
        choices=GROUPING_MODES,
        default="by-feature",
        help="Group scenarios under their feature, or keep encounter order "
        "and repeat the feature header when it changes (default: %(default)s)",
    )
    parser.add_argument(
        "--title",
        default="Test run comparison",
        help="Title of the HTML document",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any run has a failed scenario",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = MergeConfig(
        input_dir=args.input_dir,
        output_file=args.output_file,
        extension=args.extension,
        grouping_mode=args.grouping_mode,
        title=args.title,
        strict=args.strict,
    )
    sys.exit(run(config))


if __name__ == "__main__":  # pragma: no cover
    main()
