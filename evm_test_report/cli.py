"""CLI entry point for rendering contract test reports."""

import argparse
import logging
import sys
import time
from pathlib import Path

from pydantic import ValidationError

from evm_test_report.config import ReportConfig
from evm_test_report.loading import InvalidResultsError, load_test_results
from evm_test_report.models.result import ReportKind
from evm_test_report.report import print_test_report

EXIT_OK = 0
EXIT_TEST_FAILURES = 1
EXIT_BAD_INPUT = 2


def run(results_path: Path, config: ReportConfig, start: float) -> int:
    """Render the results stored at ``results_path`` and return exit code."""
    log = logging.getLogger("evm_test_report")

    try:
        results = load_test_results(results_path)
    except (OSError, InvalidResultsError) as e:
        log.error("Cannot load test results: %s", e)
        return EXIT_BAD_INPUT

    log.info(
        "Rendering %d test result(s) as %s", len(results), config.report_kind.value
    )
    print_test_report(
        results,
        config.report_kind,
        start,
        color=config.color,
        width=config.width,
    )

    if any(not result.passed for result in results):
        return EXIT_TEST_FAILURES
    return EXIT_OK


def parse_report_kind(value: str) -> ReportKind:
    """Argparse type for report kinds."""
    try:
        return ReportKind.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def main() -> None:
    """CLI entry point."""
    start = time.perf_counter()

    parser = argparse.ArgumentParser(description="Render contract test results")
    parser.add_argument(
        "results",
        type=Path,
        help="JSON file with test results ('-' reads stdin)",
    )
    parser.add_argument(
        "-r",
        "--reporter",
        type=parse_report_kind,
        default=ReportKind.DECODED,
        help="Report kind (table, list, decoded, json)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=120,
        help="Table width in columns",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = ReportConfig(
            report_kind=args.reporter, width=args.width, color=not args.no_color
        )
    except ValidationError as e:
        parser.error(str(e))

    sys.exit(run(args.results, config, start))


if __name__ == "__main__":  # pragma: no cover
    main()
