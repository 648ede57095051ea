"""Loading of test results produced by the test runner."""

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from evm_test_report.models.result import TestResult, results_adapter

log = logging.getLogger(__name__)

STDIN_PATH = Path("-")


class InvalidResultsError(Exception):
    """Raised when a results document cannot be parsed."""


def load_test_results(path: Path) -> Sequence[TestResult]:
    """Load test results from a JSON document.

    The document has the same shape as a JSON report, so a saved report can
    be rendered again in another format.

    Args:
        path: Path to the JSON document, or ``-`` for stdin

    Returns:
        Test results in document order

    Raises:
        OSError: If the file cannot be read
        InvalidResultsError: If the document is not UTF-8 JSON listing test results

    """
    if path == STDIN_PATH:
        source = "<stdin>"
        content = sys.stdin.read()
    else:
        source = str(path)
        content = path.read_bytes()

    try:
        results = results_adapter.validate_json(content)
    except ValidationError as e:
        raise InvalidResultsError(f"Invalid test results in {source}: {e}") from e

    log.debug("Loaded %d test result(s) from %s", len(results), source)
    return results
