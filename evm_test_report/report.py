"""Rendering of contract test results into reports."""

import logging
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from pydantic_core import PydanticSerializationError
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from evm_test_report.decoding import DecodeError, decode_log_entry, decode_revert
from evm_test_report.models.result import ReportKind, TestResult, results_adapter
from evm_test_report.styling import BRANCH, connector, style

log = logging.getLogger(__name__)

DEFAULT_TABLE_WIDTH = 120
JSON_ERROR_MESSAGE = "Error serializing test results into JSON."

_DURATION_UNITS = (
    (1.0, "s"),
    (1e-3, "ms"),
    (1e-6, "µs"),
)


def format_elapsed(seconds: float) -> str:
    """Format a duration with four decimals in the largest fitting unit.

    >>> format_elapsed(0.0123)
    '12.3000ms'
    """
    for scale, unit in _DURATION_UNITS:
        if seconds >= scale:
            return f"{seconds / scale:.4f}{unit}"
    return f"{max(seconds, 0.0) * 1e9:.4f}ns"


def format_summary(n_passed: int, n_results: int, elapsed: float) -> Text:
    """Build the aggregate summary line."""
    timing = Text.assemble(" ⏱ : ", style(format_elapsed(elapsed), "elapsed"))
    if n_results == 0:
        return Text.assemble("➜ ", style(0, "percent"), " tests ran.", timing)

    return Text.assemble(
        "➜ ",
        style(n_passed, "passed"),
        " tests passed, ",
        style(n_results - n_passed, "failed"),
        " tests failed (",
        style(n_passed * 100 // n_results, "percent"),
        "%).",
        timing,
    )


@dataclass(frozen=True, kw_only=True)
class ReportRenderer:
    """Renders test results to a console in one of the report kinds."""

    console: Console = field(default_factory=Console)
    error_console: Console = field(default_factory=lambda: Console(stderr=True))
    width: int = DEFAULT_TABLE_WIDTH
    clock: Callable[[], float] = time.perf_counter

    def render(
        self,
        results: Iterable[TestResult],
        report_kind: ReportKind,
        start: float,
    ) -> None:
        """Print a report of ``results`` followed by a summary line.

        Args:
            results: Test results in execution order
            report_kind: Output mode
            start: Value of ``clock`` captured before the tests ran

        """
        # Counted before any mode consumes the results
        records = tuple(results)
        n_passed = sum(1 for record in records if record.passed)
        n_results = len(records)
        log.debug("Rendering %d result(s) as %s", n_results, report_kind.value)

        match report_kind:
            case ReportKind.TABLE:
                self._render_table(records)
            case ReportKind.LIST:
                self._render_list(records)
            case ReportKind.DECODED:
                self._render_decoded(records)
            case ReportKind.JSON:
                self._render_json(records)
                return

        self._print(format_summary(n_passed, n_results, self.clock() - start))

    def _print(self, line: Text) -> None:
        self.console.print(line, soft_wrap=True)

    def _render_table(self, results: Sequence[TestResult]) -> None:
        table = Table(box=box.ROUNDED, show_lines=True, width=self.width)
        table.add_column(style("Name", "header_name"))
        table.add_column(style("Return Data", "header_return_data"), overflow="fold")
        table.add_column(style("Gas", "header_gas"))
        table.add_column(style("Status", "header_status"))

        for result in results:
            table.add_row(
                style(result.name, "name"),
                Text("None" if result.return_data is None else result.return_data),
                Text(str(result.gas)),
                style(result.status.label, result.status.role),
            )

        # Table width is fixed; never crop it to a narrower console
        self.console.print(table, crop=False)

    def _header(self, result: TestResult) -> Text:
        return Text.assemble(
            "[",
            style(result.status.label, result.status.role),
            "] ",
            f"{result.name:<15}",
            " - ",
            style("Gas used:", "label"),
            f" {result.gas}",
        )

    def _render_list(self, results: Sequence[TestResult]) -> None:
        for result in results:
            self._print(self._header(result))
            n_logs = len(result.logs)

            if result.return_data is not None:
                self._print(
                    Text.assemble(f"{BRANCH} ", style("RETURN DATA", "heading"))
                )
                self._print(Text(f"{connector(n_logs == 0)} {result.return_data}"))

            if n_logs:
                self._print(Text.assemble(f"{BRANCH} ", style("LOGS", "heading")))
                for i, (pc, raw_log) in enumerate(result.logs):
                    self._print(
                        Text.assemble(
                            f"{connector(i == n_logs - 1)} [",
                            style("PC", "label"),
                            ": ",
                            style(pc, "pc"),
                            f"]: 0x{raw_log}",
                        )
                    )

    def _render_decoded(self, results: Sequence[TestResult]) -> None:
        for result in results:
            self._print(self._header(result))
            n_logs = len(result.logs)

            if result.return_data is not None:
                prefix = connector(n_logs == 0)
                try:
                    message = style(decode_revert(result.return_data), "revert")
                except DecodeError as e:
                    log.warning("Cannot decode return data of %s: %s", result.name, e)
                    message = style(f"<decode error: {e}>", "error")
                self._print(Text.assemble(f"{prefix} ", message))

            for i, (_, raw_log) in enumerate(result.logs):
                is_last = i == n_logs - 1
                try:
                    line = Text(decode_log_entry(raw_log, i, is_last))
                except DecodeError as e:
                    log.warning("Cannot decode log of %s: %s", result.name, e)
                    line = Text.assemble(
                        f"{connector(is_last)} ", style(f"<decode error: {e}>", "error")
                    )
                self._print(line)

    def _render_json(self, results: Sequence[TestResult]) -> None:
        try:
            document = results_adapter.dump_json(list(results), indent=2).decode()
        except PydanticSerializationError as e:
            log.error("Failed to serialize test results: %s", e)
            self.error_console.print(style(JSON_ERROR_MESSAGE, "error"))
            return

        self.console.out(document, highlight=False)


def print_test_report(
    results: Iterable[TestResult],
    report_kind: ReportKind,
    start: float,
    *,
    color: bool = True,
    width: int = DEFAULT_TABLE_WIDTH,
) -> None:
    """Print a report of ``results`` to stdout (errors to stderr)."""
    renderer = ReportRenderer(
        console=Console(no_color=not color, highlight=False),
        error_console=Console(stderr=True, no_color=not color, highlight=False),
        width=width,
    )
    renderer.render(results, report_kind, start)
