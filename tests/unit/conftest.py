"""Shared fixtures for unit tests."""

import io

import pytest
from rich.console import Console

from evm_test_report.report import ReportRenderer


def _recording_console() -> Console:
    return Console(
        file=io.StringIO(),
        width=120,
        color_system=None,
        highlight=False,
        record=True,
    )


@pytest.fixture
def console() -> Console:
    """Console recording report output; read it with ``export_text()``."""
    return _recording_console()


@pytest.fixture
def error_console() -> Console:
    """Console recording report errors."""
    return _recording_console()


@pytest.fixture
def renderer(console: Console, error_console: Console) -> ReportRenderer:
    """Renderer whose clock reads 1.5 seconds after a start of 0."""
    return ReportRenderer(
        console=console, error_console=error_console, clock=lambda: 1.5
    )
