"""Models for executed contract test results."""

from collections.abc import Mapping, Sequence
from enum import Enum

from pydantic import Field, TypeAdapter

from evm_test_report.models.base import Model
from evm_test_report.styling import Role


class TestStatus(Enum):
    """Outcome of a single contract test."""

    __test__ = False

    SUCCESS = "Success"
    REVERT = "Revert"
    FAILURE = "Failure"

    @property
    def label(self) -> str:
        """Short label shown in reports (e.g. ``PASS``)."""
        return STATUS_LABELS[self]

    @property
    def role(self) -> Role:
        """Style role used when rendering the label."""
        return STATUS_ROLES[self]


STATUS_LABELS: Mapping[TestStatus, str] = {
    TestStatus.SUCCESS: "PASS",
    TestStatus.REVERT: "REVERT",
    TestStatus.FAILURE: "FAIL",
}

STATUS_ROLES: Mapping[TestStatus, Role] = {
    TestStatus.SUCCESS: "success",
    TestStatus.REVERT: "revert",
    TestStatus.FAILURE: "failure",
}


class TestResult(Model):
    """Raw result of a single contract test, as produced by the test runner.

    Field order is the key order of the JSON report.
    """

    __test__ = False

    name: str = Field(..., description="Test name")
    status: TestStatus = Field(..., description="Execution outcome")
    gas: int = Field(..., ge=0, description="Gas units consumed")
    return_data: str | None = Field(
        default=None, description="Raw return or revert data (hex, no 0x prefix)"
    )
    logs: Sequence[tuple[int, str]] = Field(
        default_factory=list,
        description="Emitted logs as (program counter, raw hex) in emission order",
    )

    @property
    def passed(self) -> bool:
        """Whether the test succeeded."""
        return self.status is TestStatus.SUCCESS


results_adapter = TypeAdapter(list[TestResult])


class ReportKind(Enum):
    """Output mode of a test report."""

    TABLE = "table"
    LIST = "list"
    DECODED = "decoded"
    JSON = "json"

    @classmethod
    def parse(cls, value: str) -> "ReportKind":
        """Parse a user supplied report kind (case-insensitive).

        Raises:
            ValueError: If the value does not name a report kind

        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            available = [kind.value for kind in cls]
            raise ValueError(
                f"Unknown report kind '{value}'. Available kinds: {available}"
            ) from None
