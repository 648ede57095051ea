"""Configuration for rendering reports."""

from pydantic import BaseModel, Field

from evm_test_report.models.result import ReportKind


class ReportConfig(BaseModel):
    """Configuration for a report run."""

    report_kind: ReportKind = ReportKind.DECODED
    width: int = Field(default=120, ge=40, description="Table width in columns")
    # Colour only changes decoration, never the printed text
    color: bool = True
