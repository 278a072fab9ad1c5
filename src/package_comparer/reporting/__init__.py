"""Report rendering for comparison results."""

from package_comparer.reporting.comparison_report import (
    REPORT_FORMATS,
    conclusion,
    display_comparison_summary,
    generate_report,
    save_report,
)

__all__ = [
    "REPORT_FORMATS",
    "conclusion",
    "display_comparison_summary",
    "generate_report",
    "save_report",
]
