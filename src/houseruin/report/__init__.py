"""Text rendering of simulation reports."""

from houseruin.report.text import (
    format_batch_row,
    format_header,
    format_histogram,
    format_report,
)

__all__ = [
    "format_batch_row",
    "format_header",
    "format_histogram",
    "format_report",
]
