"""Report serialization to standard output."""

import sys
from typing import Optional, TextIO

from .report import UpdateReport

OUTPUT_FORMATS = ("json", "yaml")


def render_report(report: UpdateReport, output_format: str = "json") -> str:
    """
    Render a report in one of the supported text encodings.

    Args:
        report: Report to serialize
        output_format: "json" (default) or "yaml"

    Returns:
        Serialized document without trailing newline
    """
    if output_format == "json":
        return report.to_json()
    if output_format == "yaml":
        return report.to_yaml().rstrip("\n")
    raise ValueError(f"Unknown output format: {output_format}")


def emit_report(
    report: UpdateReport,
    stream: Optional[TextIO] = None,
    output_format: str = "json",
) -> None:
    """Write exactly one serialized report document to stream (default: stdout)."""
    out = stream if stream is not None else sys.stdout
    out.write(render_report(report, output_format) + "\n")
    out.flush()
