"""update-reporter - Collect pending package updates into one canonical report."""

__version__ = "0.1.0"

from .core.pipeline import collect_report, run

__all__ = ["collect_report", "run"]
