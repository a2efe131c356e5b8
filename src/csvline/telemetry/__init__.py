"""Diagnostic observers for csvline processors.

Usage:
    from csvline.telemetry import LoggingObserver

    processor = create_csv_processor({"source": "message"}, observer=LoggingObserver())
"""

from csvline.telemetry.observers import LoggingObserver, NullObserver
from csvline.telemetry.protocols import DiagnosticObserver

__all__ = [
    "DiagnosticObserver",
    "LoggingObserver",
    "NullObserver",
]
