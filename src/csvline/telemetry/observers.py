"""Built-in diagnostic observers.

LoggingObserver is the default: it renders each event as one structured log
line through structlog. NullObserver drops everything.
"""

from dataclasses import asdict

import structlog

from csvline.contracts.events import (
    BatchProcessed,
    DiagnosticEvent,
    MalformedHeaderSource,
    MalformedRow,
    RecordFailed,
    SourceFieldUnreadable,
)
from csvline.core.logging import get_logger

# event type -> (log method, message)
_EVENT_LOG_LEVELS: dict[type[DiagnosticEvent], tuple[str, str]] = {
    # Recoverable: column names fall back to auto-generation
    MalformedHeaderSource: ("debug", "Auto generating header because the header source could not be parsed"),
    MalformedRow: ("error", "Could not parse source field, no fields injected"),
    SourceFieldUnreadable: ("error", "Could not read source field as text"),
    RecordFailed: ("error", "Unexpected error while processing record"),
    BatchProcessed: ("debug", "Batch processed"),
}


class LoggingObserver:
    """Write diagnostic events to a structlog logger.

    Log levels:
        MalformedHeaderSource: debug (recoverable fallback)
        MalformedRow, SourceFieldUnreadable, RecordFailed: error
        BatchProcessed: debug
        Unknown event types: warning

    Event fields become log keys. The time the event occurred is logged as
    event_timestamp, separate from the time of logging.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else get_logger("csvline.diagnostics")

    def emit(self, event: DiagnosticEvent) -> None:
        fields = asdict(event)
        # structlog's TimeStamper owns "timestamp" (time of logging)
        fields["event_timestamp"] = fields.pop("timestamp").isoformat()
        entry = _EVENT_LOG_LEVELS.get(type(event))
        if entry is None:
            self._logger.warning("Unhandled diagnostic event", event_type=type(event).__name__, **fields)
            return
        method, message = entry
        getattr(self._logger, method)(message, **fields)


class NullObserver:
    """Discard all diagnostic events."""

    def emit(self, event: DiagnosticEvent) -> None:
        pass
