"""Diagnostic events emitted by processors.

Events are delivered to an injected DiagnosticObserver (see
csvline.telemetry.observers), never written to a global logger directly.
The default observer renders them as structured log lines.

Event categories:
- Record-level: unreadable source, malformed row, malformed header source,
  unexpected failure
- Batch-level: summary counts and timing for one process_batch() call
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    """Base class for all diagnostic events.

    All events include:
    - timestamp: When the event occurred (UTC)
    - plugin_name: Name of the processor that emitted it

    Events are immutable (frozen) so observers may hand them to other
    threads without copying.
    """

    timestamp: datetime
    plugin_name: str


@dataclass(frozen=True, slots=True)
class SourceFieldUnreadable(DiagnosticEvent):
    """The configured source field is absent or does not hold text.

    Attributes:
        record_index: Position of the record in its batch
        field: The configured source key
        message: Why the field could not be read
    """

    record_index: int
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class MalformedRow(DiagnosticEvent):
    """The source text could not be tokenized; no fields were injected."""

    record_index: int
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class MalformedHeaderSource(DiagnosticEvent):
    """The header source field could not be used; columns were auto-named."""

    record_index: int
    field: str
    message: str


@dataclass(frozen=True, slots=True)
class RecordFailed(DiagnosticEvent):
    """An unexpected exception escaped while processing one record.

    The record is passed through as-is and the batch continues.
    """

    record_index: int
    exception_type: str
    message: str


@dataclass(frozen=True, slots=True)
class BatchProcessed(DiagnosticEvent):
    """Emitted once per process_batch() call.

    Attributes:
        records_in: Records received
        records_out: Records returned (always equal to records_in)
        parsed: Records with injected fields
        empty: Records whose source line was blank
        failed: Records that passed through because of a per-record failure
        header_fallbacks: Records whose header source failed to parse
        duration_ms: Wall-clock time spent in the batch
    """

    records_in: int
    records_out: int
    parsed: int
    empty: int
    failed: int
    header_fallbacks: int
    duration_ms: float
