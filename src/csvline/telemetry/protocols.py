# src/csvline/telemetry/protocols.py
"""Protocol definitions for diagnostic observers."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from csvline.contracts.events import DiagnosticEvent


@runtime_checkable
class DiagnosticObserver(Protocol):
    """Receives diagnostic events from processors.

    Observers are injected into a processor at construction time and shared
    by every batch that processor handles.

    Error handling:
        - emit() SHOULD NOT raise. Processors guard each call anyway: an
          observer failure is logged and the batch continues.

    Thread Safety:
        If the host runs process_batch() concurrently, emit() is called
        concurrently too. Implementations holding state must lock.
    """

    def emit(self, event: "DiagnosticEvent") -> None:
        """Handle a single diagnostic event."""
        ...
